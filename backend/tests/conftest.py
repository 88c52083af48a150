import os
import sys
from datetime import datetime, timedelta
from decimal import Decimal
from pathlib import Path

# Fast bcrypt and a throwaway database for every test run
os.environ["CATALOG_PASSWORD_HASH_ROUNDS"] = "4"
os.environ["CATALOG_DATABASE_URL"] = "sqlite:///:memory:"

# Add backend directory to Python path FIRST
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

# Now import after path is set
import pytest

from config.catalog_config import reload_settings
from database import build_engine, create_session_factory
from dependencies import get_product_service, get_user_service
from domain.aggregates import Category, Product, User
from domain.value_objects import EmailAddress, HashedPassword, Money, Role
from repositories import CategoryRepository, ProductRepository, UserRepository

reload_settings()

PASSWORD = "correct-horse-battery"


class FakeClock:
    """Deterministic clock; every call moves one second forward."""

    def __init__(self, start: datetime = datetime(2024, 1, 1, 12, 0, 0)):
        self.now = start

    def __call__(self) -> datetime:
        self.now += timedelta(seconds=1)
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def db_session():
    """Create in-memory database for testing"""
    engine = build_engine("sqlite:///:memory:")
    SessionLocal = create_session_factory(engine)
    session = SessionLocal()
    yield session
    session.close()
    engine.dispose()


@pytest.fixture
def category_repo(db_session):
    return CategoryRepository(db_session)


@pytest.fixture
def product_repo(db_session):
    return ProductRepository(db_session)


@pytest.fixture
def user_repo(db_session):
    return UserRepository(db_session)


@pytest.fixture
def product_service(db_session, clock):
    service = get_product_service(db_session)
    service.clock = clock
    return service


@pytest.fixture
def user_service(db_session, clock):
    service = get_user_service(db_session)
    service.clock = clock
    return service


@pytest.fixture
def electronics(category_repo):
    return category_repo.save(Category(name="Electronics", description="Gadgets", active=True))


@pytest.fixture
def books(category_repo):
    return category_repo.save(Category(name="Books", active=True))


@pytest.fixture
def archived(category_repo):
    return category_repo.save(Category(name="Archived", active=False))


def make_product(category, name="Laptop", price="999.99", stock=10, sku=None) -> Product:
    return Product(
        name=name,
        description=f"{name} description",
        price=Money(Decimal(price), "USD"),
        stock_quantity=stock,
        category=category,
        sku=sku,
    )


def make_user(email="jane@example.com", role=Role.CUSTOMER, first_name="Jane", last_name="Doe", password=PASSWORD) -> User:
    return User(
        first_name=first_name,
        last_name=last_name,
        email=EmailAddress(email),
        password=HashedPassword.from_plaintext(password),
        role=role,
    )


@pytest.fixture
def laptop(product_service, electronics):
    return product_service.create_product(make_product(electronics))


@pytest.fixture
def customer(user_service):
    return user_service.register_user(make_user())


@pytest.fixture
def admin(user_service):
    return user_service.register_user(make_user(email="admin@example.com", role=Role.ADMIN, first_name="Ada"))


@pytest.fixture
def active_customer(user_service, customer):
    return user_service.activate_user(customer.id)
