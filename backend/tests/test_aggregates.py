"""Tests for the aggregate mutation methods."""

from datetime import datetime
from decimal import Decimal

from domain.aggregates import Category, Product, User
from domain.value_objects import EmailAddress, HashedPassword, Money, Role

NOW = datetime(2024, 5, 1, 8, 30)
LATER = datetime(2024, 5, 2, 8, 30)


def _product(**overrides):
    fields = dict(
        name="Lamp",
        price=Money(Decimal("20"), "USD"),
        category=Category(name="Home", id="cat-1"),
        stock_quantity=3,
    )
    fields.update(overrides)
    return Product(**fields)


def _user(**overrides):
    fields = dict(
        first_name="Jane",
        last_name="Doe",
        email=EmailAddress("jane@example.com"),
        password=HashedPassword.from_hash("stored-hash"),
    )
    fields.update(overrides)
    return User(**fields)


class TestCategory:
    def test_toggle_active(self):
        category = Category(name="Home")

        category.deactivate(NOW)
        assert category.active is False
        assert category.updated_at == NOW

        category.activate(LATER)
        assert category.active is True
        assert category.updated_at == LATER


class TestProduct:
    def test_defaults(self):
        product = Product(name="Lamp", price=Money.zero("USD"), category=None)
        assert product.stock_quantity == 0
        assert product.version == 0
        assert not product.in_stock

    def test_stamp_created_sets_both_timestamps(self):
        product = _product()
        product.stamp_created(NOW)
        assert product.created_at == product.updated_at == NOW

    def test_mutations_touch_updated_at(self):
        product = _product(created_at=NOW, updated_at=NOW)

        product.set_stock_quantity(7, LATER)
        assert product.stock_quantity == 7
        assert product.updated_at == LATER
        assert product.created_at == NOW

        product.change_price(Money(Decimal("25"), "USD"), LATER)
        assert product.price.amount == Decimal("25")

        other = Category(name="Office", id="cat-2")
        product.change_category(other, LATER)
        assert product.category is other

    def test_take_identity_from(self):
        existing = _product(id="p-1", created_at=NOW, updated_at=NOW, version=4)
        candidate = _product(name="Desk Lamp")

        candidate.take_identity_from(existing, LATER)

        assert candidate.id == "p-1"
        assert candidate.created_at == NOW
        assert candidate.updated_at == LATER
        assert candidate.version == 4
        assert candidate.name == "Desk Lamp"

    def test_same_name_ignores_case_and_whitespace(self):
        product = _product(name="Desk Lamp")
        assert product.same_name_as(" desk lamp ")
        assert not product.same_name_as("Floor Lamp")
        assert not product.same_name_as(None)


class TestUser:
    def test_registration_resets_flags(self):
        user = _user(active=True, email_verified=True)

        user.stamp_registered(NOW)

        assert user.active is False
        assert user.email_verified is False
        assert user.created_at == user.updated_at == NOW

    def test_flags_are_independent(self):
        user = _user()

        user.verify_email(NOW)
        assert user.email_verified and not user.active

        user.activate(NOW)
        user.deactivate(LATER)
        assert user.email_verified and not user.active
        assert user.updated_at == LATER

    def test_role_capabilities(self):
        assert _user(role=Role.ADMIN).can_perform_admin_operations()
        assert _user(role=Role.MANAGER).can_perform_admin_operations()
        assert not _user().can_perform_admin_operations()
        assert _user().can_perform_customer_operations()
        assert not _user(role=None).can_perform_admin_operations()

    def test_last_login(self):
        user = _user()
        user.update_last_login(NOW)
        assert user.last_login_at == NOW
        assert user.updated_at == NOW

    def test_update_profile_skips_blank_names(self):
        user = _user()

        user.update_profile("  Janet ", "  ", NOW)

        assert user.full_name == "Janet Doe"
        assert user.updated_at == NOW

    def test_change_email_role_and_password(self):
        user = _user()
        new_password = HashedPassword.from_hash("other-hash")

        user.change_email(EmailAddress("janet@example.com"), NOW)
        user.change_role(Role.MANAGER, NOW)
        user.change_password(new_password, LATER)

        assert user.email.value == "janet@example.com"
        assert user.role is Role.MANAGER
        assert user.password is new_password
        assert user.updated_at == LATER
