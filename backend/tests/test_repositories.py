"""Tests for the SQLAlchemy storage adapters and specifications."""

from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from domain.aggregates import Category
from domain.value_objects import EmailAddress, Money, Role
from exceptions import ConcurrentModificationError, DatabaseError, NotFoundError, ValidationError
from repositories.catalog_specifications import (
    ActiveCategorySpec,
    OutOfStockSpec,
    ProductsInCategorySpec,
)
from repositories.specifications import AllOf, AnyOf
from repositories.user_specifications import (
    ActiveUserSpec,
    UsersByRoleSpec,
    VerifiedEmailSpec,
)

from conftest import make_product, make_user

T0 = datetime(2024, 3, 1, 9, 0, 0)


def _stored_product(product_repo, category, name, stock=10, price="10.00", currency="USD", offset=0):
    product = make_product(category, name=name, stock=stock, price=price)
    product.price = Money(Decimal(price), currency)
    product.stamp_created(T0 + timedelta(minutes=offset))
    return product_repo.save(product)


def _stored_user(user_repo, email, role=Role.CUSTOMER, active=False, verified=False, offset=0, first_name="Jane"):
    user = make_user(email=email, role=role, first_name=first_name)
    user.stamp_registered(T0 + timedelta(minutes=offset))
    user.active = active
    user.email_verified = verified
    return user_repo.save(user)


class TestCategoryRepository:
    def test_save_assigns_id_and_timestamps(self, category_repo):
        saved = category_repo.save(Category(name="Garden"))

        assert saved.id is not None
        assert saved.created_at is not None
        assert category_repo.exists_by_id(saved.id)

    def test_find_by_name_ignores_case(self, category_repo, electronics):
        assert category_repo.find_by_name("ELECTRONICS").id == electronics.id
        assert category_repo.exists_by_name(" electronics ")
        assert category_repo.find_by_name("Garden") is None

    def test_find_active(self, category_repo, electronics, archived):
        assert [c.id for c in category_repo.find_active(0, 10)] == [electronics.id]
        assert category_repo.count_matching(ActiveCategorySpec()) == 1
        assert category_repo.count_matching(~ActiveCategorySpec()) == 1

    def test_deactivate_round_trip(self, category_repo, electronics):
        electronics.deactivate()
        category_repo.save(electronics)
        assert category_repo.find_by_id(electronics.id).active is False

    def test_duplicate_name_is_database_error(self, category_repo, electronics):
        with pytest.raises(DatabaseError):
            category_repo.save(Category(name="Electronics"))


class TestProductRepository:
    def test_round_trip_keeps_money(self, product_repo, electronics):
        saved = _stored_product(product_repo, electronics, "Camera", price="249.50", currency="EUR")

        loaded = product_repo.find_by_id(saved.id)

        assert loaded.price == Money(Decimal("249.50"), "EUR")
        assert loaded.category.id == electronics.id
        assert loaded.category.name == "Electronics"
        assert loaded.version == 1

    def test_unknown_category_rejected(self, product_repo):
        with pytest.raises(NotFoundError):
            product_repo.save(make_product(Category(name="Ghost", id="missing")))

    def test_find_missing_returns_none(self, product_repo):
        assert product_repo.find_by_id("nope") is None
        assert product_repo.find_by_sku("nope") is None

    def test_sku_lookup(self, product_repo, electronics):
        product = make_product(electronics, name="Router", sku="RT-1")
        saved = product_repo.save(product)

        assert product_repo.find_by_sku("RT-1").id == saved.id
        assert product_repo.exists_by_sku("RT-1")
        assert not product_repo.exists_by_sku("RT-2")

    def test_exists_by_name_in_category(self, product_repo, electronics, books):
        saved = _stored_product(product_repo, electronics, "Monitor")

        assert product_repo.exists_by_name_in_category("monitor", electronics.id)
        assert product_repo.exists_by_name_in_category(" MONITOR ", electronics.id)
        assert not product_repo.exists_by_name_in_category("Monitor", books.id)
        assert not product_repo.exists_by_name_in_category("Monitor", electronics.id, saved.id)

    def test_pagination_is_ordered_by_creation(self, product_repo, electronics):
        for i in range(5):
            _stored_product(product_repo, electronics, f"Item {i}", offset=i)

        first = product_repo.find_all(0, 2)
        second = product_repo.find_all(1, 2)
        last = product_repo.find_all(2, 2)

        assert [p.name for p in first] == ["Item 0", "Item 1"]
        assert [p.name for p in second] == ["Item 2", "Item 3"]
        assert [p.name for p in last] == ["Item 4"]
        assert product_repo.find_all(3, 2) == []

    @pytest.mark.parametrize("page,page_size", [(-1, 10), (0, 0), (0, 101)])
    def test_invalid_paging_rejected(self, product_repo, page, page_size):
        with pytest.raises(ValidationError):
            product_repo.find_all(page, page_size)

    def test_search_escapes_wildcards(self, product_repo, electronics):
        _stored_product(product_repo, electronics, "100% Cotton", offset=0)
        _stored_product(product_repo, electronics, "1000 Watt", offset=1)

        assert [p.name for p in product_repo.search_by_text("100%", 0, 10)] == ["100% Cotton"]

    def test_counts_and_totals(self, product_repo, electronics, books):
        _stored_product(product_repo, electronics, "A1", stock=0, offset=0)
        _stored_product(product_repo, electronics, "B2", stock=3, offset=1)
        _stored_product(product_repo, books, "C3", stock=7, price="5.00", currency="GBP", offset=2)

        assert product_repo.count() == 3
        assert product_repo.count_by_category_id(electronics.id) == 2
        assert product_repo.total_units_in_stock() == 10
        assert product_repo.count_matching(OutOfStockSpec()) == 1
        assert product_repo.count_matching(ProductsInCategorySpec(electronics.id) & ~OutOfStockSpec()) == 1
        assert product_repo.count_matching(OutOfStockSpec() | ProductsInCategorySpec(books.id)) == 2

    def test_empty_store_totals(self, product_repo):
        assert product_repo.total_units_in_stock() == 0

    def test_delete_by_id(self, product_repo, electronics):
        saved = _stored_product(product_repo, electronics, "Cable")

        product_repo.delete_by_id(saved.id)
        product_repo.delete_by_id(saved.id)

        assert not product_repo.exists_by_id(saved.id)

    def test_stale_version_rejected(self, product_repo, electronics):
        saved = _stored_product(product_repo, electronics, "Speaker", stock=5)
        first = product_repo.find_by_id(saved.id)
        second = product_repo.find_by_id(saved.id)

        first.set_stock_quantity(6)
        product_repo.save(first)

        second.set_stock_quantity(1)
        with pytest.raises(ConcurrentModificationError) as exc_info:
            product_repo.save(second)

        assert exc_info.value.details["expected_version"] == 1
        assert exc_info.value.details["actual_version"] == 2
        assert product_repo.find_by_id(saved.id).stock_quantity == 6

    def test_version_bumps_on_update(self, product_repo, electronics):
        saved = _stored_product(product_repo, electronics, "Tripod")
        saved.set_stock_quantity(2)

        assert product_repo.save(saved).version == 2


class TestProductSpecificationsInMemory:
    def test_specs_match_aggregates(self, electronics, books):
        empty = make_product(electronics, stock=0)
        shelved = make_product(books, stock=2)

        assert OutOfStockSpec().is_satisfied_by(empty)
        assert not OutOfStockSpec().is_satisfied_by(shelved)
        assert ProductsInCategorySpec(books.id).is_satisfied_by(shelved)
        assert not ProductsInCategorySpec(books.id).is_satisfied_by(empty)
        assert (ProductsInCategorySpec(books.id) & ~OutOfStockSpec()).is_satisfied_by(shelved)
        assert (OutOfStockSpec() | ProductsInCategorySpec(books.id)).is_satisfied_by(empty)
        assert not ActiveCategorySpec().is_satisfied_by(Category(name="Old", active=False))

    def test_chains_are_flattened(self, electronics, books):
        combined = OutOfStockSpec() & ProductsInCategorySpec(electronics.id) & ~ProductsInCategorySpec(books.id)
        assert isinstance(combined, AllOf)
        assert len(combined.parts) == 3

        either = OutOfStockSpec() | (ProductsInCategorySpec(electronics.id) | ProductsInCategorySpec(books.id))
        assert isinstance(either, AnyOf)
        assert len(either.parts) == 3

    def test_double_negation_unwraps(self):
        spec = OutOfStockSpec()
        assert ~~spec is spec


class TestUserRepository:
    def test_round_trip(self, user_repo):
        saved = _stored_user(user_repo, "jane@example.com", role=Role.MANAGER, verified=True)

        loaded = user_repo.find_by_id(saved.id)

        assert loaded.email == EmailAddress("jane@example.com")
        assert loaded.role is Role.MANAGER
        assert loaded.email_verified is True
        assert loaded.password.matches("correct-horse-battery")

    def test_email_lookup(self, user_repo):
        saved = _stored_user(user_repo, "jane@example.com")

        assert user_repo.find_by_email(EmailAddress("jane@example.com")).id == saved.id
        assert user_repo.exists_by_email(EmailAddress("jane@example.com"))
        assert user_repo.find_by_email(EmailAddress("john@example.com")) is None

    def test_duplicate_email_is_database_error(self, user_repo):
        _stored_user(user_repo, "jane@example.com")
        with pytest.raises(DatabaseError):
            _stored_user(user_repo, "jane@example.com")

    def test_filters_and_counts(self, user_repo):
        _stored_user(user_repo, "a@example.com", active=True, verified=True, offset=0, first_name="Alice")
        _stored_user(user_repo, "b@example.com", role=Role.ADMIN, active=True, offset=1, first_name="Bob")
        _stored_user(user_repo, "c@example.com", role=Role.MANAGER, offset=2, first_name="Carol")

        assert [u.first_name for u in user_repo.find_active_users(0, 10)] == ["Alice", "Bob"]
        assert [u.first_name for u in user_repo.find_inactive_users(0, 10)] == ["Carol"]
        assert [u.first_name for u in user_repo.find_by_role(Role.ADMIN, 0, 10)] == ["Bob"]
        assert [u.first_name for u in user_repo.search_by_name("CAR", 0, 10)] == ["Carol"]
        assert user_repo.count_by_role(Role.CUSTOMER) == 1
        assert user_repo.count_active_users() == 2
        assert user_repo.count_inactive_users() == 1
        assert user_repo.count_matching(ActiveUserSpec() & VerifiedEmailSpec()) == 1
        assert user_repo.count_matching(UsersByRoleSpec(Role.MANAGER)) == 1

    def test_last_login_round_trip(self, user_repo):
        saved = _stored_user(user_repo, "a@example.com")
        saved.update_last_login(T0 + timedelta(days=1))
        user_repo.save(saved)

        assert user_repo.find_by_id(saved.id).last_login_at == T0 + timedelta(days=1)

    def test_stale_version_rejected(self, user_repo):
        saved = _stored_user(user_repo, "jane@example.com")
        stale = user_repo.find_by_id(saved.id)

        saved.activate()
        user_repo.save(saved)

        stale.verify_email()
        with pytest.raises(ConcurrentModificationError):
            user_repo.save(stale)
