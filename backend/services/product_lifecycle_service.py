"""
Product Lifecycle Service

Domain service that gates every state change of a Product against the
catalog rules:
- a product's category must exist and be active when it is assigned
- product names are unique (case-insensitive) within a category
- SKUs, when given, are unique across the catalog
- prices are strictly positive
- stock never goes negative
- a product can only be removed once its stock is zero

Checks run fail-fast in a fixed order: missing fields, then the category,
then price and stock, then uniqueness. Nothing is written when a check fails.
The service holds no state between calls; committing the surrounding
transaction is the caller's job.
"""

import logging
from dataclasses import replace
from decimal import Decimal
from typing import List, Optional

from config.catalog_config import CatalogSettings, get_settings
from constants import PRICE_SCALE, PRODUCT_NAME_MAX_LENGTH, PRODUCT_NAME_MIN_LENGTH, SKU_MAX_LENGTH
from domain.aggregates import Category, Product
from domain.value_objects import Money
from dtos.response import ProductStatistics
from exceptions import (
    CannotDeactivateWithStockError,
    CategoryInactiveError,
    DuplicateNameError,
    DuplicateSkuError,
    InvalidFieldError,
    InvalidPriceError,
    InvalidStockError,
    MissingFieldError,
    NotFoundError,
)
from repositories.catalog_specifications import OutOfStockSpec
from repositories.interfaces import ICategoryRepository, IProductRepository
from utils.clock import Clock, utc_now
from utils.logging_utils import log_operation

logger = logging.getLogger(__name__)

_PRICE_QUANTUM = Decimal(1).scaleb(-PRICE_SCALE)


class ProductLifecycleService:
    """Creates, changes and removes products under the catalog rules."""

    def __init__(
        self,
        product_repository: IProductRepository,
        category_repository: ICategoryRepository,
        clock: Clock = utc_now,
        settings: Optional[CatalogSettings] = None
    ):
        """
        Initialize ProductLifecycleService.

        Args:
            product_repository: Product storage port
            category_repository: Category storage port, used to read the
                current state of a category being assigned
            clock: Source of timestamps
            settings: Runtime settings; defaults to the process settings
        """
        self.products = product_repository
        self.categories = category_repository
        self.clock = clock
        self.settings = settings or get_settings()

    # ==================== COMMANDS ====================

    @log_operation("create_product")
    def create_product(self, candidate: Product) -> Product:
        """
        Validate and persist a new product.

        Args:
            candidate: Product to create; its id, timestamps and version are
                ignored. The caller's object is left untouched.

        Returns:
            The stored product with generated ID and timestamps

        Raises:
            MissingFieldError: If name, price or category is absent
            NotFoundError: If the category is not stored
            CategoryInactiveError: If the category is inactive
            InvalidPriceError: If the price is not positive or has more than
                two decimal places
            InvalidStockError: If the stock quantity is negative
            DuplicateNameError: If the category already has a product with this name
            DuplicateSkuError: If the SKU is already used
        """
        logger.debug(f"Creating new product: {candidate.name}")

        candidate = replace(candidate)
        self._validate_required(candidate)
        candidate.category = self._resolve_active_category(candidate.category)
        self._validate_price(candidate.price)
        self._validate_stock_quantity(candidate.stock_quantity)
        self._validate_name_unique_in_category(candidate.name, candidate.category.id)
        self._validate_sku_unique(candidate.sku)

        candidate.id = None
        candidate.version = 0
        candidate.stamp_created(self.clock())

        saved = self.products.save(candidate)
        logger.info(f"Successfully created product with ID: {saved.id}")
        return saved

    @log_operation("update_product")
    def update_product(self, product_id: str, candidate: Product) -> Product:
        """
        Replace a stored product's state with a candidate's.

        The stored id and creation time are kept. Name uniqueness is only
        rechecked when the name or the category changes.

        Args:
            product_id: ID of the product to update
            candidate: New product state; the caller's object is left untouched

        Returns:
            The updated product

        Raises:
            NotFoundError: If the product does not exist
            Same errors as create_product for the candidate's fields
        """
        logger.debug(f"Updating product with ID: {product_id}")

        existing = self._load(product_id)
        candidate = replace(candidate)

        self._validate_required(candidate)
        candidate.category = self._resolve_active_category(candidate.category)
        self._validate_price(candidate.price)
        self._validate_stock_quantity(candidate.stock_quantity)

        same_category = candidate.category.id == existing.category.id
        if not (same_category and candidate.same_name_as(existing.name)):
            self._validate_name_unique_in_category(candidate.name, candidate.category.id, existing.id)
        if candidate.sku != existing.sku:
            self._validate_sku_unique(candidate.sku, existing.id)

        candidate.take_identity_from(existing, self.clock())

        saved = self.products.save(candidate)
        logger.info(f"Successfully updated product with ID: {saved.id}")
        return saved

    @log_operation("adjust_stock")
    def adjust_stock(self, product_id: str, delta: int) -> Product:
        """
        Add to (positive delta) or take from (negative delta) a product's stock.

        Args:
            product_id: ID of the product
            delta: Quantity to add or subtract

        Returns:
            The updated product

        Raises:
            NotFoundError: If the product does not exist
            InvalidStockError: If the result would be negative; nothing is written
        """
        logger.debug(f"Adjusting stock for product ID: {product_id} by {delta}")

        if not _is_int(delta):
            raise InvalidFieldError("Product", "delta", f"Stock adjustment must be an integer, got {delta!r}", delta)

        product = self._load(product_id)
        current = product.stock_quantity
        new_quantity = current + delta

        if new_quantity < 0:
            raise InvalidStockError(
                f"Stock adjustment would result in negative quantity. "
                f"Current: {current}, Adjustment: {delta}",
                current=current,
                adjustment=delta,
            )

        if abs(delta) > self.settings.large_stock_adjustment:
            logger.warning(
                f"Large stock adjustment for product {product.name}: {delta} "
                f"(new total: {new_quantity})"
            )

        product.set_stock_quantity(new_quantity, self.clock())
        saved = self.products.save(product)

        logger.info(f"Stock adjusted for product {product.name}: {current} -> {new_quantity}")
        return saved

    @log_operation("change_category")
    def change_category(self, product_id: str, new_category: Category) -> Product:
        """
        Move a product to another category.

        Args:
            product_id: ID of the product
            new_category: Target category; must be stored and active

        Returns:
            The updated product

        Raises:
            NotFoundError: If the product or category does not exist
            MissingFieldError: If no category is given
            CategoryInactiveError: If the target category is inactive
            DuplicateNameError: If the target category already has a product with this name
        """
        product = self._load(product_id)
        if new_category is None:
            raise MissingFieldError("Product", "category", "Product category")

        logger.debug(f"Changing category for product ID: {product_id} to category: {new_category.name}")

        old_category_name = product.category.name
        category = self._resolve_active_category(new_category)
        self._validate_name_unique_in_category(product.name, category.id, product.id)

        product.change_category(category, self.clock())
        saved = self.products.save(product)

        logger.info(f"Category changed for product {product.name}: {old_category_name} -> {category.name}")
        return saved

    @log_operation("update_price")
    def update_price(self, product_id: str, new_price: Optional[Money]) -> Product:
        """
        Change a product's price.

        Args:
            product_id: ID of the product
            new_price: New price; must be present and positive

        Returns:
            The updated product

        Raises:
            NotFoundError: If the product does not exist
            InvalidPriceError: If the price is absent or not positive, or finer than cents
        """
        logger.debug(f"Updating price for product ID: {product_id} to {new_price}")

        product = self._load(product_id)
        if new_price is None:
            raise InvalidPriceError("Product price cannot be null")
        self._validate_price(new_price)

        old_price = product.price
        product.change_price(new_price, self.clock())
        saved = self.products.save(product)

        logger.info(f"Price updated for product {product.name}: {old_price} -> {new_price}")
        return saved

    @log_operation("deactivate_product")
    def deactivate_product(self, product_id: str) -> None:
        """
        Remove a product from the catalog.

        Only allowed once the product's stock is zero; the product is then
        deleted from the store.

        Raises:
            NotFoundError: If the product does not exist
            CannotDeactivateWithStockError: If stock remains
        """
        logger.debug(f"Deactivating product with ID: {product_id}")

        product = self._load(product_id)
        if product.stock_quantity > 0:
            raise CannotDeactivateWithStockError(product.id, product.name, product.stock_quantity)

        self.products.delete_by_id(product.id)
        logger.info(f"Product deactivated: {product.name}")

    # ==================== QUERIES ====================

    def find_product_by_id(self, product_id: str) -> Product:
        """
        Raises:
            NotFoundError: If the product does not exist
        """
        return self._load(product_id)

    def find_products_by_category(self, category_id: str, page: int = 0, page_size: Optional[int] = None) -> List[Product]:
        return self.products.find_by_category_id(category_id, page, page_size or self.settings.default_page_size)

    def search_products(self, text: str, page: int = 0, page_size: Optional[int] = None) -> List[Product]:
        if not text or not text.strip():
            return self.find_all_products(page, page_size)
        return self.products.search_by_text(text, page, page_size or self.settings.default_page_size)

    def find_all_products(self, page: int = 0, page_size: Optional[int] = None) -> List[Product]:
        return self.products.find_all(page, page_size or self.settings.default_page_size)

    def get_product_statistics(self) -> ProductStatistics:
        return ProductStatistics(
            total_products=self.products.count(),
            out_of_stock_products=self.products.count_matching(OutOfStockSpec()),
            total_units_in_stock=self.products.total_units_in_stock(),
        )

    # ==================== VALIDATION ====================

    def _load(self, product_id: str) -> Product:
        product = self.products.find_by_id(product_id)
        if product is None:
            raise NotFoundError("Product", "ID", product_id)
        return product

    def _validate_required(self, product: Product) -> None:
        if product.name is None or not product.name.strip():
            raise MissingFieldError("Product", "name", "Product name")
        if product.price is None:
            raise MissingFieldError("Product", "price", "Product price")
        if product.category is None:
            raise MissingFieldError("Product", "category", "Product category")

        product.name = product.name.strip()
        if not PRODUCT_NAME_MIN_LENGTH <= len(product.name) <= PRODUCT_NAME_MAX_LENGTH:
            raise InvalidFieldError(
                "Product",
                "name",
                f"Product name must be between {PRODUCT_NAME_MIN_LENGTH} and "
                f"{PRODUCT_NAME_MAX_LENGTH} characters",
                product.name,
            )

        if product.sku is not None:
            product.sku = product.sku.strip() or None
        if product.sku is not None and len(product.sku) > SKU_MAX_LENGTH:
            raise InvalidFieldError("Product", "sku", f"SKU must be at most {SKU_MAX_LENGTH} characters", product.sku)

    def _resolve_active_category(self, category: Category) -> Category:
        """Reload the category from storage and require it to be active."""
        if category.id is None:
            raise InvalidFieldError(
                "Product",
                "category",
                f"Category '{category.name}' has not been saved yet",
                category.name,
            )

        stored = self.categories.find_by_id(category.id)
        if stored is None:
            raise NotFoundError("Category", "ID", category.id)
        if not stored.active:
            raise CategoryInactiveError(stored.id, stored.name)
        return stored

    def _validate_price(self, price: Money) -> None:
        if not price.is_positive():
            raise InvalidPriceError(f"Product price must be positive, got {price}", price)
        # Stored prices keep PRICE_SCALE decimal places; anything finer would be rounded away
        if price.amount != price.amount.quantize(_PRICE_QUANTUM):
            raise InvalidPriceError(
                f"Product price must have at most {PRICE_SCALE} decimal places, got {price}",
                price,
            )

    def _validate_stock_quantity(self, quantity: int) -> None:
        if not _is_int(quantity):
            raise InvalidFieldError("Product", "stock_quantity", f"Stock quantity must be an integer, got {quantity!r}", quantity)
        if quantity < 0:
            raise InvalidStockError(f"Product stock quantity cannot be negative: {quantity}", current=quantity)

    def _validate_name_unique_in_category(self, name: str, category_id: str, exclude_product_id: Optional[str] = None) -> None:
        if self.products.exists_by_name_in_category(name, category_id, exclude_product_id):
            raise DuplicateNameError(name, category_id)

    def _validate_sku_unique(self, sku: Optional[str], exclude_product_id: Optional[str] = None) -> None:
        if sku is None:
            return
        existing = self.products.find_by_sku(sku)
        if existing is not None and existing.id != exclude_product_id:
            raise DuplicateSkuError(sku)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
