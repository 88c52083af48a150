"""
Product repository for product-specific data access operations.
"""

from typing import List, Optional
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from domain.aggregates import Product
from domain.value_objects import Money
from exceptions import NotFoundError
from models import Category as CategoryModel
from models import Product as ProductModel
from .base_repository import BaseRepository
from .catalog_specifications import ProductsInCategorySpec
from .category_repository import CategoryRepository
from .interfaces import IProductRepository


def name_key(name: str) -> str:
    """Case-folded form of a product name used for uniqueness."""
    return name.strip().casefold()


class ProductRepository(BaseRepository[ProductModel, Product], IProductRepository):
    """SQLAlchemy adapter for the product storage port."""

    entity_name = "Product"

    def __init__(self, db: Session):
        super().__init__(db, ProductModel)
        self._categories = CategoryRepository(db)

    def _to_domain(self, row: ProductModel) -> Product:
        return Product(
            id=row.id,
            name=row.name,
            description=row.description,
            sku=row.sku,
            price=Money(row.price_amount, row.price_currency),
            stock_quantity=row.stock_quantity,
            category=self._categories._to_domain(row.category),
            created_at=row.created_at,
            updated_at=row.updated_at,
            version=row.version,
        )

    def _apply(self, row: ProductModel, product: Product) -> None:
        category_row = self.db.get(CategoryModel, product.category.id) if product.category.id else None
        if category_row is None:
            raise NotFoundError("Category", "ID", product.category.id)

        row.name = product.name
        row.name_key = name_key(product.name)
        row.description = product.description
        row.sku = product.sku
        row.price_amount = product.price.amount
        row.price_currency = product.price.currency_code
        row.stock_quantity = product.stock_quantity
        row.category = category_row
        if product.created_at is not None:
            row.created_at = product.created_at
        if product.updated_at is not None:
            row.updated_at = product.updated_at

    def find_by_sku(self, sku: str) -> Optional[Product]:
        row = self.db.query(self.model).filter(self.model.sku == sku).first()
        return self._to_domain(row) if row is not None else None

    def exists_by_sku(self, sku: str) -> bool:
        return self.db.query(self.model).filter(self.model.sku == sku).count() > 0

    def find_by_category_id(self, category_id: str, page: int, page_size: int) -> List[Product]:
        """
        Get one page of products in a category.

        Args:
            category_id: Category UUID
            page: Zero-based page number
            page_size: Number of products per page
        """
        query = self.db.query(self.model).filter(ProductsInCategorySpec(category_id).to_sql_filter())
        return self._fetch_page(query, page, page_size)

    def search_by_text(self, text: str, page: int, page_size: int) -> List[Product]:
        """
        Get one page of products whose name or description contains the text.

        Args:
            text: Search text, matched case-insensitively
            page: Zero-based page number
            page_size: Number of products per page
        """
        needle = text.strip()
        query = self.db.query(self.model).filter(
            or_(
                self.model.name.icontains(needle, autoescape=True),
                self.model.description.icontains(needle, autoescape=True),
            )
        )
        return self._fetch_page(query, page, page_size)

    def exists_by_name_in_category(
        self,
        name: str,
        category_id: str,
        exclude_product_id: Optional[str] = None
    ) -> bool:
        """
        Check the whole category for a product with the same name.

        Args:
            name: Candidate product name
            category_id: Category UUID
            exclude_product_id: Product to leave out of the check

        Returns:
            True if another product already uses the name
        """
        query = self.db.query(self.model).filter(
            self.model.category_id == category_id,
            self.model.name_key == name_key(name),
        )
        if exclude_product_id:
            query = query.filter(self.model.id != exclude_product_id)
        return query.count() > 0

    def count_by_category_id(self, category_id: str) -> int:
        return self.count_matching(ProductsInCategorySpec(category_id))

    def total_units_in_stock(self) -> int:
        total = self.db.query(func.coalesce(func.sum(self.model.stock_quantity), 0)).scalar()
        return int(total or 0)
