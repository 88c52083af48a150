"""
Catalog Specifications

Concrete specifications for counting and filtering categories and products.
"""

from domain.aggregates import Category, Product
from models import Category as CategoryModel
from models import Product as ProductModel
from .specifications import Specification


class ActiveCategorySpec(Specification[Category]):
    """Categories that may receive products."""

    def is_satisfied_by(self, category: Category) -> bool:
        return category.active

    def to_sql_filter(self):
        return CategoryModel.active.is_(True)


class ProductsInCategorySpec(Specification[Product]):
    """Specification for products belonging to a specific category."""

    def __init__(self, category_id: str):
        """
        Initialize specification.

        Args:
            category_id: Category ID to filter by
        """
        self.category_id = category_id

    def is_satisfied_by(self, product: Product) -> bool:
        return product.category is not None and product.category.id == self.category_id

    def to_sql_filter(self):
        return ProductModel.category_id == self.category_id


class OutOfStockSpec(Specification[Product]):
    """Products with nothing left in stock."""

    def is_satisfied_by(self, product: Product) -> bool:
        return product.stock_quantity == 0

    def to_sql_filter(self):
        return ProductModel.stock_quantity == 0

