"""
Category repository for category-specific data access operations.
"""

from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session

from domain.aggregates import Category
from models import Category as CategoryModel
from .base_repository import BaseRepository
from .catalog_specifications import ActiveCategorySpec
from .interfaces import ICategoryRepository


class CategoryRepository(BaseRepository[CategoryModel, Category], ICategoryRepository):
    """SQLAlchemy adapter for the category storage port."""

    entity_name = "Category"

    def __init__(self, db: Session):
        super().__init__(db, CategoryModel)

    def _to_domain(self, row: CategoryModel) -> Category:
        return Category(
            id=row.id,
            name=row.name,
            description=row.description,
            active=bool(row.active),
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    def _apply(self, row: CategoryModel, category: Category) -> None:
        row.name = category.name
        row.description = category.description
        row.active = category.active
        if category.created_at is not None:
            row.created_at = category.created_at
        if category.updated_at is not None:
            row.updated_at = category.updated_at

    def find_by_name(self, name: str) -> Optional[Category]:
        """
        Get a category by name, ignoring case.

        Args:
            name: Category name

        Returns:
            Category, or None if not found
        """
        row = self.db.query(self.model).filter(
            func.lower(self.model.name) == name.strip().lower()
        ).first()
        return self._to_domain(row) if row is not None else None

    def exists_by_name(self, name: str) -> bool:
        return self.find_by_name(name) is not None

    def find_active(self, page: int, page_size: int) -> List[Category]:
        """
        Get one page of categories that can receive products.

        Args:
            page: Zero-based page number
            page_size: Number of categories per page
        """
        query = self.db.query(self.model).filter(ActiveCategorySpec().to_sql_filter())
        return self._fetch_page(query, page, page_size)
