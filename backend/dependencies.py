"""
Dependency injection providers.

This module provides factory functions for creating repository and service
instances from a database session, following the Dependency Inversion
Principle. The domain services only ever receive the storage ports, so tests
can hand them doubles instead.
"""

from sqlalchemy.orm import Session

from config.catalog_config import CatalogSettings
from repositories.category_repository import CategoryRepository
from repositories.product_repository import ProductRepository
from repositories.user_repository import UserRepository
from repositories.interfaces import ICategoryRepository, IProductRepository, IUserRepository
from services.product_lifecycle_service import ProductLifecycleService
from services.user_lifecycle_service import UserLifecycleService


def get_category_repository(db: Session) -> ICategoryRepository:
    """
    Factory function for creating CategoryRepository instances.

    Args:
        db: Database session

    Returns:
        CategoryRepository instance
    """
    return CategoryRepository(db)


def get_product_repository(db: Session) -> IProductRepository:
    """
    Factory function for creating ProductRepository instances.

    Args:
        db: Database session

    Returns:
        ProductRepository instance
    """
    return ProductRepository(db)


def get_user_repository(db: Session) -> IUserRepository:
    """
    Factory function for creating UserRepository instances.

    Args:
        db: Database session

    Returns:
        UserRepository instance
    """
    return UserRepository(db)


def get_product_service(db: Session, settings: CatalogSettings | None = None) -> ProductLifecycleService:
    """
    Factory function for creating ProductLifecycleService instances.

    Args:
        db: Database session shared by both repositories
        settings: Optional settings override

    Returns:
        ProductLifecycleService wired to SQLAlchemy repositories
    """
    return ProductLifecycleService(
        get_product_repository(db),
        get_category_repository(db),
        settings=settings,
    )


def get_user_service(db: Session, settings: CatalogSettings | None = None) -> UserLifecycleService:
    """
    Factory function for creating UserLifecycleService instances.

    Args:
        db: Database session
        settings: Optional settings override

    Returns:
        UserLifecycleService wired to the SQLAlchemy user repository
    """
    return UserLifecycleService(get_user_repository(db), settings=settings)
