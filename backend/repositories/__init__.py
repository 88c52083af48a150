"""
Repository layer for data access abstraction.

This package contains the storage ports the domain services depend on and
the SQLAlchemy adapters that implement them.
"""

from .base_repository import BaseRepository
from .interfaces import ICategoryRepository, IProductRepository, IUserRepository
from .category_repository import CategoryRepository
from .product_repository import ProductRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "ICategoryRepository",
    "IProductRepository",
    "IUserRepository",
    "CategoryRepository",
    "ProductRepository",
    "UserRepository",
]
