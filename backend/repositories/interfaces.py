"""
Storage Port Interfaces

Abstract repositories the domain services depend on. Concrete adapters (the
SQLAlchemy repositories in this package, or test doubles) implement them;
the services never import an adapter directly.

Conventions shared by every port:
- Lookups return ``None`` when nothing matches, never raise.
- ``page`` is zero-based; ``page_size`` must be positive.
- ``save`` inserts when the aggregate has no id and updates otherwise,
  returning the persisted aggregate with id, timestamps and version set.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from domain.aggregates import Category, Product, User
from domain.value_objects import EmailAddress, Role
from .specifications import Specification


class ICategoryRepository(ABC):
    """Storage port for Category aggregates."""

    @abstractmethod
    def save(self, category: Category) -> Category:
        pass

    @abstractmethod
    def find_by_id(self, category_id: str) -> Optional[Category]:
        pass

    @abstractmethod
    def find_by_name(self, name: str) -> Optional[Category]:
        """Categories are unique by name."""
        pass

    @abstractmethod
    def exists_by_name(self, name: str) -> bool:
        pass

    @abstractmethod
    def find_all(self, page: int, page_size: int) -> List[Category]:
        pass

    @abstractmethod
    def find_active(self, page: int, page_size: int) -> List[Category]:
        pass

    @abstractmethod
    def count(self) -> int:
        pass

    @abstractmethod
    def count_matching(self, spec: Specification[Category]) -> int:
        pass

    @abstractmethod
    def delete_by_id(self, category_id: str) -> None:
        pass

    @abstractmethod
    def exists_by_id(self, category_id: str) -> bool:
        pass


class IProductRepository(ABC):
    """Storage port for Product aggregates."""

    @abstractmethod
    def save(self, product: Product) -> Product:
        """
        Insert or update a product.

        Raises:
            ConcurrentModificationError: If the stored version moved on since
                the product was loaded
        """
        pass

    @abstractmethod
    def find_by_id(self, product_id: str) -> Optional[Product]:
        pass

    @abstractmethod
    def find_by_sku(self, sku: str) -> Optional[Product]:
        pass

    @abstractmethod
    def exists_by_sku(self, sku: str) -> bool:
        pass

    @abstractmethod
    def find_all(self, page: int, page_size: int) -> List[Product]:
        pass

    @abstractmethod
    def find_by_category_id(self, category_id: str, page: int, page_size: int) -> List[Product]:
        pass

    @abstractmethod
    def search_by_text(self, text: str, page: int, page_size: int) -> List[Product]:
        """Case-insensitive substring match on name or description."""
        pass

    @abstractmethod
    def exists_by_name_in_category(
        self,
        name: str,
        category_id: str,
        exclude_product_id: Optional[str] = None
    ) -> bool:
        """
        Check for another product with the same name (case-insensitive) in a category.

        Must consider every product in the category, not a single page.

        Args:
            name: Candidate product name
            category_id: Category to look in
            exclude_product_id: Product to ignore, typically the one being updated
        """
        pass

    @abstractmethod
    def count(self) -> int:
        pass

    @abstractmethod
    def count_by_category_id(self, category_id: str) -> int:
        pass

    @abstractmethod
    def count_matching(self, spec: Specification[Product]) -> int:
        pass

    @abstractmethod
    def total_units_in_stock(self) -> int:
        pass

    @abstractmethod
    def delete_by_id(self, product_id: str) -> None:
        pass

    @abstractmethod
    def exists_by_id(self, product_id: str) -> bool:
        pass


class IUserRepository(ABC):
    """Storage port for User aggregates."""

    @abstractmethod
    def save(self, user: User) -> User:
        """
        Insert or update a user.

        Raises:
            ConcurrentModificationError: If the stored version moved on since
                the user was loaded
        """
        pass

    @abstractmethod
    def find_by_id(self, user_id: str) -> Optional[User]:
        pass

    @abstractmethod
    def find_by_email(self, email: EmailAddress) -> Optional[User]:
        pass

    @abstractmethod
    def exists_by_email(self, email: EmailAddress) -> bool:
        pass

    @abstractmethod
    def find_all(self, page: int, page_size: int) -> List[User]:
        pass

    @abstractmethod
    def find_by_role(self, role: Role, page: int, page_size: int) -> List[User]:
        pass

    @abstractmethod
    def find_active_users(self, page: int, page_size: int) -> List[User]:
        pass

    @abstractmethod
    def find_inactive_users(self, page: int, page_size: int) -> List[User]:
        pass

    @abstractmethod
    def search_by_name(self, name: str, page: int, page_size: int) -> List[User]:
        """Case-insensitive substring match on first or last name."""
        pass

    @abstractmethod
    def count(self) -> int:
        pass

    @abstractmethod
    def count_by_role(self, role: Role) -> int:
        pass

    @abstractmethod
    def count_active_users(self) -> int:
        pass

    @abstractmethod
    def count_inactive_users(self) -> int:
        pass

    @abstractmethod
    def count_matching(self, spec: Specification[User]) -> int:
        pass

    @abstractmethod
    def delete_by_id(self, user_id: str) -> None:
        pass

    @abstractmethod
    def exists_by_id(self, user_id: str) -> bool:
        pass
