"""
User repository for user-specific data access operations.
"""

from typing import List, Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session

from domain.aggregates import User
from domain.value_objects import EmailAddress, HashedPassword, Role
from models import User as UserModel
from .base_repository import BaseRepository
from .interfaces import IUserRepository
from .user_specifications import ActiveUserSpec, UsersByRoleSpec


class UserRepository(BaseRepository[UserModel, User], IUserRepository):
    """SQLAlchemy adapter for the user storage port."""

    entity_name = "User"

    def __init__(self, db: Session):
        super().__init__(db, UserModel)

    def _to_domain(self, row: UserModel) -> User:
        return User(
            id=row.id,
            first_name=row.first_name,
            last_name=row.last_name,
            email=EmailAddress(row.email),
            password=HashedPassword.from_hash(row.password_hash),
            role=Role(row.role),
            active=bool(row.active),
            email_verified=bool(row.email_verified),
            last_login_at=row.last_login_at,
            created_at=row.created_at,
            updated_at=row.updated_at,
            version=row.version,
        )

    def _apply(self, row: UserModel, user: User) -> None:
        row.first_name = user.first_name
        row.last_name = user.last_name
        row.email = user.email.value
        row.password_hash = user.password.hash
        row.role = user.role.value
        row.active = user.active
        row.email_verified = user.email_verified
        row.last_login_at = user.last_login_at
        if user.created_at is not None:
            row.created_at = user.created_at
        if user.updated_at is not None:
            row.updated_at = user.updated_at

    def find_by_email(self, email: EmailAddress) -> Optional[User]:
        """
        Get a user by email address.

        Args:
            email: Email address (exact match on the trimmed value)

        Returns:
            User, or None if not found
        """
        row = self.db.query(self.model).filter(self.model.email == email.value).first()
        return self._to_domain(row) if row is not None else None

    def exists_by_email(self, email: EmailAddress) -> bool:
        return self.db.query(self.model).filter(self.model.email == email.value).count() > 0

    def find_by_role(self, role: Role, page: int, page_size: int) -> List[User]:
        query = self.db.query(self.model).filter(UsersByRoleSpec(role).to_sql_filter())
        return self._fetch_page(query, page, page_size)

    def find_active_users(self, page: int, page_size: int) -> List[User]:
        query = self.db.query(self.model).filter(ActiveUserSpec().to_sql_filter())
        return self._fetch_page(query, page, page_size)

    def find_inactive_users(self, page: int, page_size: int) -> List[User]:
        query = self.db.query(self.model).filter((~ActiveUserSpec()).to_sql_filter())
        return self._fetch_page(query, page, page_size)

    def search_by_name(self, name: str, page: int, page_size: int) -> List[User]:
        """
        Get one page of users whose first or last name contains the text.

        Args:
            name: Search text, matched case-insensitively
            page: Zero-based page number
            page_size: Number of users per page
        """
        needle = name.strip()
        query = self.db.query(self.model).filter(
            or_(
                self.model.first_name.icontains(needle, autoescape=True),
                self.model.last_name.icontains(needle, autoescape=True),
            )
        )
        return self._fetch_page(query, page, page_size)

    def count_by_role(self, role: Role) -> int:
        return self.count_matching(UsersByRoleSpec(role))

    def count_active_users(self) -> int:
        return self.count_matching(ActiveUserSpec())

    def count_inactive_users(self) -> int:
        return self.count_matching(~ActiveUserSpec())
