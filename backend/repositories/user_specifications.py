"""
User Specifications

Concrete specifications for counting and filtering users.
"""

from domain.aggregates import User
from domain.value_objects import Role
from models import User as UserModel
from .specifications import Specification


class UsersByRoleSpec(Specification[User]):
    """Specification for users holding a specific role."""

    def __init__(self, role: Role):
        """
        Initialize specification.

        Args:
            role: Role to filter by
        """
        self.role = role

    def is_satisfied_by(self, user: User) -> bool:
        return user.role == self.role

    def to_sql_filter(self):
        return UserModel.role == self.role.value


class ActiveUserSpec(Specification[User]):
    """Users whose account is active."""

    def is_satisfied_by(self, user: User) -> bool:
        return user.active

    def to_sql_filter(self):
        return UserModel.active.is_(True)


class VerifiedEmailSpec(Specification[User]):
    """Users who verified their email address."""

    def is_satisfied_by(self, user: User) -> bool:
        return user.email_verified

    def to_sql_filter(self):
        return UserModel.email_verified.is_(True)

