"""
Role Value Object

Immutable representation of a user's role.
"""

from enum import Enum


class Role(str, Enum):
    """
    User role enum.

    Lookup is case-insensitive and ignores surrounding whitespace, so
    Role("admin") and Role(" ADMIN ") both give Role.ADMIN. Anything else is
    rejected with ValueError.
    """

    CUSTOMER = "CUSTOMER"
    ADMIN = "ADMIN"
    MANAGER = "MANAGER"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            normalized = value.strip().upper()
            for member in cls:
                if member.value == normalized:
                    return member
        return None

    def is_admin_privileged(self) -> bool:
        """ADMIN and MANAGER may perform administrative operations."""
        return self in {Role.ADMIN, Role.MANAGER}

    def is_customer(self) -> bool:
        return self is Role.CUSTOMER

    def is_manager(self) -> bool:
        return self is Role.MANAGER

    @classmethod
    def from_string(cls, value: str) -> "Role":
        """
        Create Role from string value.

        Raises:
            ValueError: If value is blank or not a known role
        """
        if value is None or not str(value).strip():
            raise ValueError("Role cannot be null or empty")
        try:
            return cls(value)
        except ValueError:
            valid = ", ".join(member.value for member in cls)
            raise ValueError(f"Invalid role: {value}. Valid roles are: {valid}")

    def __str__(self) -> str:
        return self.value
