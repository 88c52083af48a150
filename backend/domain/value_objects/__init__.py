"""
Domain Value Objects

Value objects are immutable types that represent descriptive aspects of the domain.
They have no conceptual identity and are compared by their values, not by ID.
Each one validates itself at construction and raises ValueError when invalid.

- Money: Non-negative amount with an ISO currency code
- EmailAddress: Trimmed, format-checked email address
- HashedPassword: bcrypt hash that never renders itself
- Role: CUSTOMER, ADMIN or MANAGER
"""

from .money import Money
from .email_address import EmailAddress
from .hashed_password import HashedPassword
from .role import Role

__all__ = [
    "Money",
    "EmailAddress",
    "HashedPassword",
    "Role",
]
