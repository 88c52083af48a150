"""
Domain Aggregates

Aggregates are clusters of domain objects that can be treated as a single unit.
The aggregate root is the only member of the aggregate that outside objects
are allowed to hold references to.

- Category: Grouping for products; only its active flag matters to product rules
- Product: Owns its Money price and stock count, references one Category
- User: Owns its EmailAddress, HashedPassword and Role
"""

from .category import Category
from .product import Product
from .user import User

__all__ = [
    "Category",
    "Product",
    "User",
]
