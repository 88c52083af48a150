"""
Category aggregate.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from utils.clock import utc_now


@dataclass
class Category:
    """
    A product category.

    Products only read the ``active`` flag; everything else about a category
    is managed outside the product rules.
    """

    name: str
    description: Optional[str] = None
    active: bool = True
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def activate(self, now: Optional[datetime] = None) -> None:
        self.active = True
        self.updated_at = now or utc_now()

    def deactivate(self, now: Optional[datetime] = None) -> None:
        self.active = False
        self.updated_at = now or utc_now()
