"""Product aggregate.

Products are owned by ProductLifecycleService while a request is in flight;
the service decides whether a change is allowed and then applies it through
the methods below. The aggregate itself does not reject negative stock or
inactive categories, because a candidate handed in by a caller must be able
to carry bad input up to the service so it can be diagnosed.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from domain.aggregates.category import Category
from domain.value_objects import Money
from utils.clock import utc_now


@dataclass
class Product:
    """A product in the catalog."""

    name: Optional[str]
    price: Optional[Money]
    category: Optional[Category]
    stock_quantity: int = 0
    description: Optional[str] = None
    sku: Optional[str] = None
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    # Optimistic-lock counter; 0 until the first save
    version: int = 0

    @property
    def in_stock(self) -> bool:
        return self.stock_quantity > 0

    def stamp_created(self, now: Optional[datetime] = None) -> None:
        now = now or utc_now()
        self.created_at = now
        self.updated_at = now

    def touch(self, now: Optional[datetime] = None) -> None:
        self.updated_at = now or utc_now()

    def set_stock_quantity(self, quantity: int, now: Optional[datetime] = None) -> None:
        self.stock_quantity = quantity
        self.touch(now)

    def change_price(self, price: Money, now: Optional[datetime] = None) -> None:
        self.price = price
        self.touch(now)

    def change_category(self, category: Category, now: Optional[datetime] = None) -> None:
        self.category = category
        self.touch(now)

    def take_identity_from(self, existing: Product, now: Optional[datetime] = None) -> None:
        """Adopt the identity of the stored product this candidate replaces."""
        self.id = existing.id
        self.created_at = existing.created_at
        self.version = existing.version
        self.touch(now)

    def same_name_as(self, other_name: Optional[str]) -> bool:
        if self.name is None or other_name is None:
            return self.name == other_name
        return self.name.strip().casefold() == other_name.strip().casefold()
