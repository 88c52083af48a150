"""
Product Request DTOs

Commands carrying primitive product input. They check the shape of the input
and build candidate aggregates; the business rules stay in
ProductLifecycleService.
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from domain.aggregates import Category, Product
from domain.value_objects import Money


class CreateProductCommand(BaseModel):
    """
    Command for creating a product.
    """

    name: str = Field(description="Product name, unique within its category")
    description: Optional[str] = Field(None, description="Free-text description")
    price: Decimal = Field(description="Unit price, must be positive")
    currency: str = Field("USD", description="ISO 4217 currency code")
    stock_quantity: int = Field(0, description="Initial stock")
    category_id: str = Field(description="ID of an active category")
    sku: Optional[str] = Field(None, description="Optional stock keeping unit")

    @field_validator("currency")
    @classmethod
    def normalize_currency(cls, v):
        """Currency codes are stored upper-case."""
        return v.strip().upper()

    def to_money(self) -> Money:
        """
        Raises:
            ValueError: If the amount is negative or the currency is invalid
        """
        return Money(self.price, self.currency)

    def to_candidate(self, category: Category) -> Product:
        """
        Build the candidate product.

        Args:
            category: The category referenced by category_id, loaded by the caller
        """
        return Product(
            name=self.name,
            description=self.description,
            price=self.to_money(),
            stock_quantity=self.stock_quantity,
            category=category,
            sku=self.sku,
        )


class UpdateProductCommand(CreateProductCommand):
    """
    Command for replacing a product's state. Same fields as creation.
    """


class UpdatePriceCommand(BaseModel):
    """Command for changing a product's price."""

    price: Decimal = Field(description="New unit price")
    currency: str = Field("USD", description="ISO 4217 currency code")

    def to_money(self) -> Money:
        return Money(self.price, self.currency)
