"""
Statistics Response DTOs

Aggregated counts returned by the domain services.
"""

from pydantic import BaseModel, Field


class ProductStatistics(BaseModel):
    """
    Aggregated statistics about the catalog.
    """

    total_products: int = Field(description="Total number of products")
    out_of_stock_products: int = Field(description="Products with zero stock")
    total_units_in_stock: int = Field(description="Sum of stock quantities across all products")

    @property
    def in_stock_products(self) -> int:
        return self.total_products - self.out_of_stock_products


class UserStatistics(BaseModel):
    """
    Aggregated statistics about user accounts.
    """

    total_users: int = Field(description="Total number of users")
    active_users: int = Field(description="Users with an active account")
    inactive_users: int = Field(description="Users with an inactive account")
    verified_users: int = Field(description="Users who verified their email address")
    customer_users: int = Field(description="Users with the CUSTOMER role")
    admin_users: int = Field(description="Users with the ADMIN role")
    manager_users: int = Field(description="Users with the MANAGER role")
