"""
Request DTOs

Commands carrying primitive input from the application layer. They check the
shape of the input and build candidate aggregates for the domain services.
"""

from .product_request import CreateProductCommand, UpdatePriceCommand, UpdateProductCommand
from .user_request import ChangePasswordCommand, RegisterUserCommand, UpdateUserCommand

__all__ = [
    "CreateProductCommand",
    "UpdatePriceCommand",
    "UpdateProductCommand",
    "ChangePasswordCommand",
    "RegisterUserCommand",
    "UpdateUserCommand",
]
