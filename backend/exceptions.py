"""
Custom exception classes for the application.

This module defines the ambient application errors (configuration, validation,
database) and the typed business-rule errors raised by the domain services.
Every business-rule error is a DomainError subclass carrying an ErrorKind, so
callers can either catch a specific subclass or match on ``error.kind``.
"""

from typing import Any

from constants import ErrorKind


class ApplicationError(Exception):
    """Base exception for all application errors"""

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(ApplicationError):
    """Raised when there's a configuration issue"""

    def __init__(self, message: str, missing_keys: list[str] | None = None):
        details = {"missing_keys": missing_keys} if missing_keys else {}
        super().__init__(message, details)


class ValidationError(ApplicationError):
    """Raised when validation of caller input fails outside the business rules"""

    def __init__(self, message: str, invalid_fields: dict | None = None):
        details = {"invalid_fields": invalid_fields} if invalid_fields else {}
        super().__init__(message, details)


class DatabaseError(ApplicationError):
    """Raised when database operations fail"""

    def __init__(self, operation: str, message: str):
        details = {"operation": operation}
        super().__init__(message, details)


# ==================== BUSINESS RULE ERRORS ====================


class DomainError(ApplicationError):
    """Base class for business-rule violations. Never retried."""

    kind: ErrorKind

    def __init__(self, message: str, **details: Any):
        super().__init__(message, details)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r}, message={self.message!r})"


class NotFoundError(DomainError):
    """Raised when an aggregate cannot be loaded"""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, entity: str, lookup: str, value: Any):
        super().__init__(
            f"{entity} with {lookup} {value} not found",
            entity=entity,
            lookup=lookup,
            value=str(value),
        )


class MissingFieldError(DomainError):
    """Raised when a required field is absent or blank"""

    kind = ErrorKind.MISSING_FIELD

    def __init__(self, entity: str, field: str, label: str):
        super().__init__(f"{label} is required", entity=entity, field=field)
        self.field = field


class InvalidFieldError(DomainError):
    """Raised when a field is present but malformed"""

    kind = ErrorKind.INVALID_FIELD

    def __init__(self, entity: str, field: str, message: str, value: Any = None):
        super().__init__(message, entity=entity, field=field, value=value)
        self.field = field


class DuplicateNameError(DomainError):
    kind = ErrorKind.DUPLICATE_NAME

    def __init__(self, name: str, category_id: str):
        super().__init__(
            f"Product name '{name}' already exists in category {category_id}",
            name=name,
            category_id=category_id,
        )


class DuplicateSkuError(DomainError):
    kind = ErrorKind.DUPLICATE_SKU

    def __init__(self, sku: str):
        super().__init__(f"Product SKU '{sku}' already exists", sku=sku)


class DuplicateEmailError(DomainError):
    kind = ErrorKind.DUPLICATE_EMAIL

    def __init__(self, email: str):
        super().__init__(f"Email already exists: {email}", email=email)


class CategoryInactiveError(DomainError):
    kind = ErrorKind.CATEGORY_INACTIVE

    def __init__(self, category_id: str | None, category_name: str):
        super().__init__(
            f"Cannot use inactive category: {category_name}",
            category_id=category_id,
            category_name=category_name,
        )


class InvalidStockError(DomainError):
    kind = ErrorKind.INVALID_STOCK

    def __init__(self, message: str, current: int | None = None, adjustment: int | None = None):
        super().__init__(message, current=current, adjustment=adjustment)


class InvalidPriceError(DomainError):
    kind = ErrorKind.INVALID_PRICE

    def __init__(self, message: str, price: Any = None):
        super().__init__(message, price=None if price is None else str(price))


class CannotDeactivateWithStockError(DomainError):
    kind = ErrorKind.CANNOT_DEACTIVATE_WITH_STOCK

    def __init__(self, product_id: str, product_name: str, stock_quantity: int):
        super().__init__(
            f"Cannot deactivate product '{product_name}' with remaining stock: {stock_quantity}",
            product_id=product_id,
            product_name=product_name,
            stock_quantity=stock_quantity,
        )


class InactiveAccountError(DomainError):
    kind = ErrorKind.INACTIVE_ACCOUNT

    def __init__(self, user_id: str):
        super().__init__(f"User account {user_id} is not active", user_id=user_id)


class InvalidCredentialError(DomainError):
    kind = ErrorKind.INVALID_CREDENTIAL

    def __init__(self, user_id: str, message: str = "Invalid password"):
        super().__init__(message, user_id=user_id)


class SamePasswordError(DomainError):
    kind = ErrorKind.SAME_PASSWORD

    def __init__(self, user_id: str):
        super().__init__(
            "New password must be different from current password",
            user_id=user_id,
        )


class ForbiddenError(DomainError):
    kind = ErrorKind.FORBIDDEN

    def __init__(self, action: str, acting_user_id: str | None, acting_role: str):
        super().__init__(
            f"User {acting_user_id} with role {acting_role} is not allowed to {action}",
            action=action,
            acting_user_id=acting_user_id,
            acting_role=acting_role,
        )


class CannotActOnSelfError(DomainError):
    kind = ErrorKind.CANNOT_ACT_ON_SELF

    def __init__(self, action: str, user_id: str):
        super().__init__(f"Cannot {action} on your own account ({user_id})", action=action, user_id=user_id)


class AlreadyActiveError(DomainError):
    kind = ErrorKind.ALREADY_ACTIVE

    def __init__(self, user_id: str):
        super().__init__(f"User {user_id} is already active", user_id=user_id)


class AlreadyInactiveError(DomainError):
    kind = ErrorKind.ALREADY_INACTIVE

    def __init__(self, user_id: str):
        super().__init__(f"User {user_id} is already inactive", user_id=user_id)


class AlreadyVerifiedError(DomainError):
    kind = ErrorKind.ALREADY_VERIFIED

    def __init__(self, user_id: str):
        super().__init__(f"Email of user {user_id} is already verified", user_id=user_id)


class ConcurrentModificationError(DomainError):
    """Raised when a save is based on a stale version of the aggregate"""

    kind = ErrorKind.CONCURRENT_MODIFICATION

    def __init__(self, entity: str, entity_id: str, expected_version: int, actual_version: int | None):
        super().__init__(
            f"{entity} {entity_id} was modified concurrently "
            f"(expected version {expected_version}, found {actual_version})",
            entity=entity,
            entity_id=entity_id,
            expected_version=expected_version,
            actual_version=actual_version,
        )
