"""
Application-wide constants.

This module centralizes the magic strings and numbers used by the domain
layer so that business limits live in one place.
"""
from enum import Enum


class ErrorKind(str, Enum):
    """
    Discriminator carried by every business-rule error.

    None of these are transient; a caller must change its input before
    trying again.
    """

    NOT_FOUND = 'NOT_FOUND'
    MISSING_FIELD = 'MISSING_FIELD'
    INVALID_FIELD = 'INVALID_FIELD'

    # Catalog rules
    DUPLICATE_NAME = 'DUPLICATE_NAME'
    DUPLICATE_SKU = 'DUPLICATE_SKU'
    CATEGORY_INACTIVE = 'CATEGORY_INACTIVE'
    INVALID_STOCK = 'INVALID_STOCK'
    INVALID_PRICE = 'INVALID_PRICE'
    CANNOT_DEACTIVATE_WITH_STOCK = 'CANNOT_DEACTIVATE_WITH_STOCK'

    # User rules
    DUPLICATE_EMAIL = 'DUPLICATE_EMAIL'
    INACTIVE_ACCOUNT = 'INACTIVE_ACCOUNT'
    INVALID_CREDENTIAL = 'INVALID_CREDENTIAL'
    SAME_PASSWORD = 'SAME_PASSWORD'
    FORBIDDEN = 'FORBIDDEN'
    CANNOT_ACT_ON_SELF = 'CANNOT_ACT_ON_SELF'
    ALREADY_ACTIVE = 'ALREADY_ACTIVE'
    ALREADY_INACTIVE = 'ALREADY_INACTIVE'
    ALREADY_VERIFIED = 'ALREADY_VERIFIED'

    # Persistence
    CONCURRENT_MODIFICATION = 'CONCURRENT_MODIFICATION'


# User profile limits
NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50

# Credentials
PASSWORD_MIN_LENGTH = 8
BCRYPT_MAX_PASSWORD_BYTES = 72  # bcrypt ignores (or rejects) anything longer
REDACTED_PLACEHOLDER = '[PROTECTED]'

# Catalog limits
PRODUCT_NAME_MIN_LENGTH = 2
PRODUCT_NAME_MAX_LENGTH = 255
SKU_MAX_LENGTH = 64
CURRENCY_CODE_LENGTH = 3
PRICE_SCALE = 2  # decimal places persisted for monetary amounts

# Pagination
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

# Stock adjustments with an absolute delta above this are logged at WARNING
LARGE_STOCK_ADJUSTMENT = 100
