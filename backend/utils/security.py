"""
Password hashing helpers.

Thin wrappers around bcrypt. Each call to hash_password draws a fresh salt,
so hashing the same plaintext twice yields two different hashes that both
verify.
"""

import logging

import bcrypt

from config.catalog_config import get_settings
from constants import BCRYPT_MAX_PASSWORD_BYTES

logger = logging.getLogger(__name__)


def hash_password(password: str, rounds: int | None = None) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password
        rounds: bcrypt cost factor; defaults to CATALOG_PASSWORD_HASH_ROUNDS

    Returns:
        Hashed password string

    Raises:
        ValueError: If the encoded password is longer than bcrypt accepts
    """
    encoded = password.encode("utf-8")
    if len(encoded) > BCRYPT_MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes long")

    salt = bcrypt.gensalt(rounds=rounds or get_settings().password_hash_rounds)
    return bcrypt.hashpw(encoded, salt).decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    """
    Verify a password against its hash.

    Args:
        password: Plain text password to verify
        hashed_password: Stored hash to verify against

    Returns:
        True if password matches, False otherwise (including malformed hashes)
    """
    encoded = password.encode("utf-8")
    if len(encoded) > BCRYPT_MAX_PASSWORD_BYTES:
        return False

    try:
        return bcrypt.checkpw(encoded, hashed_password.encode("utf-8"))
    except ValueError as e:
        logger.error(f"Password verification failed: {e}")
        return False
