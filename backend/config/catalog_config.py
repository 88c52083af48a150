"""
Runtime Configuration for the Catalog Backend

All settings are read from environment variables so the same build can run
against a local SQLite file in development and a server database elsewhere.

Includes:
- Database location
- bcrypt cost factor for password hashing
- Pagination bounds
- Logging level and the stock-adjustment warning threshold
"""
import os
import logging
from dataclasses import dataclass
from pathlib import Path

import constants
from exceptions import ConfigurationError

logger = logging.getLogger(__name__)

ENV_PREFIX = 'CATALOG_'
DEFAULT_DB_PATH = Path.home() / ".catalog" / "catalog.db"
VALID_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


@dataclass(frozen=True)
class CatalogSettings:
    """Immutable snapshot of the environment-driven settings."""

    database_url: str
    password_hash_rounds: int = 12
    large_stock_adjustment: int = constants.LARGE_STOCK_ADJUSTMENT
    default_page_size: int = constants.DEFAULT_PAGE_SIZE
    max_page_size: int = constants.MAX_PAGE_SIZE
    log_level: str = 'INFO'


def _read_int(key: str, default: int, minimum: int, maximum: int | None = None) -> int:
    """
    Read an integer setting.

    Args:
        key: Setting name without the CATALOG_ prefix
        default: Value used when the variable is unset or blank
        minimum: Smallest accepted value
        maximum: Largest accepted value, if bounded

    Returns:
        Parsed integer

    Raises:
        ConfigurationError: If the value is not an integer or out of range
    """
    env_key = f"{ENV_PREFIX}{key}"
    raw = os.environ.get(env_key, '').strip()
    if not raw:
        return default

    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"{env_key} must be an integer, got {raw!r}", missing_keys=[env_key])

    if value < minimum or (maximum is not None and value > maximum):
        bound = f"{minimum}..{maximum}" if maximum is not None else f">= {minimum}"
        raise ConfigurationError(f"{env_key} must be {bound}, got {value}", missing_keys=[env_key])
    return value


def load_settings() -> CatalogSettings:
    """
    Build settings from the current environment.

    Raises:
        ConfigurationError: If any value is invalid
    """
    database_url = os.environ.get(f"{ENV_PREFIX}DATABASE_URL", '').strip() or f"sqlite:///{DEFAULT_DB_PATH}"

    log_level = os.environ.get(f"{ENV_PREFIX}LOG_LEVEL", 'INFO').strip().upper() or 'INFO'
    if log_level not in VALID_LOG_LEVELS:
        raise ConfigurationError(
            f"{ENV_PREFIX}LOG_LEVEL must be one of {', '.join(VALID_LOG_LEVELS)}, got {log_level!r}"
        )

    max_page_size = _read_int('MAX_PAGE_SIZE', constants.MAX_PAGE_SIZE, minimum=1)
    default_page_size = _read_int('DEFAULT_PAGE_SIZE', constants.DEFAULT_PAGE_SIZE, minimum=1, maximum=max_page_size)

    return CatalogSettings(
        database_url=database_url,
        # bcrypt accepts cost factors 4..31
        password_hash_rounds=_read_int('PASSWORD_HASH_ROUNDS', 12, minimum=4, maximum=31),
        large_stock_adjustment=_read_int('LARGE_STOCK_ADJUSTMENT', constants.LARGE_STOCK_ADJUSTMENT, minimum=0),
        default_page_size=default_page_size,
        max_page_size=max_page_size,
        log_level=log_level,
    )


_settings: CatalogSettings | None = None


def get_settings() -> CatalogSettings:
    """Return the process settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = load_settings()
        logger.debug(f"Loaded catalog settings (log level {_settings.log_level})")
    return _settings


def reload_settings() -> CatalogSettings:
    """Discard cached settings and read the environment again."""
    global _settings
    _settings = None
    return get_settings()
