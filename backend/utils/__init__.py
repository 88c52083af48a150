"""
Utility functions and decorators.
"""

from .clock import utc_now
from .logging_utils import log_operation

__all__ = ["utc_now", "log_operation"]
