"""
Structured Logging Utilities

Log records from the domain services carry identifiers (product_id, user_id,
acting_user_id, error_kind, ...) as record attributes, so a formatter or a
log shipper can pick them up without parsing messages.

Two sources feed those attributes:
- a per-context dict set by the caller (request id, acting user) through
  set_logging_context() or the logging_context() block
- the arguments of the decorated operation, collected by log_operation()
"""

import inspect
import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from functools import wraps
from typing import Any, Dict, Iterator

from exceptions import DomainError

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

_logging_context: ContextVar[Dict[str, Any]] = ContextVar('logging_context', default={})

# Argument names whose values are copied onto operation log records
_CONTEXT_ARGUMENTS = ("product_id", "category_id", "user_id", "acting_user_id")


def configure_logging(level: str = "INFO") -> None:
    """
    Send log output to stdout in LOG_FORMAT.

    Safe to call more than once; later calls only change the level.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    if not any(getattr(handler, "_catalog_handler", False) for handler in root_logger.handlers):
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        console_handler._catalog_handler = True
        root_logger.addHandler(console_handler)


class StructuredLogger(logging.LoggerAdapter):
    """
    Logger that stamps the current logging context onto every record.

    Values passed in ``extra`` win over context values with the same key.

        logger = StructuredLogger(__name__)
        logger.warning("Large stock adjustment", extra={"product_id": product.id})
    """

    def __init__(self, name: str):
        super().__init__(logging.getLogger(name), {})

    def process(self, msg, kwargs):
        merged = get_logging_context()
        merged.update(kwargs.get("extra") or {})
        kwargs["extra"] = merged
        return msg, kwargs


def set_logging_context(**kwargs) -> None:
    """Add keys to the logging context of the current thread or task."""
    context = _logging_context.get().copy()
    context.update(kwargs)
    _logging_context.set(context)


def get_logging_context() -> Dict[str, Any]:
    return _logging_context.get().copy()


def clear_logging_context() -> None:
    _logging_context.set({})


@contextmanager
def logging_context(**kwargs) -> Iterator[None]:
    """
    Bind keys for the duration of a block, then restore the previous context.

        with logging_context(request_id=request_id, acting_user_id=admin.id):
            service.change_role(user_id, Role.MANAGER, admin)
    """
    token = _logging_context.set({**_logging_context.get(), **kwargs})
    try:
        yield
    finally:
        _logging_context.reset(token)


def _operation_context(func, operation_name: str, args, kwargs) -> Dict[str, Any]:
    """Pull identifiers out of the call's arguments, positional or keyword."""
    context: Dict[str, Any] = {"operation": operation_name}
    try:
        bound = inspect.signature(func).bind_partial(*args, **kwargs)
    except TypeError:
        return context

    for key in _CONTEXT_ARGUMENTS:
        if key in bound.arguments:
            context[key] = bound.arguments[key]
    acting_user = bound.arguments.get("acting_user")
    if acting_user is not None and getattr(acting_user, "id", None) is not None:
        context["acting_user_id"] = acting_user.id
    return context


def log_operation(operation_name: str):
    """
    Log the start, completion or rejection of a domain-service operation.

    A DomainError is a rule violation the caller has to fix, so it is logged
    at WARNING with its kind and no traceback. Any other exception is logged
    at ERROR with the traceback. Both are re-raised unchanged.
    """
    def decorator(func):
        logger = StructuredLogger(func.__module__)

        @wraps(func)
        def wrapper(*args, **kwargs):
            context = _operation_context(func, operation_name, args, kwargs)
            logger.info(f"Starting {operation_name}", extra=context)

            try:
                result = func(*args, **kwargs)
            except DomainError as e:
                logger.warning(
                    f"Rejected {operation_name}: {e.message}",
                    extra={**context, "error": e.message, "error_kind": e.kind.value},
                )
                raise
            except Exception as e:
                logger.error(
                    f"Failed {operation_name}",
                    extra={**context, "error": str(e), "error_type": type(e).__name__},
                    exc_info=True,
                )
                raise

            logger.info(f"Completed {operation_name}", extra=context)
            return result

        return wrapper

    return decorator
