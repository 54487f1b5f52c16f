"""
Database Helper Utilities

Provides:
- Storage error translation for service methods
- LIKE pattern escaping for substring search
"""

import functools
import logging
from sqlalchemy.exc import SQLAlchemyError

from .exceptions import ServerError

logger = logging.getLogger(__name__)

LIKE_ESCAPE_CHAR = "\\"


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so the value matches as a literal substring"""
    return (
        value.replace(LIKE_ESCAPE_CHAR, LIKE_ESCAPE_CHAR * 2)
        .replace("%", LIKE_ESCAPE_CHAR + "%")
        .replace("_", LIKE_ESCAPE_CHAR + "_")
    )


def guard_storage(operation: str):
    """
    Wrap a service method so storage failures never leak to the caller.

    The session is rolled back, the failure is logged with its traceback and
    a generic ServerError is raised in its place. Domain errors raised by the
    method itself pass through untouched.

    Example:
        @guard_storage("create task")
        def create(self, caller, data): ...
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(self, *args, **kwargs):
            try:
                return func(self, *args, **kwargs)
            except SQLAlchemyError:
                self.db.rollback()
                logger.error(f"Storage failure during {operation}", exc_info=True)
                raise ServerError()
        return wrapper
    return decorator
