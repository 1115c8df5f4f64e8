"""
Error handling for document store operations.

Repository methods are wrapped so that every storage call is bounded by a
timeout and surfaces as a ``StorageError``. Timeouts are failures and are
never retried here.
"""

import asyncio
from functools import wraps
from typing import Any, Dict, Optional

import structlog

from agencyhub.domain.exceptions import StorageError

logger = structlog.get_logger(__name__)


def handle_storage_errors(context: Optional[Dict[str, Any]] = None):
    """
    Decorator for async repository methods.

    The timeout is read from the repository's ``timeout`` attribute so each
    instance carries the configured value.

    Args:
        context: Additional context to include in the exception
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(self, *args, **kwargs):
            timeout = getattr(self, "timeout", None)
            try:
                return await asyncio.wait_for(func(self, *args, **kwargs), timeout=timeout)
            except StorageError:
                raise
            except asyncio.TimeoutError as e:
                logger.error(
                    "Storage operation timed out",
                    function=func.__name__,
                    timeout=timeout,
                    context=context or {},
                )
                raise StorageError(
                    f"Storage operation timed out in {func.__name__}",
                    original_error=e,
                    context=context or {},
                )
            except Exception as e:
                logger.error(
                    "Unexpected error in storage operation",
                    function=func.__name__,
                    error=str(e),
                    error_type=type(e).__name__,
                    context=context or {},
                )
                raise StorageError(
                    f"Unexpected error in {func.__name__}: {str(e)}",
                    original_error=e,
                    context=context or {},
                )

        return wrapper
    return decorator


__all__ = ["handle_storage_errors"]
