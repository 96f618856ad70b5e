"""
Logging hooks for the persistence layer.
"""

import functools
import time
from typing import Callable

from locallibrary.logging.setup import get_logger


def log_store_operation(operation: str):
    """
    Decorator that logs document store calls.

    Successful calls are logged at DEBUG with their duration; failures are
    logged at ERROR and re-raised unchanged.

    Args:
        operation: Operation name (find_by_id, find, count, insert, update, delete)

    Returns:
        Decorator function
    """

    def decorator(func: Callable):
        @functools.wraps(func)
        async def wrapper(self, collection: str, *args, **kwargs):
            logger = get_logger(f"locallibrary.store.{type(self).__name__}")
            start_time = time.perf_counter()
            try:
                result = await func(self, collection, *args, **kwargs)
            except Exception as e:
                logger.error(
                    f"Store {operation} on '{collection}' failed: {e}",
                    extra={
                        "operation": operation,
                        "collection": collection,
                        "error_type": type(e).__name__,
                    },
                )
                raise

            logger.debug(
                f"Store {operation} on '{collection}' completed",
                extra={
                    "operation": operation,
                    "collection": collection,
                    "duration_ms": round((time.perf_counter() - start_time) * 1000, 2),
                },
            )
            return result

        return wrapper

    return decorator
