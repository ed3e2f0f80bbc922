"""
Database error handling decorators
"""
import functools
import logging
import time
from typing import Callable, Tuple, Type

from pymongo.errors import AutoReconnect, ConnectionFailure, PyMongoError

from sitestats.core.errors import DatabaseError

logger = logging.getLogger(__name__)


def handle_db_errors(func: Callable) -> Callable:
    """
    Decorator to turn driver failures into DatabaseError
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ConnectionFailure as e:
            logger.error(f"Database connection error: {str(e)}")
            raise DatabaseError(
                message="Could not connect to database",
                details={"original_error": str(e)}
            ) from e
        except PyMongoError as e:
            logger.error(f"Database operation error: {str(e)}")
            raise DatabaseError(
                message="Database operation failed",
                details={"original_error": str(e)}
            ) from e
    return wrapper


def retry_on_error(
    retries: int = 3,
    delay: float = 0.1,
    exceptions: Tuple[Type[Exception], ...] = (AutoReconnect,)
) -> Callable:
    """
    Decorator to retry database operations on transient failure
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            for attempt in range(retries):
                try:
                    return func(*args, **kwargs)
                except exceptions as e:
                    if attempt == retries - 1:
                        logger.error(
                            f"{func.__name__} failed after {retries} attempts: {str(e)}"
                        )
                        raise
                    logger.warning(
                        f"Retrying {func.__name__} after error: {str(e)}",
                        extra={"attempt": attempt + 1}
                    )
                    time.sleep(delay * (attempt + 1))
        return wrapper
    return decorator
