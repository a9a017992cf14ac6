"""Retry and timing decorators for catpoint services."""

import functools
import time
import logging
from typing import Optional, Tuple, Type

from ..logging_config import get_logger

logger = get_logger("error_decorators")


def retry_on_error(max_attempts: int = 3, delay: float = 1.0, backoff_factor: float = 1.0,
                   exceptions: Optional[Tuple[Type[Exception], ...]] = None):
    """Decorator to retry a function on failure with exponential backoff.

    Args:
        max_attempts: Maximum number of attempts
        delay: Initial delay between attempts in seconds
        backoff_factor: Factor to increase delay with each retry
        exceptions: Exception types that trigger a retry; others propagate at once

    Returns:
        Decorated function that re-raises the last exception when all attempts fail
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            exceptions_to_catch = exceptions or (Exception,)

            for attempt in range(1, max_attempts + 1):
                try:
                    return func(*args, **kwargs)
                except exceptions_to_catch as e:
                    logger.warning(f"Attempt {attempt}/{max_attempts} failed for {func.__name__}: {e}")
                    if attempt == max_attempts:
                        logger.error(f"All {max_attempts} attempts failed for {func.__name__}")
                        raise
                    sleep_time = delay * (backoff_factor ** (attempt - 1))
                    logger.debug(f"Retrying in {sleep_time:.2f} seconds")
                    time.sleep(sleep_time)
        return wrapper
    return decorator


def log_execution_time(logger_name: Optional[str] = None, level: int = logging.DEBUG):
    """Decorator to log function execution time.

    Args:
        logger_name: Optional component logger name to use
        level: Logging level for the message
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            log = get_logger(logger_name or func.__module__.rsplit('.', 1)[-1])
            start_time = time.time()
            try:
                return func(*args, **kwargs)
            finally:
                execution_time = time.time() - start_time
                log.log(level, f"Function {func.__name__} executed in {execution_time:.4f} seconds")
        return wrapper
    return decorator
