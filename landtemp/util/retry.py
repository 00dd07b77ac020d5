"""
Retry with exponential backoff for archive calls.
"""

import logging
import time
from collections.abc import Callable
from typing import Any

from landtemp.core.exceptions import FetchError

logger = logging.getLogger(__name__)


def retry_call(
    func: Callable[..., Any],
    *args: Any,
    retries: int = 3,
    delay: float = 2.0,
    backoff: float = 2.0,
    exceptions: tuple[type[BaseException], ...] = (FetchError, OSError),
    sleeper: Callable[[float], None] | None = None,
    description: str | None = None,
    **kwargs: Any,
) -> Any:
    """
    Call ``func`` and retry on transient failures.

    Args:
        func: Callable to invoke with ``*args`` / ``**kwargs``
        retries: Retries after the first attempt (0 = single attempt)
        delay: Wait before the first retry, in seconds
        backoff: Multiplier applied to the wait after every retry
        exceptions: Exception types treated as transient
        sleeper: Sleep function (for testing). If None, uses ``time.sleep``.
        description: Label used in log messages

    Returns:
        Whatever ``func`` returns

    Raises:
        FetchError: All attempts failed (chained to the last error)

    Examples:
        >>> retry_call(archive.search, "LANDSAT/LT05/C02/T1", date_range,
        ...            retries=3, delay=2.0)
    """
    sleep = sleeper or time.sleep
    label = description or getattr(func, "__name__", "call")
    wait = delay
    attempts = retries + 1

    for attempt in range(1, attempts + 1):
        try:
            return func(*args, **kwargs)
        except exceptions as e:
            if attempt == attempts:
                raise FetchError(f"{label} failed after {attempts} attempts: {e}") from e
            logger.warning(
                "%s failed (attempt %d/%d): %s; retrying in %.1fs",
                label,
                attempt,
                attempts,
                e,
                wait,
            )
            sleep(wait)
            wait *= backoff
