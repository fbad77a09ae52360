"""Async retry with exponential backoff.

Standalone retry utility used by the endpoint transport and the subgraph
client. The retry decision is delegated to a classifier so callers decide
which failures are transient.
"""

import asyncio
import logging
import random
from typing import Awaitable, Callable, Optional, TypeVar

from ens_mcp.core.providers.resilience.models import ErrorClassification, SleepFunc

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def async_retry_with_backoff(
    func: Callable[[], Awaitable[T]],
    *,
    classify: Callable[[Exception], ErrorClassification],
    max_retries: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 30.0,
    exponential_base: float = 2.0,
    jitter: bool = False,
    rng: Optional[random.Random] = None,
    sleep_func: Optional[SleepFunc] = None,
    label: str = "request",
) -> T:
    """Async retry with exponential backoff.

    Retries an async function on retryable failures with increasing delays.
    A classification carrying ``backoff_seconds`` (e.g. from ``Retry-After``)
    raises the delay to at least that value, still capped at ``max_delay``.

    Args:
        func: Async function to retry (no arguments; use lambda for args).
        classify: Maps a failure to an ErrorClassification.
        max_retries: Maximum retry attempts (default 3).
        base_delay: Initial delay in seconds (default 1.0).
        max_delay: Maximum delay cap in seconds (default 30.0).
        exponential_base: Multiplier per retry (default 2.0).
        jitter: Add 50-150% randomness to the delay (default False).
        rng: Injectable Random instance for deterministic testing.
        sleep_func: Injectable sleep function for time control in tests.
        label: Name used in log messages.

    Returns:
        Result from the function on success.

    Raises:
        Exception: The last exception if it is not retryable or all retries
            are exhausted.

    Testing example:
        >>> sleep_times = []
        >>> async def fake_sleep(s): sleep_times.append(s)
        >>> await async_retry_with_backoff(
        ...     func, classify=classify_transport_error, sleep_func=fake_sleep
        ... )
    """
    last_exception: Optional[Exception] = None
    _rng = rng or random.Random()
    _sleep = sleep_func or asyncio.sleep

    for attempt in range(max_retries + 1):
        try:
            return await func()
        except Exception as e:
            last_exception = e
            classification = classify(e)

            if not classification.retryable or attempt == max_retries:
                break

            delay = min(base_delay * (exponential_base**attempt), max_delay)
            if jitter:
                delay = delay * (0.5 + _rng.random())
            if classification.backoff_seconds is not None:
                delay = min(max(delay, classification.backoff_seconds), max_delay)

            logger.debug(
                "Retrying %s (attempt %d/%d, %s) in %.2fs: %s",
                label,
                attempt + 1,
                max_retries,
                classification.error_type.value,
                delay,
                e,
            )
            await _sleep(delay)

    if last_exception:
        raise last_exception
    raise RuntimeError("async_retry_with_backoff: unexpected state")
