"""
imagesmith Core - Resilience patterns.

Bounded retry with delay for remote calls that may fail transiently,
mainly resource teardown during cleanup.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from functools import wraps
from typing import Any, TypeVar

from loguru import logger

from imagesmith.config.constants import CLEANUP_RETRY_ATTEMPTS, CLEANUP_RETRY_DELAY_SECONDS
from imagesmith.core.exceptions import RetryExhaustedError
from imagesmith.core.metrics import get_registry
from imagesmith.utils.logger import log_prefix

T = TypeVar("T")


@dataclass
class RetryPolicy:
    """
    Bounded retry policy.

    Attempts a call up to ``max_attempts`` times in total and sleeps
    between failed attempts, never after the last one. With the default
    ``backoff=1.0`` the delay is fixed; a larger backoff grows it
    exponentially, capped at ``max_delay`` when set.

    Defaults: 5 attempts, 5s fixed delay, 20s worst case total wait.
    """

    max_attempts: int = CLEANUP_RETRY_ATTEMPTS
    delay: float = CLEANUP_RETRY_DELAY_SECONDS
    backoff: float = 1.0
    max_delay: float | None = None
    exceptions: tuple[type[Exception], ...] = (Exception,)
    sleep: Callable[[float], None] = field(default=time.sleep, repr=False)

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got: {self.max_attempts}")
        if self.delay < 0:
            raise ValueError(f"delay must be >= 0, got: {self.delay}")
        if self.backoff < 1:
            raise ValueError(f"backoff must be >= 1, got: {self.backoff}")

    def delay_for(self, attempt: int) -> float:
        """Delay to wait after failed ``attempt`` (1-based)."""
        delay = self.delay * (self.backoff ** (attempt - 1))
        if self.max_delay is not None:
            delay = min(delay, self.max_delay)
        return delay

    @property
    def worst_case_wait(self) -> float:
        """Total sleep time when every attempt fails."""
        return sum(self.delay_for(attempt) for attempt in range(1, self.max_attempts))

    def call(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """
        Call ``func`` until it succeeds or the attempt budget runs out.

        Args:
            func: Callable to invoke
            *args: Positional arguments
            **kwargs: Keyword arguments

        Returns:
            The first successful result.

        Raises:
            RetryExhaustedError: If every attempt raised one of ``exceptions``.
        """
        name = getattr(func, "__name__", repr(func))
        metrics_registry = get_registry()

        for attempt in range(1, self.max_attempts + 1):
            try:
                return func(*args, **kwargs)
            except self.exceptions as e:
                if attempt == self.max_attempts:
                    logger.error(
                        f"{log_prefix('❌')} Retry exhausted after {self.max_attempts} attempts: {name}"
                    )
                    raise RetryExhaustedError(name, attempt, e) from e

                metrics_registry.counter("imagesmith_retry_attempts_total").inc(
                    function=name, attempt=str(attempt)
                )

                delay = self.delay_for(attempt)
                error_msg = str(e)[:80] + "..." if len(str(e)) > 80 else str(e)
                logger.warning(
                    f"{log_prefix('🔄')} Retry {attempt}/{self.max_attempts} for {name} after {delay:.1f}s: {error_msg}"
                )
                self.sleep(delay)

        raise RuntimeError("Retry logic error")


def retry(
    max_attempts: int = CLEANUP_RETRY_ATTEMPTS,
    delay: float = CLEANUP_RETRY_DELAY_SECONDS,
    backoff: float = 1.0,
    max_delay: float | None = None,
    exceptions: tuple[type[Exception], ...] = (Exception,),
) -> Callable:
    """
    Retry decorator.

    Args:
        max_attempts: Total attempts, including the first (default: 5)
        delay: Delay between attempts in seconds (default: 5.0)
        backoff: Delay multiplier per attempt (default: 1.0, fixed delay)
        max_delay: Optional cap on a single delay
        exceptions: Exception types to retry (default: all exceptions)

    Example:
        @retry(max_attempts=3, delay=1.0)
        def delete_group(group_id):
            ...
    """
    policy = RetryPolicy(
        max_attempts=max_attempts,
        delay=delay,
        backoff=backoff,
        max_delay=max_delay,
        exceptions=exceptions,
    )

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            return policy.call(func, *args, **kwargs)

        return wrapper

    return decorator
