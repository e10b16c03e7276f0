"""Retry policy with exponential backoff for swap execution."""

from __future__ import annotations

import logging
import time
from functools import wraps
from typing import Any, Callable, Optional, TypeVar

logger = logging.getLogger(__name__)
T = TypeVar("T")


class RetryExhaustedError(Exception):
    """Raised when every attempt allowed by a RetryPolicy has failed."""

    def __init__(self, attempts: int, last_exception: BaseException) -> None:
        super().__init__(
            f"All {attempts} attempts failed; last error: "
            f"{type(last_exception).__name__}: {last_exception}"
        )
        self.attempts = attempts
        self.last_exception = last_exception


class RetryPolicy:
    """Synchronous retry policy with exponential backoff.

    The delay before attempt ``k`` (``k >= 2``) is
    ``initial_delay * multiplier ** (k - 2)``, capped at ``max_delay``.
    No delay follows the final failed attempt.
    """

    def __init__(
        self,
        max_attempts: int = 3,
        initial_delay: float = 5.0,
        multiplier: float = 2.0,
        max_delay: float = 300.0,
        retry_on: tuple[type[BaseException], ...] = (Exception,),
        sleep: Callable[[float], None] = time.sleep,
        label: str | None = None,
    ):
        """Initialize retry policy.

        Args:
            max_attempts: Total number of attempts, including the first one.
            initial_delay: Delay in seconds before the second attempt.
            multiplier: Factor applied to the delay after every failed attempt.
            max_delay: Upper bound for a single delay in seconds.
            retry_on: Exception types that trigger a retry. Anything else
                propagates immediately.
            sleep: Function used to wait between attempts.
            label: Name used in log messages (defaults to the function name).
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if initial_delay < 0:
            raise ValueError("initial_delay must be non-negative")
        if multiplier < 1:
            raise ValueError("multiplier must be >= 1")

        self.max_attempts = max_attempts
        self.initial_delay = initial_delay
        self.multiplier = multiplier
        self.max_delay = max_delay
        self.retry_on = retry_on
        self.sleep = sleep
        self.label = label

    def delay_for(self, attempt: int) -> float:
        """Return the delay to wait before ``attempt`` (1-based)."""
        if attempt <= 1:
            return 0.0
        return min(self.initial_delay * (self.multiplier ** (attempt - 2)), self.max_delay)

    def call(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Call ``func`` until it succeeds or the attempts are exhausted.

        Raises:
            RetryExhaustedError: If every attempt raised a retryable exception
            Exception: Any non-retryable exception raised by ``func``
        """
        name = self.label or getattr(func, "__name__", repr(func))
        last_exception: Optional[BaseException] = None

        for attempt in range(1, self.max_attempts + 1):
            if attempt > 1:
                delay = self.delay_for(attempt)
                logger.info("Retrying %s in %.1fs (attempt %d/%d)", name, delay, attempt, self.max_attempts)
                self.sleep(delay)

            try:
                return func(*args, **kwargs)

            except self.retry_on as e:
                last_exception = e
                logger.error(
                    "Failed to %s (Attempt %d): %s: %s",
                    name,
                    attempt,
                    type(e).__name__,
                    str(e),
                )

        logger.error("All %d attempts failed for %s", self.max_attempts, name)
        if last_exception is None:
            # This should never happen
            raise RuntimeError("Retry loop exhausted without exception or return")
        raise RetryExhaustedError(self.max_attempts, last_exception) from last_exception

    def __call__(self, func: Callable[..., T]) -> Callable[..., T]:
        """Decorator form of :meth:`call`."""

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            return self.call(func, *args, **kwargs)

        return wrapper


__all__ = [
    "RetryPolicy",
    "RetryExhaustedError",
]
