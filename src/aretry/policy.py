r"""Configuration dataclass for retry behavior.

This module provides the ``RetryPolicy`` used by the retry executors and
the ``DEFAULT_POLICY`` null object used when no policy is given.
"""

from __future__ import annotations

__all__ = ["DEFAULT_POLICY", "RetryPolicy"]

from dataclasses import dataclass
from typing import TYPE_CHECKING

from aretry.validation import validate_callback, validate_max_retries

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import timedelta

    from aretry.result import RunResult


@dataclass(frozen=True)
class RetryPolicy:
    """Configuration for retry behavior.

    Every field is optional. After a failed attempt the executors evaluate
    ``max_retries`` first, then ``should_stop``, then ``delay_before``.
    ``should_stop`` is not invoked on the attempt that reaches
    ``max_retries``.

    Attributes:
        max_retries: Maximum number of attempts. ``None`` retries until the
            operation succeeds or the run is cancelled.
        should_stop: Optional callback receiving the current ``RunResult``.
            A non-``None`` return value stops the run and is returned as the
            run error.
        delay_before: Optional callback receiving the current ``RunResult``
            and returning the delay (seconds or ``timedelta``) to wait before
            the next attempt. Non-positive delays retry immediately.

    Raises:
        TypeError: If a field has an invalid type.
        ValueError: If ``max_retries`` is < 1.

    Example:
        ```pycon
        >>> from aretry.policy import RetryPolicy
        >>> policy = RetryPolicy(max_retries=5, delay_before=lambda result: 0.1)
        >>> policy.max_retries
        5

        ```
    """

    max_retries: int | None = None
    should_stop: Callable[[RunResult], BaseException | None] | None = None
    delay_before: Callable[[RunResult], float | timedelta] | None = None

    def __post_init__(self) -> None:
        validate_max_retries(self.max_retries)
        validate_callback("should_stop", self.should_stop)
        validate_callback("delay_before", self.delay_before)


DEFAULT_POLICY = RetryPolicy()
