r"""Parameter validation utilities for retry policies.

This module provides validation functions for the retry parameters to
ensure they meet the required constraints before being used by the retry
executors.
"""

from __future__ import annotations

__all__ = ["to_seconds", "validate_callback", "validate_max_retries"]

from datetime import timedelta
from typing import Any


def validate_max_retries(max_retries: int | None) -> None:
    """Validate the maximum number of attempts.

    Args:
        max_retries: Maximum number of attempts. ``None`` means no limit,
            otherwise the value must be an integer >= 1.

    Raises:
        TypeError: If max_retries is not an integer (booleans are rejected).
        ValueError: If max_retries is < 1.

    Example:
        ```pycon
        >>> from aretry.validation import validate_max_retries
        >>> validate_max_retries(None)
        >>> validate_max_retries(3)
        >>> validate_max_retries(0)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: max_retries must be >= 1, got 0

        ```
    """
    if max_retries is None:
        return
    if isinstance(max_retries, bool) or not isinstance(max_retries, int):
        msg = f"max_retries must be an int or None, got {type(max_retries).__name__}"
        raise TypeError(msg)
    if max_retries < 1:
        msg = f"max_retries must be >= 1, got {max_retries}"
        raise ValueError(msg)


def validate_callback(name: str, func: Any) -> None:
    """Validate an optional policy callback.

    Args:
        name: The name of the parameter, used in the error message.
        func: The callback to validate. ``None`` is accepted.

    Raises:
        TypeError: If func is neither ``None`` nor callable.
    """
    if func is not None and not callable(func):
        msg = f"{name} must be callable or None, got {type(func).__name__}"
        raise TypeError(msg)


def to_seconds(delay: float | timedelta) -> float:
    """Convert a delay to a number of seconds.

    Args:
        delay: The delay, as a number of seconds or a ``timedelta``.

    Returns:
        The delay in seconds.

    Raises:
        TypeError: If delay has an unsupported type.

    Example:
        ```pycon
        >>> from datetime import timedelta
        >>> from aretry.validation import to_seconds
        >>> to_seconds(1.5)
        1.5
        >>> to_seconds(timedelta(milliseconds=250))
        0.25

        ```
    """
    if isinstance(delay, timedelta):
        return delay.total_seconds()
    if isinstance(delay, bool) or not isinstance(delay, (int, float)):
        msg = f"delay must be a number of seconds or a timedelta, got {type(delay).__name__}"
        raise TypeError(msg)
    return float(delay)
