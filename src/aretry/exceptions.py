r"""Define the exceptions surfaced by the retry executors.

Work errors raised by the retried operation are never wrapped: they are
recorded in ``RunResult.errors``. The classes below cover the terminal
conditions the executors produce themselves.
"""

from __future__ import annotations

__all__ = [
    "DeadlineExceededError",
    "OperationCancelledError",
    "RetryError",
    "RetryLimitExceededError",
]


class RetryError(Exception):
    """Base class for the errors raised by ``aretry``."""


class RetryLimitExceededError(RetryError):
    """Raised when the number of attempts reaches ``max_retries``.

    Args:
        max_retries: The configured maximum number of attempts.
        attempts: The number of attempts actually made.

    Example:
        ```pycon
        >>> from aretry.exceptions import RetryLimitExceededError
        >>> error = RetryLimitExceededError(max_retries=3, attempts=3)
        >>> error.max_retries
        3
        >>> str(error)
        'reached maximum retries (3 attempts)'

        ```
    """

    def __init__(self, max_retries: int, attempts: int) -> None:
        super().__init__(f"reached maximum retries ({attempts} attempts)")
        self.max_retries = max_retries
        self.attempts = attempts


class OperationCancelledError(RetryError):
    """Default error carried by a cancelled ``CancellationToken``."""

    def __init__(self, message: str = "operation cancelled") -> None:
        super().__init__(message)


class DeadlineExceededError(OperationCancelledError):
    r"""Error carried by a token whose timeout fired.

    Args:
        timeout: The timeout, in seconds, that elapsed.
    """

    def __init__(self, timeout: float) -> None:
        super().__init__(f"deadline exceeded after {timeout:.3f}s")
        self.timeout = timeout
