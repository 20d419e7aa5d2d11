r"""Define the record accumulated by the retry executors."""

from __future__ import annotations

__all__ = ["RunResult"]

from dataclasses import dataclass, field
from typing import Any


@dataclass
class RunResult:
    """Bookkeeping of one retry run.

    A ``RunResult`` is created at the start of one executor call, mutated in
    place while the run is in progress and handed to the caller once the run
    has exited. Policy callbacks receive the live record and must not mutate
    it.

    Attributes:
        attempts: Number of times the operation was invoked. It is
            incremented before each invocation.
        errors: Exceptions raised by the failed attempts, in attempt order.
        started_at: Timestamp (``time.time()``) when the run started.
        finished_at: Timestamp (``time.time()``) when the run exited.
            It is set once, on every exit path.
        value: Return value of the successful attempt, ``None`` otherwise.

    Example:
        ```pycon
        >>> from aretry.result import RunResult
        >>> result = RunResult()
        >>> result.last_error() is None
        True
        >>> result.errors.append(ValueError("boom"))
        >>> result.last_error()
        ValueError('boom')

        ```
    """

    attempts: int = 0
    errors: list[Exception] = field(default_factory=list)
    started_at: float | None = None
    finished_at: float | None = None
    value: Any = None

    def last_error(self) -> Exception | None:
        """Return the error raised by the most recent failed attempt.

        Returns:
            The last recorded error, or ``None`` if no attempt failed.
        """
        if not self.errors:
            return None
        return self.errors[-1]

    @property
    def total_time(self) -> float | None:
        """Elapsed time of the run in seconds, ``None`` while running."""
        if self.started_at is None or self.finished_at is None:
            return None
        return self.finished_at - self.started_at

    @property
    def succeeded(self) -> bool:
        """Indicate whether the last attempt of a finished run succeeded."""
        return self.finished_at is not None and self.attempts == len(self.errors) + 1
