r"""aretry - Retry a fallible operation until it succeeds.

This package runs a caller-supplied operation repeatedly until it
succeeds, a retry limit is reached, a policy callback stops the run, or a
cancellation signal fires. Every run returns a ``RunResult`` with the
number of attempts, the errors of the failed attempts and the start and
finish times, together with the error that ended the run.

Key Features:
    - Optional limit on the number of attempts
    - Veto callback to stop on unrecoverable errors
    - Pluggable delay callback, no built-in backoff curve
    - Thread-safe cancellation tokens with optional deadline
    - Synchronous and asynchronous executors

Example:
    ```pycon
    >>> from aretry import CancellationToken, RetryPolicy, run
    >>> calls = []
    >>> def flaky():
    ...     calls.append(1)
    ...     if len(calls) < 3:
    ...         raise ConnectionError("transient")
    ...     return "ok"
    ...
    >>> result, error = run(CancellationToken(), flaky, RetryPolicy(max_retries=5))
    >>> result.attempts, result.value, error
    (3, 'ok', None)

    ```
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_POLICY",
    "AsyncRetryExecutor",
    "CancellationSignal",
    "CancellationToken",
    "DeadlineExceededError",
    "OperationCancelledError",
    "RetryError",
    "RetryExecutor",
    "RetryLimitExceededError",
    "RetryPolicy",
    "RunResult",
    "__version__",
    "run",
    "run_async",
]

from importlib.metadata import PackageNotFoundError, version

from aretry.cancellation import CancellationSignal, CancellationToken
from aretry.exceptions import (
    DeadlineExceededError,
    OperationCancelledError,
    RetryError,
    RetryLimitExceededError,
)
from aretry.executor import RetryExecutor, run
from aretry.executor_async import AsyncRetryExecutor, run_async
from aretry.policy import DEFAULT_POLICY, RetryPolicy
from aretry.result import RunResult

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
