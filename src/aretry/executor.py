r"""Synchronous retry executor.

This module provides the ``RetryExecutor`` class that runs a fallible
operation until it succeeds, reaches the retry limit, is stopped by the
policy or is cancelled, and the ``run`` helper function.
"""

from __future__ import annotations

__all__ = ["RetryExecutor", "run"]

import logging
from typing import TYPE_CHECKING, Any

from aretry.delay import wait_or_cancel
from aretry.executor_core import check_stop_conditions, compute_delay, finish_run, start_run
from aretry.policy import DEFAULT_POLICY, RetryPolicy

if TYPE_CHECKING:
    from collections.abc import Callable

    from aretry.cancellation import CancellationSignal
    from aretry.result import RunResult

logger: logging.Logger = logging.getLogger(__name__)


class RetryExecutor:
    """Executes an operation with automatic retry logic.

    The executor holds no state between calls: every call to ``execute``
    creates its own ``RunResult``, so one executor can be shared by several
    threads.

    Attributes:
        policy: The retry policy. ``DEFAULT_POLICY`` is used when no policy
            is given, which retries without delay until the operation
            succeeds or the run is cancelled.

    Example:
        ```pycon
        >>> from aretry.cancellation import CancellationToken
        >>> from aretry.executor import RetryExecutor
        >>> from aretry.policy import RetryPolicy
        >>> executor = RetryExecutor(RetryPolicy(max_retries=3))
        >>> result, error = executor.execute(CancellationToken(), lambda: 42)
        >>> result.attempts, result.value, error
        (1, 42, None)

        ```
    """

    def __init__(self, policy: RetryPolicy | None = None) -> None:
        self.policy = policy if policy is not None else DEFAULT_POLICY

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(policy={self.policy})"

    def execute(
        self, signal: CancellationSignal, operation: Callable[[], Any]
    ) -> tuple[RunResult, BaseException | None]:
        """Execute the operation until a stop condition is met.

        After each failed attempt the executor checks, in this order:
        ``max_retries``, ``should_stop`` and ``delay_before``. The
        cancellation signal is checked before every attempt and during the
        delay.

        The work errors raised by the operation are recorded in
        ``RunResult.errors`` and never returned as the run error. Exceptions
        raised by the policy callbacks are propagated.

        Args:
            signal: The cancellation signal. It may already be cancelled.
            operation: Zero-argument callable. It succeeds when it returns
                and fails when it raises an ``Exception``.

        Returns:
            A tuple ``(result, error)``. ``error`` is ``None`` only when the
            operation succeeded; otherwise it is a
            ``RetryLimitExceededError``, the error returned by
            ``should_stop`` or the error of the cancellation signal.
        """
        result = start_run()
        try:
            while True:
                if signal.is_cancelled():
                    logger.debug(f"Run cancelled before attempt {result.attempts + 1}")
                    return result, signal.error

                result.attempts += 1
                try:
                    value = operation()
                except Exception as exc:  # noqa: BLE001
                    result.errors.append(exc)
                    logger.debug(f"Attempt {result.attempts} failed: {exc!r}")
                else:
                    result.value = value
                    logger.debug(f"Attempt {result.attempts} succeeded")
                    return result, None

                error = check_stop_conditions(self.policy, result)
                if error is not None:
                    return result, error

                error = wait_or_cancel(signal, compute_delay(self.policy, result))
                if error is not None:
                    return result, error
        finally:
            finish_run(result)


def run(
    signal: CancellationSignal,
    operation: Callable[[], Any],
    policy: RetryPolicy | None = None,
) -> tuple[RunResult, BaseException | None]:
    """Run an operation with automatic retry logic.

    Args:
        signal: The cancellation signal. It may already be cancelled.
        operation: Zero-argument callable. It succeeds when it returns and
            fails when it raises an ``Exception``.
        policy: Optional retry policy. Without a policy, the operation is
            retried immediately until it succeeds or the signal is
            cancelled.

    Returns:
        A tuple ``(result, error)``. ``error`` is ``None`` only when the
        operation succeeded.

    Example:
        ```pycon
        >>> from aretry import CancellationToken, RetryPolicy, run
        >>> def work():
        ...     raise ConnectionError("unreachable")
        ...
        >>> result, error = run(CancellationToken(), work, RetryPolicy(max_retries=3))
        >>> result.attempts, len(result.errors)
        (3, 3)
        >>> error
        RetryLimitExceededError('reached maximum retries (3 attempts)')

        ```
    """
    return RetryExecutor(policy).execute(signal, operation)
