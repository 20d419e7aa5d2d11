r"""Asynchronous retry executor.

This module provides the ``AsyncRetryExecutor`` class, the coroutine
counterpart of ``RetryExecutor``, and the ``run_async`` helper function.
"""

from __future__ import annotations

__all__ = ["AsyncRetryExecutor", "run_async"]

import logging
from typing import TYPE_CHECKING, Any

from aretry.delay import wait_or_cancel_async
from aretry.executor_core import check_stop_conditions, compute_delay, finish_run, start_run
from aretry.policy import DEFAULT_POLICY, RetryPolicy

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from aretry.cancellation import CancellationSignal
    from aretry.result import RunResult

logger: logging.Logger = logging.getLogger(__name__)


class AsyncRetryExecutor:
    """Executes an async operation with automatic retry logic.

    The stop conditions are evaluated exactly like in ``RetryExecutor``.
    The delay between attempts uses the event loop, so other tasks keep
    running while the executor waits. Cancelling the task running
    ``execute`` propagates ``asyncio.CancelledError``; it is not recorded as
    a work error.

    Attributes:
        policy: The retry policy.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aretry import AsyncRetryExecutor, CancellationToken, RetryPolicy
        >>> async def fetch():
        ...     return "payload"
        ...
        >>> executor = AsyncRetryExecutor(RetryPolicy(max_retries=3))
        >>> result, error = asyncio.run(executor.execute(CancellationToken(), fetch))
        >>> result.value, error
        ('payload', None)

        ```
    """

    def __init__(self, policy: RetryPolicy | None = None) -> None:
        self.policy = policy if policy is not None else DEFAULT_POLICY

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(policy={self.policy})"

    async def execute(
        self, signal: CancellationSignal, operation: Callable[[], Awaitable[Any]]
    ) -> tuple[RunResult, BaseException | None]:
        """Execute the async operation until a stop condition is met.

        Args:
            signal: The cancellation signal. It may already be cancelled.
            operation: Zero-argument callable returning an awaitable. It
                succeeds when the awaitable completes and fails when it
                raises an ``Exception``.

        Returns:
            A tuple ``(result, error)``. ``error`` is ``None`` only when the
            operation succeeded.
        """
        result = start_run()
        try:
            while True:
                if signal.is_cancelled():
                    logger.debug(f"Run cancelled before attempt {result.attempts + 1}")
                    return result, signal.error

                result.attempts += 1
                try:
                    value = await operation()
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

                error = await wait_or_cancel_async(signal, compute_delay(self.policy, result))
                if error is not None:
                    return result, error
        finally:
            finish_run(result)


async def run_async(
    signal: CancellationSignal,
    operation: Callable[[], Awaitable[Any]],
    policy: RetryPolicy | None = None,
) -> tuple[RunResult, BaseException | None]:
    """Run an async operation with automatic retry logic.

    Args:
        signal: The cancellation signal. It may already be cancelled.
        operation: Zero-argument callable returning an awaitable.
        policy: Optional retry policy. Without a policy, the operation is
            retried immediately until it succeeds or the signal is
            cancelled.

    Returns:
        A tuple ``(result, error)``. ``error`` is ``None`` only when the
        operation succeeded.
    """
    return await AsyncRetryExecutor(policy).execute(signal, operation)
