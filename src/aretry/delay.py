r"""Cancellable waits used between retry attempts.

The waits race the requested duration against the cancellation signal:
whichever resolves first wins. Long or infinite durations are waited in
slices of at most ``MAX_WAIT_SLICE`` seconds so they never exceed the
timeout range of the platform.
"""

from __future__ import annotations

__all__ = ["MAX_WAIT_SLICE", "wait_or_cancel", "wait_or_cancel_async"]

import asyncio
import logging
import time
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from aretry.cancellation import CancellationSignal

logger: logging.Logger = logging.getLogger(__name__)

MAX_WAIT_SLICE = 24 * 3600.0


def wait_or_cancel(signal: CancellationSignal, seconds: float) -> BaseException | None:
    """Block for ``seconds`` unless the signal is cancelled first.

    Args:
        signal: The cancellation signal to watch.
        seconds: The number of seconds to wait. Non-positive values do not
            block. ``math.inf`` waits until the signal is cancelled.

    Returns:
        ``None`` if the duration elapsed, otherwise the cancellation error
        of the signal.

    Example:
        ```pycon
        >>> from aretry.cancellation import CancellationToken
        >>> from aretry.delay import wait_or_cancel
        >>> wait_or_cancel(CancellationToken(), 0.01) is None
        True
        >>> token = CancellationToken()
        >>> _ = token.cancel()
        >>> wait_or_cancel(token, 60.0)
        OperationCancelledError('operation cancelled')

        ```
    """
    if seconds <= 0:
        return signal.error if signal.is_cancelled() else None
    logger.debug(f"Waiting {seconds:.2f}s before retry")
    deadline = time.monotonic() + seconds
    remaining = seconds
    while remaining > 0:
        if signal.wait(min(remaining, MAX_WAIT_SLICE)):
            logger.debug("Wait interrupted by cancellation")
            return signal.error
        remaining = deadline - time.monotonic()
    return None


async def wait_or_cancel_async(signal: CancellationSignal, seconds: float) -> BaseException | None:
    """Asynchronously wait for ``seconds`` unless the signal is cancelled first.

    The coroutine always yields to the event loop at least once, so other
    tasks get a chance to cancel the signal even when ``seconds`` is not
    positive. The signal may be cancelled from any thread: the notification
    is forwarded to the running event loop with ``call_soon_threadsafe``.

    Args:
        signal: The cancellation signal to watch.
        seconds: The number of seconds to wait. Non-positive values only
            yield to the event loop. ``math.inf`` waits until the signal is
            cancelled.

    Returns:
        ``None`` if the duration elapsed, otherwise the cancellation error
        of the signal.
    """
    if seconds <= 0:
        await asyncio.sleep(0)
        return signal.error if signal.is_cancelled() else None

    loop = asyncio.get_running_loop()
    cancelled: asyncio.Future[None] = loop.create_future()

    def _resolve() -> None:
        if not cancelled.done():
            cancelled.set_result(None)

    def _notify() -> None:
        loop.call_soon_threadsafe(_resolve)

    logger.debug(f"Waiting {seconds:.2f}s before retry")
    deadline = loop.time() + seconds
    unregister = signal.add_callback(_notify)
    try:
        remaining = seconds
        while remaining > 0 and not cancelled.done():
            await asyncio.wait({cancelled}, timeout=min(remaining, MAX_WAIT_SLICE))
            remaining = deadline - loop.time()
    finally:
        unregister()
        if not cancelled.done():
            cancelled.cancel()

    if cancelled.done() and not cancelled.cancelled():
        logger.debug("Wait interrupted by cancellation")
        return signal.error
    return None
