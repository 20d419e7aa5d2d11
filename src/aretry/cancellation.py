r"""Cancellation signals for the retry executors.

This module provides the ``CancellationSignal`` protocol the executors
depend on, and ``CancellationToken``, a thread-safe implementation built
on ``threading.Event``. A token is owned by the caller: the executors only
read it, and it can be cancelled from any thread at any time.

Example:
    ```pycon
    >>> from aretry.cancellation import CancellationToken
    >>> token = CancellationToken()
    >>> token.is_cancelled()
    False
    >>> token.cancel()
    True
    >>> token.is_cancelled()
    True
    >>> token.error
    OperationCancelledError('operation cancelled')

    ```
"""

from __future__ import annotations

__all__ = ["CancellationSignal", "CancellationToken"]

import logging
import threading
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from aretry.exceptions import DeadlineExceededError, OperationCancelledError

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

logger: logging.Logger = logging.getLogger(__name__)


@runtime_checkable
class CancellationSignal(Protocol):
    """Interface of the cancellation handles accepted by the executors."""

    @property
    def error(self) -> BaseException | None:
        """The cancellation error, ``None`` while not cancelled."""

    def is_cancelled(self) -> bool:
        """Return ``True`` if cancellation was requested, without blocking."""

    def wait(self, timeout: float | None = None) -> bool:
        """Block until cancelled or until ``timeout`` elapsed.

        Returns:
            ``True`` if the signal is cancelled.
        """

    def add_callback(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register a callback fired once when the signal is cancelled.

        Returns:
            A function that unregisters the callback.
        """


class CancellationToken:
    """Thread-safe cancellation token.

    The first call to ``cancel`` wins: it records the error, wakes up the
    threads blocked in ``wait`` and fires the registered callbacks. Later
    calls have no effect.

    Example:
        ```pycon
        >>> from aretry.cancellation import CancellationToken
        >>> token = CancellationToken()
        >>> child = token.child()
        >>> token.cancel(RuntimeError("shutdown"))
        True
        >>> child.error
        RuntimeError('shutdown')

        ```
    """

    def __init__(self) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._error: BaseException | None = None
        self._callbacks: dict[object, Callable[[], None]] = {}
        self._timer: threading.Timer | None = None
        self._detach: Callable[[], None] | None = None

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(cancelled={self.is_cancelled()})"

    def __enter__(self) -> CancellationToken:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    @classmethod
    def with_timeout(cls, timeout: float) -> CancellationToken:
        """Create a token cancelled automatically after ``timeout`` seconds.

        The token is cancelled with a ``DeadlineExceededError``. Call
        ``close`` (or use the token as a context manager) to stop the timer
        when the token is no longer needed.

        Args:
            timeout: The number of seconds before the token is cancelled.
                Must be > 0.

        Returns:
            The new token.

        Raises:
            ValueError: If timeout is <= 0.
        """
        if timeout <= 0:
            msg = f"timeout must be > 0, got {timeout}"
            raise ValueError(msg)
        token = cls()
        timer = threading.Timer(timeout, token.cancel, args=(DeadlineExceededError(timeout),))
        timer.daemon = True
        token._timer = timer
        timer.start()
        return token

    @property
    def error(self) -> BaseException | None:
        """The cancellation error, ``None`` while not cancelled."""
        return self._error

    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: float | None = None) -> bool:
        return self._event.wait(timeout)

    def cancel(self, error: BaseException | None = None) -> bool:
        """Request cancellation.

        Args:
            error: The error carried by the token. Defaults to
                ``OperationCancelledError``.

        Returns:
            ``True`` if this call cancelled the token, ``False`` if it was
            already cancelled.
        """
        with self._lock:
            if self._event.is_set():
                return False
            self._error = error if error is not None else OperationCancelledError()
            self._event.set()
            callbacks, self._callbacks = list(self._callbacks.values()), {}
        logger.debug(f"Cancellation requested: {self._error!r}")
        self._stop_timer()
        for callback in callbacks:
            try:
                callback()
            except Exception:
                logger.exception("Cancellation callback failed")
        return True

    def add_callback(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register a callback fired once when the token is cancelled.

        The callback runs in the thread calling ``cancel``, or immediately
        in the current thread if the token is already cancelled. An
        exception raised by a callback fired by ``cancel`` is logged and
        does not prevent the other callbacks from running.

        Args:
            callback: The function to call, without arguments.

        Returns:
            A function that unregisters the callback. Calling it after the
            callback fired is a no-op.
        """
        with self._lock:
            if not self._event.is_set():
                key = object()
                self._callbacks[key] = callback
                return lambda: self._remove_callback(key)
        callback()
        return lambda: None

    def child(self) -> CancellationToken:
        """Create a token cancelled whenever this token is cancelled.

        Cancelling the child does not cancel this token. Closing the child
        detaches it from this token.

        Returns:
            The child token.
        """
        child = CancellationToken()
        remove = self.add_callback(lambda: child.cancel(self._error))
        child._detach = remove
        child.add_callback(remove)
        return child

    def close(self) -> None:
        """Release the token without cancelling it.

        Stops the timeout timer, if any, and detaches a child token from its
        parent.
        """
        self._stop_timer()
        detach, self._detach = self._detach, None
        if detach is not None:
            detach()

    def _remove_callback(self, key: object) -> None:
        with self._lock:
            self._callbacks.pop(key, None)

    def _stop_timer(self) -> None:
        timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()
