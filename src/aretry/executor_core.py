r"""Shared core logic for retry executors.

This module provides shared helper functions used by both synchronous and
asynchronous retry executors. These functions encapsulate the run
bookkeeping and the evaluation of the stop conditions after a failed
attempt.
"""

from __future__ import annotations

__all__ = ["check_stop_conditions", "compute_delay", "finish_run", "start_run"]

import logging
import time
from typing import TYPE_CHECKING

from aretry.exceptions import RetryLimitExceededError
from aretry.result import RunResult
from aretry.validation import to_seconds

if TYPE_CHECKING:
    from aretry.policy import RetryPolicy

logger: logging.Logger = logging.getLogger(__name__)


def start_run() -> RunResult:
    """Create the record of a new run.

    Returns:
        A fresh ``RunResult`` with ``started_at`` set.
    """
    return RunResult(started_at=time.time())


def finish_run(result: RunResult) -> None:
    """Record the end of a run.

    ``finished_at`` is never earlier than ``started_at``, even if the
    system clock moved backwards during the run.

    Args:
        result: The record of the run.
    """
    finished_at = time.time()
    if result.started_at is not None and finished_at < result.started_at:
        finished_at = result.started_at
    result.finished_at = finished_at


def check_stop_conditions(policy: RetryPolicy, result: RunResult) -> BaseException | None:
    """Evaluate the stop conditions after a failed attempt.

    The retry limit is checked before the ``should_stop`` callback, so the
    callback is not invoked on the attempt that reaches the limit.

    Args:
        policy: The retry policy.
        result: The current record of the run.

    Returns:
        The error that terminates the run, or ``None`` to keep going.
    """
    if policy.max_retries is not None and result.attempts == policy.max_retries:
        logger.debug(f"Reached maximum retries ({policy.max_retries})")
        return RetryLimitExceededError(max_retries=policy.max_retries, attempts=result.attempts)
    if policy.should_stop is not None:
        error = policy.should_stop(result)
        if error is not None:
            logger.debug(f"should_stop stopped the run after attempt {result.attempts}: {error!r}")
            return error
    return None


def compute_delay(policy: RetryPolicy, result: RunResult) -> float:
    """Compute the delay before the next attempt.

    Args:
        policy: The retry policy.
        result: The current record of the run.

    Returns:
        The delay in seconds. It is 0.0 if the policy has no
        ``delay_before`` callback or if the callback returned a
        non-positive value.
    """
    if policy.delay_before is None:
        return 0.0
    return max(to_seconds(policy.delay_before(result)), 0.0)
