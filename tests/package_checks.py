from __future__ import annotations

import asyncio
import logging
import sys
from typing import TYPE_CHECKING

import aretry

if TYPE_CHECKING:
    from collections.abc import Callable

logger: logging.Logger = logging.getLogger(__name__)


class TransientError(Exception):
    r"""Error raised by the flaky operations of the checks."""


def make_flaky(failures: int) -> Callable[[], str]:
    calls = []

    def flaky() -> str:
        calls.append(1)
        if len(calls) <= failures:
            raise TransientError(f"failure {len(calls)}")
        return "ok"

    return flaky


def check_run() -> None:
    logger.info("Checking run...")
    result, error = aretry.run(
        aretry.CancellationToken(), make_flaky(2), aretry.RetryPolicy(max_retries=5)
    )
    assert error is None
    assert result.attempts == 3
    assert result.value == "ok"


def check_run_limit() -> None:
    logger.info("Checking run with retry limit...")
    result, error = aretry.run(
        aretry.CancellationToken(), make_flaky(10), aretry.RetryPolicy(max_retries=3)
    )
    assert isinstance(error, aretry.RetryLimitExceededError)
    assert len(result.errors) == 3


def check_run_async() -> None:
    logger.info("Checking run_async...")

    async def fetch() -> str:
        return "payload"

    result, error = asyncio.run(aretry.run_async(aretry.CancellationToken(), fetch))
    assert error is None
    assert result.value == "payload"


def check_deadline() -> None:
    logger.info("Checking deadline...")
    with aretry.CancellationToken.with_timeout(0.1) as token:
        _, error = aretry.run(
            token, make_flaky(1_000_000), aretry.RetryPolicy(delay_before=lambda r: 0.01)
        )
    assert isinstance(error, aretry.DeadlineExceededError)


def main() -> None:
    r"""Run all package checks to validate installation and
    functionality."""
    try:
        check_run()
        check_run_limit()
        check_run_async()
        check_deadline()

        logger.info("✅ All package checks passed successfully!")
    except Exception:
        logger.exception("❌ Package check failed")
        sys.exit(1)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
