from __future__ import annotations

from unittest.mock import Mock

import pytest

from aretry import CancellationToken


class WorkError(Exception):
    r"""Error raised by the operations used in the tests."""


@pytest.fixture
def work_error() -> WorkError:
    """Create the error raised by a failing operation."""
    return WorkError("work error")


@pytest.fixture
def failing_operation(work_error: WorkError) -> Mock:
    """Create an operation that always fails with ``work_error``."""
    return Mock(side_effect=work_error)


@pytest.fixture
def token() -> CancellationToken:
    """Create a fresh cancellation token."""
    return CancellationToken()


@pytest.fixture
def cancelled_token() -> CancellationToken:
    """Create a cancellation token that is already cancelled."""
    token = CancellationToken()
    token.cancel()
    return token
