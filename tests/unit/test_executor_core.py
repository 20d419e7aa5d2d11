from __future__ import annotations

from datetime import timedelta
from unittest.mock import Mock, patch

from aretry import RetryLimitExceededError, RetryPolicy, RunResult
from aretry.executor_core import check_stop_conditions, compute_delay, finish_run, start_run

###############################
#     Tests for start_run     #
###############################


def test_start_run() -> None:
    with patch("time.time", return_value=100.0):
        result = start_run()

    assert result.started_at == 100.0
    assert result.finished_at is None
    assert result.attempts == 0


################################
#     Tests for finish_run     #
################################


def test_finish_run() -> None:
    result = RunResult(started_at=100.0)
    with patch("time.time", return_value=101.5):
        finish_run(result)

    assert result.finished_at == 101.5


def test_finish_run_clock_moved_backwards() -> None:
    result = RunResult(started_at=100.0)
    with patch("time.time", return_value=99.0):
        finish_run(result)

    assert result.finished_at == 100.0


###########################################
#     Tests for check_stop_conditions     #
###########################################


def test_check_stop_conditions_no_policy_fields() -> None:
    assert check_stop_conditions(RetryPolicy(), RunResult(attempts=10)) is None


def test_check_stop_conditions_limit_reached() -> None:
    error = check_stop_conditions(RetryPolicy(max_retries=3), RunResult(attempts=3))

    assert isinstance(error, RetryLimitExceededError)
    assert error.max_retries == 3
    assert error.attempts == 3


def test_check_stop_conditions_below_limit() -> None:
    assert check_stop_conditions(RetryPolicy(max_retries=3), RunResult(attempts=2)) is None


def test_check_stop_conditions_limit_before_should_stop() -> None:
    should_stop = Mock(return_value=RuntimeError("veto"))
    error = check_stop_conditions(
        RetryPolicy(max_retries=2, should_stop=should_stop), RunResult(attempts=2)
    )

    assert isinstance(error, RetryLimitExceededError)
    should_stop.assert_not_called()


def test_check_stop_conditions_should_stop_veto() -> None:
    veto = RuntimeError("veto")
    result = RunResult(attempts=1)
    should_stop = Mock(return_value=veto)

    assert check_stop_conditions(RetryPolicy(should_stop=should_stop), result) is veto
    should_stop.assert_called_once_with(result)


def test_check_stop_conditions_should_stop_continue() -> None:
    should_stop = Mock(return_value=None)

    policy = RetryPolicy(should_stop=should_stop)

    assert check_stop_conditions(policy, RunResult(attempts=1)) is None


###################################
#     Tests for compute_delay     #
###################################


def test_compute_delay_without_callback() -> None:
    assert compute_delay(RetryPolicy(), RunResult()) == 0.0


def test_compute_delay_seconds() -> None:
    result = RunResult(attempts=1)
    delay_before = Mock(return_value=1.5)

    assert compute_delay(RetryPolicy(delay_before=delay_before), result) == 1.5
    delay_before.assert_called_once_with(result)


def test_compute_delay_timedelta() -> None:
    policy = RetryPolicy(delay_before=lambda result: timedelta(milliseconds=500))

    assert compute_delay(policy, RunResult()) == 0.5


def test_compute_delay_negative_is_clamped() -> None:
    policy = RetryPolicy(delay_before=lambda result: -3.0)

    assert compute_delay(policy, RunResult()) == 0.0
