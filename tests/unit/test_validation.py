from __future__ import annotations

from datetime import timedelta

import pytest

from aretry.validation import to_seconds, validate_callback, validate_max_retries

##########################################
#     Tests for validate_max_retries     #
##########################################


@pytest.mark.parametrize("max_retries", [None, 1, 3, 100])
def test_validate_max_retries_accepts_valid_values(max_retries: int | None) -> None:
    validate_max_retries(max_retries)


@pytest.mark.parametrize("max_retries", [0, -1])
def test_validate_max_retries_rejects_non_positive(max_retries: int) -> None:
    with pytest.raises(ValueError, match=rf"max_retries must be >= 1, got {max_retries}"):
        validate_max_retries(max_retries)


@pytest.mark.parametrize("max_retries", [True, 2.0, "3"])
def test_validate_max_retries_rejects_non_int(max_retries: object) -> None:
    with pytest.raises(TypeError, match=r"max_retries must be an int or None"):
        validate_max_retries(max_retries)


#######################################
#     Tests for validate_callback     #
#######################################


@pytest.mark.parametrize("func", [None, print, lambda result: None])
def test_validate_callback_accepts_callables(func: object) -> None:
    validate_callback("should_stop", func)


def test_validate_callback_rejects_non_callable() -> None:
    with pytest.raises(TypeError, match=r"delay_before must be callable or None, got int"):
        validate_callback("delay_before", 5)


################################
#     Tests for to_seconds     #
################################


@pytest.mark.parametrize(
    ("delay", "seconds"),
    [(0, 0.0), (1, 1.0), (0.5, 0.5), (-2.0, -2.0), (timedelta(seconds=3), 3.0)],
)
def test_to_seconds(delay: float | timedelta, seconds: float) -> None:
    assert to_seconds(delay) == seconds


def test_to_seconds_returns_float() -> None:
    assert isinstance(to_seconds(2), float)


@pytest.mark.parametrize("delay", [None, "1", True])
def test_to_seconds_rejects_invalid_types(delay: object) -> None:
    with pytest.raises(TypeError, match=r"delay must be a number of seconds or a timedelta"):
        to_seconds(delay)
