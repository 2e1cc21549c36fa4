"""Tests for wall-clock time helpers"""

import pytest

from app.exceptions import ValidationError
from app.services.times import normalize_time, require_time, require_window, to_minutes


def test_normalize_pads_single_digit_hours():
    assert normalize_time("9:05") == "09:05"
    assert normalize_time(" 18:30 ") == "18:30"


@pytest.mark.parametrize("value", ["24:00", "7pm", "18:3", "", None])
def test_normalize_rejects_malformed_times(value):
    with pytest.raises(ValueError):
        normalize_time(value)


def test_require_time_insists_on_zero_padding():
    assert require_time("09:00") == "09:00"
    with pytest.raises(ValidationError) as exc_info:
        require_time("9:00", "start_time")
    assert exc_info.value.field == "start_time"


def test_require_window_rejects_empty_and_inverted_windows():
    assert require_window("18:00", "19:30") == ("18:00", "19:30")
    with pytest.raises(ValidationError):
        require_window("19:00", "19:00")
    with pytest.raises(ValidationError):
        require_window("20:00", "18:00")


def test_to_minutes_counts_from_midnight():
    assert to_minutes("00:00") == 0
    assert to_minutes("18:45") == 1125
