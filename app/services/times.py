"""Wall-clock time helpers

Times are stored as zero-padded 24-hour "HH:MM" strings. Zero padding is what
makes plain string comparison agree with chronological order, so every value
that reaches the scheduling core goes through require_time first.
"""

import re

from app.exceptions import ValidationError

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")
_LOOSE_TIME_PATTERN = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)$")


def normalize_time(value: str) -> str:
    """Accept "H:MM" or "HH:MM" and return the zero-padded form."""
    if not isinstance(value, str):
        raise ValueError("time must be a string in HH:MM format")
    match = _LOOSE_TIME_PATTERN.match(value.strip())
    if not match:
        raise ValueError("time must be in HH:MM 24-hour format")
    hours, minutes = match.groups()
    return f"{int(hours):02d}:{minutes}"


def require_time(value, field: str = "time") -> str:
    """Reject anything that is not a strictly zero-padded HH:MM string."""
    if not isinstance(value, str) or not TIME_PATTERN.match(value):
        raise ValidationError(f"Invalid {field}: expected zero-padded HH:MM", field=field)
    return value


def require_window(start_time, end_time) -> tuple:
    start = require_time(start_time, "start_time")
    end = require_time(end_time, "end_time")
    if start >= end:
        raise ValidationError("start_time must be before end_time", field="end_time")
    return start, end


def to_minutes(value: str) -> int:
    hours, minutes = require_time(value).split(":")
    return int(hours) * 60 + int(minutes)
