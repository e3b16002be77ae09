"""Minute-of-day intervals occupied by a booked service."""

from __future__ import annotations

from datetime import time
from typing import Union

MINUTES_PER_DAY = 24 * 60


def overlaps(start_a: int, duration_a: int, start_b: int, duration_b: int) -> bool:
    """Return True when ``[start_a, start_a + duration_a)`` meets ``[start_b, start_b + duration_b)``.

    Intervals are half-open, so one that ends at 10:00 does not overlap one
    that starts at 10:00.
    """

    return start_a < start_b + duration_b and start_b < start_a + duration_a


def parse_minute_of_day(value: Union[str, int, time]) -> int:
    """Convert ``"HH:MM"``/``"HH:MM:SS"``, a ``time`` or an int to minutes since midnight."""

    if isinstance(value, time):
        return value.hour * 60 + value.minute
    if isinstance(value, bool):
        raise ValueError("Invalid time of day")
    if isinstance(value, int):
        minutes = value
    elif isinstance(value, str):
        parts = value.strip().split(":")
        if len(parts) not in (2, 3) or not all(part.isdigit() for part in parts):
            raise ValueError(f"Invalid time of day {value!r}. Expected HH:MM.")
        hours, mins = int(parts[0]), int(parts[1])
        if hours > 23 or mins > 59:
            raise ValueError(f"Invalid time of day {value!r}. Expected HH:MM.")
        minutes = hours * 60 + mins
    else:
        raise ValueError(f"Unsupported time of day value {value!r}")

    if not 0 <= minutes < MINUTES_PER_DAY:
        raise ValueError(f"Minute of day {minutes} is outside 0..{MINUTES_PER_DAY - 1}")
    return minutes


def format_minute_of_day(minutes: int) -> str:
    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}"
