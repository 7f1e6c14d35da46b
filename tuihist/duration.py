"""Compact, human-readable durations showing only the largest unit."""

from __future__ import annotations

from datetime import timedelta

_YEAR = 31_557_600  # 365.25 days
_MONTH = 2_630_016  # 30.44 days
_DAY = 86_400
_HOUR = 3_600
_MINUTE = 60


def format_duration(duration: timedelta) -> str:
    """Format a non-negative duration by its most significant unit, e.g. ``3h``."""
    if duration < timedelta(0):
        raise ValueError("duration must not be negative")

    micros = duration // timedelta(microseconds=1)
    secs, sub_micros = divmod(micros, 1_000_000)

    years, year_rest = divmod(secs, _YEAR)
    months, month_rest = divmod(year_rest, _MONTH)
    days, day_secs = divmod(month_rest, _DAY)
    hours = day_secs // _HOUR
    minutes = day_secs % _HOUR // _MINUTE
    seconds = day_secs % _MINUTE
    millis = sub_micros // 1_000

    for unit, value in (
        ("y", years),
        ("mo", months),
        ("d", days),
        ("h", hours),
        ("m", minutes),
        ("s", seconds),
        ("ms", millis),
    ):
        if value > 0:
            return f"{value}{unit}"
    return "0s"