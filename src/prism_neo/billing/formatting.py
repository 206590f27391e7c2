"""
prism_neo.billing.formatting

Display formatting for timestamps and time ranges.

All functions are pure. Aware datetimes are converted into the display timezone when
one is given; naive datetimes are taken to already be in display time.
"""

from __future__ import annotations

from datetime import datetime, tzinfo

from prism_neo import messages


def localize(value: datetime, tz: tzinfo | None = None) -> datetime:
    if tz is None or value.tzinfo is None:
        return value
    return value.astimezone(tz)


def format_datetime(value: datetime | None, tz: tzinfo | None = None) -> str:
    """`YYYY/MM/DD HH:MM:SS`; a missing value means the thing never expires."""
    if value is None:
        return messages.NEVER_EXPIRES
    return localize(value, tz).strftime("%Y/%m/%d %H:%M:%S")


def format_clock(value: datetime) -> str:
    return value.strftime("%H:%M")


def format_month_day(value: datetime) -> str:
    # No zero padding: 3/7, 12/25
    return f"{value.month}/{value.day}"


def format_time_range(start: datetime, end: datetime, tz: tzinfo | None = None) -> str:
    """
    Same calendar day: `HH:MM - HH:MM`.
    Crossing midnight: `M/D HH:MM - M/D HH:MM`.
    """
    start, end = localize(start, tz), localize(end, tz)
    if start.date() == end.date():
        return f"{format_clock(start)} - {format_clock(end)}"
    return (
        f"{format_month_day(start)} {format_clock(start)} - "
        f"{format_month_day(end)} {format_clock(end)}"
    )
