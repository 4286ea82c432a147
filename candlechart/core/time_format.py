"""Timestamp labels for the time axis and the crosshair readout.

Month names come from a fixed English table rather than the process locale
so the output is identical on every machine for a given display timezone.
"""

from __future__ import annotations

import pandas as pd

from candlechart.core.config import DEFAULT_DISPLAY_TIMEZONE

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def _to_display_time(time: float, tz: str) -> pd.Timestamp:
    """Convert epoch seconds to a timestamp in the display timezone."""
    return pd.Timestamp(time, unit="s", tz="UTC").tz_convert(tz)


def _clock_label(ts: pd.Timestamp) -> str:
    """Format a timestamp as a 12-hour clock label, e.g. ``9:05 AM``."""
    suffix = "PM" if ts.hour >= 12 else "AM"
    display_hour = ts.hour % 12 or 12
    return f"{display_hour}:{ts.minute:02d} {suffix}"


def _month_day_label(ts: pd.Timestamp) -> str:
    return f"{MONTH_ABBREVIATIONS[ts.month - 1]} {ts.day}"


def tick_label(
    time: float, is_day_boundary: bool, tz: str = DEFAULT_DISPLAY_TIMEZONE
) -> str:
    """Format a time-axis tick label.

    Args:
        time: Bar time in seconds since the Unix epoch.
        is_day_boundary: Whether the bar is the first of its calendar day.
        tz: IANA timezone name used for display.

    Returns:
        ``"Nov 14"`` for day boundaries, otherwise ``"10:13 PM"``.
    """
    ts = _to_display_time(time, tz)
    if is_day_boundary:
        return _month_day_label(ts)
    return _clock_label(ts)


def crosshair_label(time: float, tz: str = DEFAULT_DISPLAY_TIMEZONE) -> str:
    """Format the hovered bar time for the crosshair readout.

    Args:
        time: Bar time in seconds since the Unix epoch.
        tz: IANA timezone name used for display.

    Returns:
        Label such as ``"Nov 14, 2023 10:13 PM"``.
    """
    ts = _to_display_time(time, tz)
    return f"{_month_day_label(ts)}, {ts.year} {_clock_label(ts)}"
