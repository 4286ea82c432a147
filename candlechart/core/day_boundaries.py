"""Day-boundary detection for ordered candle sequences."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from candlechart.core.models import Candle


def utc_day_key(time: float) -> str:
    """Return the UTC calendar day of a timestamp as ``YYYY-MM-DD``."""
    return datetime.fromtimestamp(time, tz=timezone.utc).strftime("%Y-%m-%d")


def detect_day_boundaries(candles: Iterable[Candle]) -> set[int]:
    """Find the first candle of every new UTC calendar day.

    A candle is a boundary when its day key differs from the day key of the
    candle immediately before it, so the first candle always qualifies.
    Input is assumed sorted ascending by time; unsorted input is not
    re-sorted and yields extra boundaries instead of failing.

    Args:
        candles: Ordered candle sequence.

    Returns:
        Set of boundary timestamps (empty for an empty sequence).
    """
    boundaries: set[int] = set()
    last_key: str | None = None

    for candle in candles:
        key = utc_day_key(candle.time)
        if key != last_key:
            boundaries.add(candle.time)
            last_key = key

    return boundaries
