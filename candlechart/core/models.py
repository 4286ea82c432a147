"""Data models for candlechart."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pandas as pd


@dataclass(frozen=True)
class Candle:
    """One OHLC price bar.

    Attributes:
        time: Bar open time in seconds since the Unix epoch.
        open: Opening price.
        high: Highest price.
        low: Lowest price.
        close: Closing price.
    """

    time: int
    open: float
    high: float
    low: float
    close: float

    def to_engine(self) -> dict[str, Any]:
        """Map the candle to the row format the rendering engine accepts."""
        return {
            "time": self.time,
            "open": self.open,
            "high": self.high,
            "low": self.low,
            "close": self.close,
        }


@dataclass(frozen=True)
class Point:
    """Pixel position within the chart container."""

    x: float
    y: float


@dataclass(frozen=True)
class PointerMoveEvent:
    """Pointer-move notification delivered by the rendering engine.

    Attributes:
        point: Pointer position, or None when outside the plot area.
        time: Bar time under the pointer as reported by the engine. May be
            missing or non-numeric over axes and empty regions.
    """

    point: Point | None = None
    time: Any = None


@dataclass(frozen=True)
class ViewState:
    """Observable chart state exposed to the caller.

    Attributes:
        has_data: True when the last snapshot was non-empty and an engine
            instance is alive.
        crosshair_time: Formatted hovered time, or None.
        crosshair_x: Pixel offset of the crosshair, or None.
    """

    has_data: bool = False
    crosshair_time: str | None = None
    crosshair_x: float | None = None


def candles_from_dataframe(df: pd.DataFrame | None) -> list[Candle]:
    """Build candles from a DataFrame with time and OHLC columns.

    The ``time`` column may hold epoch seconds or datetimes. Rows are kept
    in the order given; nothing is sorted or validated.

    Args:
        df: DataFrame with columns time, open, high, low, close.

    Returns:
        List of candles, empty when df is None or empty.
    """
    if df is None or df.empty:
        return []

    times = df["time"]
    if pd.api.types.is_datetime64_any_dtype(times):
        if times.dt.tz is None:
            times = times.dt.tz_localize("UTC")
        else:
            times = times.dt.tz_convert("UTC")
        seconds = (times - pd.Timestamp(0, tz="UTC")) // pd.Timedelta(seconds=1)
    else:
        seconds = times

    return [
        Candle(
            time=int(t),
            open=float(o),
            high=float(h),
            low=float(lo),
            close=float(c),
        )
        for t, o, h, lo, c in zip(
            seconds.tolist(),
            df["open"].tolist(),
            df["high"].tolist(),
            df["low"].tolist(),
            df["close"].tolist(),
        )
    ]
