"""Deterministic synthetic candles for the demo window."""

from __future__ import annotations

import zlib

import numpy as np
import pandas as pd

from candlechart.core.models import Candle, candles_from_dataframe


def generate_candles(
    symbol: str,
    count: int = 300,
    interval_seconds: int = 900,
    end_time: int = 1_700_000_000,
    start_price: float = 100.0,
) -> list[Candle]:
    """Generate a random-walk candle sequence seeded by the symbol.

    Args:
        symbol: Ticker used to seed the generator, so each symbol always
            produces the same series.
        count: Number of candles.
        interval_seconds: Bar spacing in seconds.
        end_time: Time of the last bar in epoch seconds.
        start_price: Opening price of the first bar.

    Returns:
        Candles sorted ascending by time.
    """
    if count <= 0:
        return []

    rng = np.random.default_rng(zlib.crc32(symbol.encode("utf-8")))
    returns = rng.normal(0.0, 0.004, count)
    close = start_price * np.exp(np.cumsum(returns))
    open_ = np.concatenate(([start_price], close[:-1]))
    spread = np.abs(rng.normal(0.0, 0.002, count)) * close
    high = np.maximum(open_, close) + spread
    low = np.minimum(open_, close) - spread

    times = end_time - interval_seconds * np.arange(count - 1, -1, -1)
    df = pd.DataFrame({
        "time": times,
        "open": open_.round(2),
        "high": high.round(2),
        "low": low.round(2),
        "close": close.round(2),
    })
    return candles_from_dataframe(df)


def next_candle(last: Candle, interval_seconds: int, seed: int) -> Candle:
    """Produce the bar following ``last`` for simulated live updates."""
    rng = np.random.default_rng(seed)
    close = round(last.close * float(np.exp(rng.normal(0.0, 0.004))), 2)
    spread = round(abs(float(rng.normal(0.0, 0.002))) * close, 2)
    return Candle(
        time=last.time + interval_seconds,
        open=last.close,
        high=max(last.close, close) + spread,
        low=min(last.close, close) - spread,
        close=close,
    )
