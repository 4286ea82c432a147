"""Mutable state shared by the chart controller and its collaborators."""

from __future__ import annotations

from collections.abc import Hashable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from candlechart.core.models import ViewState

if TYPE_CHECKING:
    from candlechart.core.engine import CandleSeries, ChartHandle
    from candlechart.core.models import Candle


@dataclass
class ChartState:
    """Single state record owned by the chart controller.

    ``handle`` and ``series`` are set on mount and nulled on unmount; every
    collaborator checks ``is_live`` before touching the engine.

    Attributes:
        handle: Live engine handle, or None when unmounted.
        series: Candlestick series of the live handle.
        prev_symbol: Symbol recorded on the last reconciliation pass.
        day_boundaries: Boundary timestamps of the current snapshot.
        candles: Last candle snapshot supplied by the caller.
        symbol: Last symbol supplied by the caller.
        has_data: Whether a non-empty snapshot is rendered.
        crosshair_time: Formatted hovered time, or None.
        crosshair_x: Crosshair pixel offset, or None.
    """

    handle: ChartHandle | None = None
    series: CandleSeries | None = None
    prev_symbol: Hashable | None = None
    day_boundaries: set[int] = field(default_factory=set)
    candles: Sequence[Candle] | None = None
    symbol: Hashable | None = None
    has_data: bool = False
    crosshair_time: str | None = None
    crosshair_x: float | None = None

    @property
    def is_live(self) -> bool:
        """True while an engine handle and its series are alive."""
        return self.handle is not None and self.series is not None

    def view_state(self) -> ViewState:
        """Snapshot of the caller-visible state."""
        return ViewState(
            has_data=self.has_data,
            crosshair_time=self.crosshair_time,
            crosshair_x=self.crosshair_x,
        )

    def clear_engine(self) -> None:
        """Forget the engine handle and everything derived from it."""
        self.handle = None
        self.series = None
        self.prev_symbol = None
        self.day_boundaries = set()
        self.has_data = False
        self.crosshair_time = None
        self.crosshair_x = None
