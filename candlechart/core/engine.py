"""Capability interface of the chart rendering engine.

The controller only talks to the engine through these protocols, so any
conforming implementation can be substituted: the pyqtgraph engine in
``candlechart.ui.candlestick_chart`` or a recording double in tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Protocol

from candlechart.core.config import ChartTheme

if TYPE_CHECKING:
    from candlechart.core.models import PointerMoveEvent

TickFormatter = Callable[[float], str]
PointerMoveCallback = Callable[["PointerMoveEvent"], None]


@dataclass
class ChartOptions:
    """Options passed to ``ChartEngine.create``.

    Attributes:
        width: Initial width in pixels, taken from the container.
        height: Fixed height in pixels.
        theme: Chart colors.
        crosshair_enabled: Whether pointer moves are tracked.
        tick_formatter: Produces the time-axis label for a bar time.
        price_scale_id: Id of the visible price scale.
    """

    width: int
    height: int
    theme: ChartTheme = field(default_factory=ChartTheme)
    crosshair_enabled: bool = True
    tick_formatter: TickFormatter | None = None
    price_scale_id: str = "right"


@dataclass
class SeriesOptions:
    """Candlestick series appearance."""

    up_color: str
    down_color: str
    border_visible: bool = False


class CandleSeries(Protocol):
    def set_data(self, rows: list[dict[str, Any]]) -> None:
        """Replace the series content wholesale."""


class TimeScale(Protocol):
    def fit_content(self) -> None:
        """Fit the visible time range to all loaded data."""


class PriceScale(Protocol):
    def apply_options(self, *, auto_scale: bool | None = None) -> None:
        """Update price scale options."""


class ChartHandle(Protocol):
    def add_series(self, options: SeriesOptions) -> CandleSeries: ...

    def subscribe_pointer_move(self, callback: PointerMoveCallback) -> None: ...

    def unsubscribe_pointer_move(self, callback: PointerMoveCallback) -> None: ...

    def apply_options(self, *, width: int | None = None) -> None: ...

    def time_scale(self) -> TimeScale: ...

    def price_scale(self, scale_id: str) -> PriceScale: ...

    def remove(self) -> None: ...


class ChartEngine(Protocol):
    def create(self, container: Any, options: ChartOptions) -> ChartHandle:
        """Create a chart instance inside the container."""
