"""pyqtgraph implementation of the chart rendering engine.

Provides the candlestick painter, a time axis that puts ticks on bar
timestamps, and ``PyqtgraphEngine``, which creates chart handles that
conform to ``candlechart.core.engine``.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Any

import numpy as np
import pyqtgraph as pg  # type: ignore[import-untyped]
from PyQt6 import sip
from PyQt6.QtCore import QPointF, QRectF, Qt
from PyQt6.QtGui import QPainter, QPicture
from PyQt6.QtWidgets import QVBoxLayout, QWidget

from candlechart.core.engine import ChartOptions, SeriesOptions
from candlechart.core.exceptions import EngineRemovedError
from candlechart.core.models import Point, PointerMoveEvent

if TYPE_CHECKING:
    from collections.abc import Sequence

    from numpy.typing import NDArray

    from candlechart.core.engine import PointerMoveCallback, TickFormatter

logger = logging.getLogger(__name__)

# Fraction of the bar spacing covered by a candle body
BODY_WIDTH_RATIO = 0.6
# Bar spacing assumed for a single candle
DEFAULT_BAR_SPACING = 60.0


def bar_spacing(times: NDArray[np.float64]) -> float:
    """Smallest positive distance between consecutive bar times."""
    if len(times) < 2:
        return DEFAULT_BAR_SPACING
    diffs = np.diff(times)
    diffs = diffs[diffs > 0]
    if len(diffs) == 0:
        return DEFAULT_BAR_SPACING
    return float(diffs.min())


class CandlestickItem(pg.GraphicsObject):
    """Custom pyqtgraph item for rendering candlesticks.

    Renders OHLC rows as candlesticks colored by close vs open. The x
    coordinate is the bar time in epoch seconds.

    Attributes:
        _data: Numpy array with columns [time, open, high, low, close].
        _picture: QPicture cache for efficient repainting.
    """

    def __init__(self, options: SeriesOptions) -> None:
        """Initialize the CandlestickItem.

        Args:
            options: Series colors and border setting.
        """
        super().__init__()
        self._options = options
        self._data: NDArray[np.float64] = np.empty((0, 5), dtype=np.float64)
        self._picture: QPicture | None = None
        self._candle_width: float = DEFAULT_BAR_SPACING * BODY_WIDTH_RATIO

    @property
    def data(self) -> NDArray[np.float64]:
        """Rows currently rendered."""
        return self._data

    def set_data(self, data: NDArray[np.float64] | None) -> None:
        """Set the candlestick data.

        Args:
            data: Array with shape (n, 5), or None to clear.
        """
        if data is None or len(data) == 0:
            self._data = np.empty((0, 5), dtype=np.float64)
        else:
            self._data = np.asarray(data, dtype=np.float64)
            self._candle_width = bar_spacing(self._data[:, 0]) * BODY_WIDTH_RATIO

        self._picture = None  # Invalidate cache
        self.prepareGeometryChange()
        self.update()

    def _generate_picture(self) -> None:
        """Generate the QPicture for rendering candlesticks."""
        self._picture = QPicture()
        painter = QPainter(self._picture)

        if len(self._data) == 0:
            painter.end()
            return

        up_color = pg.mkColor(self._options.up_color)
        down_color = pg.mkColor(self._options.down_color)
        up_pen = pg.mkPen(color=up_color, width=1)
        down_pen = pg.mkPen(color=down_color, width=1)
        up_brush = pg.mkBrush(color=up_color)
        down_brush = pg.mkBrush(color=down_color)
        border_pen = pg.mkPen(None)

        w = self._candle_width / 2

        for time, open_price, high, low, close in self._data:
            bullish = close >= open_price
            wick_pen = up_pen if bullish else down_pen

            painter.setPen(wick_pen)
            painter.drawLine(pg.Point(time, low), pg.Point(time, high))

            body_bottom = min(open_price, close)
            body_height = abs(close - open_price)

            painter.setPen(wick_pen if self._options.border_visible else border_pen)
            painter.setBrush(up_brush if bullish else down_brush)
            painter.drawRect(QRectF(time - w, body_bottom, self._candle_width, body_height))

        painter.end()

    def paint(
        self,
        painter: QPainter,
        option: object,
        widget: QWidget | None = None,
    ) -> None:
        if self._picture is None:
            self._generate_picture()

        if self._picture is not None:
            self._picture.play(painter)

    def boundingRect(self) -> QRectF:
        if len(self._data) == 0:
            return QRectF()

        times = self._data[:, 0]
        highs = self._data[:, 2]
        lows = self._data[:, 3]
        finite = np.isfinite(highs) & np.isfinite(lows)
        if not finite.any():
            return QRectF()

        x_min = times.min() - self._candle_width
        x_max = times.max() + self._candle_width
        y_min = lows[finite].min()
        y_max = highs[finite].max()

        return QRectF(x_min, y_min, x_max - x_min, y_max - y_min)


class TimeAxisItem(pg.AxisItem):
    """Time axis that places ticks on bar timestamps.

    Tick positions are taken from the loaded bar times, thinned to keep
    roughly ``min_tick_spacing`` pixels between labels, and labelled by the
    tick formatter supplied at chart creation.
    """

    def __init__(
        self,
        tick_formatter: TickFormatter | None = None,
        orientation: str = "bottom",
        min_tick_spacing: int = 80,
    ) -> None:
        """Initialize the time axis.

        Args:
            tick_formatter: Maps a bar time to its label.
            orientation: Axis orientation.
            min_tick_spacing: Minimum pixels between tick labels.
        """
        super().__init__(orientation=orientation)
        self._tick_formatter = tick_formatter
        self._min_tick_spacing = min_tick_spacing
        self._times: NDArray[np.float64] = np.empty(0, dtype=np.float64)

    def set_times(self, times: NDArray[np.float64]) -> None:
        """Set the bar times ticks may be placed on."""
        self._times = np.asarray(times, dtype=np.float64)
        self.picture = None
        self.update()

    def tickValues(
        self, minVal: float, maxVal: float, size: float
    ) -> list[tuple[float, list[float]]]:
        if len(self._times) == 0:
            return []

        visible = self._times[(self._times >= minVal) & (self._times <= maxVal)]
        if len(visible) == 0:
            return []

        max_ticks = max(1, int(size // self._min_tick_spacing))
        step = max(1, math.ceil(len(visible) / max_ticks))
        spacing = bar_spacing(self._times) * step
        return [(spacing, visible[::step].tolist())]

    def tickStrings(
        self, values: Sequence[float], scale: float, spacing: float
    ) -> list[str]:
        if self._tick_formatter is None:
            return super().tickStrings(values, scale, spacing)

        result = []
        for v in values:
            try:
                result.append(self._tick_formatter(int(round(v))))
            except (ValueError, OSError, OverflowError):
                # Handle invalid timestamps
                result.append("")
        return result


class CandlestickSeries:
    """Candlestick series of a ``PyqtgraphChart``."""

    def __init__(self, chart: PyqtgraphChart, item: CandlestickItem) -> None:
        self._chart = chart
        self._item = item

    @property
    def item(self) -> CandlestickItem:
        return self._item

    def set_data(self, rows: list[dict[str, Any]]) -> None:
        """Replace the series content with engine rows."""
        self._chart.check_alive()
        data = np.array(
            [
                (row["time"], row["open"], row["high"], row["low"], row["close"])
                for row in rows
            ],
            dtype=np.float64,
        ).reshape(-1, 5)
        self._item.set_data(data)
        self._chart.set_bar_times(data[:, 0])


class _TimeScale:
    def __init__(self, chart: PyqtgraphChart) -> None:
        self._chart = chart

    def fit_content(self) -> None:
        self._chart.fit_content()


class _PriceScale:
    def __init__(self, chart: PyqtgraphChart) -> None:
        self._chart = chart

    def apply_options(self, *, auto_scale: bool | None = None) -> None:
        if auto_scale is not None:
            self._chart.set_price_auto_scale(auto_scale)


class PyqtgraphChart:
    """Chart handle backed by a ``pg.PlotWidget`` inside the container.

    Every method except ``remove`` raises ``EngineRemovedError`` once the
    chart has been removed.
    """

    def __init__(self, container: QWidget, options: ChartOptions) -> None:
        """Create the plot widget and add it to the container.

        Args:
            container: Widget the chart is placed into.
            options: Size, theme, crosshair and tick formatter options.
        """
        self._container = container
        self._options = options
        self._removed = False
        self._width = options.width
        self._subscribers: list[PointerMoveCallback] = []
        self._series: list[CandlestickSeries] = []
        self._times: NDArray[np.float64] = np.empty(0, dtype=np.float64)
        self._mouse_connected = False

        self._setup_pyqtgraph()
        self._setup_crosshair()
        self.apply_options(width=options.width)

    def _setup_pyqtgraph(self) -> None:
        """Initialize PyQtGraph components with the configured theme."""
        theme = self._options.theme

        self._time_axis = TimeAxisItem(self._options.tick_formatter)
        self._plot_widget = pg.PlotWidget(axisItems={"bottom": self._time_axis})
        self._plot_widget.setBackground(theme.background)
        self._plot_widget.setFixedHeight(self._options.height)
        self._plot_widget.showGrid(x=True, y=True, alpha=0.15)

        axis_pen = pg.mkPen(color=theme.border)
        plot_item = self._plot_widget.getPlotItem()

        # Price axis on the configured side only
        price_side = "left" if self._options.price_scale_id == "left" else "right"
        hidden_side = "right" if price_side == "left" else "left"
        plot_item.showAxis(price_side)
        plot_item.hideAxis(hidden_side)

        for axis_name in (price_side, "bottom"):
            axis = plot_item.getAxis(axis_name)
            axis.setPen(axis_pen)
            axis.setTextPen(pg.mkPen(color=theme.text))

        viewbox = self._plot_widget.getViewBox()
        viewbox.setMenuEnabled(False)
        viewbox.setMouseEnabled(x=True, y=True)
        viewbox.setMouseMode(pg.ViewBox.PanMode)

        layout = self._container.layout()
        if layout is None:
            layout = QVBoxLayout(self._container)
            layout.setContentsMargins(0, 0, 0, 0)
            layout.setSpacing(0)
        layout.addWidget(self._plot_widget)

    def _setup_crosshair(self) -> None:
        """Set up the vertical crosshair line."""
        pen = pg.mkPen(
            color=self._options.theme.crosshair,
            style=Qt.PenStyle.DashLine,
            width=1,
        )
        self._crosshair_v = pg.InfiniteLine(angle=90, movable=False, pen=pen)
        self._crosshair_v.setVisible(False)
        self._plot_widget.addItem(self._crosshair_v, ignoreBounds=True)

        if self._options.crosshair_enabled:
            self._plot_widget.scene().sigMouseMoved.connect(self._on_mouse_moved)
            self._mouse_connected = True

    @property
    def plot_widget(self) -> pg.PlotWidget:
        return self._plot_widget

    @property
    def time_axis(self) -> TimeAxisItem:
        return self._time_axis

    @property
    def width(self) -> int:
        """Width last applied through ``apply_options``."""
        return self._width

    @property
    def is_removed(self) -> bool:
        return self._removed

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def check_alive(self) -> None:
        """Raise if the chart has been removed."""
        if self._removed:
            raise EngineRemovedError("Chart has been removed")

    def add_series(self, options: SeriesOptions) -> CandlestickSeries:
        self.check_alive()
        item = CandlestickItem(options)
        self._plot_widget.addItem(item)
        series = CandlestickSeries(self, item)
        self._series.append(series)
        return series

    def subscribe_pointer_move(self, callback: PointerMoveCallback) -> None:
        self.check_alive()
        if callback not in self._subscribers:
            self._subscribers.append(callback)

    def unsubscribe_pointer_move(self, callback: PointerMoveCallback) -> None:
        self.check_alive()
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def apply_options(self, *, width: int | None = None) -> None:
        """Cap the plot width; the height stays fixed.

        The width is applied as a maximum. The container layout decides the
        actual width, so a value wider than the container has no visible
        effect, while a narrower one shrinks the plot.
        """
        self.check_alive()
        if width is None:
            return
        self._width = max(0, int(width))
        self._plot_widget.setMaximumWidth(max(1, self._width))

    def time_scale(self) -> _TimeScale:
        self.check_alive()
        return _TimeScale(self)

    def price_scale(self, scale_id: str) -> _PriceScale:
        self.check_alive()
        if scale_id != self._options.price_scale_id:
            raise ValueError(f"Unknown price scale: {scale_id!r}")
        return _PriceScale(self)

    def set_bar_times(self, times: NDArray[np.float64]) -> None:
        self._times = np.sort(np.asarray(times, dtype=np.float64))
        self._time_axis.set_times(self._times)

    def fit_content(self) -> None:
        """Fit the visible time range to all loaded bars."""
        self.check_alive()
        if len(self._times) == 0:
            return
        half = bar_spacing(self._times) / 2
        self._plot_widget.getViewBox().setXRange(
            float(self._times[0]) - half,
            float(self._times[-1]) + half,
            padding=0.02,
        )

    def set_price_auto_scale(self, enabled: bool) -> None:
        """Enable or disable automatic price-axis scaling."""
        self.check_alive()
        viewbox = self._plot_widget.getViewBox()
        if enabled:
            viewbox.setAutoVisible(y=True)
            viewbox.enableAutoRange(axis=pg.ViewBox.YAxis, enable=True)
        else:
            viewbox.disableAutoRange(axis=pg.ViewBox.YAxis)

    def is_price_auto_scale(self) -> bool:
        return bool(self._plot_widget.getViewBox().autoRangeEnabled()[1])

    def nearest_bar_time(self, x: float) -> int | None:
        """Bar time closest to a view x coordinate, within half a bar."""
        if len(self._times) == 0 or not math.isfinite(x):
            return None

        idx = int(np.searchsorted(self._times, x))
        candidates = [i for i in (idx - 1, idx) if 0 <= i < len(self._times)]
        nearest = min(candidates, key=lambda i: abs(self._times[i] - x))
        if abs(self._times[nearest] - x) > bar_spacing(self._times) / 2:
            return None
        return int(self._times[nearest])

    def _on_mouse_moved(self, pos: QPointF) -> None:
        """Translate a scene mouse move into a pointer-move notification.

        Args:
            pos: Mouse position in scene coordinates.
        """
        if self._removed:
            return

        viewbox = self._plot_widget.getViewBox()
        if not viewbox.sceneBoundingRect().contains(pos):
            self._crosshair_v.setVisible(False)
            self._notify(PointerMoveEvent())
            return

        view_x = viewbox.mapSceneToView(pos).x()
        bar_time = self.nearest_bar_time(view_x)

        widget_pos = self._plot_widget.mapFromScene(pos)
        container_pos = self._plot_widget.mapTo(self._container, widget_pos)
        point = Point(float(container_pos.x()), float(container_pos.y()))

        if bar_time is None:
            self._crosshair_v.setVisible(False)
        else:
            self._crosshair_v.setPos(bar_time)
            self._crosshair_v.setVisible(True)

        self._notify(PointerMoveEvent(point=point, time=bar_time))

    def _notify(self, event: PointerMoveEvent) -> None:
        for callback in list(self._subscribers):
            callback(event)

    def remove(self) -> None:
        """Dispose of the plot widget. Repeated calls are no-ops.

        Safe after the container was destroyed: the plot widget went with it,
        so only the Python-side bookkeeping is dropped.
        """
        if self._removed:
            return
        self._removed = True
        self._subscribers.clear()
        series_list, self._series = self._series, []

        if sip.isdeleted(self._plot_widget):
            self._mouse_connected = False
            logger.debug("pyqtgraph chart removed with its container")
            return

        if self._mouse_connected:
            self._plot_widget.scene().sigMouseMoved.disconnect(self._on_mouse_moved)
            self._mouse_connected = False

        for series in series_list:
            self._plot_widget.removeItem(series.item)

        if not sip.isdeleted(self._container):
            layout = self._container.layout()
            if layout is not None:
                layout.removeWidget(self._plot_widget)
        self._plot_widget.setParent(None)
        self._plot_widget.deleteLater()
        logger.debug("pyqtgraph chart removed")


class PyqtgraphEngine:
    """Rendering engine creating ``PyqtgraphChart`` handles."""

    def create(self, container: QWidget, options: ChartOptions) -> PyqtgraphChart:
        chart = PyqtgraphChart(container, options)
        logger.debug(
            "Created pyqtgraph chart %dx%d", options.width, options.height
        )
        return chart
