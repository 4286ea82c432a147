"""Test doubles and builders shared by the candlechart tests."""

from typing import Any

from PyQt6.QtCore import QSize
from PyQt6.QtGui import QResizeEvent
from PyQt6.QtWidgets import QApplication, QWidget

from candlechart.core.models import Candle, Point, PointerMoveEvent

# 2023-11-14 22:13:20 UTC
BASE_TIME = 1_700_000_000


class FakeSeries:
    """Recording candle series."""

    def __init__(self, chart: "FakeChart", options: Any) -> None:
        self.chart = chart
        self.options = options
        self.rows: list[dict] = []
        self.set_data_calls = 0

    def set_data(self, rows: list[dict]) -> None:
        self.chart.check_alive()
        self.rows = list(rows)
        self.set_data_calls += 1


class FakeTimeScale:
    def __init__(self, chart: "FakeChart") -> None:
        self.chart = chart

    def fit_content(self) -> None:
        self.chart.fit_count += 1
        times = [row["time"] for s in self.chart.series for row in s.rows]
        self.chart.visible_range = (min(times), max(times)) if times else None


class FakePriceScale:
    def __init__(self, chart: "FakeChart", scale_id: str) -> None:
        self.chart = chart
        self.scale_id = scale_id

    def apply_options(self, *, auto_scale: bool | None = None) -> None:
        self.chart.auto_scale_calls.append((self.scale_id, auto_scale))
        if auto_scale is not None:
            self.chart.auto_scale = auto_scale


class FakeChart:
    """Recording chart handle that mimics the engine contract."""

    def __init__(self, container: QWidget, options: Any, fail_on: str | None) -> None:
        self.container = container
        self.options = options
        self.fail_on = fail_on
        self.series: list[FakeSeries] = []
        self.subscribers: list = []
        self.applied_widths: list[int] = []
        self.fit_count = 0
        self.auto_scale_calls: list[tuple[str, bool | None]] = []
        self.auto_scale = False
        self.visible_range: tuple[int, int] | None = None
        self.removed = False
        self.remove_count = 0

    def check_alive(self) -> None:
        if self.removed:
            raise RuntimeError("chart used after remove()")

    def add_series(self, options: Any) -> FakeSeries:
        self.check_alive()
        if self.fail_on == "add_series":
            raise RuntimeError("add_series failed")
        series = FakeSeries(self, options)
        self.series.append(series)
        return series

    def subscribe_pointer_move(self, callback) -> None:
        self.check_alive()
        if self.fail_on == "subscribe":
            raise RuntimeError("subscribe failed")
        self.subscribers.append(callback)

    def unsubscribe_pointer_move(self, callback) -> None:
        self.check_alive()
        self.subscribers.remove(callback)

    def apply_options(self, *, width: int | None = None) -> None:
        self.check_alive()
        if width is not None:
            self.applied_widths.append(width)

    def time_scale(self) -> FakeTimeScale:
        self.check_alive()
        return FakeTimeScale(self)

    def price_scale(self, scale_id: str) -> FakePriceScale:
        self.check_alive()
        return FakePriceScale(self, scale_id)

    def remove(self) -> None:
        self.remove_count += 1
        self.removed = True

    def emit_pointer(self, event: PointerMoveEvent) -> None:
        """Deliver a pointer-move notification to every subscriber."""
        for callback in list(self.subscribers):
            callback(event)


class FakeEngine:
    """Engine double creating ``FakeChart`` handles."""

    def __init__(self, fail_on: str | None = None) -> None:
        self.fail_on = fail_on
        self.charts: list[FakeChart] = []

    def create(self, container: QWidget, options: Any) -> FakeChart:
        if self.fail_on == "create":
            raise RuntimeError("create failed")
        chart = FakeChart(container, options, self.fail_on)
        self.charts.append(chart)
        return chart

    @property
    def last_chart(self) -> FakeChart:
        return self.charts[-1]


def make_candles(times: list[int], price: float = 100.0) -> list[Candle]:
    """Build flat candles at the given times."""
    return [Candle(t, price, price + 1.0, price - 1.0, price + 0.5) for t in times]


def pointer_at(x: float, time: Any) -> PointerMoveEvent:
    return PointerMoveEvent(point=Point(x, 10.0), time=time)


def send_resize(widget: QWidget, width: int, height: int) -> None:
    """Deliver a resize event synchronously."""
    event = QResizeEvent(QSize(width, height), widget.size())
    QApplication.sendEvent(widget, event)

