"""Chart controller binding candle snapshots to a chart in a container.

The controller owns the rendering-engine handle for the container's mounted
lifetime and wires the collaborators around it:

- ``DataSynchronizer`` reconciles every candle/symbol update.
- ``CrosshairTracker`` follows pointer moves while mounted.
- ``ViewResetPolicy`` fits the view on symbol change and on request.
- ``ResizeObserver`` re-applies the container width on every resize.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from PyQt6 import sip
from PyQt6.QtCore import QObject, QSize, pyqtSignal

from candlechart.core.chart_state import ChartState
from candlechart.core.config import ChartConfig
from candlechart.core.crosshair_tracker import CrosshairTracker
from candlechart.core.data_synchronizer import DataSynchronizer
from candlechart.core.engine import ChartOptions, SeriesOptions
from candlechart.core.time_format import crosshair_label, tick_label
from candlechart.core.view_reset import ViewResetPolicy
from candlechart.ui.candlestick_chart import PyqtgraphEngine
from candlechart.ui.resize_observer import ResizeObserver

if TYPE_CHECKING:
    from collections.abc import Hashable, Sequence

    from PyQt6.QtWidgets import QWidget

    from candlechart.core.engine import ChartEngine, ChartHandle
    from candlechart.core.models import Candle, ViewState

logger = logging.getLogger(__name__)


class ChartController(QObject):
    """Owns a chart engine instance bound to a container widget.

    Signals:
        has_data_changed: Emitted with the new ``has_data`` flag.
        crosshair_changed: Emitted with (time_label, x) when the crosshair
            moves or is cleared; both are None when cleared.
        view_reset: Emitted after every automatic or manual view reset.

    Attributes:
        _state: State record shared with the collaborators.
        _engine: Rendering engine used to create chart handles.
        _resize_observer: Observer installed on the mounted container.
    """

    has_data_changed = pyqtSignal(bool)
    crosshair_changed = pyqtSignal(object, object)  # str | None, float | None
    view_reset = pyqtSignal()

    def __init__(
        self,
        engine: ChartEngine | None = None,
        config: ChartConfig | None = None,
        parent: QObject | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            engine: Rendering engine; defaults to the pyqtgraph engine.
            config: Chart configuration; defaults to ``ChartConfig()``.
            parent: Optional parent QObject.
        """
        super().__init__(parent)
        self._engine: ChartEngine = engine if engine is not None else PyqtgraphEngine()
        self._config = config if config is not None else ChartConfig()
        self._state = ChartState()
        self._resize_observer: ResizeObserver | None = None
        self._container: QWidget | None = None

        tz = self._config.display_timezone
        self._reset_policy = ViewResetPolicy(
            self._state,
            price_scale_id=self._config.price_scale_id,
            on_reset=self.view_reset.emit,
        )
        self._synchronizer = DataSynchronizer(self._state, self._reset_policy)
        self._crosshair = CrosshairTracker(
            self._state,
            on_change=self.crosshair_changed.emit,
            formatter=lambda t: crosshair_label(t, tz=tz),
        )

    @property
    def config(self) -> ChartConfig:
        return self._config

    @property
    def handle(self) -> ChartHandle | None:
        """Live engine handle, or None when not mounted."""
        return self._state.handle

    @property
    def is_mounted(self) -> bool:
        return self._state.is_live

    @property
    def has_data(self) -> bool:
        return self._state.has_data

    @property
    def crosshair_time(self) -> str | None:
        return self._state.crosshair_time

    @property
    def crosshair_x(self) -> float | None:
        return self._state.crosshair_x

    @property
    def view_state(self) -> ViewState:
        """Snapshot of has_data and the crosshair readout."""
        return self._state.view_state()

    @property
    def day_boundaries(self) -> frozenset[int]:
        """Day-boundary timestamps of the current snapshot."""
        return frozenset(self._state.day_boundaries)

    def format_tick(self, time: float) -> str:
        """Time-axis label for a bar time, using the current day boundaries."""
        return tick_label(
            time,
            int(time) in self._state.day_boundaries,
            tz=self._config.display_timezone,
        )

    def mount(self, container: QWidget | None) -> ChartHandle | None:
        """Create a chart inside the container.

        Does nothing when the container is absent or already deleted.
        Errors raised by the engine propagate unchanged; anything acquired
        before the failure is released first.

        Args:
            container: Widget to host the chart.

        Returns:
            The live engine handle, or None if nothing was mounted.
        """
        if container is None or sip.isdeleted(container):
            logger.warning("Chart mount skipped: container is not available")
            return None

        if self._state.handle is not None:
            self.unmount()

        options = ChartOptions(
            width=container.width(),
            height=self._config.height,
            theme=self._config.theme,
            crosshair_enabled=True,
            tick_formatter=self.format_tick,
            price_scale_id=self._config.price_scale_id,
        )
        handle = self._engine.create(container, options)

        observer: ResizeObserver | None = None
        try:
            series = handle.add_series(
                SeriesOptions(
                    up_color=self._config.theme.up,
                    down_color=self._config.theme.down,
                    border_visible=False,
                )
            )
            self._crosshair.start(handle)
            observer = ResizeObserver(self._on_container_resized, parent=self)
            observer.observe(container)
        except Exception:
            if observer is not None:
                observer.detach()
                observer.deleteLater()
            self._crosshair.stop()
            handle.remove()
            raise

        self._state.handle = handle
        self._state.series = series
        self._resize_observer = observer
        self._container = container
        container.destroyed.connect(self._on_container_destroyed)
        logger.debug("Chart mounted (width=%d)", options.width)

        if self._state.candles is not None:
            self._sync()
        return handle

    def unmount(self, handle: ChartHandle | None = None) -> None:
        """Release the chart and every subscription created by ``mount``.

        Safe to call repeatedly and when ``mount`` never succeeded.

        Args:
            handle: Handle returned by ``mount``. When given and it is not
                the live handle, nothing happens.
        """
        live = self._state.handle
        if live is None or (handle is not None and handle is not live):
            return

        had_data = self._state.has_data
        container = self._container
        self._container = None
        if container is not None and not sip.isdeleted(container):
            container.destroyed.disconnect(self._on_container_destroyed)
        if self._resize_observer is not None:
            self._resize_observer.detach()
            self._resize_observer.deleteLater()
            self._resize_observer = None
        self._crosshair.stop()
        self._state.clear_engine()
        live.remove()
        logger.debug("Chart unmounted")

        if had_data:
            self.has_data_changed.emit(False)

    def set_data(self, candles: Sequence[Candle] | None, symbol: Hashable) -> None:
        """Supply a new candle snapshot and/or symbol.

        Re-running with the same sequence object and an equal symbol is
        skipped. The snapshot is kept so a later ``mount`` can render it.

        Args:
            candles: Ordered candle snapshot, possibly empty.
            symbol: Identity of the instrument.
        """
        state = self._state
        if candles is state.candles and symbol == state.symbol and candles is not None:
            return
        state.candles = candles
        state.symbol = symbol
        self._sync()

    def reset_view(self) -> None:
        """Fit all data and autoscale the price axis. No-op when unmounted."""
        self._reset_policy.reset()

    def _sync(self) -> None:
        had_data = self._state.has_data
        has_data = self._synchronizer.sync(self._state.candles, self._state.symbol)
        if has_data != had_data:
            self.has_data_changed.emit(has_data)

    def _on_container_destroyed(self, obj: QObject | None = None) -> None:
        """Release the chart when the container goes away while mounted."""
        if self._container is None:
            return
        logger.debug("Chart container destroyed")
        self._container = None
        self.unmount()

    def _on_container_resized(self, size: QSize) -> None:
        handle = self._state.handle
        if handle is not None:
            handle.apply_options(width=size.width())
