"""Demo window showing a live candlestick chart.

Contains the MainWindow class with a symbol selector, a reset button and a
crosshair readout that follows the pointer.
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtWidgets import (
    QComboBox,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from candlechart.core.config import ChartConfig
from candlechart.core.engine import ChartEngine
from candlechart.core.models import Candle
from candlechart.core.sample_data import generate_candles, next_candle
from candlechart.ui.chart_controller import ChartController
from candlechart.ui.constants import Limits, Spacing

logger = logging.getLogger(__name__)

SYMBOLS = ("AAPL", "MSFT", "NVDA", "TSLA")
BAR_INTERVAL_SECONDS = 900


class MainWindow(QMainWindow):
    """Main window hosting one chart bound to the selected symbol."""

    def __init__(
        self,
        config: ChartConfig | None = None,
        engine: ChartEngine | None = None,
        live_interval_ms: int = 2000,
    ) -> None:
        """Initialize the window and mount the chart.

        Args:
            config: Chart configuration.
            engine: Rendering engine; defaults to pyqtgraph.
            live_interval_ms: Period of simulated live bars; 0 disables them.
        """
        super().__init__()
        self.setWindowTitle("candlechart")
        self.setMinimumSize(Limits.MIN_WINDOW_WIDTH, Limits.MIN_WINDOW_HEIGHT)

        self._controller = ChartController(engine=engine, config=config, parent=self)
        self._candles: list[Candle] = []
        self._live_seed = 0

        self._setup_ui()
        self._connect_signals()

        self._controller.mount(self._chart_container)
        self._load_symbol(self._symbol_combo.currentText())

        self._live_timer = QTimer(self)
        self._live_timer.timeout.connect(self._append_live_candle)
        if live_interval_ms > 0:
            self._live_timer.start(live_interval_ms)

        logger.debug("MainWindow initialized")

    @property
    def controller(self) -> ChartController:
        return self._controller

    def _setup_ui(self) -> None:
        """Set up toolbar row, chart container and overlay labels."""
        central = QWidget()
        central.setObjectName("centralWidget")
        layout = QVBoxLayout(central)
        layout.setContentsMargins(Spacing.LG, Spacing.LG, Spacing.LG, Spacing.LG)
        layout.setSpacing(Spacing.SM)

        toolbar = QHBoxLayout()
        toolbar.setSpacing(Spacing.SM)
        self._symbol_combo = QComboBox()
        self._symbol_combo.addItems(SYMBOLS)
        self._reset_button = QPushButton("Reset view")
        self._reset_button.setEnabled(False)
        toolbar.addWidget(self._symbol_combo)
        toolbar.addWidget(self._reset_button)
        toolbar.addStretch()
        layout.addLayout(toolbar)

        self._chart_container = QWidget()
        layout.addWidget(self._chart_container)

        self._empty_label = QLabel("No data available", self._chart_container)
        self._empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._crosshair_label = QLabel(self._chart_container)
        self._crosshair_label.setObjectName("crosshairLabel")
        self._crosshair_label.setVisible(False)

        layout.addStretch()
        self.setCentralWidget(central)

    def _connect_signals(self) -> None:
        self._symbol_combo.currentTextChanged.connect(self._load_symbol)
        self._reset_button.clicked.connect(self._controller.reset_view)
        self._controller.has_data_changed.connect(self._on_has_data_changed)
        self._controller.crosshair_changed.connect(self._on_crosshair_changed)

    def _load_symbol(self, symbol: str) -> None:
        """Replace the chart content with the selected symbol's candles."""
        self._candles = generate_candles(symbol, interval_seconds=BAR_INTERVAL_SECONDS)
        self._controller.set_data(self._candles, symbol)

    def _append_live_candle(self) -> None:
        """Append one simulated bar without touching the viewport."""
        if not self._candles:
            return
        self._live_seed += 1
        candle = next_candle(self._candles[-1], BAR_INTERVAL_SECONDS, self._live_seed)
        self._candles = [*self._candles, candle]
        self._controller.set_data(self._candles, self._symbol_combo.currentText())

    def _on_has_data_changed(self, has_data: bool) -> None:
        self._empty_label.setVisible(not has_data)
        self._reset_button.setEnabled(has_data)

    def _on_crosshair_changed(self, time_label: str | None, x: float | None) -> None:
        if time_label is None or x is None:
            self._crosshair_label.setVisible(False)
            return
        self._crosshair_label.setText(time_label)
        self._crosshair_label.adjustSize()
        label_x = int(x - self._crosshair_label.width() / 2)
        label_x = max(0, min(label_x, self._chart_container.width() - self._crosshair_label.width()))
        self._crosshair_label.move(label_x, 0)
        self._crosshair_label.raise_()
        self._crosshair_label.setVisible(True)

    def closeEvent(self, event) -> None:
        """Stop live updates and release the chart before closing."""
        self._live_timer.stop()
        self._controller.unmount()
        super().closeEvent(event)
