"""Core chart synchronization logic."""

from .chart_state import ChartState
from .config import ChartConfig, ChartConfigManager, ChartTheme
from .crosshair_tracker import CrosshairTracker
from .data_synchronizer import DataSynchronizer
from .day_boundaries import detect_day_boundaries
from .models import Candle, Point, PointerMoveEvent, ViewState, candles_from_dataframe
from .time_format import crosshair_label, tick_label
from .view_reset import ViewResetPolicy

__all__ = [
    "Candle",
    "ChartConfig",
    "ChartConfigManager",
    "ChartState",
    "ChartTheme",
    "CrosshairTracker",
    "DataSynchronizer",
    "Point",
    "PointerMoveEvent",
    "ViewResetPolicy",
    "ViewState",
    "candles_from_dataframe",
    "crosshair_label",
    "detect_day_boundaries",
    "tick_label",
]
