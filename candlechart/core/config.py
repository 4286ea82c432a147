"""Chart configuration and its JSON persistence.

Only chart options live here. The visible range, crosshair and symbol are
never persisted.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path

import pandas as pd

from candlechart.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_DISPLAY_TIMEZONE = "UTC"
DEFAULT_CHART_HEIGHT = 300
DEFAULT_PRICE_SCALE_ID = "right"
DEFAULT_CONFIG_PATH = Path.home() / ".candlechart" / "chart_config.json"


@dataclass
class ChartTheme:
    """Colors used by the rendering engine.

    Attributes:
        background: Plot background color.
        text: Axis label color.
        grid: Grid line color.
        border: Axis border color.
        up: Body and wick color for bullish candles.
        down: Body and wick color for bearish candles.
        crosshair: Crosshair line color.
    """

    background: str = "#1f2937"
    text: str = "#d1d5db"
    grid: str = "#374151"
    border: str = "#9ca3af"
    up: str = "#10b981"
    down: str = "#ef4444"
    crosshair: str = "#9ca3af"


@dataclass
class ChartConfig:
    """Chart construction options.

    Attributes:
        height: Fixed chart height in pixels; only the width follows the
            container.
        price_scale_id: Price scale re-enabled for autoscaling on reset.
        display_timezone: IANA timezone used for axis and crosshair labels.
        theme: Chart colors.
    """

    height: int = DEFAULT_CHART_HEIGHT
    price_scale_id: str = DEFAULT_PRICE_SCALE_ID
    display_timezone: str = DEFAULT_DISPLAY_TIMEZONE
    theme: ChartTheme = field(default_factory=ChartTheme)

    def __post_init__(self) -> None:
        if self.height <= 0:
            raise ConfigError(f"Chart height must be positive, got {self.height}")
        if not self.price_scale_id:
            raise ConfigError("Price scale id must not be empty")
        try:
            pd.Timestamp(0, unit="s", tz="UTC").tz_convert(self.display_timezone)
        except (KeyError, ValueError, TypeError) as e:
            raise ConfigError(
                f"Unknown display timezone: {self.display_timezone!r}"
            ) from e

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> ChartConfig:
        """Create a config from a dictionary, ignoring unknown keys.

        Raises:
            ConfigError: If a value is out of range.
        """
        theme_data = data.get("theme") or {}
        theme_fields = ChartTheme.__dataclass_fields__
        theme = ChartTheme(**{k: v for k, v in theme_data.items() if k in theme_fields})
        return cls(
            height=int(data.get("height", DEFAULT_CHART_HEIGHT)),
            price_scale_id=str(data.get("price_scale_id", DEFAULT_PRICE_SCALE_ID)),
            display_timezone=str(
                data.get("display_timezone", DEFAULT_DISPLAY_TIMEZONE)
            ),
            theme=theme,
        )


class ChartConfigManager:
    """Loads and saves the chart configuration as JSON."""

    def __init__(self, config_path: Path | None = None) -> None:
        """Initialize the manager.

        Args:
            config_path: JSON file location. Defaults to
                ``~/.candlechart/chart_config.json``.
        """
        self._config_path = Path(config_path or DEFAULT_CONFIG_PATH)

    @property
    def config_path(self) -> Path:
        """Location of the JSON file."""
        return self._config_path

    def load(self) -> ChartConfig:
        """Load the configuration, falling back to defaults.

        A missing file yields defaults silently. A corrupt or invalid file
        is logged and also yields defaults.
        """
        if not self._config_path.exists():
            return ChartConfig()

        try:
            with open(self._config_path) as f:
                data = json.load(f)
            config = ChartConfig.from_dict(data)
            logger.info("Loaded chart config from %s", self._config_path)
            return config
        except (OSError, ValueError, TypeError, AttributeError, ConfigError) as e:
            logger.error("Failed to load chart config: %s", e)
            return ChartConfig()

    def save(self, config: ChartConfig) -> None:
        """Write the configuration to disk."""
        self._config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._config_path, "w") as f:
            json.dump(config.to_dict(), f, indent=2)
        logger.info("Saved chart config to %s", self._config_path)
