"""candlechart - candlestick chart demo application."""

import logging
import sys

from PyQt6.QtWidgets import QApplication

from candlechart.__version__ import __version__
from candlechart.core.config import ChartConfigManager
from candlechart.ui import theme
from candlechart.ui.main_window import MainWindow

logger = logging.getLogger(__name__)


def main() -> int:
    """Application entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info("Starting candlechart %s", __version__)

    app = QApplication(sys.argv)
    theme.apply_theme(app)

    config = ChartConfigManager().load()
    window = MainWindow(config=config)
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
