"""candlechart - candlestick chart controller for PyQt6/pyqtgraph."""

from candlechart.__version__ import __version__

__all__ = ["__version__"]
