"""QSS stylesheet for the candlechart demo window."""

import logging

from PyQt6.QtWidgets import QApplication

from candlechart.ui.constants import Colors, Fonts, Spacing

logger = logging.getLogger(__name__)


def get_stylesheet() -> str:
    """Generate the QSS stylesheet for the demo window.

    Returns:
        A string containing the complete QSS stylesheet.
    """
    return f"""
QMainWindow, QWidget#centralWidget {{
    background-color: {Colors.BG_BASE};
}}

QLabel {{
    color: {Colors.TEXT_SECONDARY};
    font-family: "{Fonts.UI}";
}}

QLabel#crosshairLabel {{
    background-color: {Colors.BG_SURFACE};
    color: {Colors.TEXT_PRIMARY};
    border: 1px solid {Colors.BG_BORDER};
    border-radius: 3px;
    padding: 2px {Spacing.XS}px;
    font-family: "{Fonts.DATA}";
}}

QComboBox, QPushButton {{
    background-color: {Colors.BG_SURFACE};
    color: {Colors.TEXT_PRIMARY};
    border: 1px solid {Colors.BG_BORDER};
    border-radius: 4px;
    padding: {Spacing.XS}px {Spacing.SM}px;
}}

QPushButton:hover {{
    border-color: {Colors.ACCENT};
}}

QPushButton:disabled {{
    color: {Colors.TEXT_DISABLED};
}}
"""


def apply_theme(app: QApplication) -> None:
    """Apply the stylesheet to the application.

    Args:
        app: The QApplication instance to apply the theme to.
    """
    app.setStyleSheet(get_stylesheet())
    logger.info("Theme applied successfully")
