"""UI constants for the candlechart demo window.

Chart colors live in ``ChartTheme``; these cover the surrounding widgets.
"""


class Colors:
    """Window palette matching the default chart theme."""

    BG_BASE = "#111827"
    BG_SURFACE = "#1f2937"
    BG_BORDER = "#374151"

    TEXT_PRIMARY = "#f9fafb"
    TEXT_SECONDARY = "#d1d5db"
    TEXT_DISABLED = "#6b7280"

    ACCENT = "#3b82f6"


class Fonts:
    """Font family definitions."""

    DATA = "Azeret Mono"
    UI = "Geist"


class Spacing:
    """Spacing constants in pixels."""

    XS = 4
    SM = 8
    LG = 16


class Limits:
    """Window limits."""

    MIN_WINDOW_WIDTH = 640
    MIN_WINDOW_HEIGHT = 420
