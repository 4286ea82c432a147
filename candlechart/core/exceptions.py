"""Custom exceptions for candlechart."""


class CandleChartError(Exception):
    """Base exception for candlechart.

    All custom exceptions in the package should inherit from this class
    to enable consistent exception handling.
    """


class ConfigError(CandleChartError):
    """Raised when chart configuration is invalid.

    This exception is raised for out-of-range sizes, empty scale ids
    or unknown display timezones.
    """


class EngineRemovedError(CandleChartError):
    """Raised when a rendering engine handle is used after removal.

    The controller never does this; it only surfaces for callers that
    keep a handle past unmount.
    """
