"""Crosshair state driven by engine pointer-move notifications."""

from __future__ import annotations

import math
from numbers import Real
from typing import TYPE_CHECKING, Callable

from candlechart.core.time_format import crosshair_label

if TYPE_CHECKING:
    from candlechart.core.chart_state import ChartState
    from candlechart.core.engine import ChartHandle
    from candlechart.core.models import PointerMoveEvent


def _is_valid_time(value: object) -> bool:
    """Check that a reported time is a finite real number."""
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return math.isfinite(value)


class CrosshairTracker:
    """Keeps ``crosshair_time`` and ``crosshair_x`` in sync with the pointer.

    Subscribes once per mounted handle. After ``stop()`` the tracker ignores
    any notification still in flight, so no state changes after unmount.
    """

    def __init__(
        self,
        state: ChartState,
        on_change: Callable[[str | None, float | None], None] | None = None,
        formatter: Callable[[float], str] = crosshair_label,
    ) -> None:
        """Initialize the tracker.

        Args:
            state: Shared chart state record.
            on_change: Called with (time_label, x) whenever either changes.
            formatter: Formats a hovered bar time.
        """
        self._state = state
        self._on_change = on_change
        self._formatter = formatter
        self._handle: ChartHandle | None = None

    @property
    def is_active(self) -> bool:
        """Whether the tracker is subscribed to a handle."""
        return self._handle is not None

    def start(self, handle: ChartHandle) -> None:
        """Subscribe to pointer moves of a handle."""
        if self._handle is handle:
            return
        self.stop()
        handle.subscribe_pointer_move(self.on_pointer_move)
        self._handle = handle

    def stop(self) -> None:
        """Unsubscribe and clear the crosshair."""
        handle = self._handle
        if handle is None:
            return
        self._handle = None
        handle.unsubscribe_pointer_move(self.on_pointer_move)
        self._update(None, None)

    def on_pointer_move(self, event: PointerMoveEvent) -> None:
        """Handle one pointer-move notification."""
        if self._handle is None:
            return

        if event.point is None or not _is_valid_time(event.time):
            self._update(None, None)
            return

        self._update(self._formatter(event.time), float(event.point.x))

    def _update(self, time_label: str | None, x: float | None) -> None:
        state = self._state
        if state.crosshair_time == time_label and state.crosshair_x == x:
            return
        state.crosshair_time = time_label
        state.crosshair_x = x
        if self._on_change is not None:
            self._on_change(time_label, x)
