"""View reset: fit all data and re-enable price autoscaling."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from candlechart.core.config import DEFAULT_PRICE_SCALE_ID

if TYPE_CHECKING:
    from candlechart.core.chart_state import ChartState

logger = logging.getLogger(__name__)


class ViewResetPolicy:
    """Resets the viewport of the live chart.

    Invoked automatically when the symbol changes and available to the
    caller as a manual command.
    """

    def __init__(
        self,
        state: ChartState,
        price_scale_id: str = DEFAULT_PRICE_SCALE_ID,
        on_reset: Callable[[], None] | None = None,
    ) -> None:
        self._state = state
        self._price_scale_id = price_scale_id
        self._on_reset = on_reset

    def reset(self) -> bool:
        """Fit the time range to all data and autoscale the price axis.

        Returns:
            True if a live chart was reset, False if nothing is mounted.
        """
        handle = self._state.handle
        if handle is None:
            return False

        handle.time_scale().fit_content()
        handle.price_scale(self._price_scale_id).apply_options(auto_scale=True)
        logger.debug("Chart view reset")
        if self._on_reset is not None:
            self._on_reset()
        return True
