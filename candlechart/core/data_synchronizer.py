"""Reconciliation of candle snapshots into the rendering engine."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from candlechart.core.day_boundaries import detect_day_boundaries

if TYPE_CHECKING:
    from collections.abc import Hashable, Sequence

    from candlechart.core.chart_state import ChartState
    from candlechart.core.models import Candle
    from candlechart.core.view_reset import ViewResetPolicy

logger = logging.getLogger(__name__)


class DataSynchronizer:
    """Pushes each candle snapshot into the live series.

    Every pass treats the snapshot as a wholesale replacement: day
    boundaries are recomputed from scratch and the series content is
    replaced. The viewport is only reset when the symbol changes, so
    incremental updates keep the user's pan/zoom position.
    """

    def __init__(self, state: ChartState, reset_policy: ViewResetPolicy) -> None:
        self._state = state
        self._reset_policy = reset_policy

    def sync(self, candles: Sequence[Candle] | None, symbol: Hashable) -> bool:
        """Run one reconciliation pass.

        Args:
            candles: Candle snapshot, possibly empty.
            symbol: Identity of the instrument the candles belong to.

        Returns:
            The resulting ``has_data`` flag.
        """
        state = self._state
        if not state.is_live or not candles:
            state.has_data = False
            return False

        state.day_boundaries = detect_day_boundaries(candles)
        state.series.set_data([candle.to_engine() for candle in candles])
        state.has_data = True

        logger.debug(
            "Synchronized %d candles for %s (%d day boundaries)",
            len(candles),
            symbol,
            len(state.day_boundaries),
        )

        if state.prev_symbol != symbol:
            self._reset_policy.reset()
        state.prev_symbol = symbol
        return True
