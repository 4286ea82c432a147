"""Tests for DataSynchronizer."""

import math

import pytest
from PyQt6.QtWidgets import QWidget

from candlechart.core.chart_state import ChartState
from candlechart.core.data_synchronizer import DataSynchronizer
from candlechart.core.models import Candle
from candlechart.core.view_reset import ViewResetPolicy
from fakes import BASE_TIME, FakeChart, make_candles


@pytest.fixture
def live(qtbot):
    """Synchronizer wired to a live fake chart."""
    chart = FakeChart(QWidget(), options=None, fail_on=None)
    series = chart.add_series(None)
    state = ChartState(handle=chart, series=series)
    synchronizer = DataSynchronizer(state, ViewResetPolicy(state))
    return synchronizer, state, chart, series


class TestSyncWithoutData:
    """Passes that must not reach the engine."""

    def test_no_handle(self, scenario_a_candles):
        state = ChartState()
        synchronizer = DataSynchronizer(state, ViewResetPolicy(state))

        assert synchronizer.sync(scenario_a_candles, "AAPL") is False
        assert state.has_data is False

    def test_empty_sequence(self, live):
        """Scenario B: empty input clears has_data without a series update."""
        synchronizer, state, chart, series = live

        assert synchronizer.sync([], "AAPL") is False

        assert state.has_data is False
        assert series.set_data_calls == 0
        assert chart.fit_count == 0

    def test_none_sequence(self, live):
        synchronizer, state, _, series = live
        assert synchronizer.sync(None, "AAPL") is False
        assert series.set_data_calls == 0

    def test_empty_after_data_clears_has_data(self, live, scenario_a_candles):
        synchronizer, state, _, series = live
        synchronizer.sync(scenario_a_candles, "AAPL")

        synchronizer.sync([], "AAPL")

        assert state.has_data is False
        assert series.set_data_calls == 1


class TestSyncWithData:
    """Reconciliation of non-empty snapshots."""

    def test_scenario_a_boundaries_and_rows(self, live, scenario_a_candles):
        synchronizer, state, _, series = live

        assert synchronizer.sync(scenario_a_candles, "AAPL") is True

        assert state.has_data is True
        assert state.day_boundaries == {BASE_TIME, BASE_TIME + 86400}
        assert series.rows == [c.to_engine() for c in scenario_a_candles]

    def test_full_replacement_recomputes_boundaries(self, live, scenario_a_candles):
        """A wholesale replacement does not keep boundaries of the old snapshot."""
        synchronizer, state, _, series = live
        synchronizer.sync(scenario_a_candles, "AAPL")

        replacement = make_candles([BASE_TIME + 10 * 86400, BASE_TIME + 10 * 86400 + 60])
        synchronizer.sync(replacement, "AAPL")

        assert state.day_boundaries == {BASE_TIME + 10 * 86400}
        assert [row["time"] for row in series.rows] == [c.time for c in replacement]

    def test_malformed_candles_pass_through(self, live):
        synchronizer, _, _, series = live
        candle = Candle(BASE_TIME, math.nan, math.inf, 0.0, 1.0)

        synchronizer.sync([candle], "AAPL")

        assert math.isnan(series.rows[0]["open"])
        assert series.rows[0]["high"] == math.inf

    def test_does_not_mutate_input(self, live, scenario_a_candles):
        synchronizer, *_ = live
        snapshot = list(scenario_a_candles)
        synchronizer.sync(scenario_a_candles, "AAPL")
        assert scenario_a_candles == snapshot


class TestAutomaticReset:
    """View reset only on symbol changes."""

    def test_first_pass_resets(self, live, scenario_a_candles):
        synchronizer, state, chart, _ = live
        synchronizer.sync(scenario_a_candles, "AAPL")
        assert chart.fit_count == 1
        assert state.prev_symbol == "AAPL"

    def test_same_symbol_new_data_does_not_reset(self, live, scenario_a_candles):
        synchronizer, _, chart, _ = live
        synchronizer.sync(scenario_a_candles, "AAPL")

        appended = [*scenario_a_candles, *make_candles([BASE_TIME + 86400 + 900])]
        synchronizer.sync(appended, "AAPL")

        assert chart.fit_count == 1
        assert chart.auto_scale_calls == [("right", True)]

    def test_scenario_d_symbol_change_resets_once(self, live, scenario_a_candles):
        """AAPL -> MSFT with fresh candles triggers exactly one reset."""
        synchronizer, state, chart, _ = live
        synchronizer.sync(scenario_a_candles, "AAPL")
        before_fit = chart.fit_count
        before_scale = len(chart.auto_scale_calls)

        synchronizer.sync(make_candles([BASE_TIME, BASE_TIME + 60], price=300.0), "MSFT")

        assert chart.fit_count - before_fit == 1
        assert len(chart.auto_scale_calls) - before_scale == 1
        assert state.prev_symbol == "MSFT"

    def test_symbol_not_recorded_without_data(self, live, scenario_a_candles):
        """An empty pass keeps the previous symbol so the next data pass resets."""
        synchronizer, state, chart, _ = live
        synchronizer.sync(scenario_a_candles, "AAPL")

        synchronizer.sync([], "MSFT")
        assert state.prev_symbol == "AAPL"

        synchronizer.sync(scenario_a_candles, "MSFT")
        assert chart.fit_count == 2
