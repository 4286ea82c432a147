"""Tests for time-axis and crosshair label formatting."""

import re

import numpy as np
import pytest

from candlechart.core.time_format import crosshair_label, tick_label

# 2023-11-14 00:00:00 UTC
MIDNIGHT = 1_699_920_000
CLOCK_PATTERN = re.compile(r"^(1[0-2]|[1-9]):[0-5]\d (AM|PM)$")
MONTH_DAY_PATTERN = re.compile(r"^[A-Z][a-z]{2} ([1-9]|[12]\d|3[01])$")


class TestTickLabel:
    """Tests for tick_label()."""

    def test_day_boundary_shows_month_and_day(self):
        """Boundary bars are labelled with abbreviated month and day."""
        assert tick_label(1_700_000_000, True) == "Nov 14"

    def test_day_of_month_is_not_padded(self):
        """Single-digit days have no leading zero."""
        # 2023-11-01 00:00 UTC
        assert tick_label(1_698_796_800, True) == "Nov 1"

    def test_intraday_shows_twelve_hour_clock(self):
        """Non-boundary bars show H:MM AM/PM."""
        assert tick_label(1_700_000_000, False) == "10:13 PM"

    @pytest.mark.parametrize(
        ("offset", "expected"),
        [
            (0, "12:00 AM"),
            (9 * 3600 + 5 * 60, "9:05 AM"),
            (12 * 3600, "12:00 PM"),
            (13 * 3600 + 7 * 60, "1:07 PM"),
            (23 * 3600 + 59 * 60, "11:59 PM"),
        ],
    )
    def test_clock_edges(self, offset, expected):
        """Midnight and noon both use 12; minutes are zero-padded."""
        assert tick_label(MIDNIGHT + offset, False) == expected

    def test_display_timezone_applies(self):
        """Labels follow the configured display timezone."""
        assert tick_label(1_700_000_000, False, tz="America/New_York") == "5:13 PM"
        assert tick_label(1_700_000_000, True, tz="Asia/Tokyo") == "Nov 15"

    def test_boundary_never_returns_time_of_day(self):
        """Boundary labels never look like a clock label and vice versa."""
        rng = np.random.default_rng(7)
        for t in rng.integers(0, 2_000_000_000, 200):
            boundary = tick_label(int(t), True)
            intraday = tick_label(int(t), False)
            assert MONTH_DAY_PATTERN.match(boundary), boundary
            assert not CLOCK_PATTERN.match(boundary)
            assert CLOCK_PATTERN.match(intraday), intraday
            assert not MONTH_DAY_PATTERN.match(intraday)


class TestCrosshairLabel:
    """Tests for crosshair_label()."""

    def test_pinned_format(self):
        """Crosshair label has date, year and 12-hour clock."""
        assert crosshair_label(1_700_000_000) == "Nov 14, 2023 10:13 PM"

    def test_midnight(self):
        assert crosshair_label(MIDNIGHT) == "Nov 14, 2023 12:00 AM"

    def test_accepts_float_time(self):
        assert crosshair_label(1_700_000_000.0) == "Nov 14, 2023 10:13 PM"

    def test_display_timezone_applies(self):
        assert crosshair_label(1_700_000_000, tz="Asia/Tokyo") == "Nov 15, 2023 7:13 AM"
