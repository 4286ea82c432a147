# tests/conftest.py
"""Shared pytest fixtures for candlechart tests."""

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest  # noqa: E402
from PyQt6.QtWidgets import QWidget  # noqa: E402

from candlechart.core.models import Candle  # noqa: E402
from fakes import BASE_TIME, FakeEngine, make_candles  # noqa: E402


@pytest.fixture
def fake_engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def container(qtbot) -> QWidget:
    """Container widget with a known size."""
    widget = QWidget()
    widget.resize(800, 400)
    qtbot.addWidget(widget)
    return widget


@pytest.fixture
def scenario_a_candles() -> list[Candle]:
    """Two bars on 2023-11-14 (UTC) followed by one on 2023-11-15."""
    return make_candles([BASE_TIME, BASE_TIME + 3600, BASE_TIME + 86400])
