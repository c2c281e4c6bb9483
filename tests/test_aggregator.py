"""Unit tests for the history summary logic."""

from __future__ import annotations

from datetime import datetime

from services.aggregator import Aggregator
from models.records import Reading


def _reading(value: float) -> Reading:
    """Helper to build deterministic readings."""

    return Reading(sensor_name="sensor-a", value=value, timestamp=datetime(2024, 1, 1))


def test_summarize_empty_iterable_returns_default_summary() -> None:
    aggregator = Aggregator()

    summary = aggregator.summarize([])

    assert summary.count == 0
    assert summary.min_value is None
    assert summary.max_value is None
    assert summary.mean_value is None


def test_summarize_computes_statistics() -> None:
    aggregator = Aggregator()
    readings = [_reading(22.0), _reading(26.0), _reading(24.0)]

    summary = aggregator.summarize(readings)

    assert summary.count == 3
    assert summary.min_value == 22.0
    assert summary.max_value == 26.0
    assert summary.mean_value == 24.0


def test_summarize_accepts_generators() -> None:
    summary = Aggregator().summarize(_reading(value) for value in (21.5, 22.5))

    assert summary.count == 2
    assert summary.mean_value == 22.0
