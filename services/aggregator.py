"""Summary statistics over stored sensor readings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from models.records import Reading


@dataclass
class HistorySummary:
    """Computed statistics for a batch of readings."""

    count: int = 0
    min_value: float | None = None
    max_value: float | None = None
    mean_value: float | None = None


class Aggregator:
    """Pure aggregation component that can be unit tested in isolation."""

    def summarize(self, readings: Iterable[Reading]) -> HistorySummary:
        summary = HistorySummary()
        total = 0.0

        for reading in readings:
            summary.count += 1
            value = reading.value
            total += value

            if summary.min_value is None or value < summary.min_value:
                summary.min_value = value
            if summary.max_value is None or value > summary.max_value:
                summary.max_value = value

        if summary.count:
            summary.mean_value = total / summary.count

        return summary
