"""Driver loop that ticks the sensor engine on a fixed schedule."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from threading import Event
from typing import Callable, Optional

from models.config import SensorConfiguration
from models.records import Reading
from services.aggregator import Aggregator, HistorySummary
from services.sensor import ANOMALY_MIN_HISTORY, ReadingAssessment, TemperatureSensor

logger = logging.getLogger(__name__)

FAULT_INJECTED = "injected"
FAULT_CLEARED = "cleared"


@dataclass(frozen=True)
class SimulationOptions:
    interval: float = 1.0
    fault_every: int = 50
    fault_duration: int = 10
    smooth_every: int = 10
    stats_every: int = 20

    def __post_init__(self) -> None:
        if self.interval < 0:
            raise ValueError("interval must not be negative.")
        for name in ("fault_every", "fault_duration", "smooth_every", "stats_every"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive.")
        # every fault episode yields at least one faulted reading
        if self.fault_duration < 2:
            raise ValueError("fault_duration must be at least 2.")


@dataclass(frozen=True)
class TickReport:
    """Everything that happened during one tick, ready for rendering."""

    tick: int
    reading: Reading
    assessment: ReadingAssessment
    fault_active: bool
    history_count: int
    fault_event: Optional[str] = None
    smoothed: Optional[float] = None
    summary: Optional[HistorySummary] = None


class SimulationRunner:
    """Sequences engine calls once per tick and owns the fault schedule."""

    def __init__(
        self,
        sensor: TemperatureSensor,
        configuration: SensorConfiguration,
        options: Optional[SimulationOptions] = None,
        clock: Optional[Callable[[], datetime]] = None,
        aggregator: Optional[Aggregator] = None,
    ) -> None:
        self.sensor = sensor
        self.configuration = configuration
        self.options = options or SimulationOptions()
        self._clock = clock or datetime.now
        self._aggregator = aggregator or Aggregator()
        self.tick_count = 0
        self._fault_active = False
        self._fault_cycle = 0

    @property
    def fault_active(self) -> bool:
        return self._fault_active

    def prepare(self) -> None:
        config = self.configuration
        self.sensor.initialize(config.name, config.location, config.min_value, config.max_value)
        self.sensor.start()

    def tick(self) -> TickReport:
        self.tick_count += 1
        tick = self.tick_count
        options = self.options
        fault_event: Optional[str] = None

        if tick % options.fault_every == 0 and not self._fault_active:
            self.sensor.inject_fault()
            self._fault_active = True
            self._fault_cycle = 0
            fault_event = FAULT_INJECTED

        if self._fault_active:
            self._fault_cycle += 1
            if self._fault_cycle >= options.fault_duration:
                self.sensor.clear_fault()
                self._fault_active = False
                fault_event = FAULT_CLEARED

        value = self.sensor.simulate_reading()
        reading = Reading(
            sensor_name=self.configuration.name,
            value=value,
            timestamp=self._clock(),
            sequence_id=tick,
        )
        self.sensor.record_reading(reading)
        assessment = self.sensor.assess(
            reading, self.configuration.min_threshold, self.configuration.max_threshold
        )
        if assessment.is_anomaly:
            logger.debug(
                "Anomaly detected",
                extra={
                    "sequence_id": tick,
                    "value": value,
                    "baseline": round(assessment.baseline, 2),
                    "deviation": round(assessment.deviation, 2),
                },
            )

        history_count = self.sensor.history_count
        smoothed = None
        if tick % options.smooth_every == 0 and history_count >= ANOMALY_MIN_HISTORY:
            smoothed = self.sensor.smooth()

        summary = None
        if tick % options.stats_every == 0:
            summary = self._aggregator.summarize(self.sensor.history)

        return TickReport(
            tick=tick,
            reading=reading,
            assessment=assessment,
            fault_active=self._fault_active,
            history_count=history_count,
            fault_event=fault_event,
            smoothed=smoothed,
            summary=summary,
        )

    def run(
        self,
        max_ticks: Optional[int] = None,
        stop_event: Optional[Event] = None,
        on_tick: Optional[Callable[[TickReport], None]] = None,
    ) -> int:
        """Tick until ``max_ticks`` is reached or ``stop_event`` is set.

        The engine is always shut down on exit. Returns the number of ticks
        run by this call.
        """
        stop = stop_event or Event()
        if not self.sensor.is_running:
            self.prepare()

        ran = 0
        try:
            while not stop.is_set():
                report = self.tick()
                ran += 1
                if on_tick is not None:
                    on_tick(report)
                if max_ticks is not None and ran >= max_ticks:
                    break
                if self.options.interval:
                    stop.wait(self.options.interval)
        finally:
            self.sensor.shutdown()
            logger.info("Simulation stopped after %d ticks", ran)
        return ran
