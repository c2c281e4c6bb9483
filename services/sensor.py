"""Stateful engine behind the virtual data-center temperature sensor."""

from __future__ import annotations

import logging
import math
import random
from collections import deque
from dataclasses import dataclass
from typing import Deque, Optional, Protocol

from models.records import Reading
from services.errors import InvalidArgumentError, InvalidStateError, NullArgumentError

logger = logging.getLogger(__name__)

ABSOLUTE_ZERO = -273.15
NOISE_LEVEL = 0.3
SPIKE_PROBABILITY = 0.05
SPIKE_MAGNITUDE = 3.0
FAULT_DRIFT_MAX = 2.0
FAULT_CEILING_MARGIN = 10.0
ANOMALY_THRESHOLD = 1.5
ANOMALY_MIN_HISTORY = 5
ANOMALY_WINDOW_SIZE = 10
SMOOTHING_WINDOW_SIZE = 5
HISTORY_CAPACITY = 100


class RandomSource(Protocol):
    """Subset of :class:`random.Random` the engine draws from."""

    def random(self) -> float: ...

    def randrange(self, stop: int) -> int: ...


@dataclass(frozen=True)
class ReadingAssessment:
    """What the engine concluded about a single reading."""

    is_valid: bool
    is_anomaly: bool
    threshold_exceeded: bool
    baseline: Optional[float] = None
    deviation: Optional[float] = None


def _require_reading(reading: Optional[Reading]) -> Reading:
    if reading is None:
        raise NullArgumentError("reading must not be None")
    return reading


def _mean(values: list[float]) -> float:
    return sum(values) / len(values)


class TemperatureSensor:
    """Simulates one temperature sensor: readings, history and detection.

    The engine is single-owner and synchronous. It never prints; lifecycle
    notices go to the module logger and everything else is returned to the
    caller.
    """

    def __init__(self, rng: Optional[RandomSource] = None) -> None:
        self._rng: RandomSource = rng if rng is not None else random.Random()
        self.name: Optional[str] = None
        self.location: Optional[str] = None
        self.min_value: Optional[float] = None
        self.max_value: Optional[float] = None
        self.current_temperature: Optional[float] = None
        self._is_running = False
        self._fault_injected = False
        self._history: Deque[Reading] = deque(maxlen=HISTORY_CAPACITY)

    @property
    def is_configured(self) -> bool:
        return self.min_value is not None and self.max_value is not None

    @property
    def is_running(self) -> bool:
        return self._is_running

    @property
    def fault_injected(self) -> bool:
        return self._fault_injected

    @property
    def history(self) -> tuple[Reading, ...]:
        """Snapshot of stored readings, oldest first."""
        return tuple(self._history)

    @property
    def history_count(self) -> int:
        return len(self._history)

    def initialize(self, name: str, location: str, min_value: float, max_value: float) -> None:
        """Configure identity and operating range.

        Calling this again re-validates and replaces the configuration without
        touching the stored history.
        """
        if not name or not name.strip():
            raise InvalidArgumentError("Sensor name cannot be empty")
        if not location or not location.strip():
            raise InvalidArgumentError("Location cannot be empty")
        if not (math.isfinite(min_value) and math.isfinite(max_value)):
            raise InvalidArgumentError("Temperature range bounds must be finite numbers")
        if min_value >= max_value:
            raise InvalidArgumentError(
                f"min_value ({min_value}) must be less than max_value ({max_value})"
            )
        if min_value < ABSOLUTE_ZERO:
            raise InvalidArgumentError("Temperature cannot be below absolute zero")

        self.name = name
        self.location = location
        self.min_value = float(min_value)
        self.max_value = float(max_value)
        self.current_temperature = (self.min_value + self.max_value) / 2
        logger.info(
            "Sensor initialized",
            extra={
                "sensor_name": name,
                "location": location,
                "min_value": self.min_value,
                "max_value": self.max_value,
            },
        )

    def start(self) -> None:
        if not self.is_configured:
            raise InvalidStateError("Sensor must be initialized before it is started")
        if self._is_running:
            logger.warning("Sensor is already running", extra={"sensor_name": self.name})
            return
        self._is_running = True
        logger.info("Sensor started", extra={"sensor_name": self.name})

    def shutdown(self) -> None:
        """Stop the sensor and drop its history; configuration is kept."""
        self._is_running = False
        self._history.clear()
        logger.info("Sensor shut down", extra={"sensor_name": self.name})

    def inject_fault(self) -> None:
        self._fault_injected = True
        logger.warning("Cooling fault injected", extra={"sensor_name": self.name})

    def clear_fault(self) -> None:
        self._fault_injected = False
        logger.info("Cooling fault cleared", extra={"sensor_name": self.name})

    def simulate_reading(self) -> float:
        """Produce the next temperature value, rounded to two decimals.

        In fault mode the temperature climbs from the previous value by up to
        ``FAULT_DRIFT_MAX`` per tick and levels off at ``max_value + 10``.
        """
        if not self._is_running:
            raise InvalidStateError("Sensor must be started before simulating data")
        assert self.min_value is not None and self.max_value is not None
        assert self.current_temperature is not None

        if self._fault_injected:
            temperature = self.current_temperature + self._rng.random() * FAULT_DRIFT_MAX
            ceiling = self.max_value + FAULT_CEILING_MARGIN
            if temperature > ceiling:
                temperature = ceiling
        else:
            target = (self.min_value + self.max_value) / 2
            noise = (self._rng.random() * 2 - 1) * NOISE_LEVEL
            temperature = target + noise
            if self._rng.random() < SPIKE_PROBABILITY:
                magnitude = self._rng.random() * SPIKE_MAGNITUDE
                sign = 1 if self._rng.randrange(2) == 0 else -1
                temperature += magnitude * sign

        self.current_temperature = temperature
        return round(temperature, 2)

    def validate_reading(self, reading: Optional[Reading]) -> bool:
        reading = _require_reading(reading)
        self._require_configured()
        return self.min_value <= reading.value <= self.max_value

    def record_reading(self, reading: Optional[Reading]) -> None:
        # the deque evicts the oldest entry once HISTORY_CAPACITY is exceeded
        self._history.append(_require_reading(reading))

    def smooth(self) -> float:
        """Moving average over the most recent readings."""
        if not self._history:
            return 0.0
        window = self._recent_values(SMOOTHING_WINDOW_SIZE)
        return round(_mean(window), 2)

    def detect_anomaly(self, reading: Optional[Reading]) -> bool:
        """Flag readings that stray too far from the recent average.

        The candidate does not have to be part of the history; it is compared
        against whatever the history holds at call time.
        """
        reading = _require_reading(reading)
        baseline = self._anomaly_baseline()
        if baseline is None:
            return False
        return abs(reading.value - baseline) > ANOMALY_THRESHOLD

    def check_threshold(
        self, reading: Optional[Reading], min_threshold: float, max_threshold: float
    ) -> bool:
        reading = _require_reading(reading)
        return reading.value < min_threshold or reading.value > max_threshold

    def assess(
        self, reading: Optional[Reading], min_threshold: float, max_threshold: float
    ) -> ReadingAssessment:
        """Run validation, anomaly and threshold checks in one pass."""
        reading = _require_reading(reading)
        baseline = self._anomaly_baseline()
        deviation = abs(reading.value - baseline) if baseline is not None else None
        return ReadingAssessment(
            is_valid=self.validate_reading(reading),
            is_anomaly=self.detect_anomaly(reading),
            threshold_exceeded=self.check_threshold(reading, min_threshold, max_threshold),
            baseline=baseline,
            deviation=deviation,
        )

    def format_reading(self, reading: Optional[Reading]) -> str:
        reading = _require_reading(reading)
        status = "VALID" if self.validate_reading(reading) else "INVALID"
        return (
            f"[{reading.timestamp:%Y-%m-%d %H:%M:%S}] {reading.sensor_name} | "
            f"{reading.value:.2f}°C | Status: {status}"
        )

    def _anomaly_baseline(self) -> Optional[float]:
        if len(self._history) < ANOMALY_MIN_HISTORY:
            return None
        return _mean(self._recent_values(ANOMALY_WINDOW_SIZE))

    def _recent_values(self, size: int) -> list[float]:
        count = min(size, len(self._history))
        return [reading.value for reading in list(self._history)[-count:]]

    def _require_configured(self) -> None:
        if not self.is_configured:
            raise InvalidStateError("Sensor has not been initialized")
