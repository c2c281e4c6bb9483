from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from services.simulation import SimulationOptions

DEFAULT_INTERVAL = 1.0
DEFAULT_FAULT_EVERY = 50
DEFAULT_FAULT_DURATION = 10
DEFAULT_SMOOTH_EVERY = 10
DEFAULT_STATS_EVERY = 20

_INTERVAL_ENV = "SIM_TICK_INTERVAL"
_FAULT_EVERY_ENV = "SIM_FAULT_EVERY"
_FAULT_DURATION_ENV = "SIM_FAULT_DURATION"
_SMOOTH_EVERY_ENV = "SIM_SMOOTH_EVERY"
_STATS_EVERY_ENV = "SIM_STATS_EVERY"


@dataclass(frozen=True)
class CLIConfig:
    interval: float = DEFAULT_INTERVAL
    fault_every: int = DEFAULT_FAULT_EVERY
    fault_duration: int = DEFAULT_FAULT_DURATION
    smooth_every: int = DEFAULT_SMOOTH_EVERY
    stats_every: int = DEFAULT_STATS_EVERY

    def simulation_options(self) -> SimulationOptions:
        return SimulationOptions(
            interval=self.interval,
            fault_every=self.fault_every,
            fault_duration=self.fault_duration,
            smooth_every=self.smooth_every,
            stats_every=self.stats_every,
        )


def _read_float(value: Optional[str], default: float) -> float:
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = float(candidate)
    except ValueError:
        return default
    return parsed if parsed >= 0 else default


def _read_int(value: Optional[str], default: int) -> int:
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = int(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def load_config(interval: Optional[float] = None) -> CLIConfig:
    if interval is None:
        interval = _read_float(os.getenv(_INTERVAL_ENV), DEFAULT_INTERVAL)
    return CLIConfig(
        interval=interval,
        fault_every=_read_int(os.getenv(_FAULT_EVERY_ENV), DEFAULT_FAULT_EVERY),
        fault_duration=_read_int(os.getenv(_FAULT_DURATION_ENV), DEFAULT_FAULT_DURATION),
        smooth_every=_read_int(os.getenv(_SMOOTH_EVERY_ENV), DEFAULT_SMOOTH_EVERY),
        stats_every=_read_int(os.getenv(_STATS_EVERY_ENV), DEFAULT_STATS_EVERY),
    )
