"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True, slots=True)
class Reading:
    """A single temperature reading produced by one simulation tick."""

    sensor_name: str
    value: float
    timestamp: datetime
    sequence_id: Optional[int] = None
