from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


_CONFIG_PATH_ENV = "SENSOR_CONFIG_PATH"
_LOG_LEVEL_ENV = "LOG_LEVEL"
_RANDOM_SEED_ENV = "SENSOR_RANDOM_SEED"


@dataclass(frozen=True)
class Settings:
    config_path: str
    log_level: str
    random_seed: Optional[int]


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_random_seed() -> Optional[int]:
    value = os.getenv(_RANDOM_SEED_ENV)
    if value is None:
        return None
    candidate = value.strip()
    if not candidate:
        return None
    try:
        return int(candidate)
    except ValueError:
        return None


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        config_path=_read_str_env(_CONFIG_PATH_ENV, "sensor_config.yaml"),
        log_level=_read_log_level("INFO"),
        random_seed=_read_random_seed(),
    )
