"""Load and validate the sensor configuration YAML file."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

import yaml
from pydantic import ValidationError

from models.config import SensorConfiguration
from services.errors import ConfigSecurityError, ConfigurationError

logger = logging.getLogger(__name__)

SAMPLE_CONFIGURATION = SensorConfiguration(
    name="DataCenter-Sensor-01",
    location="Server Room A",
    min_value=22.0,
    max_value=24.0,
    min_threshold=21.0,
    max_threshold=25.0,
)

PathLike = Union[str, Path]


def _check_path(path: PathLike) -> Path:
    raw = str(path)
    if not raw.strip():
        raise ConfigurationError("Configuration file path cannot be empty.")
    if ".." in raw or "~" in raw:
        raise ConfigSecurityError("Invalid file path - directory traversal not allowed.")
    return Path(raw)


def load_configuration(path: PathLike) -> SensorConfiguration:
    """Read ``path`` and return a validated configuration."""
    config_path = _check_path(path)
    if not config_path.is_file():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        document = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse YAML configuration: {exc}") from exc

    if not isinstance(document, dict):
        raise ConfigurationError("Configuration file must contain a mapping.")

    try:
        configuration = SensorConfiguration.model_validate(document)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration: {exc}") from exc

    logger.info("Configuration loaded", extra={"sensor_name": configuration.name})
    return configuration


def create_sample_config(path: PathLike) -> SensorConfiguration:
    """Write the sample configuration to ``path`` and return it."""
    config_path = _check_path(path)
    config_path.parent.mkdir(parents=True, exist_ok=True)
    payload = SAMPLE_CONFIGURATION.model_dump(by_alias=True)
    config_path.write_text(yaml.safe_dump(payload, sort_keys=False), encoding="utf-8")
    logger.info("Sample configuration written to %s", config_path)
    return SAMPLE_CONFIGURATION
