from __future__ import annotations

import logging

from cli.config import CLIConfig, load_config
from logging_config import ContextualFormatter
from settings import get_settings


def test_environment_overrides_apply(monkeypatch) -> None:
    monkeypatch.setenv("SENSOR_CONFIG_PATH", "  configs/rack7.yaml ")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("SENSOR_RANDOM_SEED", "42")
    get_settings.cache_clear()

    try:
        settings = get_settings()
        assert settings.config_path == "configs/rack7.yaml"
        assert settings.log_level == "DEBUG"
        assert settings.random_seed == 42
    finally:
        get_settings.cache_clear()


def test_blank_or_malformed_environment_falls_back(monkeypatch) -> None:
    monkeypatch.setenv("SENSOR_CONFIG_PATH", "   ")
    monkeypatch.setenv("LOG_LEVEL", "")
    monkeypatch.setenv("SENSOR_RANDOM_SEED", "not-a-number")
    get_settings.cache_clear()

    try:
        settings = get_settings()
        assert settings.config_path == "sensor_config.yaml"
        assert settings.log_level == "INFO"
        assert settings.random_seed is None
    finally:
        get_settings.cache_clear()


def test_cli_config_reads_cadence(monkeypatch) -> None:
    monkeypatch.setenv("SIM_TICK_INTERVAL", "0.25")
    monkeypatch.setenv("SIM_FAULT_EVERY", "7")
    monkeypatch.setenv("SIM_FAULT_DURATION", "-3")
    monkeypatch.setenv("SIM_SMOOTH_EVERY", "abc")
    monkeypatch.delenv("SIM_STATS_EVERY", raising=False)

    config = load_config()

    assert config == CLIConfig(interval=0.25, fault_every=7)
    options = config.simulation_options()
    assert options.fault_duration == 10
    assert options.smooth_every == 10
    assert options.stats_every == 20


def test_cli_config_explicit_interval_wins(monkeypatch) -> None:
    monkeypatch.setenv("SIM_TICK_INTERVAL", "5")

    assert load_config(interval=0.0).interval == 0.0


def test_contextual_formatter_appends_extra_fields() -> None:
    formatter = ContextualFormatter(fmt="%(levelname)s %(message)s")
    record = logging.LogRecord("services.sensor", logging.WARNING, __file__, 1, "Anomaly detected", None, None)
    record.sequence_id = 12
    record.value = 26.456
    record.deviation = None

    assert formatter.format(record) == "WARNING Anomaly detected | sequence_id=12 value=26.46°C"
