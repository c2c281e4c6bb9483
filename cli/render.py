from __future__ import annotations

from typing import Any, Iterable

import typer

from models.config import SensorConfiguration
from services.aggregator import HistorySummary
from services.simulation import FAULT_CLEARED, FAULT_INJECTED, TickReport
from services.sensor import TemperatureSensor


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def _celsius(value: float | None) -> str:
    return "n/a" if value is None else f"{value:.2f}°C"


def render_banner(config: SensorConfiguration) -> None:
    echo_heading("=== Temperature Sensor Simulation ===")
    echo_key_values(
        [
            ("Sensor", config.name),
            ("Location", config.location),
            ("Normal Range", f"{config.min_value}°C - {config.max_value}°C"),
            ("Alert Thresholds", f"{config.min_threshold}°C - {config.max_threshold}°C"),
        ]
    )
    typer.echo()


def render_summary(tick: int, summary: HistorySummary) -> None:
    typer.echo()
    echo_heading(f"--- Statistics (Total readings: {tick}) ---")
    echo_key_values(
        [
            ("History stored", f"{summary.count} readings"),
            ("Min", _celsius(summary.min_value)),
            ("Max", _celsius(summary.max_value)),
            ("Mean", _celsius(summary.mean_value)),
        ]
    )
    typer.echo()


def render_tick(
    sensor: TemperatureSensor, config: SensorConfiguration, report: TickReport
) -> None:
    reading = report.reading
    assessment = report.assessment

    if report.fault_event == FAULT_INJECTED:
        typer.secho("[FAULT] Cooling system failure simulated", fg=typer.colors.RED, bold=True)
    elif report.fault_event == FAULT_CLEARED:
        typer.secho("[FAULT] Cooling system restored", fg=typer.colors.GREEN)

    if not assessment.is_valid:
        typer.secho(
            f"[VALIDATION] FAILED - Reading {reading.value:.2f}°C out of range "
            f"[{config.min_value}, {config.max_value}]",
            fg=typer.colors.YELLOW,
        )
    typer.echo(sensor.format_reading(reading))

    if assessment.is_anomaly:
        typer.secho(
            f"[ANOMALY] Detected! Current: {reading.value:.2f}°C, "
            f"Average: {assessment.baseline:.2f}°C, Deviation: {assessment.deviation:.2f}°C",
            fg=typer.colors.MAGENTA,
        )
    if assessment.threshold_exceeded:
        typer.secho(
            f"[ALERT] Threshold exceeded! Current: {reading.value:.2f}°C, "
            f"Thresholds: [{config.min_threshold}, {config.max_threshold}]",
            fg=typer.colors.RED,
        )
    if report.smoothed is not None:
        typer.echo(f"[SMOOTHED] Moving average (last 5): {report.smoothed:.2f}°C")
    if report.summary is not None:
        render_summary(report.tick, report.summary)
