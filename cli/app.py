from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn, Optional

import typer

from cli.config import CLIConfig, load_config
from cli.render import render_banner, render_tick
from logging_config import configure_logging
from services.config_loader import create_sample_config, load_configuration
from services.errors import SensorError
from services.sensor import TemperatureSensor
from services.simulation import SimulationRunner
from settings import Settings, get_settings


@dataclass
class CLIState:
    config: CLIConfig
    settings: Settings


app = typer.Typer(
    help="Virtual data-center temperature sensor simulator.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1)
    return state


def _fail(exc: BaseException) -> NoReturn:
    typer.secho(f"[ERROR] {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


@app.callback()
def main(
    ctx: typer.Context,
    interval: Optional[float] = typer.Option(
        None,
        "--interval",
        "-i",
        min=0.0,
        help="Seconds between readings (defaults to SIM_TICK_INTERVAL env or 1.0).",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Logging level (defaults to LOG_LEVEL env or INFO).",
    ),
) -> None:
    """Entry point for the CLI."""
    settings = get_settings()
    level = (log_level or settings.log_level).strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        _fail(ValueError(f"Unknown log level: {level}"))
    configure_logging(level)
    ctx.obj = CLIState(config=load_config(interval=interval), settings=settings)


@app.command("run")
def run_command(
    ctx: typer.Context,
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        dir_okay=False,
        help="Sensor configuration YAML (defaults to SENSOR_CONFIG_PATH env or sensor_config.yaml).",
    ),
    ticks: Optional[int] = typer.Option(
        None,
        "--ticks",
        "-n",
        min=1,
        help="Stop after this many readings instead of running until interrupted.",
    ),
    seed: Optional[int] = typer.Option(
        None,
        "--seed",
        help="Seed for the noise generator (defaults to SENSOR_RANDOM_SEED env).",
    ),
) -> None:
    """Run the sensor simulation, printing one line per reading."""
    state = _get_state(ctx)
    path = config_path or Path(state.settings.config_path)

    try:
        if not path.exists():
            typer.echo("Configuration file not found. Creating sample configuration...")
            create_sample_config(path)
        typer.echo(f"Loading configuration from {path}...")
        configuration = load_configuration(path)
        options = state.config.simulation_options()
    except (SensorError, FileNotFoundError, ValueError) as exc:
        _fail(exc)

    rng_seed = seed if seed is not None else state.settings.random_seed
    sensor = TemperatureSensor(rng=random.Random(rng_seed))
    runner = SimulationRunner(sensor, configuration, options=options)

    render_banner(configuration)
    typer.echo("Simulation running... (Press Ctrl+C to stop)")
    typer.echo()
    try:
        count = runner.run(
            max_ticks=ticks,
            on_tick=lambda report: render_tick(sensor, configuration, report),
        )
    except KeyboardInterrupt:
        count = runner.tick_count
    except SensorError as exc:
        _fail(exc)

    typer.secho(f"Simulation stopped after {count} readings.", fg=typer.colors.GREEN)


@app.command("init-config")
def init_config_command(
    path: Optional[Path] = typer.Argument(
        None, dir_okay=False, help="Where to write the sample configuration."
    ),
    force: bool = typer.Option(
        False,
        "--force/--no-force",
        help="Overwrite an existing file.",
    ),
) -> None:
    """Write a sample sensor configuration file."""
    target = path or Path(get_settings().config_path)
    if target.exists() and not force:
        typer.secho(
            f"{target} already exists; pass --force to overwrite it.",
            fg=typer.colors.RED,
            err=True,
        )
        raise typer.Exit(code=1)
    try:
        create_sample_config(target)
    except SensorError as exc:
        _fail(exc)
    typer.secho(f"Sample configuration created: {target}", fg=typer.colors.GREEN)
