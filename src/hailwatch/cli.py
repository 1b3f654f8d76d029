"""
Command line interface for the hazard service.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import ConfigError, HazardConfig, build_config, load_config
from .hazard import HazardOrchestrator, danger_payload, demo_verdicts, marker_payload, raw_alerts_payload

console = Console()
app = typer.Typer(help="Aggregate hail and storm hazards for the sensor registry.")
logger = logging.getLogger(__name__)

LOG_LEVELS = ["critical", "error", "warning", "info", "debug"]


def _configure_logging(level_name: str) -> None:
    env_override = os.getenv("HAILWATCH_LOG_LEVEL")
    level_str = (env_override or level_name or "info").upper()
    if level_str not in {lvl.upper() for lvl in LOG_LEVELS}:
        level_str = "INFO"
    logging.basicConfig(
        level=getattr(logging, level_str, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logger.debug("Logging configured at %s", level_str)


def _resolve_config_path(value: Optional[Path]) -> Optional[Path]:
    """Ensure an optional config path exists and return the absolute path."""
    if value is None:
        return None
    resolved = value.expanduser().resolve()
    if not resolved.exists():
        raise typer.BadParameter(f"No config file found at {resolved}")
    if not resolved.is_file():
        raise typer.BadParameter(f"Config path must be a file, got directory: {resolved}")
    return resolved


def _load_config_or_exit(path: Optional[Path]) -> HazardConfig:
    try:
        return load_config(path) if path else build_config()
    except ConfigError as exc:
        console.print(f"[bold red]Configuration error:[/] {exc}")
        raise typer.Exit(code=1) from exc


_CONFIG_OPTION = typer.Option(
    None,
    "--config",
    "-c",
    help="Optional TOML file overriding the default sensor registry and settings.",
    callback=_resolve_config_path,
)


@app.callback(invoke_without_command=True)
def _root_command(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show hailwatch version and exit.",
        is_flag=True,
    ),
    log_level: str = typer.Option(
        "info",
        "--log-level",
        help="Logging level (critical, error, warning, info, debug).",
        show_default=True,
        case_sensitive=False,
    ),
) -> None:
    """
    Default command when no subcommand is selected.
    """
    _configure_logging(log_level)

    if version:
        console.print(f"[bold green]hailwatch[/] {__version__}")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print("[bold yellow]hailwatch[/] is ready. Run [cyan]hailwatch serve[/] to start the API.")


@app.command()
def serve(
    config: Optional[Path] = _CONFIG_OPTION,
    host: str = typer.Option("0.0.0.0", "--host", help="Bind address."),
    port: int = typer.Option(
        3001,
        "--port",
        "-p",
        envvar="PORT",
        help="Listen port (defaults to $PORT or 3001).",
    ),
    static_dir: Optional[Path] = typer.Option(
        None,
        "--static-dir",
        help="Built frontend directory (with index.html) to serve for non-API paths.",
    ),
) -> None:
    """
    Serve the hazard API over HTTP.
    """
    import uvicorn

    from .web import create_app

    hazard_config = _load_config_or_exit(config)
    if static_dir is not None:
        hazard_config = hazard_config.model_copy(update={"static_dir": static_dir})
    logger.info("Serving %d sensors on http://%s:%d", len(hazard_config.sensors), host, port)
    uvicorn.run(create_app(hazard_config), host=host, port=port, log_config=None)


@app.command()
def markers(
    config: Optional[Path] = _CONFIG_OPTION,
    demo: bool = typer.Option(False, "--demo", help="Print the fixed demo marker set."),
    as_json: bool = typer.Option(False, "--json", help="Print the raw JSON body instead of a table."),
) -> None:
    """
    Show the map-marker list (Open-Meteo first, OpenWeatherMap fallback).
    """
    hazard_config = _load_config_or_exit(config)
    payload = marker_payload(HazardOrchestrator(hazard_config), demo=demo)
    if as_json:
        console.print_json(json.dumps(payload, ensure_ascii=False))
        return

    table = Table(title="Hazard Markers")
    table.add_column("Sensor")
    table.add_column("Lat", justify="right")
    table.add_column("Lon", justify="right")
    table.add_column("Type")
    for marker in payload:
        table.add_row(marker["name"], f"{marker['lat']:.4f}", f"{marker['lon']:.4f}", marker["type"])
    console.print(table)
    if not payload:
        console.print("[green]No hazard detected.[/]")


@app.command()
def danger(
    config: Optional[Path] = _CONFIG_OPTION,
    demo: bool = typer.Option(False, "--demo", help="Print the fixed demo danger set."),
    as_json: bool = typer.Option(False, "--json", help="Print the raw JSON body instead of a table."),
) -> None:
    """
    Show dangerous precipitation from Open-Meteo weather codes.
    """
    hazard_config = _load_config_or_exit(config)
    if as_json:
        payload = danger_payload(HazardOrchestrator(hazard_config), demo=demo)
        console.print_json(json.dumps(payload, ensure_ascii=False))
        return

    verdicts = demo_verdicts() if demo else HazardOrchestrator(hazard_config).danger_list()
    table = Table(title="Dangerous Precipitation")
    table.add_column("Sensor")
    table.add_column("Severity")
    table.add_column("Description", overflow="fold")
    table.add_column("Next", overflow="fold")
    table.add_column("Source")
    for verdict in verdicts:
        style = "bold red" if verdict.severity == "high" else "yellow"
        table.add_row(
            verdict.sensor.name,
            f"[{style}]{verdict.severity}[/]",
            verdict.description,
            ", ".join(verdict.display_occurrences()),
            verdict.source,
        )
    console.print(table)
    if not verdicts:
        console.print("[green]No hazard detected.[/]")


@app.command()
def alerts(
    config: Optional[Path] = _CONFIG_OPTION,
    lat: float = typer.Option(-32.8895, "--lat", help="Latitude of the point."),
    lon: float = typer.Option(-68.8458, "--lon", help="Longitude of the point."),
) -> None:
    """
    Print the upstream OpenWeatherMap alerts for one point as JSON.
    """
    hazard_config = _load_config_or_exit(config)
    payload = raw_alerts_payload(HazardOrchestrator(hazard_config), lat, lon)
    console.print_json(json.dumps(payload, ensure_ascii=False))


def main() -> None:  # pragma: no cover
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
