"""
widgetconf command line interface.

    widgetconf check widgets.wconf
    widgetconf open bar --id bar-left --arg label=hi --screen 1 --duration 5s
"""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from widgetconf._version import get_version
from widgetconf.core.errors import WidgetConfError
from widgetconf.core.ir import Config
from widgetconf.core.registry import ConfigRegistry
from widgetconf.core.settings import Settings, load_settings
from widgetconf.core.window_arguments import WindowArguments

app = typer.Typer(
    help="Parse widget configurations and bind window arguments.",
    no_args_is_help=True,
)
console = Console()


def _setup(config: Path | None) -> tuple[Settings, Path]:
    """Load settings, configure logging and pick the configuration file."""
    settings = load_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    return settings, config or settings.config_file


def _load(registry: ConfigRegistry, path: Path) -> Config:
    try:
        return registry.reload_file(path)
    except OSError as e:
        typer.echo(f"Error: Cannot read {path}: {e.strerror or e}", err=True)
        raise typer.Exit(code=1)
    except WidgetConfError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


def _parse_arg(raw: str) -> tuple[str, str]:
    name, sep, value = raw.partition("=")
    if not sep or not name:
        typer.echo(f"Error: Invalid --arg '{raw}', expected key=value", err=True)
        raise typer.Exit(code=1)
    return name, value


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"widgetconf {get_version()}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False, "--version", callback=version_callback, is_eager=True, help="Show version"
    ),
) -> None:
    """widgetconf - declarative widget configuration tooling."""


@app.command("check")
def check(
    config: Path | None = typer.Argument(None, help="Configuration file to check"),
) -> None:
    """Parse a configuration file and list its definitions."""
    _, path = _setup(config)
    loaded = _load(ConfigRegistry(), path)

    windows = Table(title="Windows")
    windows.add_column("Name")
    windows.add_column("Parameters")
    windows.add_column("Monitor")
    windows.add_column("Stacking")
    for window in loaded.window_definitions.values():
        windows.add_row(
            window.name,
            " ".join(str(arg) for arg in window.expected_args) or "-",
            str(window.monitor) if window.monitor is not None else "-",
            window.stacking.value,
        )

    variables = Table(title="Variables")
    variables.add_column("Name")
    variables.add_column("Kind")
    variables.add_column("Initial value")
    for var in loaded.var_definitions.values():
        kind = "defvar (per window)" if var.per_window else "defvar"
        variables.add_row(var.name, kind, var.initial_value.text)
    for script_var in loaded.script_vars.values():
        initial = script_var.initial_value.text if script_var.initial_value else "-"
        variables.add_row(script_var.name, script_var.ELEMENT_NAME, initial)

    console.print(windows)
    console.print(variables)
    typer.echo(f"{path}: OK")


@app.command("open")
def open_window(
    window: str = typer.Argument(..., help="Name of the window definition"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Configuration file"),
    instance_id: str | None = typer.Option(
        None, "--id", help="Instance id (defaults to the window name)"
    ),
    arg: list[str] = typer.Option([], "--arg", "-a", help="Window argument as key=value"),
    pos: str | None = typer.Option(None, "--pos", help="Position override, e.g. 10x20"),
    size: str | None = typer.Option(None, "--size", help="Size override, e.g. 100%x30px"),
    screen: str | None = typer.Option(None, "--screen", help="Monitor index or name"),
    anchor: str | None = typer.Option(None, "--anchor", help="Anchor, e.g. 'top center'"),
    duration: str | None = typer.Option(None, "--duration", help="Close after, e.g. 5s"),
) -> None:
    """Resolve the arguments for opening a window and print the result as JSON."""
    _, path = _setup(config)
    registry = ConfigRegistry()
    _load(registry, path)

    args = dict(_parse_arg(raw) for raw in arg)
    overrides = {"pos": pos, "size": size, "screen": screen, "anchor": anchor, "duration": duration}
    args.update({name: value for name, value in overrides.items() if value is not None})

    try:
        window_args = WindowArguments.new_from_args(instance_id or window, window, args)
        resolved = registry.resolve(window_args)
    except WidgetConfError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(resolved.model_dump_json(indent=2))


def main() -> None:
    app()
