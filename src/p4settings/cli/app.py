"""Root CLI application."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table
from typing_extensions import Annotated

from p4settings.config.loader import CONFIG_FILE
from p4settings.session.registry import DEFAULT_FACTORY

app = typer.Typer(
    name="p4settings",
    help="Resolve Perforce connection settings and open a server session.",
    no_args_is_help=True,
)
console = Console()

ConfigFileOption = Annotated[
    Path,
    typer.Option("--config-file", "-c", help="Properties file holding the settings"),
]


@app.callback()
def configure(
    log_level: Annotated[str, typer.Option("--log-level", help="DEBUG, INFO, WARNING, ...")] = "WARNING",
    json_logs: Annotated[bool, typer.Option("--json-logs", help="Emit logs as JSON")] = False,
) -> None:
    """Resolve Perforce connection settings and open a server session."""
    from p4settings.utils.logging import setup_logging

    setup_logging(log_level, json_logs)


@app.command("show")
def show(
    config_file: ConfigFileOption = CONFIG_FILE,
    reveal: Annotated[bool, typer.Option("--reveal", help="Print the password in clear")] = False,
) -> None:
    """Show each resolved setting and the tier it came from."""
    from p4settings.config.loader import resolve_settings

    resolution = resolve_settings(config_file)
    if resolution.warning:
        typer.echo(f"Warning: {resolution.warning}", err=True)

    table = Table(title="Perforce Settings", show_header=True, header_style="bold")
    table.add_column("Setting")
    table.add_column("Value")
    table.add_column("Source")

    for key, value in resolution.settings.as_properties(reveal=reveal).items():
        table.add_row(key, value, resolution.sources[key].value)

    console.print(table)


@app.command("connect")
def connect_server(
    config_file: ConfigFileOption = CONFIG_FILE,
    factory_name: Annotated[
        str, typer.Option("--factory", "-f", help="Session factory to connect with")
    ] = DEFAULT_FACTORY,
) -> None:
    """Connect with the resolved settings and print server info."""
    from p4settings.config.loader import resolve_settings
    from p4settings.session import SessionError, connect, get_factory

    resolution = resolve_settings(config_file)
    if resolution.warning:
        typer.echo(f"Warning: {resolution.warning}", err=True)

    try:
        session = connect(resolution.settings, factory=get_factory(factory_name))
    except SessionError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if session is None:
        typer.echo(f"Error: factory '{factory_name}' returned no session", err=True)
        raise typer.Exit(1)

    try:
        info = session.info()
    except SessionError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    finally:
        session.disconnect()

    typer.echo(f"Connected to {resolution.settings.server_uri}")
    table = Table(title="Server Info", show_header=True, header_style="bold")
    table.add_column("Field")
    table.add_column("Value")
    for key, value in info.items():
        table.add_row(key, value)
    console.print(table)


def main() -> None:
    app()
