"""
StoryClients: CLI for inspecting the lazily constructed service clients.
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from .clients import CLIENT_SPECS, get_provider, list_clients
from .config import Config, load_config
from .console import console
from .shared.errors import ClientConstructionError, StoryClientsError

app = typer.Typer(
    help="StoryClients: lazily constructed API clients for story generation.\n\n"
    "Credentials are read from environment variables; see 'storyclients status'.\n"
    "Environment: Set STORYCLIENTS_CONFIG to use a custom config file location.",
    epilog="Examples:\n\n"
    "  # Show which clients have credentials\n"
    "  storyclients status\n\n"
    "  # Construct the Gemini client once and report the result\n"
    "  storyclients check gemini\n\n"
    "  # Initialize configuration file\n"
    "  storyclients config init",
)
config_app = typer.Typer(help="Configuration management commands")
app.add_typer(config_app, name="config")


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
) -> None:
    """Configure logging before running a command."""
    level = "INFO"
    try:
        level = load_config().log_level
    except StoryClientsError as e:
        console.print(f"[yellow]Warning:[/yellow] {escape(e.describe())}")
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, level),
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command(help="List supported clients and whether a credential is configured.")
def status() -> None:
    table = Table(title="Story clients")
    table.add_column("Client", style="bold")
    table.add_column("Configured")
    table.add_column("Source")
    table.add_column("Environment variables (first wins)", style="dim")

    for client_status in list_clients():
        configured = "[green]yes[/green]" if client_status.configured else "[red]no[/red]"
        table.add_row(
            client_status.name,
            configured,
            client_status.source or "-",
            ", ".join(client_status.env_vars),
        )
    console.print(table)


@app.command(help="Construct a client once and report whether it is usable.")
def check(
    name: Annotated[str, typer.Argument(help=f"Client name: {', '.join(CLIENT_SPECS)}")],
) -> None:
    try:
        provider = get_provider(name)
    except StoryClientsError as e:
        console.print(f"[red]Error:[/red] {escape(e.message)}")
        if e.recovery_hint:
            console.print(f"[dim]{e.recovery_hint}[/dim]")
        raise typer.Exit(2) from e

    async def _acquire():
        return await provider.acquire()

    try:
        handle = asyncio.run(_acquire())
    except ClientConstructionError as e:
        console.print(f"[bold red]❌ {escape(e.message)}[/bold red]")
        console.print(f"[dim]{e.recovery_hint}[/dim]")
        raise typer.Exit(2) from e

    if handle is None:
        console.print(f"[yellow]⚠️  {provider.name} unavailable:[/yellow] set one of {', '.join(provider.env_vars)}")
        raise typer.Exit(1)

    console.print(
        f"[bold green]✅ {provider.name} ready[/bold green] "
        f"(credential from {provider.credential_source}, {type(handle).__name__})"
    )


@config_app.command(name="init", help="Create a default configuration file in the XDG config directory.")
def init_config(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config file"),
    config_path: str | None = typer.Option(None, "--path", "-p", help="Custom config file path"),
) -> None:
    """Create a default configuration file."""
    config = Config()
    target_path = config.get_default_config_path() if config_path is None else Path(config_path)

    if target_path.exists() and not force:
        console.print(f"[yellow]Configuration file already exists:[/yellow] {target_path}")
        console.print("[dim]Use --force to overwrite the existing configuration file[/dim]")
        raise typer.Exit(0)

    try:
        created_path = config.create_default_config(target_path)
    except OSError as e:
        console.print(f"[red]Error:[/red] Could not write {target_path}: {e}")
        raise typer.Exit(1) from e
    console.print(f"[bold green]✅ Configuration file created:[/bold green] {created_path}")


@config_app.command(name="path", help="Show configuration file search paths.")
def config_path() -> None:
    config = Config()
    loaded = config.find_config_file()
    console.print("[bold]Configuration file locations (in priority order):[/bold]")
    for i, search_path in enumerate(config.get_config_paths(), 1):
        if search_path == loaded:
            console.print(f"  {i}. {search_path} [bold green](loaded)[/bold green]")
        else:
            console.print(f"  {i}. {search_path}")
    if loaded is None:
        console.print("[dim]No configuration file found, using defaults[/dim]")
