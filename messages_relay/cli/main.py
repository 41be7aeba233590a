"""Main CLI entry point for messages-relay."""

import typer
from rich.console import Console
from rich.table import Table

from messages_relay.core.config import ConfigError, ConfigSchema, RelayConfig, validate_all

app = typer.Typer(
    name="messages-relay",
    help="Messages Relay CLI - run and inspect the relay server",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()


def _load_config_or_exit() -> RelayConfig:
    try:
        return RelayConfig.load()
    except ConfigError as e:
        console.print(f"[bold red]Configuration error:[/bold red] {e}")
        raise typer.Exit(code=1)


def build_config_table(config: RelayConfig) -> Table:
    table = Table(title="Messages Relay Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Server URL", f"http://{config.host}:{config.port}")
    table.add_row("Target API URL", config.target_api_url)
    table.add_row("Log Level", config.log_level)
    table.add_row("Default API Key", config.api_key_hint)
    table.add_row("Force Default API Key", "yes" if config.force_default_api_key else "no")
    table.add_row("Default User ID", config.default_user_id or "(not set)")
    table.add_row("Connect Timeout", f"{config.connect_timeout:g}s")
    return table


@app.command()
def version() -> None:
    """Show version information."""
    from messages_relay import __version__

    console.print(f"[bold cyan]messages-relay[/bold cyan] version [green]{__version__}[/green]")


@app.command()
def config() -> None:
    """Show the effective configuration."""
    console.print(build_config_table(_load_config_or_exit()))


@app.command()
def validate() -> None:
    """Check every environment variable and report all problems at once."""
    errors = validate_all()
    if not errors:
        console.print(f"[green]Configuration OK[/green] ({len(ConfigSchema.all_specs())} settings)")
        return

    for error in errors:
        console.print(f"[bold red]✗[/bold red] {error.env_var}={error.value!r}: {error.message}")
    raise typer.Exit(code=1)


@app.command()
def start(
    host: str = typer.Option(None, "--host", help="Override host"),
    port: int = typer.Option(None, "--port", help="Override port"),
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload for development"),
) -> None:
    """Start the relay server."""
    from messages_relay.main import run_server

    relay_config = _load_config_or_exit()

    console.print("[bold green]Starting Messages Relay server...[/bold green]")
    console.print(build_config_table(relay_config))

    run_server(relay_config, host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
