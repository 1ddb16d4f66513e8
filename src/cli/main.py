"""Main CLI entry point for keyfleet."""

from pathlib import Path

import typer
from rich.console import Console

from src.cli.commands.audit import audit_command
from src.cli.commands.pull import pull_command
from src.cli.commands.push import push_command
from src.cli.output import format_error
from src.cli.utils import CliContext, ConfigManager, configure_logging
from src.keys import SshTransport, load_ssh_settings_from_env

app = typer.Typer(
    name="keyfleet",
    help="Keep SSH authorized_keys files in sync with a declarative config",
    no_args_is_help=True,
    add_completion=False,
)
console = Console()


@app.callback()
def cli(
    ctx: typer.Context,
    config: str = typer.Option(..., "-c", "--config", help="Path to the YAML config file"),
    timeout: float = typer.Option(None, "-t", "--timeout", help="Seconds to wait for each ssh command"),
    quiet: bool = typer.Option(False, "-q", "--quiet", help="Only log warnings and errors"),
) -> None:
    """Reconcile authorized_keys across hosts using keys and @identities."""
    configure_logging(quiet)
    try:
        settings = load_ssh_settings_from_env(timeout)
    except ValueError as e:
        format_error(console, str(e))
        raise typer.Exit(code=2)
    ctx.obj = CliContext(config=ConfigManager(Path(config)), transport=SshTransport(settings))


@app.command("push")
def push(
    ctx: typer.Context,
    strict: bool = typer.Option(False, "--strict", help="Fail on undefined identities"),
) -> None:
    """Push the authorized keys defined in the configuration file."""
    push_command(ctx.obj, strict)


@app.command("pull")
def pull(ctx: typer.Context) -> None:
    """Pull the authorized keys into the configuration file."""
    pull_command(ctx.obj)


@app.command("audit")
def audit(
    ctx: typer.Context,
    strict: bool = typer.Option(False, "--strict", help="Fail on undefined identities"),
    keep_going: bool = typer.Option(False, "-k", "--keep-going", help="Audit every target before failing"),
    json_flag: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Audit the authorized keys stored on remote servers."""
    audit_command(ctx.obj, strict, keep_going, json_flag)


def main() -> None:
    """Entry point."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled[/yellow]")
        raise typer.Exit(130)
