"""Read remote keys back into the configuration file."""

import asyncio

import typer
from rich.console import Console

from src.cli.output import format_error, format_success
from src.cli.utils import CliContext
from src.keys import ConfigError, KeyfleetError, ParseError, TransportError, pull_fleet

console = Console()


async def _pull(ctx: CliContext) -> int:
    config = ctx.config.load()
    pulled = await pull_fleet(config, ctx.transport)
    ctx.config.save(config)
    return pulled


def pull_command(ctx: CliContext) -> None:
    """Pull the authorized keys into the configuration file."""
    try:
        pulled = asyncio.run(_pull(ctx))
    except ConfigError as e:
        format_error(console, str(e), hint="Check the file passed with --config")
        raise typer.Exit(code=1)
    except TransportError as e:
        format_error(console, f"Failed to read authorized keys: {e}")
        raise typer.Exit(code=1)
    except ParseError as e:
        format_error(console, f"Remote authorized keys file is malformed: {e}")
        raise typer.Exit(code=1)
    except KeyfleetError as e:
        format_error(console, f"Pull failed: {e}")
        raise typer.Exit(code=1)

    format_success(console, f"Pulled {pulled} authorized keys file(s) into {ctx.config.config_path}")
