"""Write declared keys to every configured host."""

import asyncio

import typer
from rich.console import Console

from src.cli.output import format_error, format_success, format_warning
from src.cli.utils import CliContext
from src.keys import ConfigError, KeyfleetError, TransportError, UnknownIdentityError, push_fleet

console = Console()


async def _push(ctx: CliContext, strict: bool) -> int:
    config = ctx.config.load()
    for hostname, entry in config.targets():
        if not entry.authorized_keys:
            format_warning(
                console, f"{entry.path} (via {entry.user}@{hostname}) declares no keys and will be emptied"
            )
    return await push_fleet(config, ctx.transport, strict=strict)


def push_command(ctx: CliContext, strict: bool) -> None:
    """Push the authorized keys defined in the configuration file."""
    try:
        written = asyncio.run(_push(ctx, strict))
    except ConfigError as e:
        format_error(console, str(e), hint="Check the file passed with --config")
        raise typer.Exit(code=1)
    except UnknownIdentityError as e:
        format_error(console, str(e), hint="Define it under 'identities:' or drop --strict")
        raise typer.Exit(code=1)
    except TransportError as e:
        format_error(console, f"Failed to write authorized keys: {e}")
        raise typer.Exit(code=1)
    except KeyfleetError as e:
        format_error(console, f"Push failed: {e}")
        raise typer.Exit(code=1)

    format_success(console, f"Pushed {written} authorized keys file(s)")
