"""Compare remote authorized keys with the declared ones."""

import asyncio

import typer
from rich.console import Console

from src.cli.output import format_error, format_key_line, format_success, format_table, json_output
from src.cli.utils import CliContext
from src.keys import AuditMismatch, AuditResult, ConfigError, KeyfleetError, ParseError, TransportError, UnknownIdentityError, audit_fleet

console = Console()
err_console = Console(stderr=True)


def _report(result: AuditResult, json_flag: bool) -> None:
    """Print every unknown and missing key of a target as soon as it is audited."""
    if result.ok:
        if not json_flag:
            console.print(f"{result.path} (via {result.connection}): OK", highlight=False, markup=False)
        return
    for key in result.diff.unknown.sorted():
        format_key_line(err_console, "found unknown key", key)
    for key in result.diff.missing.sorted():
        format_key_line(err_console, "found missing key", key)


async def _audit(
    ctx: CliContext, strict: bool, keep_going: bool, json_flag: bool, results: list[AuditResult],
) -> None:
    config = ctx.config.load()

    def on_result(result: AuditResult) -> None:
        results.append(result)
        _report(result, json_flag)

    await audit_fleet(config, ctx.transport, strict=strict, keep_going=keep_going, on_result=on_result)


def audit_command(ctx: CliContext, strict: bool, keep_going: bool, json_flag: bool) -> None:
    """Audit the authorized keys stored on remote servers."""
    results: list[AuditResult] = []
    try:
        asyncio.run(_audit(ctx, strict, keep_going, json_flag, results))
    except AuditMismatch as e:
        if json_flag:
            json_output(console, {"status": "mismatch", "targets": [r.to_dict() for r in results]})
        elif len(e.results) > 1:
            rows = [
                (r.path, str(r.connection), str(len(r.diff.unknown)), str(len(r.diff.missing)))
                for r in e.results
            ]
            format_table(err_console, "Audit failures", ["Path", "Via", "Unknown", "Missing"], rows)
        format_error(err_console, str(e))
        raise typer.Exit(code=1)
    except ConfigError as e:
        format_error(err_console, str(e), hint="Check the file passed with --config")
        raise typer.Exit(code=1)
    except UnknownIdentityError as e:
        format_error(err_console, str(e), hint="Define it under 'identities:' or drop --strict")
        raise typer.Exit(code=1)
    except TransportError as e:
        format_error(err_console, f"Failed to read authorized keys: {e}")
        raise typer.Exit(code=1)
    except ParseError as e:
        format_error(err_console, f"Remote authorized keys file is malformed: {e}")
        raise typer.Exit(code=1)
    except KeyfleetError as e:
        format_error(err_console, f"Audit failed: {e}")
        raise typer.Exit(code=1)

    if json_flag:
        json_output(console, {"status": "ok", "targets": [r.to_dict() for r in results]})
        return
    format_success(console, f"Audited {len(results)} authorized keys file(s), no drift found")
