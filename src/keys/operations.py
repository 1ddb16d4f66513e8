"""Fleet operations: push, pull, audit.

Targets are processed one at a time in config file order and the first
error aborts the run.
"""

import logging
from dataclasses import dataclass
from typing import Callable

from .authorized_keys import AuthorizedKeys
from .exceptions import AuditMismatch
from .models import FleetConfig, HostEntry
from .reconcile import KeyDiff, compact, diff, expand
from .transport import Connection, RemoteFileTransport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuditResult:
    connection: Connection
    path: str
    diff: KeyDiff

    @property
    def ok(self) -> bool:
        return self.diff.ok

    def to_dict(self) -> dict:
        return {
            "host": self.connection.hostname,
            "user": self.connection.user,
            "path": self.path,
            "ok": self.ok,
            "unknown": self.diff.unknown,
            "missing": self.diff.missing,
        }


async def read_authorized_keys(transport: RemoteFileTransport, connection: Connection, path: str) -> AuthorizedKeys:
    logger.info("reading authorized keys from %s (via %s)...", path, connection)
    text = await transport.read_file(connection, path)
    keys = AuthorizedKeys.from_text(text)
    logger.info("successfully read %d authorized keys from %s (via %s)", len(keys), path, connection)
    return keys


async def write_authorized_keys(
    transport: RemoteFileTransport, connection: Connection, path: str, keys: AuthorizedKeys,
) -> None:
    logger.info("writing authorized keys to %s (via %s)...", path, connection)
    await transport.write_file(connection, path, keys.to_text())
    logger.info("successfully wrote %d authorized keys to %s (via %s)", len(keys), path, connection)


def _connection(hostname: str, entry: HostEntry) -> Connection:
    return Connection(hostname=hostname, user=entry.user)


async def push_fleet(config: FleetConfig, transport: RemoteFileTransport, strict: bool = False) -> int:
    """Write every target's expanded keys. Returns the number of files written."""
    written = 0
    for hostname, entry in config.targets():
        keys = expand(entry.authorized_keys, config.identities, strict=strict)
        await write_authorized_keys(transport, _connection(hostname, entry), entry.path, keys)
        written += 1
    return written


async def pull_fleet(config: FleetConfig, transport: RemoteFileTransport) -> int:
    """Replace every target's items with the compacted remote keys, in place.

    Returns the number of files read. The caller saves ``config``.
    """
    pulled = 0
    for hostname, entry in config.targets():
        keys = await read_authorized_keys(transport, _connection(hostname, entry), entry.path)
        entry.authorized_keys = compact(keys, config.identities)
        pulled += 1
    return pulled


async def audit_fleet(
    config: FleetConfig,
    transport: RemoteFileTransport,
    strict: bool = False,
    keep_going: bool = False,
    on_result: Callable[[AuditResult], None] | None = None,
) -> list[AuditResult]:
    """Compare each target's remote keys with its declared keys.

    ``on_result`` sees every result as soon as it is known. Raises
    :class:`AuditMismatch` on the first mismatch, or after all targets when
    ``keep_going`` is set.
    """
    results: list[AuditResult] = []
    for hostname, entry in config.targets():
        connection = _connection(hostname, entry)
        logger.info("auditing %s (via %s)...", entry.path, connection)
        observed = await read_authorized_keys(transport, connection, entry.path)
        expected = expand(entry.authorized_keys, config.identities, strict=strict)
        result = AuditResult(connection=connection, path=entry.path, diff=diff(observed, expected))
        results.append(result)
        if on_result is not None:
            on_result(result)
        if not result.ok and not keep_going:
            raise AuditMismatch([result])

    failed = [r for r in results if not r.ok]
    if failed:
        raise AuditMismatch(failed)
    return results
