"""Remote file access over an external ssh client."""

import asyncio
import logging
import os
import shlex
from dataclasses import dataclass, field
from typing import Protocol

from .exceptions import TransportError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
HEREDOC_MARKER = "KEYFLEET_EOF"


@dataclass(frozen=True)
class Connection:
    hostname: str
    user: str

    def __str__(self) -> str:
        return f"{self.user}@{self.hostname}"


class RemoteFileTransport(Protocol):
    """Reads and writes whole files on a remote host."""

    async def read_file(self, connection: Connection, path: str) -> str: ...

    async def write_file(self, connection: Connection, path: str, text: str) -> None: ...


@dataclass(frozen=True)
class SshSettings:
    """How the ssh client is invoked.

    ``options`` are passed before the destination, e.g.
    ``("-o", "BatchMode=yes")``. ``timeout`` bounds each remote command.
    """

    command: str = "ssh"
    options: tuple[str, ...] = ()
    timeout: float = DEFAULT_TIMEOUT


def load_ssh_settings_from_env(timeout: float | None = None) -> SshSettings:
    """Read ``KEYFLEET_SSH_*`` variables; an explicit ``timeout`` wins."""
    command = os.environ.get("KEYFLEET_SSH_COMMAND", "ssh")
    options = tuple(shlex.split(os.environ.get("KEYFLEET_SSH_OPTIONS", "")))
    if timeout is None:
        raw = os.environ.get("KEYFLEET_SSH_TIMEOUT", "")
        try:
            timeout = float(raw) if raw else DEFAULT_TIMEOUT
        except ValueError:
            logger.warning("Invalid KEYFLEET_SSH_TIMEOUT %r, using %s", raw, DEFAULT_TIMEOUT)
            timeout = DEFAULT_TIMEOUT
    if timeout <= 0:
        raise ValueError("ssh timeout must be positive")
    return SshSettings(command=command, options=options, timeout=timeout)


def read_command(path: str) -> str:
    return f"cat {shlex.quote(path)}"


def write_command(path: str, text: str) -> str:
    """Shell command replacing ``path`` with ``text`` via a quoted here-document."""
    body = text if not text or text.endswith("\n") else f"{text}\n"
    if HEREDOC_MARKER in body.splitlines():
        raise ValueError(f"text contains the here-document marker {HEREDOC_MARKER}")
    return f"cat > {shlex.quote(path)} <<'{HEREDOC_MARKER}'\n{body}{HEREDOC_MARKER}"


@dataclass
class SshTransport:
    settings: SshSettings = field(default_factory=SshSettings)

    async def read_file(self, connection: Connection, path: str) -> str:
        command = read_command(path)
        stdout = await self._execute(connection, command)
        try:
            return stdout.decode("utf-8")
        except UnicodeDecodeError as e:
            raise TransportError(f"{path} on {connection} is not valid UTF-8: {e}", command) from e

    async def write_file(self, connection: Connection, path: str, text: str) -> None:
        await self._execute(connection, write_command(path, text))

    async def _execute(self, connection: Connection, command: str) -> bytes:
        argv = [self.settings.command, *self.settings.options, str(connection), command]
        logger.debug("Running %s", shlex.join(argv[:-1]))
        try:
            proc = await asyncio.create_subprocess_exec(
                *argv,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise TransportError(f"failed to start {self.settings.command}: {e}", command) from e

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=self.settings.timeout)
        except asyncio.TimeoutError:
            proc.kill()
            await proc.wait()
            raise TransportError(
                f"ssh command on {connection} timed out after {self.settings.timeout:g}s", command,
            ) from None

        if proc.returncode != 0:
            err_msg = stderr.decode(errors="replace").strip() if stderr else "unknown error"
            raise TransportError(
                f"ssh command on {connection} failed (exit {proc.returncode}): {err_msg}",
                command,
                proc.returncode,
            )
        return stdout
