"""Pytest fixtures shared by the engine and CLI tests."""
from pathlib import Path

import pytest

from src.keys import Connection, Identities, TransportError

K1 = "ssh-ed25519 AAAAC3NzaC1lZDI1NTE5AAAAIK1 alice@laptop"
K2 = "ssh-ed25519 AAAAC3NzaC1lZDI1NTE5AAAAIK2 bob@desktop"
K3 = "ssh-rsa AAAAB3NzaC1yc2EAAAADAQABAAABAQK3 carol@ci"


class InMemoryTransport:
    """Remote files kept in a dict keyed by (user@host, path)."""

    def __init__(self, files: dict[tuple[str, str], str] | None = None) -> None:
        self.files: dict[tuple[str, str], str] = dict(files or {})
        self.calls: list[tuple[str, str, str]] = []
        self.fail_on: set[tuple[str, str]] = set()

    async def read_file(self, connection: Connection, path: str) -> str:
        self.calls.append(("read", str(connection), path))
        location = (str(connection), path)
        if location in self.fail_on or location not in self.files:
            raise TransportError(f"cat: {path}: No such file or directory", f"cat {path}", 1)
        return self.files[location]

    async def write_file(self, connection: Connection, path: str, text: str) -> None:
        self.calls.append(("write", str(connection), path))
        location = (str(connection), path)
        if location in self.fail_on:
            raise TransportError(f"cannot write {path}", f"cat > {path}", 1)
        self.files[location] = text


@pytest.fixture
def transport() -> InMemoryTransport:
    return InMemoryTransport()


@pytest.fixture
def identities() -> Identities:
    return Identities.from_config({"alice": [K1, K3], "bob": [K2]})


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "fleet.yaml"
    path.write_text(
        "hosts:\n"
        "  web1:\n"
        "    - user: deploy\n"
        "      path: /home/deploy/.ssh/authorized_keys\n"
        "      authorized_keys:\n"
        "        - '@alice'\n"
        f"        - {K2}\n"
        "  db1:\n"
        "    - user: root\n"
        "      path: /root/.ssh/authorized_keys\n"
        "      authorized_keys:\n"
        "        - '@bob'\n"
        "identities:\n"
        "  alice:\n"
        f"    - {K1}\n"
        f"    - {K3}\n"
        "  bob:\n"
        f"    - {K2}\n"
    )
    return path
