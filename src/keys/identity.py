"""Named identities and the registry resolving them to keys."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

from .authorized_keys import AuthorizedKeys
from .exceptions import ParseIdentityError
from .public_key import PublicKey

IDENTITY_PREFIX = "@"


@dataclass(frozen=True)
class Identity:
    """Alias for a set of keys. Stored without the ``@`` marker."""

    name: str

    @classmethod
    def parse(cls, token: str) -> Identity:
        """Parse ``@name``; exactly one leading ``@`` is removed."""
        if not isinstance(token, str) or not token.startswith(IDENTITY_PREFIX):
            raise ParseIdentityError(f"identity must start with '{IDENTITY_PREFIX}': {token!r}")
        return cls(token[len(IDENTITY_PREFIX):])

    def __str__(self) -> str:
        return f"{IDENTITY_PREFIX}{self.name}"


class Identities:
    """Read-only registry mapping each identity to the keys it owns.

    Iteration follows declaration order. :meth:`identity_for` returns the
    earliest declared identity owning a key, so a key shared by several
    identities always resolves the same way for a given config file.
    """

    def __init__(self, entries: Mapping[Identity, AuthorizedKeys] | None = None) -> None:
        self._entries: Mapping[Identity, AuthorizedKeys] = MappingProxyType(dict(entries or {}))

    @classmethod
    def from_config(cls, data: Mapping[str, Iterable[str]] | None) -> Identities:
        """Build the registry from the ``identities:`` config section."""
        entries: dict[Identity, AuthorizedKeys] = {}
        for name, lines in (data or {}).items():
            entries[Identity(str(name))] = AuthorizedKeys(PublicKey.parse(line) for line in lines or ())
        return cls(entries)

    def keys_for(self, identity: Identity) -> AuthorizedKeys | None:
        """Copy of the keys owned by ``identity``, or None if it is not defined here."""
        keys = self._entries.get(identity)
        if keys is None:
            return None
        return AuthorizedKeys(keys)

    def identity_for(self, key: PublicKey) -> Identity | None:
        for identity, keys in self._entries.items():
            if key in keys:
                return identity
        return None

    def names(self) -> list[str]:
        return [identity.name for identity in self._entries]

    def to_config(self) -> dict[str, list[str]]:
        return {identity.name: [str(key) for key in keys] for identity, keys in self._entries.items()}

    def __contains__(self, identity: object) -> bool:
        return identity in self._entries

    def __iter__(self) -> Iterator[Identity]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Identities({self.names()!r})"
