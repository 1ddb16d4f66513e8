"""Comment-insensitive set of public keys and the authorized_keys text format."""

from __future__ import annotations

from typing import Iterable, Iterator

from .public_key import PublicKey


class AuthorizedKeys:
    """Insertion-ordered set of :class:`PublicKey`.

    Membership is comment-insensitive. When an equal key is inserted twice
    the first spelling (and its comment) is kept.
    """

    def __init__(self, keys: Iterable[PublicKey] = ()) -> None:
        self._keys: dict[PublicKey, None] = {}
        self.update(keys)

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> AuthorizedKeys:
        """Parse key lines, skipping blank lines and ``#`` comments."""
        keys = cls()
        for line in lines:
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            keys.insert(PublicKey.parse(stripped))
        return keys

    @classmethod
    def from_text(cls, text: str) -> AuthorizedKeys:
        return cls.from_lines(text.splitlines())

    def to_text(self) -> str:
        """Render one key per line, newline-terminated, in insertion order."""
        return "".join(f"{key}\n" for key in self._keys)

    def insert(self, key: PublicKey) -> bool:
        """Add ``key`` unless an equal key is present. Returns True if added."""
        if key in self._keys:
            return False
        self._keys[key] = None
        return True

    def update(self, keys: Iterable[PublicKey]) -> None:
        for key in keys:
            self.insert(key)

    def union(self, other: AuthorizedKeys) -> AuthorizedKeys:
        result = AuthorizedKeys(self)
        result.update(other)
        return result

    def contains(self, key: PublicKey) -> bool:
        return key in self._keys

    def difference(self, other: AuthorizedKeys) -> AuthorizedKeys:
        """Keys in ``self`` that are not in ``other``."""
        return AuthorizedKeys(key for key in self._keys if key not in other)

    def is_superset(self, other: AuthorizedKeys) -> bool:
        """True if every key of ``other`` is in ``self``."""
        return all(key in self._keys for key in other)

    def sorted(self) -> list[PublicKey]:
        return sorted(self._keys, key=str)

    def is_empty(self) -> bool:
        return not self._keys

    def __contains__(self, key: object) -> bool:
        return key in self._keys

    def __iter__(self) -> Iterator[PublicKey]:
        return iter(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def __bool__(self) -> bool:
        return bool(self._keys)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AuthorizedKeys):
            return NotImplemented
        return self._keys.keys() == other._keys.keys()

    def __repr__(self) -> str:
        return f"AuthorizedKeys({[str(key) for key in self._keys]!r})"
