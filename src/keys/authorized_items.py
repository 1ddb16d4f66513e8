"""Declared config entries: identity references or raw keys."""

from __future__ import annotations

from typing import Iterable, Iterator, Union

from .authorized_keys import AuthorizedKeys
from .exceptions import ParseAuthorizedItemError, ParseIdentityError, ParsePublicKeyError
from .identity import Identity
from .public_key import PublicKey

AuthorizedItem = Union[Identity, PublicKey]


def parse_authorized_item(value: str) -> AuthorizedItem:
    """Parse ``@name`` as an :class:`Identity`, anything else as a key."""
    try:
        return Identity.parse(value)
    except ParseIdentityError:
        pass
    try:
        return PublicKey.parse(value)
    except ParsePublicKeyError:
        raise ParseAuthorizedItemError(f"failed to parse item: {value!r}") from None


def format_authorized_item(item: AuthorizedItem) -> str:
    match item:
        case Identity():
            return str(item)
        case PublicKey():
            return item.line
        case _:
            raise TypeError(f"not an authorized item: {item!r}")


class AuthorizedItems:
    """Ordered collection of items with structural duplicates suppressed."""

    def __init__(self, items: Iterable[AuthorizedItem] = ()) -> None:
        self._items: dict[AuthorizedItem, None] = {}
        for item in items:
            self.insert(item)

    @classmethod
    def parse_all(cls, values: Iterable[str]) -> AuthorizedItems:
        return cls(parse_authorized_item(value) for value in values)

    @classmethod
    def from_keys(cls, keys: AuthorizedKeys) -> AuthorizedItems:
        """One raw key item per key, without identity substitution."""
        return cls(keys)

    def insert(self, item: AuthorizedItem) -> bool:
        """Append ``item`` unless an equal one is present. Returns True if added."""
        if not isinstance(item, (Identity, PublicKey)):
            raise TypeError(f"not an authorized item: {item!r}")
        if item in self._items:
            return False
        self._items[item] = None
        return True

    def identities(self) -> list[Identity]:
        return [item for item in self._items if isinstance(item, Identity)]

    def to_strings(self) -> list[str]:
        return [format_authorized_item(item) for item in self._items]

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def __iter__(self) -> Iterator[AuthorizedItem]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AuthorizedItems):
            return NotImplemented
        return list(self._items) == list(other._items)

    def __repr__(self) -> str:
        return f"AuthorizedItems({self.to_strings()!r})"
