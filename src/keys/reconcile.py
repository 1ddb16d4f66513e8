"""Expansion, compaction and diffing of declared items against key sets.

``expand`` turns the items declared for a target into the concrete keys
that should be on the host. ``compact`` goes the other way for ``pull``:
observed keys are folded back into identity references, but only when every
key of the identity is present, so nothing observed is lost.
``diff`` is the set algebra behind ``audit``.
"""

import logging
from typing import NamedTuple

from .authorized_items import AuthorizedItem, AuthorizedItems
from .authorized_keys import AuthorizedKeys
from .exceptions import UnknownIdentityError
from .identity import Identities, Identity
from .public_key import PublicKey

logger = logging.getLogger(__name__)


class KeyDiff(NamedTuple):
    """Keys present but not declared, and keys declared but not present."""

    unknown: AuthorizedKeys
    missing: AuthorizedKeys

    @property
    def ok(self) -> bool:
        return not self.unknown and not self.missing


def expand(items: AuthorizedItems, identities: Identities, strict: bool = False) -> AuthorizedKeys:
    """Resolve declared items into the keys they stand for.

    An identity missing from ``identities`` contributes no keys and a warning
    is logged; with ``strict`` it raises :class:`UnknownIdentityError`.
    """
    keys = AuthorizedKeys()
    for item in items:
        keys.update(_expand_item(item, identities, strict))
    return keys


def _expand_item(item: AuthorizedItem, identities: Identities, strict: bool) -> AuthorizedKeys:
    match item:
        case PublicKey():
            return AuthorizedKeys([item])
        case Identity():
            resolved = identities.keys_for(item)
            if resolved is None:
                if strict:
                    raise UnknownIdentityError(str(item))
                logger.warning("identity %s is not defined, it contributes no keys", item)
                return AuthorizedKeys()
            return resolved
        case _:
            raise TypeError(f"not an authorized item: {item!r}")


def compact(observed: AuthorizedKeys, identities: Identities) -> AuthorizedItems:
    """Fold observed keys into the shortest item list that expands back to them."""
    items = AuthorizedItems()
    for key in observed:
        identity = identities.identity_for(key)
        if identity is not None and observed.is_superset(identities.keys_for(identity)):
            items.insert(identity)
        else:
            items.insert(key)
    return items


def diff(observed: AuthorizedKeys, expected: AuthorizedKeys) -> KeyDiff:
    return KeyDiff(unknown=observed.difference(expected), missing=expected.difference(observed))
