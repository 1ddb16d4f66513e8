"""Exception types for the keyfleet reconciliation engine."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .operations import AuditResult


class KeyfleetError(Exception):
    """Base exception for all keyfleet errors."""
    pass


class ParseError(KeyfleetError, ValueError):
    """A key line, identity token or config item could not be parsed."""
    pass


class ParsePublicKeyError(ParseError):
    """Line does not have at least an algorithm and a key data field."""
    pass


class ParseIdentityError(ParseError):
    """Identity token is missing its leading '@'."""
    pass


class ParseAuthorizedItemError(ParseError):
    """String is neither an identity reference nor a public key."""
    pass


class UnknownIdentityError(KeyfleetError):
    """An identity is referenced but not defined (strict expansion only)."""
    def __init__(self, identity: str) -> None:
        super().__init__(f"identity {identity} is not defined")
        self.identity = identity


class ConfigError(KeyfleetError):
    """Configuration file error."""
    def __init__(self, message: str, path: str) -> None:
        super().__init__(message)
        self.path = path


class ConfigReadError(ConfigError):
    """Configuration file could not be read or failed validation."""
    pass


class ConfigWriteError(ConfigError):
    """Configuration file could not be written."""
    pass


class TransportError(KeyfleetError):
    """Remote command failed, timed out or produced undecodable output."""
    def __init__(self, message: str, command: str | None = None, returncode: int | None = None) -> None:
        super().__init__(message)
        self.command = command
        self.returncode = returncode


class AuditMismatch(KeyfleetError):
    """Observed keys differ from the declared keys on one or more targets."""
    def __init__(self, results: list[AuditResult]) -> None:
        targets = ", ".join(f"{r.path} (via {r.connection})" for r in results)
        super().__init__(f"audit failed for {targets}")
        self.results = results
