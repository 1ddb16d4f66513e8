"""keyfleet: identity-aware reconciliation of SSH authorized_keys files."""

from .authorized_items import AuthorizedItem, AuthorizedItems, format_authorized_item, parse_authorized_item
from .authorized_keys import AuthorizedKeys
from .exceptions import (AuditMismatch, ConfigError, ConfigReadError, ConfigWriteError, KeyfleetError, ParseAuthorizedItemError,
                         ParseError, ParseIdentityError, ParsePublicKeyError, TransportError, UnknownIdentityError)
from .identity import Identities, Identity
from .models import FleetConfig, HostEntry
from .operations import AuditResult, audit_fleet, pull_fleet, push_fleet
from .public_key import PublicKey
from .reconcile import KeyDiff, compact, diff, expand
from .transport import Connection, RemoteFileTransport, SshSettings, SshTransport, load_ssh_settings_from_env

__all__ = [
    "PublicKey", "Identity", "Identities", "AuthorizedKeys",
    "AuthorizedItem", "AuthorizedItems", "parse_authorized_item", "format_authorized_item",
    "KeyDiff", "expand", "compact", "diff",
    "FleetConfig", "HostEntry",
    "AuditResult", "push_fleet", "pull_fleet", "audit_fleet",
    "Connection", "RemoteFileTransport", "SshSettings", "SshTransport", "load_ssh_settings_from_env",
    "KeyfleetError", "ParseError", "ParsePublicKeyError", "ParseIdentityError", "ParseAuthorizedItemError",
    "UnknownIdentityError", "ConfigError", "ConfigReadError", "ConfigWriteError", "TransportError", "AuditMismatch",
]

__version__ = "0.1.0"
