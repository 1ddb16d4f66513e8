"""CLI commands."""

from . import audit, pull, push

__all__ = [
    "audit",
    "pull",
    "push",
]
