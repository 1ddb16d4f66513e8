"""CLI utilities."""

from .config import ConfigManager
from .context import CliContext
from .logging import configure_logging

__all__ = [
    "CliContext",
    "ConfigManager",
    "configure_logging",
]
