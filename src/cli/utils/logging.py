"""Logging setup for CLI runs."""

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(quiet: bool = False) -> None:
    """Send progress logging to stderr through rich."""
    logging.basicConfig(
        level=logging.WARNING if quiet else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_time=False, show_path=False, markup=False)],
        force=True,
    )
