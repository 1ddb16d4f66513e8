"""Objects shared by all commands of one CLI run."""

from dataclasses import dataclass

from src.keys import RemoteFileTransport

from .config import ConfigManager


@dataclass
class CliContext:
    config: ConfigManager
    transport: RemoteFileTransport
