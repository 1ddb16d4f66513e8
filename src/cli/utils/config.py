"""Configuration file management for CLI."""

from pathlib import Path

import yaml
from pydantic import ValidationError

from src.keys import ConfigReadError, ConfigWriteError, FleetConfig

# Key lines are long; keep each one on a single YAML line.
LINE_WIDTH = 1 << 16


class ConfigManager:
    """Loads and saves the fleet configuration YAML file."""

    def __init__(self, config_path: Path) -> None:
        self._config_path = Path(config_path)

    @property
    def config_path(self) -> Path:
        return self._config_path

    def exists(self) -> bool:
        return self._config_path.exists()

    def load(self) -> FleetConfig:
        """Load and validate configuration. Raises ConfigReadError."""
        path = str(self._config_path)
        try:
            with open(self._config_path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise ConfigReadError(f"failed to read config file {path}: {e}", path) from e
        except yaml.YAMLError as e:
            raise ConfigReadError(f"failed to parse config file {path}: {e}", path) from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigReadError(f"invalid config file {path}: root must be a mapping", path)

        try:
            return FleetConfig.model_validate(data)
        except ValidationError as e:
            raise ConfigReadError(f"invalid config file {path}: {_describe(e)}", path) from e

    def save(self, config: FleetConfig) -> None:
        """Write configuration back, preserving host and item order."""
        path = str(self._config_path)
        try:
            with open(self._config_path, "w", encoding="utf-8") as f:
                yaml.safe_dump(
                    config.to_config(), f, default_flow_style=False, sort_keys=False, width=LINE_WIDTH,
                )
        except (OSError, yaml.YAMLError) as e:
            raise ConfigWriteError(f"failed to write config file {path}: {e}", path) from e


def _describe(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        location = ".".join(str(p) for p in err["loc"])
        parts.append(f"{location}: {err['msg']}" if location else err["msg"])
    return "; ".join(parts)
