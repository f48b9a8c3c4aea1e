"""Configuration management for dor-radar."""

import json
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..topology.reshape import ReshapeRule
from .exceptions import ConfigError
from .limits import MAX_TIMEOUT


def _flag(data: dict[str, Any], key: str) -> bool:
    value = data[key]
    if not isinstance(value, bool):
        raise ConfigError(f"{key} must be true or false", repr(value))
    return value


@dataclass
class CollectorConfig:
    """Metrics store target and graph shaping rules."""

    target: str = "http://localhost:9090/"
    filter: str = ""
    timeout: float = MAX_TIMEOUT
    shapes: tuple[ReshapeRule, ...] = ()
    snapshot_propagation: bool = False

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ConfigError("Collector timeout must be positive", str(self.timeout))
        self.timeout = min(float(self.timeout), MAX_TIMEOUT)
        self.shapes = tuple(self.shapes)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CollectorConfig":
        """Build a collector config from its file representation."""
        config = cls()
        if "target" in data:
            config.target = str(data["target"])
        if "filter" in data:
            config.filter = str(data["filter"])
        if "timeout" in data:
            try:
                timeout = float(data["timeout"])
            except (TypeError, ValueError) as e:
                raise ConfigError("Invalid collector timeout", str(e)) from e
            if timeout <= 0:
                raise ConfigError("Collector timeout must be positive", str(timeout))
            config.timeout = min(timeout, MAX_TIMEOUT)
        if "snapshot_propagation" in data:
            config.snapshot_propagation = _flag(data, "snapshot_propagation")
        if "shapes" in data:
            shapes = data["shapes"]
            if not isinstance(shapes, list):
                raise ConfigError("Collector shapes must be a list")
            config.shapes = tuple(ReshapeRule.from_dict(shape) for shape in shapes)
        return config

    def to_dict(self) -> dict[str, Any]:
        return {
            "target": self.target,
            "filter": self.filter,
            "timeout": self.timeout,
            "snapshot_propagation": self.snapshot_propagation,
            "shapes": [rule.to_dict() for rule in self.shapes],
        }


@dataclass
class Config:
    """Main configuration for dor-radar."""

    collector: CollectorConfig = field(default_factory=CollectorConfig)
    verbose: bool = False

    @classmethod
    def from_file(cls, path: Path) -> "Config":
        """Load configuration from a TOML or JSON file."""
        if not path.exists():
            return cls()

        try:
            if path.suffix == ".toml":
                with open(path, "rb") as f:
                    data = tomllib.load(f)
            else:
                with open(path) as f:
                    data = json.load(f)
        except (OSError, ValueError) as e:
            raise ConfigError(f"Failed to read config: {path}", str(e)) from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config root must be a table: {path}")

        config = cls()
        if "verbose" in data:
            config.verbose = _flag(data, "verbose")
        if "collector" in data:
            if not isinstance(data["collector"], dict):
                raise ConfigError("Collector section must be a table")
            config.collector = CollectorConfig.from_dict(data["collector"])

        return config

    def save(self, path: Path) -> None:
        """Save configuration to JSON file."""
        data = {
            "verbose": self.verbose,
            "collector": self.collector.to_dict(),
        }
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(data, f, indent=2)


_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        config_path = Path(os.environ.get("DORRADAR_CONFIG", "config.toml"))
        _config = Config.from_file(config_path)
    return _config


def set_config(config: Config) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config
