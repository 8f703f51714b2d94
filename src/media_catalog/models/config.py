"""Configuration model for media catalog."""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

from ..exceptions import ConfigurationError

STORAGE_DIR_ENV = "MEDIA_CATALOG_STORAGE_DIR"
LOG_LEVEL_ENV = "MEDIA_CATALOG_LOG_LEVEL"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class StorageConfig:
    """Where the JSON file stores live."""
    directory: Path = Path("catalog-data")


@dataclass
class LoggingConfig:
    """Configuration for log output."""
    level: str = "WARNING"
    format: str = "%(name)s: %(message)s"


@dataclass
class Config:
    """Main configuration model."""
    storage: StorageConfig = field(default_factory=StorageConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def default(cls) -> "Config":
        return cls()

    def with_env_overrides(self) -> "Config":
        """Apply ``MEDIA_CATALOG_*`` environment variables over this config."""
        if storage_dir := os.getenv(STORAGE_DIR_ENV):
            self.storage.directory = Path(storage_dir)
        if log_level := os.getenv(LOG_LEVEL_ENV):
            self.logging.level = log_level
        self.validate()
        return self

    @classmethod
    def from_env(cls) -> "Config":
        """Defaults with environment overrides applied."""
        return cls().with_env_overrides()

    def validate(self) -> None:
        if self.logging.level.upper() not in LOG_LEVELS:
            raise ConfigurationError(f"Unknown log level: {self.logging.level}")


def _config_to_dict(config: Config) -> Dict[str, Any]:
    return {
        "storage": {"directory": str(config.storage.directory)},
        "logging": {"level": config.logging.level, "format": config.logging.format},
    }


def _dict_to_config(data: Dict[str, Any]) -> Config:
    storage = data.get("storage", {})
    log = data.get("logging", {})
    config = Config(
        storage=StorageConfig(directory=Path(storage.get("directory", StorageConfig.directory))),
        logging=LoggingConfig(
            level=log.get("level", LoggingConfig.level),
            format=log.get("format", LoggingConfig.format),
        ),
    )
    config.validate()
    return config


def load_config(config_path: Path) -> Config:
    """Load configuration from JSON file."""
    try:
        with open(config_path, 'r') as f:
            config_data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Cannot load config {config_path}: {e}") from e

    if not isinstance(config_data, dict):
        raise ConfigurationError(f"Config {config_path} must hold a JSON object")
    return _dict_to_config(config_data)


def save_config(config: Config, config_path: Path) -> None:
    """Save configuration to JSON file."""
    with open(config_path, 'w') as f:
        json.dump(_config_to_dict(config), f, indent=2)
