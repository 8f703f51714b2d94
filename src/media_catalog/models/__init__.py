"""Configuration models for media catalog."""

from .config import Config, LoggingConfig, StorageConfig, load_config, save_config

__all__ = ["Config", "LoggingConfig", "StorageConfig", "load_config", "save_config"]
