"""Tests for configuration and logging setup."""

import io
import json
import logging
from pathlib import Path

import pytest
from rich.console import Console
from rich.logging import RichHandler

from media_catalog.exceptions import ConfigurationError
from media_catalog.logging_config import setup_logging
from media_catalog.models.config import (
    LOG_LEVEL_ENV,
    STORAGE_DIR_ENV,
    Config,
    LoggingConfig,
    load_config,
    save_config,
)


class TestConfig:
    """Test the configuration model."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv(STORAGE_DIR_ENV, raising=False)
        monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
        config = Config.from_env()
        assert config.storage.directory == Path("catalog-data")
        assert config.logging.level == "WARNING"

    def test_env_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv(STORAGE_DIR_ENV, str(tmp_path))
        monkeypatch.setenv(LOG_LEVEL_ENV, "debug")
        config = Config.from_env()
        assert config.storage.directory == tmp_path
        assert config.logging.level == "debug"

    def test_bad_log_level(self, monkeypatch):
        monkeypatch.setenv(LOG_LEVEL_ENV, "LOUD")
        with pytest.raises(ConfigurationError, match="LOUD"):
            Config.from_env()

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "config.json"
        config = Config.default()
        config.storage.directory = tmp_path / "data"
        config.logging.level = "INFO"
        save_config(config, path)

        loaded = load_config(path)
        assert loaded.storage.directory == tmp_path / "data"
        assert loaded.logging.level == "INFO"

    def test_load_partial(self, tmp_path):
        """Missing sections fall back to defaults."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"logging": {"level": "ERROR"}}))
        loaded = load_config(path)
        assert loaded.logging.level == "ERROR"
        assert loaded.storage.directory == Path("catalog-data")

    @pytest.mark.parametrize("content", ["not json", "[1, 2]"])
    def test_load_invalid(self, tmp_path, content):
        path = tmp_path / "config.json"
        path.write_text(content)
        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_config(tmp_path / "absent.json")


class TestSetupLogging:
    """Test root logger configuration."""

    def setup_method(self):
        root = logging.getLogger()
        self.saved = (root.level, list(root.handlers))

    def teardown_method(self):
        root = logging.getLogger()
        root.setLevel(self.saved[0])
        root.handlers[:] = self.saved[1]

    def test_level_from_config(self):
        setup_logging(LoggingConfig(level="info"))
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert any(isinstance(h, RichHandler) for h in root.handlers)

    def test_explicit_console(self):
        """Log records render to the console that was passed in."""
        console = Console(file=io.StringIO())
        setup_logging(LoggingConfig(), console=console)
        handlers = [h for h in logging.getLogger().handlers if isinstance(h, RichHandler)]
        assert handlers[0].console is console

    def test_verbose_forces_debug(self):
        setup_logging(LoggingConfig(level="ERROR"), verbose=True)
        assert logging.getLogger().level == logging.DEBUG
