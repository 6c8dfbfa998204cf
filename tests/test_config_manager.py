"""
Tests for configuration management using Dynaconf.

This module tests the ConfigurationManager class, default file creation,
validation of loaded values, and the global configuration helpers.
"""

import logging

import pytest

from cdma_walsh_simulator.config_manager import (
    ConfigurationError,
    ConfigurationManager,
    get_config,
    reload_config,
    reset_config,
)


class TestConfigurationManager:
    """Test cases for ConfigurationManager class."""

    def test_initialization_with_default_config(self, tmp_path):
        """A default config file is created when missing."""
        config_file = tmp_path / "test_config.toml"

        config_manager = ConfigurationManager(str(config_file), create_default=True)

        assert config_file.exists()
        assert config_manager.config_file == str(config_file)
        assert config_manager.settings is not None

    def test_initialization_without_default(self, tmp_path):
        """Missing file without create_default falls back to built-in defaults."""
        config_file = tmp_path / "absent.toml"

        config_manager = ConfigurationManager(str(config_file), create_default=False)

        assert not config_file.exists()
        assert config_manager.get_engine_config()["truncate_to_word_length"] is True
        assert config_manager.get_cli_config()["exit_token"] == "exit"

    def test_default_values(self, tmp_path):
        config_manager = ConfigurationManager(str(tmp_path / "config.toml"))

        assert config_manager.get_engine_config() == {
            "truncate_to_word_length": True,
            "record_composite_signals": True,
            "verify_orthogonality": True,
        }
        cli = config_manager.get_cli_config()
        assert cli["exit_token"] == "exit"
        assert cli["output_format"] == "{name} says: {text}"
        assert config_manager.get_export_config() == {
            "output_dir": "cdma_runs",
            "default_format": "json",
        }
        logging_config = config_manager.get_logging_config()
        assert logging_config["level"] == "INFO"
        assert "%(levelname)s" in logging_config["format"]

    def test_existing_config_values(self, tmp_path):
        config_file = tmp_path / "existing.toml"
        config_file.write_text(
            """
[engine]
truncate_to_word_length = false

[cli]
exit_token = "quit"
output_format = "{name}: {text}"

[export]
output_dir = "runs"
default_format = "numpy"

[logging]
level = "DEBUG"
"""
        )

        config_manager = ConfigurationManager(str(config_file), create_default=False)

        assert config_manager.get_engine_config()["truncate_to_word_length"] is False
        assert config_manager.get_cli_config()["exit_token"] == "quit"
        assert config_manager.get_cli_config()["output_format"] == "{name}: {text}"
        assert config_manager.get_export_config()["default_format"] == "numpy"
        assert config_manager.get_log_level() == logging.DEBUG

    def test_non_boolean_engine_flags_rejected(self, tmp_path):
        config_file = tmp_path / "engine.toml"
        config_file.write_text(
            '[engine]\ntruncate_to_word_length = "no"\nverify_orthogonality = 1\n'
        )

        with pytest.raises(ConfigurationError) as exc_info:
            ConfigurationManager(str(config_file), create_default=False)

        message = str(exc_info.value)
        assert "engine.truncate_to_word_length must be true or false, got 'no'" in message
        assert "engine.verify_orthogonality must be true or false, got 1" in message
        assert "record_composite_signals" not in message

    def test_invalid_values_collected(self, tmp_path):
        """All validation problems are reported together."""
        config_file = tmp_path / "invalid.toml"
        config_file.write_text(
            """
[cli]
exit_token = "   "
output_format = "{name} only"

[export]
default_format = "xml"

[logging]
level = "LOUD"
"""
        )

        with pytest.raises(ConfigurationError) as exc_info:
            ConfigurationManager(str(config_file), create_default=False)

        message = str(exc_info.value)
        assert "cli.exit_token cannot be empty" in message
        assert "cli.output_format must contain" in message
        assert "export.default_format" in message
        assert "logging.level" in message

    def test_get_and_set(self, tmp_path):
        config_manager = ConfigurationManager(str(tmp_path / "config.toml"))

        assert config_manager.get("cli.exit_token") == "exit"
        assert config_manager.get("missing.key", "fallback") == "fallback"

        config_manager.set("cli.exit_token", "stop")
        assert config_manager.get_cli_config()["exit_token"] == "stop"

    def test_to_dict(self, tmp_path):
        config_manager = ConfigurationManager(str(tmp_path / "config.toml"))

        config_dict = config_manager.to_dict()

        assert set(config_dict) == {"engine", "cli", "export", "logging"}

    def test_reload_picks_up_changes(self, tmp_path):
        config_file = tmp_path / "config.toml"
        config_manager = ConfigurationManager(str(config_file))

        config_file.write_text('[cli]\nexit_token = "done"\n')
        config_manager.reload()

        assert config_manager.get_cli_config()["exit_token"] == "done"

    def test_repr(self, tmp_path):
        config_file = str(tmp_path / "config.toml")
        config_manager = ConfigurationManager(config_file)

        assert repr(config_manager) == f"ConfigurationManager(config_file='{config_file}')"


class TestGlobalConfiguration:
    """Test cases for global configuration helpers."""

    def test_get_config_is_cached(self):
        assert get_config() is get_config()

    def test_get_config_with_file_replaces_instance(self, tmp_path):
        first = get_config()
        second = get_config(str(tmp_path / "other.toml"))

        assert first is not second
        assert get_config() is second

    def test_reset_config(self):
        first = get_config()
        reset_config()

        assert get_config() is not first

    def test_reload_config_without_instance(self):
        reset_config()
        reload_config()  # no-op

    def test_default_file_created_in_working_directory(self, tmp_path):
        get_config()

        assert (tmp_path / "config.toml").exists()
