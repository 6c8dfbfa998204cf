"""
Configuration management using Dynaconf for centralized parameter handling.

This module provides a centralized configuration system that loads parameters
from TOML files and provides validation and default value management.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from dynaconf import Dynaconf

logger = logging.getLogger(__name__)

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
VALID_EXPORT_FORMATS = ("json", "numpy")
ENGINE_FLAGS = ("truncate_to_word_length", "record_composite_signals", "verify_orthogonality")


class ConfigurationError(Exception):
    """Exception raised for configuration-related errors."""

    pass


class ConfigurationManager:
    """Centralized configuration manager using Dynaconf.

    This class provides a unified interface for loading and validating
    configuration parameters from TOML files using Dynaconf.
    """

    def __init__(self, config_file: Optional[str] = None, create_default: bool = True):
        """Initialize configuration manager.

        Args:
            config_file: Path to configuration file (defaults to config.toml)
            create_default: Whether to create default config if file doesn't exist
        """
        self.config_file = config_file or "config.toml"
        self.config_path = Path(self.config_file)

        if not self.config_path.exists() and create_default:
            self._create_default_config()

        try:
            self.settings = Dynaconf(
                settings_files=[self.config_file],
                load_dotenv=True,
                envvar_prefix="CDMA",
            )
        except Exception as e:
            raise ConfigurationError(f"Failed to load configuration: {e}")

        self._validate_configuration()

        logger.info(f"Configuration loaded from {self.config_file}")

    def _create_default_config(self) -> None:
        """Create a default configuration file."""
        default_config = """# CDMA Walsh Simulator Configuration

[engine]
# Cut each station's decoded bits to its own word length before text conversion
truncate_to_word_length = true
# Keep the composite signal of every time slot for reporting and export
record_composite_signals = true
# Check the assigned codes for exact orthogonality after code assignment
verify_orthogonality = true

[cli]
exit_token = "exit"
prompt = "Enter a station name and a word separated by a space ('exit' to finish):"
output_format = "{name} says: {text}"

[export]
output_dir = "cdma_runs"
default_format = "json"  # "json" or "numpy"

[logging]
level = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
"""

        with open(self.config_path, "w") as f:
            f.write(default_config)

        logger.info(f"Created default configuration file: {self.config_file}")

    def _validate_configuration(self) -> None:
        """Validate configuration parameters."""
        errors = []

        for key in ENGINE_FLAGS:
            value = self.settings.get(f"engine.{key}", True)
            if not isinstance(value, bool):
                errors.append(f"engine.{key} must be true or false, got {value!r}")

        try:
            cli = self.get_cli_config()

            if not cli["exit_token"].strip():
                errors.append("cli.exit_token cannot be empty")

            if "{name}" not in cli["output_format"] or "{text}" not in cli["output_format"]:
                errors.append("cli.output_format must contain {name} and {text} placeholders")

        except Exception as e:
            errors.append(f"Error validating CLI configuration: {e}")

        try:
            export = self.get_export_config()

            if export["default_format"] not in VALID_EXPORT_FORMATS:
                errors.append(
                    f"export.default_format must be one of {VALID_EXPORT_FORMATS}, "
                    f"got '{export['default_format']}'"
                )

        except Exception as e:
            errors.append(f"Error validating export configuration: {e}")

        try:
            logging_config = self.get_logging_config()

            if logging_config["level"].upper() not in VALID_LOG_LEVELS:
                errors.append(
                    f"logging.level must be one of {VALID_LOG_LEVELS}, "
                    f"got '{logging_config['level']}'"
                )

        except Exception as e:
            errors.append(f"Error validating logging configuration: {e}")

        if errors:
            error_msg = "Configuration validation failed:\n" + "\n".join(
                f"  - {error}" for error in errors
            )
            raise ConfigurationError(error_msg)

    def get_engine_config(self) -> Dict[str, Any]:
        """Get CDMA engine configuration parameters.

        Returns:
            Dictionary with engine configuration
        """
        return {
            "truncate_to_word_length": bool(
                self.settings.get("engine.truncate_to_word_length", True)
            ),
            "record_composite_signals": bool(
                self.settings.get("engine.record_composite_signals", True)
            ),
            "verify_orthogonality": bool(self.settings.get("engine.verify_orthogonality", True)),
        }

    def get_cli_config(self) -> Dict[str, Any]:
        """Get interactive application configuration parameters.

        Returns:
            Dictionary with CLI configuration
        """
        return {
            "exit_token": str(self.settings.get("cli.exit_token", "exit")),
            "prompt": str(
                self.settings.get(
                    "cli.prompt",
                    "Enter a station name and a word separated by a space ('exit' to finish):",
                )
            ),
            "output_format": str(self.settings.get("cli.output_format", "{name} says: {text}")),
        }

    def get_export_config(self) -> Dict[str, Any]:
        """Get run export configuration parameters.

        Returns:
            Dictionary with export configuration
        """
        return {
            "output_dir": str(self.settings.get("export.output_dir", "cdma_runs")),
            "default_format": str(self.settings.get("export.default_format", "json")),
        }

    def get_logging_config(self) -> Dict[str, Any]:
        """Get logging configuration parameters.

        Returns:
            Dictionary with logging configuration
        """
        return {
            "level": str(self.settings.get("logging.level", "INFO")),
            "format": str(self.settings.get("logging.format", DEFAULT_LOG_FORMAT)),
        }

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by key.

        Args:
            key: Configuration key (supports dot notation, e.g., 'cli.exit_token')
            default: Default value if key is not found

        Returns:
            Configuration value
        """
        return self.settings.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value.

        Args:
            key: Configuration key (supports dot notation)
            value: Value to set
        """
        self.settings.set(key, value)

    def reload(self) -> None:
        """Reload configuration from file."""
        try:
            self.settings.reload()
            self._validate_configuration()
            logger.info("Configuration reloaded successfully")
        except ConfigurationError:
            raise
        except Exception as e:
            raise ConfigurationError(f"Failed to reload configuration: {e}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary.

        Returns:
            Dictionary representation of configuration
        """
        return {
            "engine": self.get_engine_config(),
            "cli": self.get_cli_config(),
            "export": self.get_export_config(),
            "logging": self.get_logging_config(),
        }

    def get_log_level(self) -> int:
        """Get the configured log level as a logging module constant."""
        return getattr(logging, self.get_logging_config()["level"].upper())

    def __repr__(self) -> str:
        """String representation of ConfigurationManager."""
        return f"ConfigurationManager(config_file='{self.config_file}')"


# Global configuration instance
_global_config: Optional[ConfigurationManager] = None


def get_config(
    config_file: Optional[str] = None, create_default: bool = True
) -> ConfigurationManager:
    """Get global configuration instance.

    Args:
        config_file: Path to configuration file
        create_default: Whether to create default config if file doesn't exist

    Returns:
        ConfigurationManager instance
    """
    global _global_config

    if _global_config is None or config_file is not None:
        _global_config = ConfigurationManager(config_file, create_default)

    return _global_config


def reload_config() -> None:
    """Reload global configuration."""
    global _global_config

    if _global_config is not None:
        _global_config.reload()


def reset_config() -> None:
    """Reset global configuration (force reload on next access)."""
    global _global_config
    _global_config = None
