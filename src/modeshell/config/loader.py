"""
Configuration loading system for modeshell.

This module handles loading, merging, and validating configuration from
YAML files and environment variables.
"""

import os
from pathlib import Path
from typing import Optional, Dict, Any, Union
import yaml
from pydantic import ValidationError
from dotenv import load_dotenv

from .models import ShellConfig
from ..utils.error_handling import ConfigurationError
from ..utils.logging import get_logger


ENV_PREFIX = "MODESHELL_"


class ConfigLoader:
    """
    Configuration loader that supports multiple sources and validation.

    Loading priority (highest to lowest):
    1. Environment variables (MODESHELL_<SECTION>_<KEY>)
    2. Explicitly given config file
    3. Environment-specific config (MODESHELL_ENV, e.g. development.yaml)
    4. Default configuration file
    5. Built-in defaults (from Pydantic models)
    """

    def __init__(self, search_root: Optional[Union[str, Path]] = None):
        """Initialize the configuration loader.

        Args:
            search_root: Directory searched for default and environment
                config files, the working directory when omitted
        """
        self._config: Optional[ShellConfig] = None
        self._config_path: Optional[Path] = None
        self._root = Path(search_root) if search_root else Path(".")
        self.logger = get_logger(__name__)

        env_file = self._root / ".env"
        if env_file.exists():
            load_dotenv(env_file)

    @property
    def config_path(self) -> Optional[Path]:
        """The explicitly loaded config file, if any."""
        return self._config_path

    def load_config(self, config_path: Optional[Union[str, Path]] = None) -> ShellConfig:
        """
        Load configuration from multiple sources and validate it.

        Args:
            config_path: Optional path to a specific config file

        Returns:
            Validated ShellConfig instance

        Raises:
            ConfigurationError: If configuration loading or validation fails
        """
        try:
            config_data: Dict[str, Any] = {}

            default_config_path = self._find_config("default")
            if default_config_path:
                config_data = self._deep_merge(config_data, self._load_yaml_file(default_config_path))

            env_name = os.getenv(f"{ENV_PREFIX}ENV")
            env_config_path = self._find_config(env_name) if env_name else None
            if env_config_path and env_config_path != default_config_path:
                config_data = self._deep_merge(config_data, self._load_yaml_file(env_config_path))

            if config_path:
                explicit_path = Path(config_path)
                if not explicit_path.exists():
                    raise ConfigurationError(f"Specified config file not found: {config_path}")
                config_data = self._deep_merge(config_data, self._load_yaml_file(explicit_path))
                self._config_path = explicit_path

            config_data = self._apply_env_overrides(config_data)

            self._config = ShellConfig(**config_data)
            self.logger.debug(f"Configuration loaded (explicit file: {self._config_path})")
            return self._config

        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed: {self._format_validation_error(e)}") from e
        except ConfigurationError:
            raise
        except Exception as e:
            raise ConfigurationError(f"Failed to load configuration: {e}") from e

    def get_config(self) -> ShellConfig:
        """Get the current configuration, loading it if necessary."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def reload_config(self, config_path: Optional[Union[str, Path]] = None) -> ShellConfig:
        """Reload configuration from sources."""
        self._config = None
        return self.load_config(config_path)

    def _find_config(self, name: str) -> Optional[Path]:
        """Find ``<name>.yaml`` or ``<name>.yml`` in the usual config locations."""
        for directory in ("configs", "config", "."):
            for suffix in (".yaml", ".yml"):
                path = self._root / directory / f"{name}{suffix}"
                if path.exists():
                    return path

        return None

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """
        Load and parse a YAML configuration file.

        Raises:
            ConfigurationError: If file cannot be loaded or parsed
        """
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {file_path}: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file {file_path}: {e}") from e

        if data is None:
            return {}

        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file {file_path} must contain a YAML object (dictionary)")

        return data

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two configuration dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def _apply_env_overrides(self, config_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply environment variable overrides to configuration.

        The first underscore separates the section from the key:
        MODESHELL_HISTORY_SIZE=50 overrides history.size and
        MODESHELL_APP_LOG_LEVEL=DEBUG overrides app.log_level.
        """
        result = config_data.copy()

        for env_key, env_value in os.environ.items():
            if not env_key.startswith(ENV_PREFIX) or env_key == f"{ENV_PREFIX}ENV":
                continue

            parts = env_key[len(ENV_PREFIX):].lower().split('_', 1)
            if len(parts) != 2 or not parts[1]:
                continue

            section, key = parts
            current = result.get(section)
            if current is None:
                current = {}
            elif not isinstance(current, dict):
                continue
            else:
                current = current.copy()

            # raw string; the models coerce it to the field's type
            current[key] = env_value
            result[section] = current

        return result

    def _format_validation_error(self, error: ValidationError) -> str:
        """Format a Pydantic validation error for user-friendly display."""
        messages = []
        for err in error.errors():
            location = " -> ".join(str(loc) for loc in err['loc'])
            value = err.get('input', 'N/A')
            messages.append(f"  {location}: {err['msg']} (got: {value})")

        return "Validation errors:\n" + "\n".join(messages)


# Global configuration loader instance
_config_loader = ConfigLoader()


def load_config(config_path: Optional[Union[str, Path]] = None) -> ShellConfig:
    """
    Load configuration from multiple sources.

    Raises:
        ConfigurationError: If configuration loading fails
    """
    return _config_loader.load_config(config_path)


def get_config() -> ShellConfig:
    """Get the current configuration, loading it if necessary."""
    return _config_loader.get_config()


def reload_config(config_path: Optional[Union[str, Path]] = None) -> ShellConfig:
    """Reload configuration from sources."""
    return _config_loader.reload_config(config_path)


def validate_config_file(config_path: Union[str, Path]) -> tuple[bool, Optional[str]]:
    """
    Validate a configuration file without loading it globally.

    Returns:
        Tuple of (is_valid, error_message)
    """
    try:
        ConfigLoader().load_config(config_path)
        return True, None
    except ConfigurationError as e:
        return False, str(e)
