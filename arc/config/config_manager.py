"""Configuration manager for Arduino Relay Control.

Builds the run configuration from layered sources: built-in defaults,
an optional YAML file and ``ARC_*`` environment variables.
"""

from copy import deepcopy
from pathlib import Path
from typing import Optional, Dict, Any
import os

import yaml

from arc.config.config_models import Config, DeviceConfig, LoggingConfig, LogLevel
from arc.config.config_schema import ConfigSchema
from arc.config.defaults import get_default_config
from arc.core.exceptions import ConfigError


class ConfigManager:
    """Loads and validates configuration.

    Layering, later wins:
    1. Defaults from defaults.py
    2. YAML file (explicit path, or the first of ./arc.yaml,
       ~/.arc/config.yaml that exists)
    3. Environment overrides ``ARC_<SECTION>_<KEY>``

    Only the file and environment layers are schema-checked; defaults are
    trusted. Serial line parameters cannot be overridden.

    Example:
        >>> manager = ConfigManager()
        >>> config = manager.load()
        >>> config.device.descriptor
        'Arduino'
        >>> manager.get_source('device.descriptor')
        'default'
    """

    ENV_PREFIX = "ARC_"

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize manager.

        Args:
            config_path: Explicit config file. When given it must exist.
        """
        self.requested_path = Path(config_path) if config_path else None
        self.config_path: Optional[Path] = None
        self._config: Optional[Config] = None
        self._config_source: Dict[str, str] = {}

    def load(self) -> Config:
        """Load configuration from all layers.

        Returns:
            Validated Config

        Raises:
            ConfigError: Explicit file missing, YAML unreadable, or a value
                fails schema validation
        """
        self._config_source = {}
        default_config = get_default_config()
        config_dict = self._layer_dict(default_config)
        self._mark_source(config_dict, "default")

        overrides: Dict[str, Any] = {}

        config_path = self.requested_path
        if config_path is not None and not config_path.is_file():
            raise ConfigError(f"Config file not found: {config_path}")
        if config_path is None:
            config_path = self._search_config_paths()

        if config_path is not None:
            file_config = self._load_from_file(config_path)
            overrides = self._merge_configs(overrides, file_config)
            self._mark_source(file_config, "file")
            self.config_path = config_path

        env_overrides = self._apply_env_overrides()
        if env_overrides:
            overrides = self._merge_configs(overrides, env_overrides)
            self._mark_source(env_overrides, "env")

        is_valid, errors = ConfigSchema.validate_config(overrides)
        if not is_valid:
            raise ConfigError("Configuration validation failed:", errors)

        config_dict = self._merge_configs(config_dict, overrides)
        self._config = self._dict_to_config(config_dict, default_config)
        return self._config

    def get_config(self) -> Config:
        """Get the loaded configuration, loading it on first use."""
        if self._config is None:
            return self.load()
        return self._config

    def get_source(self, key: str) -> Optional[str]:
        """Return where a dotted key came from: 'default', 'file' or 'env'."""
        return self._config_source.get(key)

    @staticmethod
    def _layer_dict(config: Config) -> Dict[str, Any]:
        """Dictionary of the overridable keys of ``config``."""
        config_dict = config.to_dict()
        config_dict['device'].pop('channel', None)
        return config_dict

    @staticmethod
    def _search_config_paths() -> Optional[Path]:
        """Search for a config file in standard locations.

        Search order:
            1. ./arc.yaml (current directory)
            2. ~/.arc/config.yaml (user home directory)
        """
        search_paths = [
            Path("./arc.yaml"),
            Path.home() / ".arc" / "config.yaml"
        ]

        for path in search_paths:
            if path.exists() and path.is_file():
                return path

        return None

    @staticmethod
    def _load_from_file(path: Path) -> Dict[str, Any]:
        """Load configuration from YAML file.

        Raises:
            ConfigError: File unreadable, invalid YAML, or not a mapping
        """
        try:
            with open(path, 'r', encoding='utf-8') as f:
                config_dict = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to load config from {path}: {e}")

        if config_dict is None:
            return {}
        if not isinstance(config_dict, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        return config_dict

    @classmethod
    def _apply_env_overrides(cls) -> Dict[str, Any]:
        """Collect environment variable overrides.

        Environment variables use format: ARC_SECTION_KEY
        Examples:
            ARC_DEVICE_DESCRIPTOR="USB-SERIAL CH340"
            ARC_LOGGING_ENABLED=true
            ARC_LOGGING_LEVEL=DEBUG

        Variables that do not name a known section and key are ignored.
        """
        sections = ConfigSchema.get_schema()["properties"]
        overrides: Dict[str, Dict[str, Any]] = {}

        for env_name, env_value in os.environ.items():
            if not env_name.startswith(cls.ENV_PREFIX):
                continue

            # ARC_LOGGING_LOG_FILE_PATH -> ["logging", "log_file_path"]
            parts = env_name[len(cls.ENV_PREFIX):].lower().split('_', 1)
            if len(parts) != 2:
                continue

            section, key = parts
            if key not in sections.get(section, {}).get("properties", {}):
                continue

            overrides.setdefault(section, {})[key] = cls._parse_env_value(env_value)

        return overrides

    @staticmethod
    def _parse_env_value(value: str) -> Any:
        """Parse environment variable value to bool, int or str."""
        if value.lower() in ('true', 'yes', 'on'):
            return True
        if value.lower() in ('false', 'no', 'off'):
            return False

        try:
            return int(value)
        except ValueError:
            pass

        return value

    @staticmethod
    def _merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Merge two configuration dictionaries section by section.

        Returns:
            Merged configuration (override takes precedence).
        """
        merged = deepcopy(base)

        for section, section_values in override.items():
            if isinstance(section_values, dict) and isinstance(merged.get(section), dict):
                merged[section].update(section_values)
            else:
                merged[section] = deepcopy(section_values)

        return merged

    def _mark_source(self, config: Dict[str, Any], source: str) -> None:
        for section, section_values in config.items():
            if isinstance(section_values, dict):
                for key in section_values.keys():
                    self._config_source[f"{section}.{key}"] = source

    @staticmethod
    def _dict_to_config(config_dict: Dict[str, Any], defaults: Config) -> Config:
        """Convert a validated configuration dictionary to a Config object."""
        device_dict = config_dict.get('device', {})
        device = DeviceConfig(
            descriptor=device_dict.get('descriptor', defaults.device.descriptor),
            fault_response=device_dict.get('fault_response', defaults.device.fault_response),
            channel=defaults.device.channel
        )

        log_dict = config_dict.get('logging', {})
        logging = LoggingConfig(
            enabled=log_dict.get('enabled', defaults.logging.enabled),
            level=LogLevel(log_dict.get('level', defaults.logging.level.value)),
            log_to_file=log_dict.get('log_to_file', defaults.logging.log_to_file),
            log_to_console=log_dict.get('log_to_console', defaults.logging.log_to_console),
            log_file_path=log_dict.get('log_file_path', defaults.logging.log_file_path),
            max_file_size_mb=log_dict.get('max_file_size_mb', defaults.logging.max_file_size_mb),
            backup_count=log_dict.get('backup_count', defaults.logging.backup_count)
        )

        return Config(device=device, logging=logging)
