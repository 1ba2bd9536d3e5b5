"""Configuration management for hal-resource using YAML files."""

from pathlib import Path
from typing import Any

import structlog
import yaml

logger = structlog.get_logger()

CONFIG_DIR_NAME = ".hal-resource"

DEFAULTS: dict[str, Any] = {
    "json.indent": 2,
    "json.ensure_ascii": False,
}

TRUE_STRINGS = ("1", "true", "yes", "on")
FALSE_STRINGS = ("0", "false", "no", "off")


def _to_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in TRUE_STRINGS + FALSE_STRINGS:
        return value.strip().lower() in TRUE_STRINGS
    raise ValueError(f"{key} must be a boolean (true/false), got {value!r}")


def _to_indent(key: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{key} must be a non-negative integer, got {value!r}")
    try:
        indent = int(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{key} must be a non-negative integer, got {value!r}") from e
    if indent < 0:
        raise ValueError(f"{key} must be a non-negative integer, got {value!r}")
    return indent


CONVERTERS = {
    "json.indent": _to_indent,
    "json.ensure_ascii": _to_bool,
}


def coerce_setting(key: str, value: Any) -> Any:
    """Convert a raw setting value, such as a CLI string, to its stored type.

    Raises:
        ValueError: If the key is not a known setting or the value cannot be converted
    """
    if key not in DEFAULTS:
        known = ", ".join(DEFAULTS)
        raise ValueError(f"Unknown setting '{key}'; known settings: {known}")
    return CONVERTERS[key](key, value)


class Config:
    """Configuration manager using YAML file storage.

    Local config lives in .hal-resource/config.yaml in the current directory,
    global config in ~/.hal-resource/config.yaml. Reads check local config
    first, then global config.
    """

    def __init__(self, use_global: bool = False, config_dir: Path | None = None) -> None:
        """Initialize configuration manager.

        Args:
            use_global: If True, use global config only. If False, use local config with global fallback.
            config_dir: Custom directory to store config file (overrides use_global)
        """
        if config_dir is not None:
            self.config_dir = Path(config_dir)
            self.is_global = use_global
        elif use_global:
            self.config_dir = Path.home() / CONFIG_DIR_NAME
            self.is_global = True
        else:
            self.config_dir = Path.cwd() / CONFIG_DIR_NAME
            self.is_global = False

        self.config_file = self.config_dir / "config.yaml"
        self._config: dict[str, Any] = self._load(self.config_file)

        self._global_config: dict[str, Any] = {}
        if not self.is_global:
            global_config_file = Path.home() / CONFIG_DIR_NAME / "config.yaml"
            if global_config_file != self.config_file and global_config_file.exists():
                try:
                    self._global_config = self._load(global_config_file)
                except ValueError as e:
                    logger.warning("Failed to load global config", error=str(e))

        logger.debug("Config initialized", config_file=str(self.config_file), is_global=self.is_global)

    @staticmethod
    def _load(config_file: Path) -> dict[str, Any]:
        if not config_file.exists():
            logger.debug("Config file does not exist, initializing empty config", config_file=str(config_file))
            return {}

        try:
            with open(config_file, "r") as f:
                config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error("Failed to load config", error=str(e))
            raise ValueError(f"Failed to load config from {config_file}: {e}") from e

        if not isinstance(config, dict):
            raise ValueError(f"Config file {config_file} must contain a mapping")
        logger.debug("Config loaded successfully", keys=list(config.keys()))
        return config

    def _save(self) -> None:
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            with open(self.config_file, "w") as f:
                yaml.safe_dump(self._config, f, default_flow_style=False, sort_keys=False)
            logger.debug("Config saved successfully")
        except OSError as e:
            logger.error("Failed to save config", error=str(e))
            raise ValueError(f"Failed to save config to {self.config_file}: {e}") from e

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value, falling back to global config, then to default."""
        if key in self._config:
            logger.debug("Getting config value from local", key=key)
            return self._config[key]

        if not self.is_global and key in self._global_config:
            logger.debug("Getting config value from global", key=key)
            return self._global_config[key]

        logger.debug("Config value not found", key=key)
        return default

    def source(self, key: str) -> str:
        """Return where the value of key comes from: local, global or default."""
        if key in self._config:
            return "global" if self.is_global else "local"
        if not self.is_global and key in self._global_config:
            return "global"
        return "default"

    def set(self, key: str, value: Any) -> Any:
        """Validate, store and persist a setting.

        Returns:
            The value as stored, after conversion

        Raises:
            ValueError: If the key is unknown or the value is invalid for it
        """
        value = coerce_setting(key, value)
        logger.debug("Setting config value", key=key, value=value)
        self._config[key] = value
        self._save()
        return value

    def unset(self, key: str) -> None:
        logger.debug("Unsetting config value", key=key)
        if key in self._config:
            del self._config[key]
            self._save()

    def list(self) -> dict[str, Any]:
        """List all configuration settings, local values taking precedence over global ones."""
        if self.is_global:
            logger.debug("Listing global config values", count=len(self._config))
            return self._config.copy()

        merged = self._global_config.copy()
        merged.update(self._config)
        logger.debug("Listing merged config values", count=len(merged))
        return merged

    def setting(self, key: str) -> Any:
        """Return the effective value of a known setting, converted to its type.

        Files edited by hand are checked here as well as on set.

        Raises:
            ValueError: If the key is unknown or the stored value is invalid
        """
        return coerce_setting(key, self.get(key, DEFAULTS.get(key)))

    def json_options(self) -> dict[str, Any]:
        """Return json.dumps options for rendering HAL documents."""
        return {
            "indent": self.setting("json.indent"),
            "ensure_ascii": self.setting("json.ensure_ascii"),
        }


def get_config(use_global: bool = False) -> Config:
    """Get a configuration instance.

    Args:
        use_global: If True, return global config. If False, return local config with global fallback.

    Returns:
        Config instance
    """
    return Config(use_global=use_global)
