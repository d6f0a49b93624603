"""YAML configuration for the fire alert monitor.

Settings are read from a YAML file, overlaid with ``FIRE_ALERT_*``
environment variables and validated into an ``AppConfiguration``:

- ``FIRE_ALERT_DATABASE_URL`` sets ``source.database_url``
- ``FIRE_ALERT_DATABASE_PATH`` sets ``source.path``
- ``FIRE_ALERT_DEBUG`` sets ``enable_debug_logging``

Usage:
    from fire_alert.lib.config import ConfigManager

    manager = ConfigManager("config.yaml")
    configuration = manager.load_config()

    # Write a default file on first run
    manager = ConfigManager("config.yaml", create_if_missing=True)
"""

import copy
import os
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Union

import yaml

from ...models.app_configuration import AppConfiguration
from .validation import (
    ConfigValidator,
    ValidationResult,
    filter_known_keys,
    generate_example_config
)


ENV_PREFIX = "FIRE_ALERT_"

YAML_HEADER = """\
# Fire Alert Monitor Configuration
#
# Sensor readings are read from <database_url>/<path>.json:
#   FireSensor:  0 = fire, 1 = no fire
#   SmokeSensor: smoke level (alert above 1000)
#   Temperature: degrees Celsius (alert above 50)

"""


class ConfigurationError(Exception):
    """Configuration could not be read, validated or written."""


def _env_flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


# variable suffix -> (key path, converter)
ENV_OVERRIDES: Dict[str, Tuple[Tuple[str, ...], Callable[[str], Any]]] = {
    "DATABASE_URL": (("source", "database_url"), str),
    "DATABASE_PATH": (("source", "path"), str),
    "DEBUG": (("enable_debug_logging",), _env_flag),
}


def merge_sections(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay ``override`` on a copy of ``base``, section by section."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_sections(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def apply_env_overrides(
    config_data: Dict[str, Any],
    environ: Optional[Mapping[str, str]] = None
) -> Dict[str, Any]:
    """Return a copy of ``config_data`` with environment overrides applied."""
    environ = os.environ if environ is None else environ
    result = copy.deepcopy(config_data)

    for suffix, (key_path, convert) in ENV_OVERRIDES.items():
        raw = environ.get(ENV_PREFIX + suffix)
        if raw is None:
            continue

        section = result
        for key in key_path[:-1]:
            if not isinstance(section.get(key), dict):
                section[key] = {}
            section = section[key]
        section[key_path[-1]] = convert(raw)

    return result


def build_configuration(config_data: Dict[str, Any], strict: bool = False) -> AppConfiguration:
    """Construct the configuration model, ignoring unknown keys unless strict."""
    if not strict:
        config_data = filter_known_keys(config_data)
    try:
        return AppConfiguration(**config_data)
    except ValueError as e:
        raise ConfigurationError(f"Invalid configuration: {e}")


def to_yaml(config_data: Dict[str, Any]) -> str:
    return YAML_HEADER + yaml.safe_dump(
        config_data,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True
    )


class ConfigManager:
    """Loads, validates and saves one YAML configuration file."""

    def __init__(
        self,
        config_path: Union[str, Path],
        validate: bool = True,
        strict_validation: bool = False,
        create_if_missing: bool = False
    ):
        self.config_path = Path(config_path)
        self.validate = validate
        self.strict_validation = strict_validation

        self.current: Optional[AppConfiguration] = None
        self.loaded_at: Optional[datetime] = None
        self.validation: Optional[ValidationResult] = None
        self.on_validation_warning: Optional[Callable[[ValidationResult], None]] = None

        if create_if_missing and not self.config_path.exists():
            self._write(generate_example_config())

    def load_config(self) -> AppConfiguration:
        """Read the file, apply environment overrides and validate."""
        self.current = self._build(apply_env_overrides(self._read()))
        self.loaded_at = datetime.now()
        return self.current

    def save_config(self, configuration: AppConfiguration) -> None:
        self._write(configuration.export_dict())
        self.current = configuration
        self.loaded_at = datetime.now()

    def merge_config(self, override_data: Dict[str, Any]) -> AppConfiguration:
        """Configuration with ``override_data`` laid over the current one."""
        if self.current is None:
            base = generate_example_config()
        else:
            base = self.current.export_dict()
        return self._build(merge_sections(base, override_data))

    def _build(self, config_data: Dict[str, Any]) -> AppConfiguration:
        if self.validate:
            result = ConfigValidator(strict_mode=self.strict_validation).validate_config(config_data)
            self.validation = result
            if not result.is_valid:
                raise ConfigurationError(f"Invalid configuration: {result.errors[0]}")
            if result.warnings and self.on_validation_warning:
                self.on_validation_warning(result)

        return build_configuration(config_data, strict=self.strict_validation)

    def _read(self) -> Dict[str, Any]:
        if not self.config_path.exists():
            raise ConfigurationError(f"No configuration file at {self.config_path}")

        try:
            data = yaml.safe_load(self.config_path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Malformed YAML in {self.config_path}: {e}")
        except OSError as e:
            raise ConfigurationError(f"Cannot read {self.config_path}: {e}")

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"{self.config_path} must contain a mapping")
        return data

    def _write(self, config_data: Dict[str, Any]) -> None:
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            self.config_path.write_text(to_yaml(config_data), encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Cannot write {self.config_path}: {e}")


def load_configuration(config_path: Union[str, Path], validate: bool = True) -> AppConfiguration:
    return ConfigManager(config_path, validate=validate).load_config()


def load_default_configuration() -> AppConfiguration:
    """Default configuration with environment overrides applied."""
    return build_configuration(apply_env_overrides({}))


def export_configuration(config: AppConfiguration, config_path: Union[str, Path]) -> None:
    ConfigManager(config_path, validate=False).save_config(config)


def create_default_config_file(config_path: Union[str, Path]) -> None:
    """Write the default configuration unless the file already exists."""
    ConfigManager(config_path, validate=False, create_if_missing=True)


__all__ = [
    "ConfigManager",
    "ConfigurationError",
    "ValidationResult",
    "apply_env_overrides",
    "build_configuration",
    "create_default_config_file",
    "export_configuration",
    "load_configuration",
    "load_default_configuration",
    "merge_sections",
]
