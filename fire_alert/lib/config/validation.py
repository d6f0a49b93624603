"""Checks for fire alert monitor configuration data.

Errors make a configuration unusable; warnings point at settings that load
fine but are probably not what the operator wants.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
from urllib.parse import urlparse

import yaml
from pydantic import ValidationError

from ...models.app_configuration import AppConfiguration


KNOWN_SECTIONS = {"source", "notifications", "display", "simulation"}
KNOWN_KEYS = KNOWN_SECTIONS | {"enable_debug_logging"}

# Firebase sends a keep-alive event every 30 seconds on an idle stream
STREAM_KEEP_ALIVE_SECONDS = 30.0


class ConfigValidationError(Exception):
    """One configuration problem, optionally tied to a dotted key path."""

    def __init__(self, message: str, path: str = "", details: Optional[Dict] = None):
        self.message = message
        self.path = path
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        return f"{self.path}: {self.message}" if self.path else self.message


@dataclass
class ValidationResult:
    """Errors and warnings collected while checking a configuration."""

    errors: List[ConfigValidationError] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def error(self, message: str, path: str = "", details: Optional[Dict] = None) -> None:
        self.errors.append(ConfigValidationError(message, path, details))

    def warn(self, message: str, path: str = "") -> None:
        self.warnings.append(f"{path}: {message}" if path else message)

    def get_summary(self) -> Dict[str, Any]:
        return {
            "valid": self.is_valid,
            "error_count": len(self.errors),
            "warning_count": len(self.warnings),
            "errors": [str(e) for e in self.errors],
            "warnings": list(self.warnings),
        }


def filter_known_keys(config_data: Dict[str, Any]) -> Dict[str, Any]:
    """Drop top-level keys the configuration model does not know."""
    return {key: value for key, value in config_data.items() if key in KNOWN_KEYS}


class ConfigValidator:
    """Validates raw configuration mappings and YAML files.

    In strict mode unknown top-level keys are errors; otherwise they are
    reported as warnings and ignored when the configuration is built.
    """

    def __init__(self, strict_mode: bool = False):
        self.strict_mode = strict_mode

    def validate_config(self, config_data: Any) -> ValidationResult:
        result = ValidationResult()

        if not isinstance(config_data, dict):
            result.error(f"expected a mapping at the top level, got {type(config_data).__name__}")
            return result

        self._check_keys(config_data, result)

        configuration = self._check_schema(filter_known_keys(config_data), result)
        if configuration is not None:
            self._check_source(configuration, result)
            self._check_notifications(configuration, result)

        return result

    def validate_yaml_file(self, file_path: Union[str, Path]) -> ValidationResult:
        path = Path(file_path)

        if not path.is_file():
            result = ValidationResult()
            result.error(f"no configuration file at {path}")
            return result

        try:
            config_data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            result = ValidationResult()
            result.error(f"malformed YAML: {e}")
            return result

        return self.validate_config(config_data or {})

    def _check_keys(self, config_data: Dict[str, Any], result: ValidationResult) -> None:
        for section in sorted(KNOWN_SECTIONS & config_data.keys()):
            if not isinstance(config_data[section], dict):
                result.error("section must be a mapping", path=section)

        unknown = sorted(set(config_data) - KNOWN_KEYS)
        if not unknown:
            return

        if self.strict_mode:
            for key in unknown:
                result.error("unknown key", path=key)
        else:
            result.warn(f"ignoring unknown keys: {', '.join(unknown)}")

    def _check_schema(
        self,
        config_data: Dict[str, Any],
        result: ValidationResult
    ) -> Optional[AppConfiguration]:
        try:
            return AppConfiguration(**config_data)
        except ValidationError as e:
            for problem in e.errors():
                result.error(
                    problem["msg"],
                    path=".".join(str(part) for part in problem["loc"]),
                    details={"type": problem["type"], "input": problem.get("input")}
                )
            return None

    def _check_source(self, configuration: AppConfiguration, result: ValidationResult) -> None:
        source = configuration.source

        if source.database_url is None:
            result.warn("no database URL configured; only demo mode is available",
                        path="source.database_url")
        else:
            url = urlparse(source.database_url)
            if not url.netloc:
                result.error("database URL has no host", path="source.database_url")
            elif url.scheme != "https":
                result.warn("database URL does not use https", path="source.database_url")

        if source.read_timeout_seconds <= STREAM_KEEP_ALIVE_SECONDS:
            result.warn(
                f"{source.read_timeout_seconds:g}s read timeout will expire between "
                f"keep-alive events sent every {STREAM_KEEP_ALIVE_SECONDS:g}s",
                path="source.read_timeout_seconds"
            )

    def _check_notifications(self, configuration: AppConfiguration, result: ValidationResult) -> None:
        if not configuration.notifications.enabled:
            result.warn("alerts will only be logged", path="notifications.enabled")

        number = configuration.display.fire_station_number
        if not number.replace("+", "").replace(" ", "").isdigit():
            result.warn(f"'{number}' does not look like a phone number",
                        path="display.fire_station_number")


def validate_config_dict(config_data: Dict[str, Any], strict: bool = False) -> ValidationResult:
    return ConfigValidator(strict_mode=strict).validate_config(config_data)


def validate_config_file(file_path: Union[str, Path], strict: bool = False) -> ValidationResult:
    return ConfigValidator(strict_mode=strict).validate_yaml_file(file_path)


def generate_example_config() -> Dict[str, Any]:
    """Default settings as a plain mapping, ready to be written as YAML."""
    return AppConfiguration().export_dict()
