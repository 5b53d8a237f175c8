"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def _is_plain_name(value: Any) -> bool:
        return (
            isinstance(value, str)
            and value not in ("", ".", "..")
            and "/" not in value
            and "\\" not in value
            and "\x00" not in value
        )

    @staticmethod
    def validate_layout_params(params: Any) -> list[ValidationError]:
        """Validate layout names."""
        if not isinstance(params, dict):
            return [ValidationError(field="layout", message="Must be a mapping", value=params)]

        errors = []
        names = {}

        for field_name in ("inbound_dirname", "locked_dirname", "state_filename"):
            if field_name not in params:
                continue
            value = params[field_name]
            if not ConfigValidator._is_plain_name(value):
                errors.append(ValidationError(
                    field=field_name,
                    message="Must be a single non-empty path component",
                    value=value
                ))
            else:
                names[field_name] = value

        if len(set(names.values())) != len(names):
            errors.append(ValidationError(
                field="layout",
                message="Inbound, locked and state names must be distinct",
                value=names
            ))

        return errors

    @staticmethod
    def validate_logging_params(params: Any) -> list[ValidationError]:
        """Validate logging parameters."""
        if not isinstance(params, dict):
            return [ValidationError(field="logging", message="Must be a mapping", value=params)]

        errors = []

        if "level" in params:
            value = params["level"]
            if not isinstance(value, str) or value.upper() not in LOG_LEVELS:
                errors.append(ValidationError(
                    field="level",
                    message=f"Must be one of {', '.join(LOG_LEVELS)}",
                    value=value
                ))

        for field_name in ("format_json", "include_timestamp"):
            if field_name in params and not isinstance(params[field_name], bool):
                errors.append(ValidationError(
                    field=field_name,
                    message="Must be a boolean",
                    value=params[field_name]
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "layout" in config:
            errors.extend(ConfigValidator.validate_layout_params(config["layout"]))

        if "logging" in config:
            errors.extend(ConfigValidator.validate_logging_params(config["logging"]))

        return errors
