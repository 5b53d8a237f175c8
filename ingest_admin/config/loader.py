"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from ..errors import ConfigError
from .defaults import DefaultConfig, LayoutParams, LoggingParams, get_default_config
from .validation import ConfigValidator

CONFIG_FILENAME = "ingest_admin.yaml"


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_file: Optional[Path]
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_file: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance.

        Without an explicit file, ``config/ingest_admin.yaml`` under the
        working directory is used when present.
        """
        if config_file is None:
            candidate = Path.cwd() / "config" / CONFIG_FILENAME
            config_file = candidate if candidate.exists() else None

        return cls(
            config_file=Path(config_file) if config_file is not None else None,
            defaults=get_default_config(),
        )

    def load_file_config(self) -> dict[str, Any]:
        """Load overrides from the YAML config file, if any."""
        if self.config_file is None:
            return {}

        try:
            with open(self.config_file) as f:
                file_config = yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(
                f"Cannot read config file {self.config_file}: {e}",
                context={"config_file": str(self.config_file)},
            ) from e
        except yaml.YAMLError as e:
            raise ConfigError(
                f"Invalid YAML in config file {self.config_file}: {e}",
                context={"config_file": str(self.config_file)},
            ) from e

        if file_config is None:
            return {}
        if not isinstance(file_config, dict):
            raise ConfigError(
                f"Config file {self.config_file} must contain a mapping",
                context={"config_file": str(self.config_file)},
            )
        return file_config

    def merge_config(self, overrides: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Command-line overrides (highest priority)
        2. Config file values
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        config = self._deep_merge(config, self.load_file_config())

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def load(self, overrides: Optional[dict[str, Any]] = None) -> DefaultConfig:
        """Merge, validate and build the typed configuration.

        Raises:
            ConfigError: If any value fails validation
        """
        config = self.merge_config(overrides)
        errors = ConfigValidator.validate_config(config)
        if errors:
            details = "; ".join(f"{e.field}: {e.message}" for e in errors)
            raise ConfigError(f"Invalid configuration: {details}", errors=errors)
        return build_config(config)

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name, _field in obj.__dataclass_fields__.items():
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result


def build_config(config: dict[str, Any]) -> DefaultConfig:
    """Build a typed config from a merged dictionary, ignoring unknown keys."""
    layout = config.get("layout", {})
    logging_cfg = config.get("logging", {})
    return DefaultConfig(
        layout=LayoutParams(**{
            k: v for k, v in layout.items() if k in LayoutParams.__dataclass_fields__
        }),
        logging=LoggingParams(**{
            k: v for k, v in logging_cfg.items() if k in LoggingParams.__dataclass_fields__
        }),
    )
