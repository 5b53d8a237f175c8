"""Default configuration parameters for the ingest admin tool."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LayoutParams:
    """Names of the per-root entries, all relative to the root."""
    inbound_dirname: str = "in"                      # Data awaiting ingestion
    locked_dirname: str = "locked"                   # Data claimed for processing
    state_filename: str = "ingest.state.json"        # Persisted state record


@dataclass(frozen=True)
class LoggingParams:
    """Logging output parameters."""
    level: str = "INFO"
    format_json: bool = False
    include_timestamp: bool = True


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    layout: LayoutParams
    logging: LoggingParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        layout=LayoutParams(),
        logging=LoggingParams(),
    )
