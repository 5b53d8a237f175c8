"""
structlog setup for the ingest admin tool.

Log records go through the stdlib logging module to stderr; stdout is kept
for command output such as the --status report.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger

BASE_PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
]


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
) -> None:
    """
    Configure structlog and the stdlib root logger.

    Args:
        level: Logging level name, case-insensitive
        format_json: Render JSON lines instead of console key=value output
        include_timestamp: Prefix each entry with an ISO timestamp
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(level=log_level, stream=sys.stderr, format="%(message)s")
    logging.getLogger().setLevel(log_level)

    processors = list(BASE_PROCESSORS)
    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))
    processors.append(
        structlog.processors.JSONRenderer() if format_json
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """Structlog logger for a module, usually called with __name__."""
    return structlog.get_logger(name)


def get_state_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger for lock transition state changes.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger bound with the lock transition subsystem
    """
    logger = get_logger(name)

    return logger.bind(
        subsystem="lock_transition",
        audit_trail=True
    )


def log_state_transition(
    logger: FilteringBoundLogger,
    root: str,
    from_state: str,
    to_state: str,
    trigger: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a state record change with standardized format.

    Args:
        logger: Structlog logger instance
        root: Root directory whose record changed
        from_state: Recorded status before the change ("unknown" if none)
        to_state: Recorded status after the change
        trigger: What triggered the change
        context: Additional context data
    """
    bound_logger = logger.bind(
        root=root,
        from_state=from_state,
        to_state=to_state,
        trigger=trigger,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    if to_state == "failed":
        bound_logger.warning("State transition")
    else:
        bound_logger.info("State transition")
