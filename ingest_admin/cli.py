"""
Command line front-end for the lock transition.

    ingest-admin ROOT [--resume] [--status] [--config FILE]
"""
import argparse
import json
import sys
from pathlib import Path
from typing import Any, Optional

from .config.loader import ConfigLoader
from .errors import (
    AlreadyAttemptedError,
    ConfigError,
    InvalidRootError,
    RenameError,
    StateIOError,
    StateMismatchError,
)
from .logging.config import configure_logging, get_logger
from .state.models import RootPhase
from .state.transition import LockTransition

EXIT_OK = 0
EXIT_RENAME_FAILED = 1
EXIT_ALREADY_ATTEMPTED = 2
EXIT_STATE_MISMATCH = 3
EXIT_STATE_IO = 4
EXIT_USAGE = 5

# Checked in order, first match wins
EXIT_CODES: list[tuple[type, int]] = [
    (RenameError, EXIT_RENAME_FAILED),
    (AlreadyAttemptedError, EXIT_ALREADY_ATTEMPTED),
    (StateMismatchError, EXIT_STATE_MISMATCH),
    (StateIOError, EXIT_STATE_IO),
    (InvalidRootError, EXIT_USAGE),
    (ConfigError, EXIT_USAGE),
]

HANDLED_ERRORS = tuple(error_type for error_type, _ in EXIT_CODES)


def exit_code_for(error: BaseException) -> int:
    """Map an error kind to the process exit code."""
    for error_type, code in EXIT_CODES:
        if isinstance(error, error_type):
            return code
    raise TypeError(f"No exit code for {type(error).__name__}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ingest-admin",
        description="Lock an inbound ingestion directory (ROOT/in -> ROOT/locked)."
    )
    parser.add_argument("root", type=Path, help="Root directory under administration")
    parser.add_argument(
        "--resume",
        action="store_true",
        help="Retry after a previous pending or failed transition"
    )
    parser.add_argument(
        "--status",
        action="store_true",
        help="Print the current state of ROOT as JSON and exit without changes"
    )
    parser.add_argument("--config", type=Path, default=None, help="YAML configuration file")
    parser.add_argument("--log-level", default=None, help="Logging level (default: INFO)")
    parser.add_argument("--json-logs", action="store_true", help="Emit logs as JSON")
    return parser


def _cli_overrides(args: argparse.Namespace) -> dict[str, Any]:
    logging_overrides: dict[str, Any] = {}
    if args.log_level:
        logging_overrides["level"] = args.log_level
    if args.json_logs:
        logging_overrides["format_json"] = True
    return {"logging": logging_overrides} if logging_overrides else {}


def main(argv: Optional[list[str]] = None) -> int:
    """Run the admin command and return the process exit code."""
    args = build_parser().parse_args(argv)

    try:
        config = ConfigLoader.create(args.config).load(_cli_overrides(args))
    except ConfigError as e:
        print(f"ingest-admin: {e}", file=sys.stderr)
        return exit_code_for(e)

    configure_logging(
        level=config.logging.level,
        format_json=config.logging.format_json,
        include_timestamp=config.logging.include_timestamp,
    )
    logger = get_logger("ingest_admin.cli")
    lock = LockTransition.from_config(config)

    try:
        if args.status:
            status = lock.inspect(args.root)
            print(json.dumps(status.to_dict(), indent=2))
            return EXIT_STATE_MISMATCH if status.phase == RootPhase.MISMATCH else EXIT_OK

        result = lock.transition(args.root, resume=args.resume)
    except HANDLED_ERRORS as e:
        code = exit_code_for(e)
        cause = e.__cause__
        logger.error(
            "Lock transition failed",
            root=str(args.root),
            error_kind=type(e).__name__,
            error=str(e),
            cause=f"{type(cause).__name__}: {cause}" if cause else None,
            exit_code=code
        )
        return code

    logger.info(
        "Lock transition complete",
        root=result.root,
        action=result.action.value,
        attempts=result.record.attempts
    )
    return EXIT_OK


def main_entry() -> None:
    """Console script entry point."""
    sys.exit(main())
