"""
System failure error classifications.

These exceptions represent failures of the state file or of the tool's
own configuration rather than of the transition itself.
"""

from typing import Any, Optional


class SystemFailureError(Exception):
    """Base class for system failures."""

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class StateIOError(SystemFailureError):
    """State file could not be read or written."""

    def __init__(self, message: str, operation: Optional[str] = None,
                 target: Optional[str] = None, after_rename: bool = False, **kwargs):
        super().__init__(message, **kwargs)
        self.operation = operation
        self.target = target
        self.after_rename = after_rename
        # A write that failed after the rename leaves a pending record that
        # a resume run converges.
        self.recoverable = after_rename


class StateReadError(StateIOError):
    """State file exists but could not be read or decoded."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("operation", "load")
        super().__init__(message, **kwargs)


class StateWriteError(StateIOError):
    """State file could not be written."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("operation", "save")
        super().__init__(message, **kwargs)


class ConfigError(SystemFailureError):
    """Configuration file is unreadable or holds invalid values."""

    def __init__(self, message: str, errors: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = errors or []
