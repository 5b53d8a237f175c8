"""
Error classification for the lock transition control path.

Transition errors are reported to the operator, who decides whether to
re-run with resume. System failures cover state persistence problems.
"""

from .recovery import (
    RecoverableError,
    UnrecoverableError,
)
from .system_failures import (
    SystemFailureError,
    StateIOError,
    StateReadError,
    StateWriteError,
    ConfigError,
)
from .transition import (
    TransitionError,
    AlreadyAttemptedError,
    StateMismatchError,
    RenameError,
    InvalidRootError,
)

__all__ = [
    # Recovery Categories
    "RecoverableError",
    "UnrecoverableError",
    # System Failures
    "SystemFailureError",
    "StateIOError",
    "StateReadError",
    "StateWriteError",
    "ConfigError",
    # Transition Errors
    "TransitionError",
    "AlreadyAttemptedError",
    "StateMismatchError",
    "RenameError",
    "InvalidRootError",
]
