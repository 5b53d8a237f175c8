"""
Lock transition error classifications.

Every error carries the root it concerns plus enough detail for the
operator to decide whether to re-invoke with resume.
"""

from typing import Any, Optional

from .recovery import RecoverableError, UnrecoverableError


class TransitionError(Exception):
    """Base class for failures of a lock transition."""

    def __init__(self, message: str, root: Optional[str] = None,
                 context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.root = root
        self.context = context or {}


class AlreadyAttemptedError(TransitionError, RecoverableError):
    """A prior attempt exists and resume was not requested."""

    def __init__(self, message: str, status: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.status = status


class StateMismatchError(TransitionError, UnrecoverableError):
    """Persisted state disagrees with the filesystem."""

    def __init__(self, message: str, recorded_status: Optional[str] = None,
                 locked_exists: bool = False, inbound_exists: bool = False, **kwargs):
        super().__init__(message, **kwargs)
        self.recorded_status = recorded_status
        self.locked_exists = locked_exists
        self.inbound_exists = inbound_exists


class RenameError(TransitionError, RecoverableError):
    """The inbound to locked rename failed; wraps the OS error."""

    def __init__(self, message: str, source: Optional[str] = None,
                 target: Optional[str] = None, errno: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.source = source
        self.target = target
        self.errno = errno


class InvalidRootError(TransitionError, UnrecoverableError):
    """Root does not exist, is not a directory or is not writable."""
