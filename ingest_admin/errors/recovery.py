"""
Recovery strategy classifications for error handling.

These mixins tell the command layer whether re-running the tool can fix
the problem or whether an operator has to look at the root first.
"""


class RecoverableError(Exception):
    """Mixin for errors that a re-run (usually with resume) can clear."""

    recoverable = True


class UnrecoverableError(Exception):
    """Mixin for errors that require human intervention."""

    recoverable = False
