"""
Lock transition: inbound to locked, exactly once, resumable.

The rename is the atomicity primitive; the state record only makes that
step resumable across restarts. PENDING is persisted strictly before the
rename is attempted and LOCKED/FAILED strictly after it returns, so a
resume run can tell "never started" from "may have happened".
"""

import os
from pathlib import Path
from typing import Optional, Union

from ..config.defaults import DefaultConfig
from ..errors import (
    AlreadyAttemptedError,
    InvalidRootError,
    RenameError,
    StateMismatchError,
    StateWriteError,
)
from ..logging.config import get_state_logger, log_state_transition
from ..utils.fs import atomic_rename
from .models import (
    RootLayout,
    RootPhase,
    RootStatus,
    StateRecord,
    TransitionAction,
    TransitionResult,
    TransitionStatus,
)
from .store import StateStore

UNKNOWN_STATE = "unknown"


class LockTransition:
    """Drives a root from inbound to locked using a StateStore."""

    def __init__(self, store: Optional[StateStore] = None,
                 layout: Optional[RootLayout] = None):
        self.layout = layout or RootLayout()
        self.store = store or StateStore(self.layout.params.state_filename)
        self.logger = get_state_logger(__name__)

    @classmethod
    def from_config(cls, config: DefaultConfig) -> "LockTransition":
        layout = RootLayout(config.layout)
        return cls(StateStore(config.layout.state_filename), layout)

    def transition(self, root: Union[str, Path], resume: bool = False) -> TransitionResult:
        """
        Move root/in to root/locked, or confirm it already happened.

        Args:
            root: Root directory under administration
            resume: Retry after a prior pending or failed attempt

        Returns:
            TransitionResult describing what this call did

        Raises:
            InvalidRootError: Root missing, not a directory or not writable
            StateReadError: State record unreadable; nothing was renamed
            StateMismatchError: Record says locked but root/locked is gone
            AlreadyAttemptedError: Prior attempt exists and resume is False
            RenameError: The rename failed; record is now FAILED
            StateWriteError: Record could not be written
        """
        root_path = self._check_root(root, writable=True)
        record = self.store.load(root_path)
        locked = self.layout.locked(root_path)

        if record is not None and record.status == TransitionStatus.LOCKED:
            if locked.is_dir():
                self.logger.info("Root already locked", root=str(root_path), resume=resume)
                return TransitionResult(
                    root=str(root_path),
                    action=TransitionAction.NOOP,
                    record=record,
                )

            inbound_exists = self.layout.inbound(root_path).exists()
            self.logger.error(
                "State record says locked but locked directory is missing",
                root=str(root_path),
                locked_path=str(locked),
                inbound_exists=inbound_exists
            )
            raise StateMismatchError(
                f"State record for {root_path} is locked but {locked} does not exist; "
                "refusing to re-lock, inspect the root manually",
                root=str(root_path),
                recorded_status=record.status.value,
                locked_exists=False,
                inbound_exists=inbound_exists,
            )

        if record is not None and not resume:
            self.logger.warning(
                "Prior attempt found, resume not requested",
                root=str(root_path),
                status=record.status.value,
                attempts=record.attempts
            )
            raise AlreadyAttemptedError(
                f"A previous transition of {root_path} is {record.status.value}; "
                "pass --resume to retry",
                root=str(root_path),
                status=record.status.value,
                context={"attempts": record.attempts, "error_detail": record.error_detail},
            )

        return self._attempt(root_path, record)

    def _attempt(self, root: Path, previous: Optional[StateRecord]) -> TransitionResult:
        """Write PENDING, rename, then write LOCKED or FAILED."""
        inbound = self.layout.inbound(root)
        locked = self.layout.locked(root)
        from_state = previous.status.value if previous else UNKNOWN_STATE

        pending = StateRecord(
            status=TransitionStatus.PENDING,
            root_path=str(root),
            attempts=(previous.attempts if previous else 0) + 1,
        )
        self.store.save(root, pending)
        log_state_transition(
            self.logger,
            root=str(root),
            from_state=from_state,
            to_state=TransitionStatus.PENDING.value,
            trigger="resume" if previous else "attempt",
            context={"attempt": pending.attempts}
        )

        action = TransitionAction.LOCKED
        try:
            atomic_rename(inbound, locked)
        except OSError as e:
            if not inbound.exists() and locked.is_dir():
                # An earlier run renamed but died before recording it
                action = TransitionAction.RECOVERED
                self.logger.info(
                    "Rename already completed by an earlier attempt",
                    root=str(root),
                    error=str(e)
                )
            else:
                self._record_failure(root, pending, e)
                raise RenameError(
                    f"Cannot rename {inbound} to {locked}: {e}",
                    root=str(root),
                    source=str(inbound),
                    target=str(locked),
                    errno=e.errno,
                ) from e

        final = pending.with_status(TransitionStatus.LOCKED)
        try:
            self.store.save(root, final)
        except StateWriteError as e:
            self.logger.error(
                "Locked directory in place but state record still pending",
                root=str(root),
                error=str(e)
            )
            raise StateWriteError(
                f"Rename of {inbound} succeeded but the locked state could not be "
                f"recorded: {e}; re-run with --resume to reconcile",
                target=e.target,
                after_rename=True,
                context={"root": str(root)},
            ) from e

        log_state_transition(
            self.logger,
            root=str(root),
            from_state=TransitionStatus.PENDING.value,
            to_state=TransitionStatus.LOCKED.value,
            trigger=action.value,
            context={"attempt": final.attempts}
        )
        return TransitionResult(root=str(root), action=action, record=final)

    def _record_failure(self, root: Path, pending: StateRecord, error: OSError) -> None:
        failed = pending.with_status(
            TransitionStatus.FAILED,
            error_kind=type(error).__name__,
            error_detail=str(error),
        )
        self.store.save(root, failed)
        log_state_transition(
            self.logger,
            root=str(root),
            from_state=TransitionStatus.PENDING.value,
            to_state=TransitionStatus.FAILED.value,
            trigger="rename_failed",
            context={
                "attempt": failed.attempts,
                "error_kind": failed.error_kind,
                "error_detail": failed.error_detail,
                "errno": error.errno,
            }
        )

    def inspect(self, root: Union[str, Path]) -> RootStatus:
        """
        Classify a root without changing anything.

        Raises:
            InvalidRootError: Root missing or not a directory
            StateReadError: State record unreadable
        """
        root_path = self._check_root(root, writable=False)
        record = self.store.load(root_path)
        inbound_exists = self.layout.inbound(root_path).exists()
        locked_exists = self.layout.locked(root_path).is_dir()

        if record is None:
            phase = RootPhase.UNKNOWN
        elif record.status == TransitionStatus.LOCKED:
            phase = RootPhase.LOCKED if locked_exists else RootPhase.MISMATCH
        else:
            phase = RootPhase(record.status.value)

        return RootStatus(
            root=str(root_path),
            phase=phase,
            inbound_exists=inbound_exists,
            locked_exists=locked_exists,
            record=record,
        )

    def is_ready(self, root: Union[str, Path]) -> bool:
        """Whether downstream ingestion may start on root/locked."""
        return self.inspect(root).ready

    def _check_root(self, root: Union[str, Path], writable: bool) -> Path:
        root_path = Path(root).absolute()

        if not root_path.exists():
            raise InvalidRootError(f"Root {root_path} does not exist", root=str(root_path))
        if not root_path.is_dir():
            raise InvalidRootError(f"Root {root_path} is not a directory", root=str(root_path))
        if writable and not os.access(root_path, os.W_OK | os.X_OK):
            raise InvalidRootError(f"Root {root_path} is not writable", root=str(root_path))

        return root_path
