"""
Data models for the lock transition.

This module defines the persisted state record, the fixed per-root layout
and the immutable results returned to callers.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from ..config.defaults import LayoutParams
from ..utils.time import format_timestamp, parse_timestamp, utc_now

SCHEMA_VERSION = 1


class TransitionStatus(str, Enum):
    """Statuses a state record can hold."""
    PENDING = "pending"
    LOCKED = "locked"
    FAILED = "failed"


class RootPhase(str, Enum):
    """Observed phase of a root, combining record and filesystem."""
    UNKNOWN = "unknown"
    PENDING = "pending"
    LOCKED = "locked"
    FAILED = "failed"
    MISMATCH = "mismatch"


class TransitionAction(str, Enum):
    """What a successful transition call did."""
    LOCKED = "locked"          # Rename performed by this call
    RECOVERED = "recovered"    # Rename found already done by an earlier attempt
    NOOP = "noop"              # Root already locked, nothing to do


@dataclass(frozen=True)
class StateRecord:
    """Persisted marker of the last known transition outcome for a root."""

    status: TransitionStatus
    root_path: str
    attempts: int = 0
    updated_at: datetime = field(default_factory=utc_now)
    error_kind: Optional[str] = None
    error_detail: Optional[str] = None
    version: int = SCHEMA_VERSION

    def with_status(self, status: TransitionStatus,
                    error_kind: Optional[str] = None,
                    error_detail: Optional[str] = None,
                    new_attempt: bool = False) -> 'StateRecord':
        """Create new record with updated status; error fields reset unless given."""
        return StateRecord(
            status=status,
            root_path=self.root_path,
            attempts=self.attempts + 1 if new_attempt else self.attempts,
            updated_at=utc_now(),
            error_kind=error_kind,
            error_detail=error_detail,
            version=self.version,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "status": self.status.value,
            "root_path": self.root_path,
            "attempts": self.attempts,
            "updated_at": format_timestamp(self.updated_at),
            "error_kind": self.error_kind,
            "error_detail": self.error_detail,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'StateRecord':
        """
        Build a record from its JSON form.

        Raises:
            ValueError: If a required field is missing or holds a bad value
        """
        if not isinstance(data, dict):
            raise ValueError("state record must be a JSON object")
        if "status" not in data:
            raise ValueError("state record has no status")

        status = TransitionStatus(data["status"])
        attempts = data.get("attempts", 0)
        if isinstance(attempts, bool) or not isinstance(attempts, int) or attempts < 0:
            raise ValueError(f"invalid attempts value: {attempts!r}")

        return cls(
            status=status,
            root_path=str(data.get("root_path", "")),
            attempts=attempts,
            updated_at=parse_timestamp(data.get("updated_at")) or utc_now(),
            error_kind=data.get("error_kind"),
            error_detail=data.get("error_detail"),
            version=int(data.get("version", SCHEMA_VERSION)),
        )


@dataclass(frozen=True)
class RootLayout:
    """Resolves the per-root paths from layout names."""

    params: LayoutParams = field(default_factory=LayoutParams)

    def inbound(self, root: Path) -> Path:
        return Path(root) / self.params.inbound_dirname

    def locked(self, root: Path) -> Path:
        return Path(root) / self.params.locked_dirname

    def state_file(self, root: Path) -> Path:
        return Path(root) / self.params.state_filename


@dataclass(frozen=True)
class TransitionResult:
    """Outcome of a successful transition call."""
    root: str
    action: TransitionAction
    record: StateRecord

    @property
    def changed(self) -> bool:
        """Whether this call wrote anything."""
        return self.action != TransitionAction.NOOP


@dataclass(frozen=True)
class RootStatus:
    """Read-only snapshot of a root for status reporting."""
    root: str
    phase: RootPhase
    inbound_exists: bool
    locked_exists: bool
    record: Optional[StateRecord] = None

    @property
    def ready(self) -> bool:
        """Downstream readiness: record locked and locked directory present."""
        return self.phase == RootPhase.LOCKED

    def to_dict(self) -> dict[str, Any]:
        return {
            "root": self.root,
            "phase": self.phase.value,
            "ready": self.ready,
            "inbound_exists": self.inbound_exists,
            "locked_exists": self.locked_exists,
            "record": self.record.to_dict() if self.record else None,
        }
