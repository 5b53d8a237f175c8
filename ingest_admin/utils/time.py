"""Wall-clock helpers for state record timestamps."""

from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Current wall-clock time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def format_timestamp(ts: Optional[datetime] = None) -> str:
    """
    Format a timestamp as ISO-8601 UTC.

    Naive datetimes are assumed to already be UTC.
    """
    if ts is None:
        ts = utc_now()
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc).isoformat()


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 string back into an aware datetime; None passes through."""
    if not value:
        return None
    ts = datetime.fromisoformat(value)
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts
