#!/usr/bin/env python3
"""
Basic Usage Example - Ingest Admin Lock Transition

This script demonstrates the lock transition on a throwaway root. It shows how to:
- Lock a fresh root
- Re-run safely (no-op)
- Recover from a failed rename with resume
- Check downstream readiness

Run: python examples/basic_usage.py
"""

import json
import tempfile
from pathlib import Path

from ingest_admin.errors import AlreadyAttemptedError, RenameError
from ingest_admin.logging import configure_logging
from ingest_admin.state.transition import LockTransition


def create_sample_root(base: Path, name: str) -> Path:
    """Create a root with a few inbound files."""
    root = base / name
    (root / "in").mkdir(parents=True)
    (root / "in" / "orders.csv").write_text("id,sku,qty\n1,A-100,3\n")
    (root / "in" / "prices.json").write_text('{"A-100": 12.5}\n')
    return root


def show_status(lock: LockTransition, root: Path) -> None:
    print(json.dumps(lock.inspect(root).to_dict(), indent=2))


def main():
    """Main demo function."""
    configure_logging(level="INFO")
    lock = LockTransition()

    with tempfile.TemporaryDirectory() as tmp:
        base = Path(tmp)

        print("1. Locking a fresh root...")
        root = create_sample_root(base, "fresh")
        result = lock.transition(root)
        print(f"   Action: {result.action.value}, ready: {lock.is_ready(root)}")
        print()

        print("2. Running again...")
        result = lock.transition(root)
        print(f"   Action: {result.action.value}")
        print()

        print("3. Locked path blocked by a stray file...")
        root = create_sample_root(base, "blocked")
        (root / "locked").write_text("leftover")
        try:
            lock.transition(root)
        except RenameError as e:
            print(f"   RenameError: {e}")
        show_status(lock, root)
        print()

        print("4. Retrying without resume...")
        try:
            lock.transition(root)
        except AlreadyAttemptedError as e:
            print(f"   AlreadyAttemptedError: {e}")
        print()

        print("5. Removing the stray file and retrying with resume...")
        (root / "locked").unlink()
        result = lock.transition(root, resume=True)
        print(f"   Action: {result.action.value}, attempts: {result.record.attempts}")
        show_status(lock, root)
        print()

    print("✅ Demo completed successfully!")


if __name__ == "__main__":
    main()
