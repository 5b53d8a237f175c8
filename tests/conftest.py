"""Pytest configuration and shared fixtures."""

from pathlib import Path
from unittest.mock import Mock

import pytest

from ingest_admin.state.models import RootLayout
from ingest_admin.state.store import StateStore
from ingest_admin.state.transition import LockTransition

INBOUND_FILES = {
    "orders.csv": "id,sku,qty\n1,A-100,3\n2,B-200,1\n",
    "nested/prices.json": '{"A-100": 12.5}\n',
}


def make_inbound(root: Path) -> Path:
    """Create root/in with the sample files."""
    inbound = root / "in"
    for rel, content in INBOUND_FILES.items():
        target = inbound / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content)
    return inbound


def snapshot(directory: Path) -> dict[str, str]:
    """Relative path -> content for every file under directory."""
    return {
        str(p.relative_to(directory)): p.read_text()
        for p in sorted(directory.rglob("*")) if p.is_file()
    }


@pytest.fixture
def root(tmp_path: Path) -> Path:
    """Fresh root with inbound data and no state record."""
    root_dir = tmp_path / "root"
    root_dir.mkdir()
    make_inbound(root_dir)
    return root_dir


@pytest.fixture
def store() -> StateStore:
    return StateStore()


@pytest.fixture
def lock(store: StateStore) -> LockTransition:
    return LockTransition(store=store, layout=RootLayout())


@pytest.fixture
def log_messages() -> list:
    return []


@pytest.fixture
def mock_logger(log_messages: list) -> Mock:
    """Logger double recording (level, message, kwargs); bind returns a child recorder."""

    def make(bound: dict) -> Mock:
        logger = Mock()

        def recorder(level):
            def record(message, **kwargs):
                log_messages.append({
                    "level": level,
                    "message": message,
                    "kwargs": {**bound, **kwargs},
                })
            return record

        for level in ("debug", "info", "warning", "error"):
            setattr(logger, level, recorder(level))
        logger.bind = lambda **kwargs: make({**bound, **kwargs})
        return logger

    return make({})
