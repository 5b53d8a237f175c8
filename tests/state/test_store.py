"""Tests for the state record store."""

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from ingest_admin.errors import StateIOError, StateReadError, StateWriteError
from ingest_admin.state.models import StateRecord, TransitionStatus
from ingest_admin.state.store import StateStore


class TestStateStore:
    """Test StateStore load/save/clear."""

    def test_load_missing_record_returns_none(self, tmp_path: Path, store: StateStore):
        assert store.load(tmp_path) is None

    def test_path_for(self, tmp_path: Path):
        assert StateStore().path_for(tmp_path) == tmp_path / "ingest.state.json"
        assert StateStore("custom.json").path_for(tmp_path) == tmp_path / "custom.json"

    def test_save_then_load(self, tmp_path: Path, store: StateStore):
        record = StateRecord(
            status=TransitionStatus.FAILED,
            root_path=str(tmp_path),
            attempts=3,
            error_kind="PermissionError",
            error_detail="[Errno 13] Permission denied",
        )

        store.save(tmp_path, record)
        loaded = store.load(tmp_path)

        assert loaded == record

    def test_saved_file_is_plain_json(self, tmp_path: Path, store: StateStore):
        store.save(tmp_path, StateRecord(status=TransitionStatus.LOCKED, root_path=str(tmp_path)))

        data = json.loads((tmp_path / "ingest.state.json").read_text())

        assert data["status"] == "locked"
        assert data["root_path"] == str(tmp_path)

    def test_save_overwrites_whole_record(self, tmp_path: Path, store: StateStore):
        store.save(tmp_path, StateRecord(
            status=TransitionStatus.FAILED, root_path="x",
            error_kind="OSError", error_detail="boom",
        ))
        store.save(tmp_path, StateRecord(status=TransitionStatus.LOCKED, root_path="x"))

        loaded = store.load(tmp_path)
        assert loaded.status == TransitionStatus.LOCKED
        assert loaded.error_detail is None

    def test_save_leaves_no_temp_files(self, tmp_path: Path, store: StateStore):
        store.save(tmp_path, StateRecord(status=TransitionStatus.PENDING, root_path="x"))
        store.save(tmp_path, StateRecord(status=TransitionStatus.LOCKED, root_path="x"))

        assert sorted(os.listdir(tmp_path)) == ["ingest.state.json"]

    def test_failed_replace_keeps_previous_record(self, tmp_path: Path, store: StateStore):
        store.save(tmp_path, StateRecord(status=TransitionStatus.PENDING, root_path="x"))

        with patch("ingest_admin.utils.fs.os.replace", side_effect=OSError(28, "No space left on device")):
            with pytest.raises(StateWriteError) as exc_info:
                store.save(tmp_path, StateRecord(status=TransitionStatus.LOCKED, root_path="x"))

        assert exc_info.value.operation == "save"
        assert exc_info.value.target == str(tmp_path / "ingest.state.json")
        assert isinstance(exc_info.value.__cause__, OSError)
        assert store.load(tmp_path).status == TransitionStatus.PENDING
        assert sorted(os.listdir(tmp_path)) == ["ingest.state.json"]

    def test_save_into_missing_directory_fails(self, tmp_path: Path, store: StateStore):
        with pytest.raises(StateWriteError):
            store.save(tmp_path / "missing", StateRecord(status=TransitionStatus.PENDING, root_path="x"))

    @pytest.mark.parametrize("content", [
        "",
        "{not json",
        "[]",
        '{"status": "maybe"}',
        '{"root_path": "/r"}',
    ])
    def test_malformed_record_raises(self, tmp_path: Path, store: StateStore, content: str):
        (tmp_path / "ingest.state.json").write_text(content)

        with pytest.raises(StateReadError) as exc_info:
            store.load(tmp_path)

        assert isinstance(exc_info.value, StateIOError)
        assert exc_info.value.operation == "load"

    @pytest.mark.parametrize("content", [
        b"\xff\xfe",
        b'{"status": "pending\xff"}',
    ])
    def test_invalid_utf8_record_raises(self, tmp_path: Path, store: StateStore, content: bytes):
        (tmp_path / "ingest.state.json").write_bytes(content)

        with pytest.raises(StateReadError) as exc_info:
            store.load(tmp_path)

        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)
        assert exc_info.value.target == str(tmp_path / "ingest.state.json")

    def test_unreadable_record_raises(self, tmp_path: Path, store: StateStore):
        # A directory in place of the state file cannot be read
        (tmp_path / "ingest.state.json").mkdir()

        with pytest.raises(StateReadError):
            store.load(tmp_path)

    def test_clear(self, tmp_path: Path, store: StateStore):
        store.save(tmp_path, StateRecord(status=TransitionStatus.FAILED, root_path="x"))

        assert store.clear(tmp_path) is True
        assert store.load(tmp_path) is None
        assert store.clear(tmp_path) is False
