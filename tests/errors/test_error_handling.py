"""
Error classification tests.

Covers the error hierarchy, recovery flags and the details each error
carries for the operator.
"""

import errno

from ingest_admin.errors import (
    AlreadyAttemptedError,
    ConfigError,
    InvalidRootError,
    RecoverableError,
    RenameError,
    StateIOError,
    StateMismatchError,
    StateReadError,
    StateWriteError,
    SystemFailureError,
    TransitionError,
    UnrecoverableError,
)


class TestErrorClassification:
    """Test error classification system."""

    def test_transition_error_hierarchy(self):
        for error_type in (AlreadyAttemptedError, StateMismatchError, RenameError, InvalidRootError):
            error = error_type("boom", root="/r")
            assert isinstance(error, TransitionError)
            assert error.root == "/r"
            assert error.context == {}
            assert str(error) == "boom"

    def test_recovery_flags(self):
        assert isinstance(AlreadyAttemptedError("x"), RecoverableError)
        assert isinstance(RenameError("x"), RecoverableError)
        assert isinstance(StateMismatchError("x"), UnrecoverableError)
        assert isinstance(InvalidRootError("x"), UnrecoverableError)
        assert AlreadyAttemptedError("x").recoverable is True
        assert StateMismatchError("x").recoverable is False

    def test_rename_error_details(self):
        error = RenameError(
            "rename failed",
            root="/r",
            source="/r/in",
            target="/r/locked",
            errno=errno.EXDEV,
        )
        assert error.source == "/r/in"
        assert error.target == "/r/locked"
        assert error.errno == errno.EXDEV

    def test_state_mismatch_details(self):
        error = StateMismatchError("mismatch", recorded_status="locked",
                                   locked_exists=False, inbound_exists=True)
        assert error.recorded_status == "locked"
        assert error.locked_exists is False
        assert error.inbound_exists is True

    def test_already_attempted_context(self):
        error = AlreadyAttemptedError("again", status="failed", context={"attempts": 2})
        assert error.status == "failed"
        assert error.context == {"attempts": 2}


class TestSystemFailures:
    """Test state IO and config failures."""

    def test_state_io_hierarchy(self):
        read_error = StateReadError("cannot read", target="/r/ingest.state.json")
        write_error = StateWriteError("cannot write")

        assert isinstance(read_error, StateIOError)
        assert isinstance(write_error, SystemFailureError)
        assert read_error.operation == "load"
        assert write_error.operation == "save"
        assert read_error.target == "/r/ingest.state.json"

    def test_state_io_recoverable_only_after_rename(self):
        assert StateWriteError("x").recoverable is False
        assert StateWriteError("x", after_rename=True).recoverable is True

    def test_explicit_operation_wins(self):
        assert StateWriteError("x", operation="clear").operation == "clear"

    def test_config_error(self):
        error = ConfigError("bad", errors=["e1"], context={"config_file": "a.yaml"})
        assert error.errors == ["e1"]
        assert error.context == {"config_file": "a.yaml"}
        assert error.recoverable is False
