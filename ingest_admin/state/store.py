"""State record persistence, one JSON file per root."""

import json
from pathlib import Path
from typing import Optional, Union

from ..errors import StateReadError, StateWriteError
from ..logging.config import get_logger
from ..utils.fs import atomic_write_text
from .models import StateRecord

DEFAULT_STATE_FILENAME = "ingest.state.json"


class StateStore:
    """JSON file based store for the per-root state record.

    Writes go through a temp file and os.replace, so a crash leaves either
    the previous record or the new one on disk, never a partial file.
    Callers serialize access per root.
    """

    def __init__(self, state_filename: str = DEFAULT_STATE_FILENAME):
        self.state_filename = state_filename
        self.logger = get_logger("ingest_admin.state.store")

    def path_for(self, root: Union[str, Path]) -> Path:
        return Path(root) / self.state_filename

    def load(self, root: Union[str, Path]) -> Optional[StateRecord]:
        """
        Load the state record for a root.

        Args:
            root: Root directory

        Returns:
            The record, or None if the root was never administered

        Raises:
            StateReadError: If the file exists but cannot be read or decoded
        """
        path = self.path_for(root)

        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            self.logger.debug("No state record", root=str(root), path=str(path))
            return None
        except OSError as e:
            self.logger.error("Failed to read state record", path=str(path), error=str(e))
            raise StateReadError(
                f"Cannot read state file {path}: {e}",
                target=str(path),
            ) from e

        try:
            record = StateRecord.from_dict(json.loads(raw.decode("utf-8")))
        except (json.JSONDecodeError, ValueError, TypeError) as e:
            self.logger.error("Malformed state record", path=str(path), error=str(e))
            raise StateReadError(
                f"Malformed state file {path}: {e}",
                target=str(path),
            ) from e

        self.logger.debug(
            "State record loaded",
            root=str(root),
            status=record.status.value,
            attempts=record.attempts
        )
        return record

    def save(self, root: Union[str, Path], record: StateRecord) -> None:
        """
        Persist the state record for a root, replacing any previous one.

        Raises:
            StateWriteError: If the record could not be written
        """
        path = self.path_for(root)
        content = json.dumps(record.to_dict(), indent=2, sort_keys=True) + "\n"

        try:
            atomic_write_text(path, content)
        except OSError as e:
            self.logger.error(
                "Failed to write state record",
                path=str(path),
                status=record.status.value,
                error=str(e)
            )
            raise StateWriteError(
                f"Cannot write state file {path}: {e}",
                target=str(path),
            ) from e

        self.logger.debug("State record saved", path=str(path), status=record.status.value)

    def clear(self, root: Union[str, Path]) -> bool:
        """
        Remove the state record for a root.

        Returns:
            True if a record was removed, False if there was none

        Raises:
            StateWriteError: If the file exists but cannot be removed
        """
        path = self.path_for(root)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StateWriteError(
                f"Cannot remove state file {path}: {e}",
                operation="clear",
                target=str(path),
            ) from e

        self.logger.info("State record cleared", path=str(path))
        return True
