"""
Atomic filesystem helpers.

Both helpers follow the same flip: stage content under a provisional name
next to the destination, then rename it into place so readers only ever
see the old or the new version.
"""

import errno
import os
import tempfile
from pathlib import Path
from typing import Union

PathLike = Union[str, os.PathLike]


def fsync_directory(path: PathLike) -> None:
    """Flush a directory entry so a completed rename survives a crash."""
    if not hasattr(os, "O_DIRECTORY"):
        return
    fd = os.open(os.fspath(path), os.O_RDONLY | os.O_DIRECTORY)
    try:
        os.fsync(fd)
    finally:
        os.close(fd)


def atomic_write_text(path: PathLike, content: str, encoding: str = "utf-8") -> None:
    """
    Write text to path atomically.

    The content goes to a temp file in the destination directory, which is
    flushed, fsynced and moved over the destination with os.replace. On
    failure the temp file is removed and the previous file is untouched.

    Raises:
        OSError: If staging or replacing fails
    """
    path = Path(path)
    fd, tmp_path = tempfile.mkstemp(
        dir=str(path.parent),
        prefix=f".{path.name}.",
        suffix=".tmp",
    )
    try:
        with os.fdopen(fd, "w", encoding=encoding) as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, path)
    except BaseException:
        try:
            os.unlink(tmp_path)
        except FileNotFoundError:
            pass
        raise
    fsync_directory(path.parent)


def atomic_rename(source: PathLike, target: PathLike) -> None:
    """
    Rename source to target without replacing anything already at target.

    os.rename silently replaces an empty directory on POSIX, so an occupied
    target is refused up front with FileExistsError while the source is
    still present. A missing source surfaces as FileNotFoundError from the
    rename itself.

    Raises:
        FileExistsError: If target already exists
        OSError: Any failure of the underlying rename
    """
    source = Path(source)
    target = Path(target)
    if source.exists() and (target.exists() or target.is_symlink()):
        raise FileExistsError(errno.EEXIST, os.strerror(errno.EEXIST), str(target))
    os.rename(source, target)
    fsync_directory(target.parent)
