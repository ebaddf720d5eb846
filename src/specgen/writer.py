"""Write generated files to disk.

Every file is written atomically (temp file in the target directory, then
``os.replace``) so an interrupted run never leaves a half-written module
behind. Any ``OSError`` is re-raised as :class:`~specgen.exceptions.IOError_`
carrying the path that failed.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Optional

from specgen.exceptions import IOError_


def ensure_dir(path: Path) -> Path:
    """Create *path* (and parents) if needed.

    Raises:
        IOError_: If the directory cannot be created.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise IOError_(f"Cannot create directory {path}: {exc}", path) from exc
    return path


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is guaranteed to be an atomic rename on POSIX systems.
    On any failure the temp file is cleaned up.
    """
    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None  # prevent double-close in finally
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


def write_file(path: Path, content: str) -> Path:
    """Write *content* to *path*, creating parent directories.

    Returns:
        The written path.

    Raises:
        IOError_: If the directory or file cannot be written.
    """
    ensure_dir(path.parent)
    try:
        _atomic_write(path, content)
    except OSError as exc:
        raise IOError_(f"Cannot write {path}: {exc}", path) from exc
    return path
