"""Filesystem helpers shared by the catalog store, the cache, and the scanner."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path

from librarian.errors import LibrarianIOError

logger = logging.getLogger(__name__)


def write_json_atomic(path: Path, text: str) -> None:
    """Replace ``path`` with ``text`` through a temp file in the same directory.

    Readers see either the old contents or the new ones, never a partial write.
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=str(path.parent), prefix=f".{path.name}-", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(text)
                fh.write("\n")
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
    except OSError as exc:
        raise LibrarianIOError(f"failed to write {path}: {exc}") from exc


def remove_resource(path: Path) -> None:
    """Delete a file, or a directory with everything under it."""
    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink()
    except OSError as exc:
        raise LibrarianIOError(f"failed to remove {path}: {exc}") from exc


def rename_resource(source: Path, target: Path) -> None:
    """Rename ``source`` to ``target``, refusing to replace an existing entry."""
    if target.exists() or target.is_symlink():
        raise LibrarianIOError(f"cannot rename {source} to {target}: target exists")
    try:
        source.rename(target)
    except OSError as exc:
        raise LibrarianIOError(f"failed to rename {source} to {target}: {exc}") from exc
    logger.debug("Renamed %s -> %s", source.name, target.name)
