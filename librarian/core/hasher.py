"""Content digests for files and directory trees.

A file's digest is the hash of its bytes, read in fixed-size chunks so
memory stays bounded regardless of file size.

A directory's digest folds in every descendant: for each entry, visited in
lexicographic order of its path relative to the directory, the relative path
(POSIX separators, UTF-8) and then, for files, the file's bytes.  Two
identical trees at different locations produce the same digest; any change to
a name, a path, or a file's content inside the tree changes it.
"""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path
from typing import Any

from librarian.errors import HashingError

logger = logging.getLogger(__name__)

HASH_ALGORITHM = "sha1"
CHUNK_SIZE = 0x4000


def new_hash() -> Any:
    """Return a fresh hash object for the library's digest algorithm."""
    return hashlib.new(HASH_ALGORITHM)


def update_from_file(hasher: Any, path: Path) -> None:
    """Feed the bytes of ``path`` into ``hasher`` in ``CHUNK_SIZE`` chunks."""
    with open(path, "rb") as fh:
        while chunk := fh.read(CHUNK_SIZE):
            hasher.update(chunk)


def file_digest(path: Path) -> str:
    """Hex digest of a single file's content."""
    hasher = new_hash()
    try:
        update_from_file(hasher, path)
    except OSError as exc:
        raise HashingError(f"failed to hash {path}: {exc}") from exc
    return hasher.hexdigest()


def _walk_sorted(root: Path) -> list[Path]:
    # Sorting on path components (rather than the joined string) keeps every
    # directory's children together, so "a/b" sorts before "a.txt".
    return sorted(root.rglob("*"), key=lambda p: p.relative_to(root).parts)


def directory_digest(path: Path) -> str:
    """Hex digest of a directory tree: relative paths plus file contents."""
    hasher = new_hash()
    try:
        for entry in _walk_sorted(path):
            relative = entry.relative_to(path).as_posix()
            hasher.update(relative.encode("utf-8"))
            # An entry that vanished since listing fails here; a dangling
            # symlink does not, and contributes only its path.
            entry.lstat()
            if entry.is_file():
                update_from_file(hasher, entry)
    except OSError as exc:
        raise HashingError(f"failed to hash {path}: {exc}") from exc
    return hasher.hexdigest()


def content_digest(path: Path) -> str:
    """Digest of a resource, which may be a file or a directory."""
    path = Path(path)
    if path.is_dir():
        digest = directory_digest(path)
    else:
        digest = file_digest(path)
    logger.debug("Hashed %s -> %s", path.name, digest[:12])
    return digest


class Hasher:
    """Callable wrapper around ``content_digest`` that counts invocations.

    The verification cache hashes through one of these, so the number of
    actual recomputations in a run is observable.
    """

    def __init__(self) -> None:
        self.calls = 0

    def __call__(self, path: Path) -> str:
        self.calls += 1
        return content_digest(path)
