"""Shared test fixtures for Librarian."""

from __future__ import annotations

import os
import time
from collections.abc import Callable
from pathlib import Path

import pytest

from librarian.core.cache import VerificationCache
from librarian.core.hasher import Hasher
from librarian.core.orchestrator import Librarian
from librarian.models.catalog import Catalog
from librarian.models.resource import DocumentType, MediaPrefix, MediaType, Resource


class FakeClock:
    """Controllable stand-in for ``time.time()`` in whole seconds."""

    def __init__(self, start: int | None = None) -> None:
        self.now = start if start is not None else int(time.time())

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int = 10) -> int:
        self.now += seconds
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    """Provide a clock starting at the real current time."""
    return FakeClock()


@pytest.fixture
def hasher() -> Hasher:
    """Provide a counting hasher."""
    return Hasher()


@pytest.fixture
def library_dir(tmp_path: Path) -> Path:
    """Provide a library directory with an empty ``resources/`` inside."""
    (tmp_path / "resources").mkdir()
    return tmp_path


@pytest.fixture
def resources_dir(library_dir: Path) -> Path:
    return library_dir / "resources"


@pytest.fixture
def catalog_path(library_dir: Path) -> Path:
    return library_dir / "catalog.json"


@pytest.fixture
def cache_path(library_dir: Path) -> Path:
    return library_dir / ".cache"


@pytest.fixture
def cache(cache_path: Path, hasher: Hasher) -> VerificationCache:
    """Provide an empty, enabled VerificationCache using the counting hasher."""
    return VerificationCache(cache_path, hasher=hasher)


@pytest.fixture
def library(
    resources_dir: Path,
    catalog_path: Path,
    cache_path: Path,
    hasher: Hasher,
    clock: FakeClock,
) -> Librarian:
    """Provide a Librarian wired to the temp library, counting hasher, and fake clock."""
    return Librarian(
        resources_dir, catalog_path, cache_path, hasher=hasher, clock=clock
    )


# ---------------------------------------------------------------------------
# Filesystem and model factories
# ---------------------------------------------------------------------------


@pytest.fixture
def write_file(clock: FakeClock) -> Callable[..., Path]:
    """Factory fixture: write bytes to a file and pin its mtime.

    The mtime defaults to a minute before the fake clock, so a freshly
    written file counts as unmodified since any cache entry the clock stamps.
    """

    def _factory(path: Path, data: bytes, mtime: int | None = None) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        stamp = clock.now - 60 if mtime is None else mtime
        os.utime(path, (stamp, stamp))
        return path

    return _factory


@pytest.fixture
def write_tree(clock: FakeClock) -> Callable[..., Path]:
    """Factory fixture: build a directory resource from ``{relative path: bytes}``.

    Every file and directory in the tree, the root included, gets the same
    pinned mtime.
    """

    def _factory(root: Path, files: dict[str, bytes], mtime: int | None = None) -> Path:
        stamp = clock.now - 60 if mtime is None else mtime
        root.mkdir(parents=True, exist_ok=True)
        for relative, data in files.items():
            target = root / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        for path in [root, *root.rglob("*")]:
            os.utime(path, (stamp, stamp))
        return root

    return _factory


@pytest.fixture
def make_resource() -> Callable[..., Resource]:
    """Factory fixture: build a Resource with a given history and defaults."""

    def _factory(*history: str, title: str = "Untitled", **overrides) -> Resource:
        history = history or ("0" * 40,)
        return Resource(
            title=title,
            checksum=history[-1],
            historical_checksums=list(history),
            **overrides,
        )

    return _factory


@pytest.fixture
def pdf_catalog() -> Catalog:
    """A catalog that knows the ``pdf`` document type."""
    return Catalog(
        document_types={
            "pdf": DocumentType(
                extension="pdf",
                mime=MediaType(type=MediaPrefix.APPLICATION, subtype="pdf"),
            )
        }
    )
