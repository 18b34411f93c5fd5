"""Directory scanner — builds the Resource Snapshot for one run.

Only the immediate children of the resources directory are resources.  A
child directory is a single resource: it is hashed as a whole tree and never
descended into for separate cataloging.

Identical content is deduplicated while scanning: when a child's digest is
already in the snapshot, the later child is deleted from disk.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from librarian.core.cache import VerificationCache
from librarian.core.fileio import remove_resource
from librarian.errors import LibrarianIOError
from librarian.models.reports import Duplicate, ScanResult

logger = logging.getLogger(__name__)


def modified_time(path: Path) -> int:
    """Last modification time of a resource, in whole seconds.

    For a directory this is the newest mtime anywhere in the tree, since
    editing a nested file does not touch the directory's own mtime.
    """
    try:
        latest = path.stat().st_mtime
        if path.is_dir():
            for root, dirs, files in os.walk(path):
                for name in dirs + files:
                    latest = max(latest, os.lstat(os.path.join(root, name)).st_mtime)
    except OSError as exc:
        raise LibrarianIOError(f"failed to stat {path}: {exc}") from exc
    return int(latest)


class DirectoryScanner:
    """Hashes every top-level resource and deduplicates identical content.

    Parameters
    ----------
    resources_dir:
        The directory whose children are resources.
    cache:
        Verification cache consulted (and updated in memory) for each child.
    known_names:
        Original digests of all cataloged resources.  A child with one of
        these names is catalog-backed; its filename is a stable cache key.
        Catalog-backed children are scanned first, so when they collide
        with a newcomer the newcomer is the one deleted.
    exclude:
        Paths inside ``resources_dir`` that are not resources (for example
        a catalog or cache file kept there).
    """

    def __init__(
        self,
        resources_dir: Path,
        cache: VerificationCache,
        known_names: Iterable[str] = (),
        *,
        exclude: Iterable[Path] = (),
    ) -> None:
        self.resources_dir = Path(resources_dir)
        self.cache = cache
        self.known_names = frozenset(known_names)
        self._exclude = {Path(p).resolve() for p in exclude}

    def children(self) -> list[Path]:
        """Top-level resources in scan order: catalog-backed first, then by name."""
        try:
            entries = [
                p for p in self.resources_dir.iterdir() if p.resolve() not in self._exclude
            ]
        except OSError as exc:
            raise LibrarianIOError(
                f"failed to list resources directory {self.resources_dir}: {exc}"
            ) from exc
        return sorted(entries, key=lambda p: (p.name not in self.known_names, p.name))

    def scan(self, now: int) -> ScanResult:
        """Hash every child, delete duplicates, and return the snapshot."""
        snapshot: dict[str, Path] = {}
        duplicates: list[Duplicate] = []
        seen_names: set[str] = set()

        children = self.children()
        # Original digests whose file is present.  Any other known digest
        # found here is a returning resource that will be renamed to it.
        taken = {p.name for p in children if p.name in self.known_names}

        for path in children:
            name = path.name
            is_known = name in taken
            digest = self.cache.lookup_or_compute(
                name,
                path,
                modified_time(path),
                now,
                store_under_digest=not is_known,
                reserved=taken,
            )

            kept = snapshot.get(digest)
            if kept is not None:
                logger.warning(
                    "%s has the same content as %s (%s); removing duplicate",
                    path, kept.name, digest[:12],
                )
                remove_resource(path)
                duplicates.append(Duplicate(path=path, checksum=digest, kept=kept))
                continue

            snapshot[digest] = path
            if is_known or digest in taken:
                seen_names.add(name)
            else:
                seen_names.add(digest)

        logger.info(
            "Scanned %s: %d resources, %d duplicates removed, %d hashed, %d from cache",
            self.resources_dir,
            len(snapshot),
            len(duplicates),
            self.cache.recomputed,
            self.cache.hits,
        )
        return ScanResult(snapshot=snapshot, duplicates=duplicates, seen_names=seen_names)
