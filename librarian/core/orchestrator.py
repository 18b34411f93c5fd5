"""Library orchestrator — one cataloging run from disk to disk.

The ``Librarian`` wires the VerificationCache, DirectoryScanner, and the
pure ``reconcile()`` together and owns persistence.  The order of effects in
a run is:

1. load the catalog and the cache (corrupt files abort before anything else),
2. scan: hash resources and delete duplicate content,
3. reconcile in memory,
4. rename new resources to their digests,
5. write the catalog, then prune and write the cache.

Nothing is written to the catalog or cache files unless every earlier step
succeeded.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

from librarian.core.cache import VerificationCache
from librarian.core.catalog_store import load_catalog, save_catalog
from librarian.core.orphans import OrphanPolicy, OrphanResolver, resolver_for
from librarian.core.reconciler import apply_plan, reconcile
from librarian.core.scanner import DirectoryScanner
from librarian.errors import LibrarianIOError
from librarian.models.catalog import Catalog
from librarian.models.reports import CatalogRunReport

if TYPE_CHECKING:
    from librarian.config import LibrarianConfig

logger = logging.getLogger(__name__)


class Librarian:
    """A library: a resources directory, its catalog file, and its cache file.

    Parameters
    ----------
    resources_path:
        Directory whose immediate children are the resources.
    catalog_path:
        The catalog JSON file.
    cache_path:
        The verification cache JSON file.  Defaults to ``.cache`` next to
        the resources directory.
    hasher:
        Digest function for cache misses (injectable for tests).
    clock:
        Returns the current time in whole seconds since the epoch.
    """

    def __init__(
        self,
        resources_path: Path,
        catalog_path: Path,
        cache_path: Path | None = None,
        *,
        hasher: Callable[[Path], str] | None = None,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self.resources_path = Path(resources_path)
        self.catalog_path = Path(catalog_path)
        self.cache_path = (
            Path(cache_path) if cache_path is not None
            else self.resources_path.parent / ".cache"
        )
        self._hasher = hasher
        self._clock = clock or (lambda: int(time.time()))

    @classmethod
    def from_config(cls, config: LibrarianConfig, **kwargs) -> Librarian:
        """Build a Librarian for the paths in ``config``."""
        return cls(
            config.resources_path,
            config.catalog_path,
            config.cache_path,
            **kwargs,
        )

    def load_catalog(self) -> Catalog:
        return load_catalog(self.catalog_path)

    def catalog(
        self,
        *,
        use_cache: bool = True,
        orphans: OrphanPolicy | str = OrphanPolicy.ASK,
        resolver: OrphanResolver | None = None,
    ) -> CatalogRunReport:
        """Reconcile the catalog with the resources directory and persist both files.

        Parameters
        ----------
        use_cache:
            If ``False``, every resource is re-hashed; the cache is still
            refreshed and written.
        orphans:
            Orphan policy, used when no ``resolver`` is given.
        resolver:
            Decides each orphan's fate; overrides ``orphans``.

        Raises
        ------
        LibrarianIOError
            On any filesystem failure.  The run stops immediately.
        MalformedCatalogError, MalformedCacheError
            If the catalog or cache file is corrupt.
        """
        if not self.resources_path.is_dir():
            raise LibrarianIOError(
                f"resources directory {self.resources_path} does not exist"
            )
        if resolver is None:
            resolver = resolver_for(orphans)
        now = self._clock()

        catalog = self.load_catalog()
        cache = VerificationCache.load(
            self.cache_path, enabled=use_cache, hasher=self._hasher
        )

        scanner = DirectoryScanner(
            self.resources_path,
            cache,
            known_names=(r.original_checksum for r in catalog.resources),
            exclude=(self.catalog_path, self.cache_path),
        )
        scan = scanner.scan(now)

        result = reconcile(catalog, scan.snapshot, resolver)
        renamed = apply_plan(result.plan)

        save_catalog(result.catalog, self.catalog_path)
        pruned = cache.prune(scan.seen_names)
        cache.save()

        plan = result.plan
        logger.info(
            "Catalog has %d resources (%d new, %d changed, %d orphans removed)",
            len(result.catalog.resources),
            len(plan.created),
            len(plan.updated),
            len(plan.removed_orphans),
        )
        return CatalogRunReport(
            resources=len(result.catalog.resources),
            created=plan.created,
            updated=plan.updated,
            relinked=plan.relinked,
            removed_orphans=plan.removed_orphans,
            kept_orphans=plan.kept_orphans,
            renamed=renamed,
            duplicates=scan.duplicates,
            conflicts=plan.conflicts,
            hashed=cache.recomputed,
            cache_hits=cache.hits,
            pruned_cache_entries=pruned,
        )


def run_catalog(
    resources_path: Path,
    catalog_path: Path,
    *,
    cache_path: Path | None = None,
    cache_enabled: bool = True,
    orphan_policy: OrphanPolicy | str = OrphanPolicy.ASK,
    resolver: OrphanResolver | None = None,
) -> CatalogRunReport:
    """Catalog ``resources_path`` into ``catalog_path`` in one call."""
    librarian = Librarian(resources_path, catalog_path, cache_path)
    return librarian.catalog(
        use_cache=cache_enabled, orphans=orphan_policy, resolver=resolver
    )
