"""Catalog reconciliation — merge a Resource Snapshot into the catalog.

``reconcile()`` is pure: it takes a catalog and a snapshot and returns the
new catalog together with a plan of renames.  It never touches the
filesystem.  ``apply_plan()`` performs the renames afterwards, so a failure
during reconciliation leaves the resources directory as it was.

Matching rules, for each ``digest -> path`` in the snapshot:

1. **By name** — the file is named after an entry's original checksum: same
   logical resource.  A changed digest is appended to the entry's history.
   The file keeps its name.
2. **Returning** — the digest *is* an entry's original checksum but no file
   carries that name: the original content came back under another name.
   The entry is re-linked and the file renamed to the digest.
3. **Conflict** — the digest is an entry's original checksum and that
   entry's own (since modified) file is present.  The newcomer is left alone
   and uncataloged.
4. **New** — anything else becomes a new entry whose identity is the digest,
   and the file is renamed to the digest.  A file already named after its
   digest (renamed by an earlier run that did not get to save the catalog)
   needs no rename.

Entries matched by none of the snapshot are orphans, resolved by an
``OrphanResolver``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

from librarian.core.catalog_store import default_title, extension_index, sorted_catalog
from librarian.core.fileio import rename_resource
from librarian.core.orphans import OrphanResolver
from librarian.errors import LibrarianIOError
from librarian.models.catalog import Catalog
from librarian.models.reports import PlannedRename, ReconcilePlan, ReconcileResult
from librarian.models.resource import Resource

logger = logging.getLogger(__name__)


def reconcile(
    catalog: Catalog,
    snapshot: Mapping[str, Path],
    resolver: OrphanResolver,
) -> ReconcileResult:
    """Merge ``snapshot`` (digest -> path) into ``catalog``.

    Returns the reconciled catalog, sorted, and the plan describing what
    changed.  The input catalog is not modified.
    """
    known: dict[str, Resource] = catalog.by_original_checksum()
    entries: dict[str, Resource] = dict(known)
    orphaned: set[str] = set(known)
    present_names = {path.name for path in snapshot.values()}
    extensions = extension_index(catalog)

    renames: list[PlannedRename] = []
    created: list[str] = []
    updated: list[str] = []
    relinked: list[str] = []
    conflicts: list[Path] = []

    for digest, path in snapshot.items():
        name = path.name

        entry = known.get(name)
        if entry is not None:
            if digest != entry.checksum:
                entries[name] = entry.with_checksum(digest)
                updated.append(name)
                logger.info("Content of %s changed (%s)", name, digest[:12])
            orphaned.discard(name)
            continue

        entry = known.get(digest)
        if entry is not None:
            if digest in present_names:
                logger.warning(
                    "%s holds the original content of %s, whose file is present; "
                    "leaving it uncataloged",
                    path, digest[:12],
                )
                conflicts.append(path)
                continue
            entries[digest] = entry.with_checksum(digest)
            orphaned.discard(digest)
            relinked.append(digest)
            renames.append(PlannedRename(source=path, target=path.parent / digest))
            logger.info("Re-linked %s to %r", name, entry.title)
            continue

        title, document_type = default_title(name, extensions)
        entries[digest] = Resource.new(digest, title, document_type)
        created.append(digest)
        if name != digest:
            renames.append(PlannedRename(source=path, target=path.parent / digest))
        logger.info("Cataloged new resource %s as %s", name, digest[:12])

    removed_orphans: list[str] = []
    kept_orphans: list[str] = []
    for resource in catalog.resources:
        original = resource.original_checksum
        if original not in orphaned:
            continue
        if resolver.resolve_orphan(entries[original]):
            del entries[original]
            removed_orphans.append(original)
            logger.info("Removed orphan %s (%r)", original[:12], resource.title)
        else:
            kept_orphans.append(original)
            logger.info("Kept orphan %s (%r)", original[:12], resource.title)

    plan = ReconcilePlan(
        renames=renames,
        created=created,
        updated=updated,
        relinked=relinked,
        removed_orphans=removed_orphans,
        kept_orphans=kept_orphans,
        conflicts=conflicts,
    )
    return ReconcileResult(catalog=sorted_catalog(catalog, entries.values()), plan=plan)


def _rename_order(renames: list[PlannedRename]) -> list[PlannedRename]:
    # A rename whose target is still occupied by another pending source must
    # wait until that source has moved away.
    pending = list(renames)
    ordered: list[PlannedRename] = []
    while pending:
        sources = {r.source for r in pending}
        ready = [r for r in pending if r.target not in sources]
        if not ready:
            raise LibrarianIOError(
                "planned renames form a cycle: "
                + ", ".join(f"{r.source.name} -> {r.target.name}" for r in pending)
            )
        ordered.extend(ready)
        pending = [r for r in pending if r.target in sources]
    return ordered


def apply_plan(plan: ReconcilePlan) -> list[PlannedRename]:
    """Rename resources to their digests; return the renames performed.

    Raises
    ------
    LibrarianIOError
        If a rename fails or would replace an existing file.  Renames done
        before the failure stay done; the next run recognizes those files by
        their digest names.
    """
    done: list[PlannedRename] = []
    for rename in _rename_order(plan.renames):
        rename_resource(rename.source, rename.target)
        done.append(rename)
    if done:
        logger.info("Renamed %d resources to their checksums", len(done))
    return done
