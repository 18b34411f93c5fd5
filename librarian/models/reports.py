"""Results of a scan, a reconciliation, and a whole cataloging run."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from librarian.models.catalog import Catalog


class Duplicate(BaseModel):
    """A resource deleted because its content was already present."""

    model_config = ConfigDict(frozen=True)

    path: Path
    checksum: str
    kept: Path


class ScanResult(BaseModel):
    """Outcome of scanning the resources directory.

    ``snapshot`` maps each distinct digest to the one path that holds it, in
    scan order.  ``seen_names`` are the cache keys that still correspond to a
    resource on disk (or to the name a new resource is about to get).
    """

    model_config = ConfigDict(frozen=True)

    snapshot: dict[str, Path] = Field(default_factory=dict)
    duplicates: list[Duplicate] = Field(default_factory=list)
    seen_names: set[str] = Field(default_factory=set)


class PlannedRename(BaseModel):
    """A resource that must be renamed to its digest."""

    model_config = ConfigDict(frozen=True)

    source: Path
    target: Path


class ReconcilePlan(BaseModel):
    """Filesystem changes and catalog changes decided by reconciliation.

    All lists hold original checksums, except ``renames`` and ``conflicts``.
    ``conflicts`` are paths left uncataloged because their digest is the
    identity of another resource whose file is present.
    """

    model_config = ConfigDict(frozen=True)

    renames: list[PlannedRename] = Field(default_factory=list)
    created: list[str] = Field(default_factory=list)
    updated: list[str] = Field(default_factory=list)
    relinked: list[str] = Field(default_factory=list)
    removed_orphans: list[str] = Field(default_factory=list)
    kept_orphans: list[str] = Field(default_factory=list)
    conflicts: list[Path] = Field(default_factory=list)


class ReconcileResult(BaseModel):
    """The reconciled catalog and the plan that produced it."""

    model_config = ConfigDict(frozen=True)

    catalog: Catalog
    plan: ReconcilePlan


class CatalogRunReport(BaseModel):
    """Summary of one cataloging run, for display and tests."""

    model_config = ConfigDict(frozen=True)

    resources: int
    created: list[str] = Field(default_factory=list)
    updated: list[str] = Field(default_factory=list)
    relinked: list[str] = Field(default_factory=list)
    removed_orphans: list[str] = Field(default_factory=list)
    kept_orphans: list[str] = Field(default_factory=list)
    renamed: list[PlannedRename] = Field(default_factory=list)
    duplicates: list[Duplicate] = Field(default_factory=list)
    conflicts: list[Path] = Field(default_factory=list)
    hashed: int = 0
    cache_hits: int = 0
    pruned_cache_entries: list[str] = Field(default_factory=list)
