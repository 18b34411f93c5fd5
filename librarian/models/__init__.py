"""Librarian data models — all Pydantic v2, all frozen (immutable)."""

from librarian.models.cache import CacheEntry
from librarian.models.catalog import Catalog
from librarian.models.reports import (
    CatalogRunReport,
    Duplicate,
    PlannedRename,
    ReconcilePlan,
    ReconcileResult,
    ScanResult,
)
from librarian.models.resource import (
    BibtexType,
    Date,
    DocumentType,
    MediaPrefix,
    MediaType,
    Name,
    Resource,
)

__all__ = [
    # catalog
    "Catalog",
    "Resource",
    "Name",
    "Date",
    "DocumentType",
    "MediaType",
    "MediaPrefix",
    "BibtexType",
    # cache
    "CacheEntry",
    # reports
    "Duplicate",
    "ScanResult",
    "PlannedRename",
    "ReconcilePlan",
    "ReconcileResult",
    "CatalogRunReport",
]
