"""Catalog persistence and the merge primitives reconciliation builds on.

The catalog file is a JSON object::

    {
      "document_types": {"pdf": {"extension": "pdf", "mime": {...}}},
      "content_types": {"paper": "article"},
      "resources": [ ... ]
    }

A missing or empty file is an empty catalog.  Saving always rewrites the
whole file.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from librarian.core.fileio import write_json_atomic
from librarian.errors import LibrarianIOError, MalformedCatalogError
from librarian.models.catalog import Catalog
from librarian.models.resource import Date, Resource

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Load / save
# ---------------------------------------------------------------------------


def load_catalog(path: Path) -> Catalog:
    """Read the catalog at ``path``; a missing or blank file is an empty catalog.

    Raises
    ------
    MalformedCatalogError
        If the file is not valid JSON or does not match the catalog schema.
    LibrarianIOError
        If the file exists but cannot be read.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8") if path.exists() else ""
    except OSError as exc:
        raise LibrarianIOError(f"failed to read catalog {path}: {exc}") from exc

    if not text.strip():
        logger.info("No catalog at %s; starting with an empty catalog", path)
        return Catalog()

    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedCatalogError(f"catalog {path} is not valid JSON: {exc}") from exc
    try:
        catalog = Catalog.model_validate(raw)
    except ValidationError as exc:
        raise MalformedCatalogError(f"catalog {path} does not match the schema: {exc}") from exc

    _check_unique_identities(catalog, path)
    return catalog


def _check_unique_identities(catalog: Catalog, path: Path) -> None:
    seen: set[str] = set()
    for resource in catalog.resources:
        original = resource.original_checksum
        if original in seen:
            raise MalformedCatalogError(
                f"catalog {path} has two resources with original checksum {original}"
            )
        seen.add(original)


def catalog_json(catalog: Catalog) -> str:
    """Serialize a catalog exactly as ``save_catalog`` writes it."""
    return catalog.model_dump_json(indent=2)


def save_catalog(catalog: Catalog, path: Path) -> None:
    """Overwrite the catalog file with ``catalog``."""
    write_json_atomic(Path(path), catalog_json(catalog))
    logger.debug("Wrote %d resources to %s", len(catalog.resources), path)


def init_catalog(path: Path) -> Catalog:
    """Create an empty catalog file if none exists yet, and return the catalog."""
    catalog = load_catalog(path)
    path = Path(path)
    if not path.exists() or not path.read_text(encoding="utf-8").strip():
        save_catalog(catalog, path)
    return catalog


# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------


def _optional(value: Any) -> tuple[Any, ...]:
    # Missing values sort before present ones.
    return (0,) if value is None else (1, value)


def _date_key(date: Date | None) -> tuple[Any, ...]:
    if date is None:
        return (0,)
    return (1, _optional(date.year), _optional(date.month), _optional(date.day))


def resource_sort_key(resource: Resource) -> tuple[Any, ...]:
    """Total order of catalog entries: title, date, edition, version, volume.

    The original checksum is the final tie-break so that two entries with
    identical sort fields still land in a stable, reproducible order.
    """
    return (
        resource.title,
        _date_key(resource.date),
        _optional(resource.edition),
        _optional(resource.version),
        _optional(resource.volume),
        resource.original_checksum,
    )


def sort_resources(resources: Iterable[Resource]) -> list[Resource]:
    """Return ``resources`` in catalog order."""
    return sorted(resources, key=resource_sort_key)


def sorted_catalog(catalog: Catalog, resources: Iterable[Resource]) -> Catalog:
    """Return ``catalog`` holding ``resources`` in catalog order, lookup tables sorted by key."""
    return catalog.model_copy(
        update={
            "document_types": dict(sorted(catalog.document_types.items())),
            "content_types": dict(sorted(catalog.content_types.items())),
            "resources": sort_resources(resources),
        }
    )


# ---------------------------------------------------------------------------
# Document types
# ---------------------------------------------------------------------------


def extension_index(catalog: Catalog) -> dict[str, str]:
    """Map lower-cased file extension (no dot) to document type name."""
    index: dict[str, str] = {}
    for name, doc_type in catalog.document_types.items():
        index[doc_type.extension.lower().lstrip(".")] = name
    return index


def default_title(file_name: str, extensions: dict[str, str]) -> tuple[str, str | None]:
    """Title and document type for a newly discovered resource.

    The title is the file name.  When the name's extension (compared
    case-insensitively) belongs to a known document type, the extension is
    dropped from the title and that document type is returned with it.
    """
    stem, dot, suffix = file_name.rpartition(".")
    if dot and stem:
        doc_type = extensions.get(suffix.lower())
        if doc_type is not None:
            return stem, doc_type
    return file_name, None
