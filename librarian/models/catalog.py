"""The catalog document stored in ``catalog.json``."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from librarian.models.resource import BibtexType, DocumentType, Resource


class Catalog(BaseModel):
    """Every cataloged resource plus the lookup tables the metadata layer uses.

    ``document_types`` maps a document type name to its extension and media
    type; ``content_types`` maps a content type name to the BibTeX entry type
    it exports as.  Reconciliation only reads ``document_types`` (to default
    the document type of new resources).
    """

    model_config = ConfigDict(frozen=True)

    document_types: dict[str, DocumentType] = Field(default_factory=dict)
    content_types: dict[str, BibtexType] = Field(default_factory=dict)
    resources: list[Resource] = Field(default_factory=list)

    def by_original_checksum(self) -> dict[str, Resource]:
        """Index resources by their original (identity) digest."""
        return {r.original_checksum: r for r in self.resources}
