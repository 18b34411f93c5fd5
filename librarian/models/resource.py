"""Catalog entry models — one ``Resource`` per logical unit of library content.

A resource keeps its identity across content changes: the first digest in
``historical_checksums`` (the *original* digest) never changes, while
``checksum`` tracks the most recent content.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class BibtexType(str, Enum):
    """BibTeX entry types a content type can export as."""

    ARTICLE = "article"
    BOOK = "book"
    MANUAL = "manual"
    MISCELLANEOUS = "miscellaneous"
    ONLINE = "online"
    TECH_REPORT = "techreport"


class MediaPrefix(str, Enum):
    """Top-level media type (the part before the slash in ``text/plain``)."""

    APPLICATION = "application"
    AUDIO = "audio"
    IMAGE = "image"
    MESSAGE = "message"
    MULTIPART = "multipart"
    TEXT = "text"
    VIDEO = "video"
    FONT = "font"
    EXAMPLE = "example"
    MODEL = "model"


class MediaType(BaseModel):
    """Media (formerly MIME) type, e.g. ``application/pdf``."""

    model_config = ConfigDict(frozen=True)

    type: MediaPrefix
    subtype: str

    def __str__(self) -> str:
        return f"{self.type.value}/{self.subtype}"


class DocumentType(BaseModel):
    """Associates a document type with a file extension and media type.

    The extension is how a newly discovered file gets its ``document_type``.
    """

    model_config = ConfigDict(frozen=True)

    extension: str
    mime: MediaType | None = None


class Date(BaseModel):
    """Partial calendar date; any component may be unknown."""

    model_config = ConfigDict(frozen=True)

    year: int | None = None
    month: int | None = None
    day: int | None = None


class Name(BaseModel):
    """A person's name, split the way bibliographies need it."""

    model_config = ConfigDict(frozen=True)

    first: str | None = None
    middle: str | None = None
    last: str | None = None


class Resource(BaseModel):
    """Library resource: a file (document, video) or a directory (a saved webpage).

    Everything except ``checksum`` and ``historical_checksums`` is free-form
    descriptive metadata that reconciliation never interprets, apart from
    ``title`` and ``document_type`` defaults for new resources and the sort
    fields.
    """

    model_config = ConfigDict(frozen=True)

    title: str
    subtitle: str | None = None
    authors: list[Name] = Field(default_factory=list)
    editors: list[Name] = Field(default_factory=list)
    # Last time the content changed: publication date for a book or article,
    # last update (or archival date) for a website.
    date: Date | None = None
    edition: int | None = None
    version: str | None = None
    publisher: str | None = None
    organization: str | None = None
    journal: str | None = None
    volume: int | None = None
    number: int | None = None
    part_number: int | None = None
    doi: str | None = None
    tags: list[str] = Field(default_factory=list)
    document_type: str | None = None
    content_type: str | None = None
    url: str | None = None
    checksum: str
    historical_checksums: list[str]

    @model_validator(mode="after")
    def _check_history(self) -> Resource:
        if not self.historical_checksums:
            raise ValueError("historical_checksums must not be empty")
        if self.historical_checksums[-1] != self.checksum:
            raise ValueError(
                f"checksum {self.checksum!r} is not the last historical checksum "
                f"({self.historical_checksums[-1]!r})"
            )
        return self

    @classmethod
    def new(
        cls, digest: str, title: str, document_type: str | None = None
    ) -> Resource:
        """Create the catalog entry for content seen for the first time."""
        return cls(
            title=title,
            document_type=document_type,
            checksum=digest,
            historical_checksums=[digest],
        )

    @property
    def original_checksum(self) -> str:
        """The digest the resource had when first cataloged — its identity."""
        return self.historical_checksums[0]

    def with_checksum(self, digest: str) -> Resource:
        """Return a copy whose current content is ``digest``.

        History is append-only; an unchanged digest returns ``self``.
        """
        if digest == self.checksum:
            return self
        return self.model_copy(
            update={
                "checksum": digest,
                "historical_checksums": [*self.historical_checksums, digest],
            }
        )
