"""Tests for the pydantic data models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from librarian.models import CacheEntry, Catalog, Resource
from librarian.models.resource import BibtexType, MediaPrefix, MediaType


class TestResource:
    def test_new(self):
        resource = Resource.new("a" * 40, "Report", "pdf")
        assert resource.checksum == "a" * 40
        assert resource.historical_checksums == ["a" * 40]
        assert resource.original_checksum == "a" * 40
        assert resource.document_type == "pdf"
        assert resource.authors == []

    def test_empty_history_rejected(self):
        with pytest.raises(ValidationError):
            Resource(title="T", checksum="a" * 40, historical_checksums=[])

    def test_checksum_must_be_latest(self):
        with pytest.raises(ValidationError):
            Resource(title="T", checksum="a" * 40, historical_checksums=["a" * 40, "b" * 40])

    def test_with_checksum_appends(self, make_resource):
        original = make_resource("a" * 40, title="Paper")
        updated = original.with_checksum("b" * 40)
        assert updated.historical_checksums == ["a" * 40, "b" * 40]
        assert updated.original_checksum == "a" * 40
        assert original.historical_checksums == ["a" * 40]

    def test_with_same_checksum_is_identity(self, make_resource):
        resource = make_resource("a" * 40)
        assert resource.with_checksum("a" * 40) is resource

    def test_frozen(self, make_resource):
        with pytest.raises(ValidationError):
            make_resource().title = "Other"


class TestCatalog:
    def test_by_original_checksum(self, make_resource):
        catalog = Catalog(resources=[make_resource("a" * 40, "b" * 40), make_resource("c" * 40)])
        assert set(catalog.by_original_checksum()) == {"a" * 40, "c" * 40}

    def test_content_types_parse_bibtex(self):
        catalog = Catalog.model_validate({"content_types": {"paper": "article"}})
        assert catalog.content_types["paper"] is BibtexType.ARTICLE


class TestMediaType:
    def test_str(self):
        assert str(MediaType(type=MediaPrefix.APPLICATION, subtype="pdf")) == "application/pdf"


class TestCacheEntry:
    def test_fresh_when_verified_after_modification(self):
        entry = CacheEntry(last_verified=100, checksum="a" * 40)
        assert entry.is_fresh(100)
        assert entry.is_fresh(99)
        assert not entry.is_fresh(101)
