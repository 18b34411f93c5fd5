"""Tests for fuzzy catalog search."""

from __future__ import annotations

from librarian.models.catalog import Catalog
from librarian.models.resource import Date, Name
from librarian.search import fuzzy_match, search, searchable_text


class TestFuzzyMatch:
    def test_ordered_subsequence(self):
        assert fuzzy_match("Programming Python", "prgpy")

    def test_order_matters(self):
        assert not fuzzy_match("Programming Python", "ypg")

    def test_lowercase_query_ignores_case(self):
        assert fuzzy_match("RUST BOOK", "rust")

    def test_uppercase_query_is_case_sensitive(self):
        assert not fuzzy_match("rust book", "Rust")
        assert fuzzy_match("The Rust Book", "Rust")

    def test_empty_query_matches(self):
        assert fuzzy_match("anything", "")


class TestSearch:
    def test_matches_any_field(self, make_resource):
        catalog = Catalog(
            resources=[
                make_resource("a" * 40, title="Deep Learning", authors=[Name(first="Ian", last="Goodfellow")]),
                make_resource("b" * 40, title="Cooking", tags=["food"]),
            ]
        )
        assert [r.title for r in search(catalog, "goodfellow")] == ["Deep Learning"]
        assert [r.title for r in search(catalog, "food")] == ["Cooking"]

    def test_no_match(self, make_resource):
        catalog = Catalog(resources=[make_resource(title="Cooking")])
        assert search(catalog, "xyz") == []

    def test_searchable_text_includes_numbers_and_history(self, make_resource):
        resource = make_resource("a" * 40, "b" * 40, title="T", edition=3, date=Date(year=1999))
        text = list(searchable_text(resource))
        assert "3" in text
        assert "1999" in text
        assert "a" * 40 in text
