"""Fuzzy search over a finalized catalog.

A query matches a field when its characters appear in the field's text in
order, not necessarily adjacent (``"prgpy"`` matches ``"Programming
Python"``).  Matching is smart-case: a query with no upper-case letters
ignores case.
"""

from __future__ import annotations

from collections.abc import Iterator

from librarian.models.catalog import Catalog
from librarian.models.resource import Name, Resource


def fuzzy_match(text: str, query: str) -> bool:
    """Whether every character of ``query`` occurs in ``text`` in order."""
    if not query:
        return True
    if query == query.lower():
        text = text.lower()
    remaining = iter(text)
    return all(ch in remaining for ch in query)


def _names(names: list[Name]) -> Iterator[str]:
    for name in names:
        for part in (name.first, name.middle, name.last):
            if part:
                yield part


def searchable_text(resource: Resource) -> Iterator[str]:
    """Every metadata value of ``resource`` rendered as text."""
    yield resource.title
    for value in (
        resource.subtitle,
        resource.version,
        resource.publisher,
        resource.organization,
        resource.journal,
        resource.doi,
        resource.document_type,
        resource.content_type,
        resource.url,
    ):
        if value:
            yield value
    yield from _names(resource.authors)
    yield from _names(resource.editors)
    if resource.date is not None:
        for part in (resource.date.year, resource.date.month, resource.date.day):
            if part is not None:
                yield str(part)
    for number in (resource.edition, resource.volume, resource.number, resource.part_number):
        if number is not None:
            yield str(number)
    yield from resource.tags
    yield from resource.historical_checksums


def matches(resource: Resource, query: str) -> bool:
    return any(fuzzy_match(text, query) for text in searchable_text(resource))


def search(catalog: Catalog, query: str) -> list[Resource]:
    """Resources with at least one field matching ``query``, in catalog order."""
    return [r for r in catalog.resources if matches(r, query)]
