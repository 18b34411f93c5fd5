"""``librarian search`` — print catalog entries matching a fuzzy query."""

from __future__ import annotations

import json

import typer
from rich.console import Console

from librarian.cli.context import LibraryOptions, fail
from librarian.core.catalog_store import load_catalog
from librarian.errors import LibrarianError
from librarian.search import search

console = Console(stderr=True)


def search_cmd(
    ctx: typer.Context,
    query: str = typer.Argument(..., help="Characters to look for, in order."),
) -> None:
    """Print matching resources as JSON."""
    options: LibraryOptions = ctx.obj
    try:
        catalog = load_catalog(options.config.catalog_path)
    except LibrarianError as exc:
        fail(console, exc)

    results = search(catalog, query)
    typer.echo(json.dumps([r.model_dump(mode="json") for r in results], indent=2))
    if not results:
        console.print(f"[dim]No resources match {query!r}.[/dim]")
