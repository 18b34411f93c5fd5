"""``librarian catalog`` — reconcile the catalog with the resources directory.

Hashes every resource (reusing cached digests for unchanged ones), removes
duplicate content, catalogs new resources under their digest, records
content changes, and resolves orphans.
"""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from librarian.cli.context import LibraryOptions, fail
from librarian.core.orchestrator import Librarian
from librarian.core.orphans import OrphanPolicy, resolver_for
from librarian.errors import LibrarianError
from librarian.models.reports import CatalogRunReport

console = Console()


def _summary(report: CatalogRunReport) -> Table:
    table = Table(title="Catalog updated", show_header=False)
    table.add_column("Item", style="bold")
    table.add_column("Count", justify="right")
    table.add_row("Resources", str(report.resources))
    table.add_row("New", f"[green]{len(report.created)}[/green]")
    table.add_row("Changed", f"[yellow]{len(report.updated)}[/yellow]")
    table.add_row("Re-linked", str(len(report.relinked)))
    table.add_row("Duplicates removed", str(len(report.duplicates)))
    table.add_row("Orphans removed", f"[red]{len(report.removed_orphans)}[/red]")
    table.add_row("Orphans kept", str(len(report.kept_orphans)))
    table.add_row("Conflicts", str(len(report.conflicts)))
    table.add_row("Hashed / cached", f"{report.hashed} / {report.cache_hits}")
    return table


def catalog_cmd(
    ctx: typer.Context,
    cache: Optional[bool] = typer.Option(
        None,
        "--cache/--no-cache",
        help="Reuse cached checksums of unmodified resources.",
    ),
    orphans: Optional[OrphanPolicy] = typer.Option(
        None,
        "--orphans",
        "-o",
        case_sensitive=False,
        help="What to do with catalog entries whose resource is gone.",
    ),
) -> None:
    """Catalog new resources and update changed ones."""
    options: LibraryOptions = ctx.obj
    config = options.config
    use_cache = config.use_cache if cache is None else cache
    policy = config.orphans if orphans is None else orphans

    resolver = resolver_for(policy, ask=console.input, say=console.print)
    librarian = Librarian.from_config(config)
    try:
        report = librarian.catalog(use_cache=use_cache, resolver=resolver)
    except LibrarianError as exc:
        fail(console, exc)

    console.print(_summary(report))
    for conflict in report.conflicts:
        console.print(
            f"[yellow]Left uncataloged:[/yellow] {conflict} "
            "(its content is the original version of another resource)"
        )
