"""``librarian init`` — create an empty library layout."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.panel import Panel

from librarian.cli.context import LibraryOptions, fail
from librarian.core.cache import VerificationCache
from librarian.core.catalog_store import init_catalog
from librarian.errors import LibrarianError

console = Console()


def init_cmd(ctx: typer.Context) -> None:
    """Create the resources directory, catalog file, and cache file if missing."""
    options: LibraryOptions = ctx.obj
    config = options.config
    try:
        config.resources_path.mkdir(parents=True, exist_ok=True)
        catalog = init_catalog(config.catalog_path)
        if not config.cache_path.exists():
            VerificationCache(config.cache_path).save()
    except (LibrarianError, OSError) as exc:
        fail(console, exc)

    console.print(
        Panel(
            "\n".join([
                f"[bold]Resources:[/bold] {config.resources_path}",
                f"[bold]Catalog:[/bold]   {config.catalog_path} "
                f"({len(catalog.resources)} resources)",
                f"[bold]Cache:[/bold]     {config.cache_path}",
            ]),
            title="[bold]Library ready[/bold]",
            border_style="green",
        )
    )
