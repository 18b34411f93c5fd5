"""Main Typer application — imports and registers all CLI commands.

Entry point: ``librarian`` (configured via pyproject.toml project.scripts).

Library options (``--directory``, ``--catalog``, ``--resources``,
``--log-level``) go before the subcommand and override ``LIBRARIAN_*``
environment settings.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console

from librarian.cli.commands.catalog_cmd import catalog_cmd
from librarian.cli.commands.init_cmd import init_cmd
from librarian.cli.commands.search_cmd import search_cmd
from librarian.cli.context import LibraryOptions
from librarian.config import LibrarianConfig
from librarian.logging_setup import configure_logging

app = typer.Typer(
    name="librarian",
    help="Librarian: a content-addressed catalog for your documents.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def main_callback(
    ctx: typer.Context,
    directory: Optional[Path] = typer.Option(
        None, "--directory", "-d", help="Library directory (default: current directory)."
    ),
    catalog_file: Optional[Path] = typer.Option(
        None, "--catalog", "-c", help="Catalog file, relative to the library directory."
    ),
    resources_dir: Optional[Path] = typer.Option(
        None, "--resources", "-r", help="Resources directory, relative to the library directory."
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Logging level (DEBUG, INFO, WARNING, ...)."
    ),
) -> None:
    """Resolve the library configuration shared by all commands."""
    overrides = {
        key: value
        for key, value in {
            "directory": directory,
            "catalog_file": catalog_file,
            "resources_dir": resources_dir,
            "log_level": log_level,
        }.items()
        if value is not None
    }
    try:
        config = LibrarianConfig(**overrides)
    except ValidationError as exc:
        Console(stderr=True).print(f"[bold red]Invalid configuration:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    configure_logging(config.log_level)
    ctx.obj = LibraryOptions(config=config)


# Register subcommands
app.command(name="init", help="Create an empty library.")(init_cmd)
app.command(name="catalog", help="Catalog new and changed resources.")(catalog_cmd)
app.command(name="search", help="Fuzzy-search the catalog.")(search_cmd)


@app.command(name="show-config", help="Show the effective library configuration.")
def show_config_cmd(ctx: typer.Context) -> None:
    """Print the resolved paths and settings."""
    from rich.table import Table

    config = ctx.obj.config
    table = Table(title="Librarian configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_row("Library", str(config.library_path))
    table.add_row("Catalog", str(config.catalog_path))
    table.add_row("Resources", str(config.resources_path))
    table.add_row("Cache", str(config.cache_path))
    table.add_row("Use cache", str(config.use_cache))
    table.add_row("Orphans", config.orphans.value)
    table.add_row("Log level", config.log_level)
    Console().print(table)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
