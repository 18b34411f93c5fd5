"""State shared by every command: the resolved library configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NoReturn

import typer
from rich.console import Console

from librarian.config import LibrarianConfig


@dataclass(frozen=True)
class LibraryOptions:
    """Options given before the subcommand, merged over env/.env settings."""

    config: LibrarianConfig


def fail(console: Console, exc: BaseException) -> NoReturn:
    """Report a fatal error and exit with status 1."""
    console.print(f"[bold red]Error:[/bold red] {exc}", markup=True, highlight=False)
    raise typer.Exit(code=1) from exc
