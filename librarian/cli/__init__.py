"""Librarian CLI — Typer-based command-line interface.

Provides the ``librarian`` command with subcommands to initialize a library,
catalog its resources, search the catalog, and show the effective
configuration.

All output uses Rich for formatted terminal display.
"""
