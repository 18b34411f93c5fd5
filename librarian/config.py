"""Library configuration — env-driven via pydantic-settings.

Every setting can be overridden with a ``LIBRARIAN_*`` environment variable
or a ``.env`` file in the working directory; command-line options override
both.

Examples
--------
Override via environment::

    export LIBRARIAN_DIRECTORY=~/library
    export LIBRARIAN_ORPHANS=keep
    export LIBRARIAN_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from librarian.core.orphans import OrphanPolicy


class LibrarianConfig(BaseSettings):
    """Where the library lives and how cataloging behaves.

    ``catalog_file``, ``resources_dir``, and ``cache_file`` are relative to
    ``directory`` unless absolute.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="LIBRARIAN_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Library layout
    directory: Path = Path(".")
    catalog_file: Path = Path("catalog.json")
    resources_dir: Path = Path("resources")
    cache_file: Path = Path(".cache")

    # Cataloging
    use_cache: bool = True
    orphans: OrphanPolicy = OrphanPolicy.ASK

    # Observability
    log_level: str = "INFO"

    @property
    def library_path(self) -> Path:
        """Absolute library directory."""
        return self.directory.expanduser().resolve()

    @property
    def catalog_path(self) -> Path:
        return self.library_path / self.catalog_file

    @property
    def resources_path(self) -> Path:
        return self.library_path / self.resources_dir

    @property
    def cache_path(self) -> Path:
        return self.library_path / self.cache_file

