"""Verification cache — skip re-hashing resources that have not changed.

The cache file maps a resource's name in the resources directory to the time
its digest was last verified and the digest itself::

    {
      "3f786850e387550fdab836ed7e6dc881de23001b": {
        "last_verified": 1700000000,
        "checksum": "3f786850e387550fdab836ed7e6dc881de23001b"
      }
    }

A missing or empty file is an empty cache.  The file is only written by
``save()``, which rewrites it completely with keys in sorted order.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Container, Iterable
from pathlib import Path

from pydantic import ValidationError

from librarian.core.fileio import write_json_atomic
from librarian.core.hasher import Hasher
from librarian.errors import LibrarianIOError, MalformedCacheError
from librarian.models.cache import CacheEntry

logger = logging.getLogger(__name__)


class VerificationCache:
    """In-memory view of the cache file with lookup, update, and prune.

    Parameters
    ----------
    path:
        Location of the cache file.
    entries:
        Initial entries, usually from ``load()``.
    enabled:
        If ``False``, every lookup recomputes the digest; the entry is still
        refreshed so the cache is warm the next time it is enabled.
    hasher:
        Digest function used on a cache miss.  Defaults to a counting
        ``Hasher``.
    """

    def __init__(
        self,
        path: Path,
        entries: dict[str, CacheEntry] | None = None,
        *,
        enabled: bool = True,
        hasher: Callable[[Path], str] | None = None,
    ) -> None:
        self.path = Path(path)
        self.enabled = enabled
        self._entries: dict[str, CacheEntry] = dict(entries or {})
        self._hasher = hasher if hasher is not None else Hasher()
        self.hits = 0
        self.recomputed = 0

    # ------------------------------------------------------------------
    # Load and save
    # ------------------------------------------------------------------

    @classmethod
    def load(
        cls,
        path: Path,
        *,
        enabled: bool = True,
        hasher: Callable[[Path], str] | None = None,
    ) -> VerificationCache:
        """Read the cache file, treating a missing or blank file as empty.

        Raises
        ------
        MalformedCacheError
            If the file is not a JSON object of cache entries.
        LibrarianIOError
            If the file exists but cannot be read.
        """
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8") if path.exists() else ""
        except OSError as exc:
            raise LibrarianIOError(f"failed to read cache {path}: {exc}") from exc

        entries: dict[str, CacheEntry] = {}
        if text.strip():
            try:
                raw = json.loads(text)
            except json.JSONDecodeError as exc:
                raise MalformedCacheError(f"cache {path} is not valid JSON: {exc}") from exc
            if not isinstance(raw, dict):
                raise MalformedCacheError(f"cache {path} must contain a JSON object")
            try:
                entries = {
                    name: CacheEntry.model_validate(value) for name, value in raw.items()
                }
            except ValidationError as exc:
                raise MalformedCacheError(f"cache {path} has an invalid entry: {exc}") from exc
        else:
            logger.info("No cache at %s; starting with an empty cache", path)

        return cls(path, entries, enabled=enabled, hasher=hasher)

    def to_json(self) -> str:
        """Serialize entries with sorted keys, the format ``save()`` writes."""
        payload = {
            name: self._entries[name].model_dump(mode="json")
            for name in sorted(self._entries)
        }
        return json.dumps(payload, indent=2)

    def save(self) -> None:
        """Overwrite the cache file with the current entries."""
        write_json_atomic(self.path, self.to_json())
        logger.debug("Wrote %d cache entries to %s", len(self._entries), self.path)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, name: str) -> CacheEntry | None:
        """Return the entry stored under ``name``, if any."""
        return self._entries.get(name)

    def lookup_or_compute(
        self,
        name: str,
        path: Path,
        modified_time: int,
        now: int,
        *,
        store_under_digest: bool = False,
        reserved: Container[str] = (),
    ) -> str:
        """Return the digest of the resource at ``path``.

        A fresh entry under ``name`` (verified no earlier than
        ``modified_time``) is returned without touching the filesystem.
        Otherwise the digest is recomputed and stored as ``{now, digest}``.

        ``store_under_digest`` is for resources about to be renamed to their
        digest (new or returning ones), so the digest is the name they will
        have on the next run.  A digest listed in ``reserved`` is already the
        name of another present resource; no rename will happen and the
        entry stays under ``name`` instead.
        """
        entry = self._entries.get(name)
        if self.enabled and entry is not None and entry.is_fresh(modified_time):
            self.hits += 1
            return entry.checksum

        digest = self._hasher(path)
        self.recomputed += 1
        key = digest if store_under_digest and digest not in reserved else name
        self._entries[key] = CacheEntry(last_verified=now, checksum=digest)
        return digest

    # ------------------------------------------------------------------
    # Maintenance
    # ------------------------------------------------------------------

    def prune(self, seen_names: Iterable[str]) -> list[str]:
        """Drop entries whose resource no longer exists; return the dropped keys."""
        keep = set(seen_names)
        dropped = sorted(name for name in self._entries if name not in keep)
        for name in dropped:
            del self._entries[name]
        if dropped:
            logger.info("Pruned %d stale cache entries", len(dropped))
        return dropped

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def keys(self) -> list[str]:
        return sorted(self._entries)
