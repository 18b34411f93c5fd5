"""Error kinds raised by Librarian.

Fatal conditions (unreadable resources, corrupt catalog or cache files)
propagate to the caller and abort the run.  ``InvalidOrphanResponse`` is the
only recoverable kind: the orphan prompt catches it and asks again.
"""

from __future__ import annotations


class LibrarianError(Exception):
    """Base class for every error raised by Librarian."""


class LibrarianIOError(LibrarianError, OSError):
    """A resource, catalog, or cache path could not be read, written, or renamed."""


class HashingError(LibrarianIOError):
    """Raised when a resource disappears or becomes unreadable while hashing."""


class MalformedCatalogError(LibrarianError, ValueError):
    """The catalog file exists but does not match the catalog schema."""


class MalformedCacheError(LibrarianError, ValueError):
    """The cache file exists but does not match the cache schema."""


class InvalidOrphanResponse(LibrarianError, ValueError):
    """The operator answered the orphan prompt with something other than y/n."""
