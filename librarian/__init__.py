"""Librarian: a content-addressed catalog for a personal document library.

Every resource (a file or a directory) is named after the SHA-1 digest of its
content.  The catalog keeps bibliographic metadata per resource and follows
each resource through content changes by its original digest:
  - Verification cache so unchanged resources are not re-hashed
  - Deduplication of identical content while scanning
  - Pure reconciliation with staged renames
  - Pluggable orphan resolution (keep, remove, ask)
"""

__version__ = "0.3.0"
__description__ = "Content-addressed catalog for a personal document library"

from librarian.core.orchestrator import Librarian, run_catalog
from librarian.core.reconciler import apply_plan, reconcile

__all__ = ["Librarian", "run_catalog", "reconcile", "apply_plan", "__version__"]
