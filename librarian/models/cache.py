"""Verification cache entry model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class CacheEntry(BaseModel):
    """When a resource's digest was last computed, and what it was.

    ``last_verified`` is whole seconds since the Unix epoch.  The entry may be
    reused as long as the resource has not been modified after that time.
    """

    model_config = ConfigDict(frozen=True)

    last_verified: int
    checksum: str

    def is_fresh(self, modified_time: int) -> bool:
        """Whether the entry still describes a resource last modified at ``modified_time``."""
        return self.last_verified >= modified_time
