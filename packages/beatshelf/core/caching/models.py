"""Models for the library metadata cache."""

from enum import Enum

from pydantic import BaseModel, Field


class InvalidationPolicy(str, Enum):
    """How a cached library is checked against the device.

    COUNT compares the number of cached items with the number of item
    directories on the device. It is cheap but cannot see in-place edits.
    FINGERPRINT hashes the directory listing plus mtimes and compares it with
    the fingerprint recorded when the cache was written.
    """

    COUNT = "count"
    FINGERPRINT = "fingerprint"


class CacheMeta(BaseModel):
    """
    Sidecar metadata written after the cache file (commit marker).

    Only the fingerprint policy reads it; the cache file itself stays a
    flat array of items.
    """

    created_at: float = Field(description="Unix timestamp (seconds)")
    item_count: int = Field(ge=0, description="Number of items in the cache file")
    fingerprint: str | None = Field(
        default=None, description="Library fingerprint at save time, if computed"
    )
