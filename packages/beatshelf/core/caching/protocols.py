"""Protocol for library cache backends."""

from typing import Protocol

from beatshelf.core.caching.models import CacheMeta
from beatshelf.core.models.library import LibraryItem


class Cache(Protocol):
    """
    Protocol for library cache backends.

    All implementations must support:
    - Miss-on-error semantics (corruption → None)
    - Non-raising saves (failure → False, logged)
    """

    def load(self) -> list[LibraryItem] | None:
        """
        Load cached items.

        Returns:
            Items in stored order, or None on miss/error
        """
        ...

    def load_meta(self) -> CacheMeta | None:
        """Load the metadata written alongside the items, None on miss/error."""
        ...

    def save(self, items: list[LibraryItem], fingerprint: str | None = None) -> bool:
        """
        Replace the cached items.

        Args:
            items: Items to persist
            fingerprint: Optional library fingerprint to record

        Returns:
            True on success
        """
        ...
