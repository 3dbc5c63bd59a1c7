"""Filesystem-backed library cache.

The cache file is a flat JSON array of items (including id and modified),
read and written wholesale. A small meta file is written after it as a
commit marker and carries the library fingerprint for the fingerprint
invalidation policy.
"""

from __future__ import annotations

import logging
import time

from pydantic import ValidationError

from beatshelf.core.caching.models import CacheMeta
from beatshelf.core.io import AbsolutePath, FileSystem, absolute_path
from beatshelf.core.models.library import LibraryItem, LibraryItemList

logger = logging.getLogger(__name__)


class LibraryCache:
    """
    Persists the scanned library between runs.

    Read failures are cache misses and write failures are logged; neither
    is raised, so the in-memory library stays usable for the session.
    """

    def __init__(self, fs: FileSystem, path: AbsolutePath) -> None:
        """
        Initialize library cache.

        Args:
            fs: Filesystem implementation
            path: Absolute path of the cache file
        """
        self.fs = fs
        self.path = path
        self.meta_path = absolute_path(f"{path}.meta.json")

    def load(self) -> list[LibraryItem] | None:
        """
        Load the cached items.

        Returns:
            Items in stored order, or None when the cache is missing,
            unreadable or malformed
        """
        try:
            raw = self.fs.read_text(self.path)
        except FileNotFoundError:
            logger.info(f"No cached library at {self.path}")
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Can't read cached library {self.path}: {e}")
            return None

        try:
            items = LibraryItemList.validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Discarding malformed cache {self.path}: {e.error_count()} errors")
            return None

        logger.info(f"Retrieved {len(items)} items from cache")
        return items

    def load_meta(self) -> CacheMeta | None:
        """Load the commit marker; None when absent or corrupt."""
        try:
            return CacheMeta.model_validate_json(self.fs.read_text(self.meta_path))
        except (OSError, UnicodeDecodeError, ValidationError):
            return None

    def save(self, items: list[LibraryItem], fingerprint: str | None = None) -> bool:
        """
        Write items to the cache file, then the meta file.

        Args:
            items: Library items to persist
            fingerprint: Library fingerprint to record, if computed

        Returns:
            True when both files were written
        """
        payload = LibraryItemList.dump_json(items, by_alias=True).decode("utf-8")
        logger.debug(f"Attempting to cache {len(items)} items to {self.path}")

        try:
            self.fs.write_text(self.path, payload)
            meta = CacheMeta(created_at=time.time(), item_count=len(items), fingerprint=fingerprint)
            self.fs.write_text(self.meta_path, meta.model_dump_json(indent=2))
        except OSError as e:
            logger.warning(f"Can't write cache to {self.path}: {e}")
            return False

        logger.info(f"Cached {len(items)} items to {self.path}")
        return True


class NullLibraryCache:
    """
    No-op cache used when caching is disabled.

    Always reports a miss, discards all saves.
    """

    def load(self) -> list[LibraryItem] | None:
        """Always returns None."""
        return None

    def load_meta(self) -> CacheMeta | None:
        """Always returns None."""
        return None

    def save(self, items: list[LibraryItem], fingerprint: str | None = None) -> bool:
        """Discards items."""
        return True
