"""beatshelf session coordinator.

The session wires one AppConfig and one FileSystem into the pipeline:

    locate device -> load library (cache or scan) -> load playlists
    -> reconcile -> (mutate) -> persist dirty playlists

Everything is synchronous; each call blocks until its I/O completes.
"""

from __future__ import annotations

import logging
from pathlib import Path

from beatshelf.core.caching import (
    Cache,
    LibraryCache,
    NullLibraryCache,
    load_library,
)
from beatshelf.core.config.loader import load_app_config
from beatshelf.core.config.models import AppConfig
from beatshelf.core.device import DeviceHandle, locate_device
from beatshelf.core.engine import EngineSummary, ReconciliationEngine
from beatshelf.core.io import FileSystem, RealFileSystem, absolute_path
from beatshelf.core.playlists import PersistReport, PlaylistStore
from beatshelf.core.utils.logging import get_logger

logger = logging.getLogger(__name__)


class BeatshelfSession:
    """Owns the engine and the collaborators that feed and persist it."""

    def __init__(
        self,
        *,
        app_config: AppConfig | Path | str | None = None,
        fs: FileSystem | None = None,
    ) -> None:
        """Initialize session.

        Args:
            app_config: AppConfig instance, path, or None (default path)
            fs: Filesystem implementation; the real OS filesystem by default

        Raises:
            FileNotFoundError: If an explicit config path doesn't exist
            ValidationError: If the config is invalid
        """
        self.config = (
            app_config if isinstance(app_config, AppConfig) else load_app_config(app_config)
        )
        self.fs: FileSystem = fs or RealFileSystem()
        self.cache = self._build_cache()
        self.engine = ReconciliationEngine(
            sanitize_file_names=self.config.playlists.sanitize_file_names
        )
        self.device: DeviceHandle | None = None
        self.store: PlaylistStore | None = None

    def _build_cache(self) -> Cache:
        if not self.config.cache.enabled:
            return NullLibraryCache()
        cache_path = Path(self.config.cache.path).expanduser().absolute()
        return LibraryCache(self.fs, absolute_path(cache_path.as_posix()))

    @property
    def device_available(self) -> bool:
        return self.device is not None

    def load(self, force: bool = False) -> EngineSummary:
        """Locate the device, load library and playlists, reconcile.

        Args:
            force: Rescan the device even if the cache looks current

        Returns:
            Engine summary after reconciliation
        """
        self.device = locate_device(self.fs, self.config.device)
        self.store = PlaylistStore(self.fs, self.device) if self.device else None

        library = load_library(
            self.fs,
            self.device,
            self.cache,
            policy=self.config.cache.invalidation,
            force=force,
        )
        playlists = self.store.load_playlists() if self.store else []

        self.engine.initialize(library, playlists)
        return self.engine.summary()

    def reload(self) -> EngineSummary:
        """Rescan the library, keeping in-memory playlists and their edits."""
        self.device = locate_device(self.fs, self.config.device)
        self.store = PlaylistStore(self.fs, self.device) if self.device else None

        library = load_library(
            self.fs,
            self.device,
            self.cache,
            policy=self.config.cache.invalidation,
            force=True,
        )
        self.engine.initialize(library, self.engine.playlists)
        return self.engine.summary()

    def save(self) -> PersistReport:
        """Persist dirty playlists and clear the flag of each one written.

        Returns:
            Report of written and failed file names. Without a device every
            dirty playlist is reported as failed and stays dirty.
        """
        dirty = self.engine.dirty_playlists()
        if self.store is None:
            if dirty:
                logger.warning(f"Device unavailable, {len(dirty)} playlists not saved")
            return PersistReport(failed=[playlist.file_name for playlist in dirty])

        device_logger = get_logger(__name__, device=self.store.device.name)
        report = self.store.persist_dirty(self.engine.playlists)
        self.engine.mark_persisted(report.written)
        device_logger.info(f"Saved {len(report.written)} playlists, {len(report.failed)} failed")
        return report
