"""Cache-or-scan policy for loading the library."""

from __future__ import annotations

from collections.abc import Callable
import logging
import time

from beatshelf.core.caching.models import InvalidationPolicy
from beatshelf.core.caching.protocols import Cache
from beatshelf.core.device.models import DeviceHandle
from beatshelf.core.io import FileSystem
from beatshelf.core.library.scanner import (
    count_library_items,
    fingerprint_library,
    scan_library,
)
from beatshelf.core.models.library import LibraryItem

logger = logging.getLogger(__name__)


def load_library(
    fs: FileSystem,
    device: DeviceHandle | None,
    cache: Cache,
    policy: InvalidationPolicy = InvalidationPolicy.COUNT,
    force: bool = False,
    clock: Callable[[], float] = time.time,
) -> list[LibraryItem]:
    """Return the library, from cache when it still looks current.

    Decision order:
    - no device: cached items as-is (even when forced), else empty
    - force, or nothing cached: full scan, then save
    - COUNT: rescan when the on-device item directory count differs from the
      number of cached items
    - FINGERPRINT: rescan when the listing fingerprint differs from the one
      recorded at save time (or none was recorded)
    - the check itself can't run (library dir unreadable): stale cache

    Args:
        fs: Filesystem holding the device
        device: Located device, or None when unavailable
        cache: Cache backend
        policy: Invalidation policy
        force: Ignore the cache and rescan
        clock: Passed through to the scanner

    Returns:
        Library items
    """
    if device is None:
        cached = cache.load()
        if cached is None:
            logger.warning("Device unavailable and no cached library")
            return []
        logger.warning("Device unavailable, using cached library")
        return cached

    cached = None if force else cache.load()
    if cached is None:
        return _rescan(fs, device, cache, policy, clock)

    if policy is InvalidationPolicy.FINGERPRINT:
        live_fingerprint = fingerprint_library(fs, device)
        if live_fingerprint is None:
            return cached
        meta = cache.load_meta()
        if meta is None or meta.fingerprint != live_fingerprint:
            logger.info("Library fingerprint changed, invalidating cache")
            return _rescan(fs, device, cache, policy, clock)
        return cached

    live_count = count_library_items(fs, device)
    if live_count is None:
        return cached
    if live_count != len(cached):
        logger.info(
            f"There are {live_count} songs on device, but {len(cached)} cached, "
            "invalidating cache"
        )
        return _rescan(fs, device, cache, policy, clock)
    return cached


def _rescan(
    fs: FileSystem,
    device: DeviceHandle,
    cache: Cache,
    policy: InvalidationPolicy,
    clock: Callable[[], float],
) -> list[LibraryItem]:
    items = scan_library(fs, device, clock=clock)
    fingerprint = (
        fingerprint_library(fs, device) if policy is InvalidationPolicy.FINGERPRINT else None
    )
    cache.save(items, fingerprint=fingerprint)
    return items
