"""Library scanner.

Walks the custom level directory on the device. Each subdirectory is one
item: its name is the item id and it holds an ``Info.dat`` (or ``info.dat``)
descriptor. Broken items are skipped so that a partially readable library
still loads.
"""

from __future__ import annotations

from collections.abc import Callable
import hashlib
import logging
import time

from pydantic import ValidationError

from beatshelf.core.device.models import DeviceHandle
from beatshelf.core.io import AbsolutePath, FileSystem
from beatshelf.core.models.library import LibraryItem

logger = logging.getLogger(__name__)

DESCRIPTOR_NAMES = ("Info.dat", "info.dat")


def scan_library(
    fs: FileSystem,
    device: DeviceHandle,
    clock: Callable[[], float] = time.time,
) -> list[LibraryItem]:
    """Read every item descriptor under the device's library directory.

    Args:
        fs: Filesystem holding the device
        device: Located device
        clock: Source of "now" for the elapsed-since-modified value

    Returns:
        Items in enumeration order. Empty when the directory can't be listed.
    """
    library_dir = device.library_dir
    try:
        entries = fs.listdir(library_dir)
    except OSError as e:
        logger.warning(f"Can't open library folder on device {device.name}: {e}")
        return []

    items: list[LibraryItem] = []
    seen: set[str] = set()
    skipped = 0

    for item_id in entries:
        item_dir = fs.join(library_dir, item_id)
        if not fs.is_dir(item_dir):
            continue

        if item_id in seen:
            logger.warning(f"Duplicate item id {item_id}, keeping first occurrence")
            continue

        logger.debug(f"Reading level: {item_id}, number: {len(items)}")
        item = _read_item(fs, item_dir, item_id)
        if item is None:
            skipped += 1
            continue

        modified = _elapsed_ms(fs, item_dir, clock())
        items.append(item.model_copy(update={"id": item_id, "modified": modified}))
        seen.add(item_id)

    logger.info(f"Scanned {len(items)} items from {device.name} ({skipped} skipped)")
    return items


def count_library_items(fs: FileSystem, device: DeviceHandle) -> int | None:
    """Count item subdirectories without reading any descriptor.

    Returns:
        Number of item directories, or None when the library directory
        can't be listed.
    """
    try:
        entries = fs.listdir(device.library_dir)
    except OSError as e:
        logger.warning(f"Can't count items on device {device.name}: {e}")
        return None
    return sum(1 for name in entries if fs.is_dir(fs.join(device.library_dir, name)))


def fingerprint_library(fs: FileSystem, device: DeviceHandle) -> str | None:
    """Hash the sorted item directory names together with their mtimes.

    Detects additions, removals and rewritten item directories without
    reading descriptors. An item whose mtime can't be read contributes its
    name only.

    Returns:
        SHA256 hex digest, or None when the library directory can't be listed.
    """
    try:
        entries = fs.listdir(device.library_dir)
    except OSError as e:
        logger.warning(f"Can't fingerprint library on device {device.name}: {e}")
        return None

    digest = hashlib.sha256()
    for name in sorted(entries):
        item_dir = fs.join(device.library_dir, name)
        if not fs.is_dir(item_dir):
            continue
        try:
            mtime = repr(fs.mtime(item_dir))
        except OSError:
            mtime = "?"
        digest.update(f"{name}\x00{mtime}\n".encode())
    return digest.hexdigest()


def _read_item(fs: FileSystem, item_dir: AbsolutePath, item_id: str) -> LibraryItem | None:
    """Read and validate one descriptor, trying each accepted file name."""
    raw: str | None = None
    last_error: Exception | None = None
    for descriptor in DESCRIPTOR_NAMES:
        try:
            raw = fs.read_text(fs.join(item_dir, descriptor))
            break
        except (OSError, UnicodeDecodeError) as e:
            last_error = e

    if raw is None:
        logger.warning(f"Can't read info.dat from folder with name: {item_id} ({last_error!r})")
        return None

    try:
        return LibraryItem.model_validate_json(raw)
    except ValidationError as e:
        logger.warning(
            f"Can't deserialize info.dat in the folder: {item_id} ({e.error_count()} errors)"
        )
        return None


def _elapsed_ms(fs: FileSystem, path: AbsolutePath, now: float) -> int:
    """Milliseconds since path was modified; 0 when unknown or in the future."""
    try:
        mtime = fs.mtime(path)
    except OSError:
        return 0
    return max(0, int((now - mtime) * 1000))
