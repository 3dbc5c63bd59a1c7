"""Device locator.

Finds the headset among the volumes mounted under the user-space mounts
root (gvfs exposes each MTP device as one directory there).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from beatshelf.core.device.models import DeviceHandle
from beatshelf.core.io import FileSystem, absolute_path, relative_path

if TYPE_CHECKING:
    from beatshelf.core.config.models import DeviceConfig

logger = logging.getLogger(__name__)


def locate_device(fs: FileSystem, config: DeviceConfig) -> DeviceHandle | None:
    """Return the first mount whose name contains config.name_pattern.

    Matching is a case-insensitive substring test, in listing order.

    Args:
        fs: Filesystem to search
        config: Mounts root, name pattern and on-device subpaths

    Returns:
        DeviceHandle, or None when the mounts root can't be listed or nothing
        matches. None means "library unavailable", not an error.
    """
    try:
        mounts_root = absolute_path(config.mounts_root)
        entries = fs.listdir(mounts_root)
    except (OSError, ValueError) as e:
        logger.warning(f"Can't access mounts root {config.mounts_root}: {e}")
        return None

    pattern = config.name_pattern.lower()
    name = next((entry for entry in entries if pattern in entry.lower()), None)
    if name is None:
        logger.warning(f"No mounted device matching '{config.name_pattern}' in {mounts_root}")
        return None

    try:
        root = fs.join(mounts_root, name)
        library_dir = fs.join(root, *relative_path(config.library_subpath).parts)
        playlists_dir = fs.join(root, *relative_path(config.playlists_subpath).parts)
    except ValueError as e:
        logger.warning(f"Invalid device subpath configuration: {e}")
        return None

    logger.info(f"Found device: {name}")
    return DeviceHandle(
        name=name,
        root=root,
        library_dir=library_dir,
        playlists_dir=playlists_dir,
    )
