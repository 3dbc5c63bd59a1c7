"""Tests for locate_device."""

from __future__ import annotations

from beatshelf.core.config.models import DeviceConfig
from beatshelf.core.device import locate_device

MOUNTS_ROOT = "/gvfs"
DEVICE_NAME = "mtp:host=Oculus_Quest_2_1WMHH"


class TestLocateDevice:
    """Tests for finding the headset mount."""

    def test_resolves_library_and_playlist_dirs(self, fs, device_config):
        fs.add_dir(f"{MOUNTS_ROOT}/{DEVICE_NAME}")

        handle = locate_device(fs, device_config)

        assert handle is not None
        assert handle.name == DEVICE_NAME
        assert str(handle.root) == f"{MOUNTS_ROOT}/{DEVICE_NAME}"
        assert str(handle.library_dir) == f"{MOUNTS_ROOT}/{DEVICE_NAME}/Quest/CustomLevels"
        assert str(handle.playlists_dir) == f"{MOUNTS_ROOT}/{DEVICE_NAME}/Quest/Playlists"

    def test_match_is_case_insensitive_and_first_wins(self, fs):
        fs.add_dir(f"{MOUNTS_ROOT}/smb-share:server=nas")
        fs.add_dir(f"{MOUNTS_ROOT}/mtp:host=OCULUS_QUEST_A")
        fs.add_dir(f"{MOUNTS_ROOT}/mtp:host=Quest_B")

        handle = locate_device(fs, DeviceConfig(mounts_root=MOUNTS_ROOT, name_pattern="Quest"))

        assert handle is not None
        assert handle.name == "mtp:host=OCULUS_QUEST_A"

    def test_no_match_returns_none(self, fs, device_config):
        fs.add_dir(f"{MOUNTS_ROOT}/mtp:host=Pixel_7")

        assert locate_device(fs, device_config) is None

    def test_missing_mounts_root_returns_none(self, fs, device_config):
        assert locate_device(fs, device_config) is None

    def test_relative_mounts_root_returns_none(self, fs):
        assert locate_device(fs, DeviceConfig(mounts_root="gvfs")) is None

    def test_escaping_subpath_returns_none(self, fs):
        fs.add_dir(f"{MOUNTS_ROOT}/{DEVICE_NAME}")
        config = DeviceConfig(mounts_root=MOUNTS_ROOT, library_subpath="../../etc")

        assert locate_device(fs, config) is None

    def test_default_subpaths(self, fs):
        fs.add_dir(f"{MOUNTS_ROOT}/{DEVICE_NAME}")

        handle = locate_device(fs, DeviceConfig(mounts_root=MOUNTS_ROOT))

        assert handle is not None
        assert str(handle.library_dir).endswith(
            "Internal shared storage/ModData/com.beatgames.beatsaber/Mods/SongLoader/CustomLevels"
        )
