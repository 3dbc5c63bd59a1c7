"""Shared pytest fixtures for beatshelf tests.

Builds a fake device under a fake gvfs mounts root:

    /gvfs/mtp:host=Oculus_Quest_2_1WMHH/
        Quest/CustomLevels/<hash>/Info.dat
        Quest/Playlists/<file>.json
"""

from __future__ import annotations

from collections.abc import Callable
import json
from typing import Any

import pytest

from beatshelf.core.config.models import AppConfig, DeviceConfig
from beatshelf.core.device import DeviceHandle, locate_device
from beatshelf.core.io import FakeFileSystem
from beatshelf.core.models import LibraryItem, Playlist, SongRef

NOW = 1_700_000_000.0
MOUNTS_ROOT = "/gvfs"
DEVICE_NAME = "mtp:host=Oculus_Quest_2_1WMHH"


# ============================================================================
# Filesystem / Device Fixtures
# ============================================================================


@pytest.fixture
def now() -> float:
    """Fixed wall clock used by the fake filesystem and the scanner."""
    return NOW


@pytest.fixture
def fs(now: float) -> FakeFileSystem:
    """Provide fresh FakeFileSystem with a frozen clock."""
    return FakeFileSystem(clock=lambda: now)


@pytest.fixture
def device_config() -> DeviceConfig:
    """Device config pointing at the fake mounts root."""
    return DeviceConfig(
        mounts_root=MOUNTS_ROOT,
        name_pattern="quest",
        library_subpath="Quest/CustomLevels",
        playlists_subpath="Quest/Playlists",
    )


@pytest.fixture
def app_config(device_config: DeviceConfig) -> AppConfig:
    """AppConfig using the fake device and a cache file at /work."""
    return AppConfig.model_validate(
        {
            "device": device_config.model_dump(),
            "cache": {"path": "/work/custom_levels.json"},
        }
    )


@pytest.fixture
def device(fs: FakeFileSystem, device_config: DeviceConfig) -> DeviceHandle:
    """Mounted fake device with empty library and playlist directories."""
    fs.add_dir(f"{MOUNTS_ROOT}/{DEVICE_NAME}/Quest/CustomLevels")
    fs.add_dir(f"{MOUNTS_ROOT}/{DEVICE_NAME}/Quest/Playlists")
    fs.add_dir("/work")
    handle = locate_device(fs, device_config)
    assert handle is not None
    return handle


# ============================================================================
# Content Factories
# ============================================================================


def descriptor(name: str, bpm: float = 120.0, author: str = "Artist") -> dict[str, Any]:
    """Info.dat content with the game's key names."""
    return {
        "_version": "2.0.0",
        "_songName": name,
        "_songSubName": "",
        "_songAuthorName": author,
        "_levelAuthorName": "Mapper",
        "_coverImageFilename": "cover.jpg",
        "_beatsPerMinute": bpm,
        "_difficultyBeatmapSets": [],
    }


@pytest.fixture
def add_level(fs: FakeFileSystem, device: DeviceHandle, now: float) -> Callable[..., str]:
    """Factory: write one level directory with an Info.dat; returns its id."""

    def _add(
        item_id: str,
        name: str,
        bpm: float = 120.0,
        age_s: float = 0.0,
        descriptor_name: str = "Info.dat",
    ) -> str:
        item_dir = f"{device.library_dir}/{item_id}"
        fs.add_file(f"{item_dir}/{descriptor_name}", json.dumps(descriptor(name, bpm)))
        fs.set_mtime(item_dir, now - age_s)
        return item_id

    return _add


@pytest.fixture
def add_playlist(fs: FakeFileSystem, device: DeviceHandle) -> Callable[..., str]:
    """Factory: write one playlist descriptor; returns its file name."""

    def _add(file_name: str, title: str, songs: list[tuple[str, str]], **extra: Any) -> str:
        payload = {
            "playlistTitle": title,
            "songs": [{"hash": h, "songName": n} for h, n in songs],
            **extra,
        }
        fs.add_file(f"{device.playlists_dir}/{file_name}", json.dumps(payload))
        return file_name

    return _add


@pytest.fixture
def make_item() -> Callable[..., LibraryItem]:
    """Factory: build a LibraryItem directly."""

    def _make(
        item_id: str | None,
        name: str,
        bpm: float = 120.0,
        modified: int | None = 0,
        author: str = "Artist",
    ) -> LibraryItem:
        return LibraryItem.model_validate(
            {**descriptor(name, bpm, author), "hash": item_id, "modified": modified}
        )

    return _make


@pytest.fixture
def make_playlist() -> Callable[..., Playlist]:
    """Factory: build a clean, loaded Playlist referencing the given ids."""

    def _make(title: str, *item_ids: str) -> Playlist:
        return Playlist(
            title=title,
            songs=[SongRef(hash=item_id, name=f"song {item_id}") for item_id in item_ids],
            file_name=f"{title}.json",
        )

    return _make
