"""Integration tests for the CLI against a device tree on the real filesystem.

Each test builds a fake gvfs mounts root under tmp_path and points the CLI
at it through environment overrides.
"""

import json
from pathlib import Path

import pytest

from beatshelf.cli.main import main
from beatshelf.core.config.models import DeviceConfig

DEVICE_NAME = "mtp:host=Oculus_Quest_2_1WMHH"


@pytest.fixture
def quest(tmp_path: Path, monkeypatch) -> Path:
    """Mounted headset with three levels and one playlist holding one of them."""
    defaults = DeviceConfig()
    mounts = tmp_path / "gvfs"
    root = mounts / DEVICE_NAME
    levels = root / defaults.library_subpath
    playlists = root / defaults.playlists_subpath
    playlists.mkdir(parents=True)

    for item_id, name, bpm in [("h1", "Energy", 128), ("h2", "Zebra", 90), ("h3", "Lullaby", 70)]:
        (levels / item_id).mkdir(parents=True)
        (levels / item_id / "Info.dat").write_text(
            json.dumps(
                {
                    "_version": "2.0.0",
                    "_songName": name,
                    "_songSubName": "",
                    "_songAuthorName": "Artist",
                    "_levelAuthorName": "Mapper",
                    "_coverImageFilename": "cover.jpg",
                    "_beatsPerMinute": bpm,
                }
            )
        )

    (playlists / "Chill.json").write_text(
        json.dumps(
            {
                "playlistTitle": "Chill",
                "playlistAuthor": "me",
                "songs": [{"hash": "h3", "songName": "Lullaby"}],
            }
        )
    )

    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("BEATSHELF_MOUNTS_ROOT", str(mounts))
    monkeypatch.setenv("BEATSHELF_CACHE_PATH", str(tmp_path / "custom_levels.json"))
    return playlists


def read_playlist(playlists: Path, file_name: str) -> dict:
    return json.loads((playlists / file_name).read_text())


class TestReadCommands:
    """Commands that only read."""

    def test_scan_prints_summary_and_writes_cache(self, quest: Path, tmp_path: Path, capsys):
        assert main(["--log-level", "WARNING", "scan"]) == 0

        out = capsys.readouterr().out
        assert "3 levels" in out
        assert "2 not in any playlist" in out
        cached = json.loads((tmp_path / "custom_levels.json").read_text())
        assert sorted(entry["hash"] for entry in cached) == ["h1", "h2", "h3"]

    def test_scan_skips_undecodable_level(self, quest: Path, tmp_path: Path, capsys):
        levels = tmp_path / "gvfs" / DEVICE_NAME / DeviceConfig().library_subpath
        (levels / "bad").mkdir()
        (levels / "bad" / "Info.dat").write_bytes(b'{"_songName": "\xff\xfe"}')

        assert main(["--log-level", "WARNING", "scan"]) == 0

        assert "3 levels" in capsys.readouterr().out

    def test_available_sorted_by_tempo(self, quest: Path, capsys):
        assert main(["--log-level", "WARNING", "available", "--sort", "tempo"]) == 0

        out = capsys.readouterr().out
        assert out.index("Zebra") < out.index("Energy")
        assert "Lullaby" not in out

    def test_show_marks_dangling_references(self, quest: Path, capsys):
        playlist = read_playlist(quest, "Chill.json")
        playlist["songs"].append({"hash": "deleted", "songName": "Old Song"})
        (quest / "Chill.json").write_text(json.dumps(playlist))

        assert main(["--log-level", "WARNING", "show", "Chill"]) == 0

        out = capsys.readouterr().out
        assert "Lullaby by: Artist" in out
        assert "Unknown" in out

    def test_missing_explicit_config_fails(self, quest: Path, tmp_path: Path, capsys):
        assert main(["--config", str(tmp_path / "nope.yaml"), "scan"]) == 1
        assert "Could not load config" in capsys.readouterr().out


class TestEditCommands:
    """Commands that modify and persist playlists."""

    def test_create_then_add(self, quest: Path):
        assert main(["--log-level", "WARNING", "create", "Workout"]) == 0
        assert read_playlist(quest, "Workout.json") == {"playlistTitle": "Workout", "songs": []}

        assert main(["--log-level", "WARNING", "add", "Workout", "h1", "h2"]) == 0

        assert read_playlist(quest, "Workout.json")["songs"] == [
            {"hash": "h1", "songName": "Energy"},
            {"hash": "h2", "songName": "Zebra"},
        ]

    def test_create_duplicate_fails_without_writing(self, quest: Path):
        before = (quest / "Chill.json").read_text()

        assert main(["--log-level", "WARNING", "create", "Chill"]) == 1
        assert (quest / "Chill.json").read_text() == before

    def test_add_unavailable_item_reports_failure(self, quest: Path, capsys):
        assert main(["--log-level", "WARNING", "add", "Chill", "h3", "h1"]) == 1

        assert "Not available: h3" in capsys.readouterr().out
        songs = read_playlist(quest, "Chill.json")["songs"]
        assert [song["hash"] for song in songs] == ["h3", "h1"]

    def test_remove_keeps_unmodeled_keys(self, quest: Path):
        assert main(["--log-level", "WARNING", "remove", "Chill", "0"]) == 0

        playlist = read_playlist(quest, "Chill.json")
        assert playlist["songs"] == []
        assert playlist["playlistAuthor"] == "me"

    def test_remove_invalid_index_fails(self, quest: Path):
        assert main(["--log-level", "WARNING", "remove", "Chill", "5"]) == 1

    def test_edit_without_device_fails(self, quest: Path, tmp_path: Path, monkeypatch, capsys):
        monkeypatch.setenv("BEATSHELF_MOUNTS_ROOT", str(tmp_path / "empty"))

        assert main(["--log-level", "WARNING", "create", "Offline"]) == 1
        assert "Device not found" in capsys.readouterr().out
