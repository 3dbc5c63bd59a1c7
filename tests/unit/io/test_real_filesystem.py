"""Tests for RealFileSystem against a temporary directory."""

from pathlib import Path

import pytest

from beatshelf.core.io import RealFileSystem, absolute_path, sanitize_path_component


@pytest.fixture
def fs():
    return RealFileSystem()


class TestRealFileSystem:
    """Round trips through the OS."""

    def test_write_is_atomic_and_leaves_no_temp_files(self, fs: RealFileSystem, tmp_path: Path):
        """Test write_text replaces the target and cleans up its temp file."""
        root = absolute_path(tmp_path.as_posix())
        target = fs.join(root, "cache.json")

        fs.write_text(target, "[]")
        fs.write_text(target, '[{"a": 1}]')

        assert fs.read_text(target) == '[{"a": 1}]'
        assert fs.listdir(root) == ["cache.json"]

    def test_write_into_missing_directory_raises(self, fs: RealFileSystem, tmp_path: Path):
        """Test writes do not create parent directories."""
        target = fs.join(absolute_path(tmp_path.as_posix()), "missing", "x.json")
        with pytest.raises(FileNotFoundError):
            fs.write_text(target, "{}")

    def test_mtime_and_listing(self, fs: RealFileSystem, tmp_path: Path):
        """Test mtime reflects the OS stat value and listdir sees directories."""
        (tmp_path / "level").mkdir()
        root = absolute_path(tmp_path.as_posix())
        level = fs.join(root, "level")

        assert fs.is_dir(level)
        assert fs.mtime(level) == (tmp_path / "level").stat().st_mtime
        assert fs.listdir(root) == ["level"]

    def test_read_undecodable_file_raises_unicode_error(self, fs: RealFileSystem, tmp_path: Path):
        """Test invalid UTF-8 surfaces as UnicodeDecodeError, not OSError."""
        (tmp_path / "Info.dat").write_bytes(b'{"_songName": "\xff\xfe"}')

        with pytest.raises(UnicodeDecodeError):
            fs.read_text(fs.join(absolute_path(tmp_path.as_posix()), "Info.dat"))


class TestSanitizePathComponent:
    """Tests for sanitize_path_component."""

    def test_replaces_separators_and_reserved_characters(self):
        assert sanitize_path_component("Rock/Metal: Best of") == "Rock_Metal_ Best of"

    def test_strips_leading_dots(self):
        assert sanitize_path_component("../secret") == "_secret"

    def test_empty_result_falls_back_to_replacement(self):
        assert sanitize_path_component("...") == "_"
