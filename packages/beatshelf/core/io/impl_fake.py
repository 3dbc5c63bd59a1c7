"""In-memory filesystem for tests.

Mirrors RealFileSystem semantics closely enough for scanner, cache and
playlist-store tests: writes need an existing parent directory, listing a
missing directory raises FileNotFoundError, and every entry carries an
mtime taken from an injectable clock.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import PurePosixPath
import time

from .models import AbsolutePath, WriteResult, absolute_path
from .utils import safe_join


class FakeFileSystem:
    """Dict-backed FileSystem implementation.

    Attributes:
        writes: Paths passed to write_text, in call order (successful writes only)
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._files: dict[str, str | bytes] = {}
        self._dirs: dict[str, None] = {"/": None}  # insertion-ordered set
        self._mtimes: dict[str, float] = {"/": clock()}
        self.writes: list[str] = []

    # ------------------------------------------------------------------
    # Test setup helpers
    # ------------------------------------------------------------------

    def add_file(
        self, path: str, content: str | bytes, mtime: float | None = None
    ) -> AbsolutePath:
        """Create a file (and any missing parents) without recording a write.

        Bytes content is decoded on read, so undecodable files can be modelled.
        """
        p = absolute_path(path)
        self._mkdirs(absolute_path(p.parent))
        key = str(p)
        self._files[key] = content
        self._mtimes[key] = self._clock() if mtime is None else mtime
        return p

    def add_dir(self, path: str, mtime: float | None = None) -> AbsolutePath:
        """Create a directory (and parents), optionally with an explicit mtime."""
        p = absolute_path(path)
        self._mkdirs(p)
        if mtime is not None:
            self._mtimes[str(p)] = mtime
        return p

    def set_mtime(self, path: str, mtime: float) -> None:
        key = str(absolute_path(path))
        if key not in self._files and key not in self._dirs:
            raise FileNotFoundError(key)
        self._mtimes[key] = mtime

    def _mkdirs(self, path: AbsolutePath) -> None:
        p = PurePosixPath(path)
        for ancestor in [*reversed(p.parents), p]:
            key = str(ancestor)
            if key in self._files:
                raise NotADirectoryError(key)
            if key not in self._dirs:
                self._dirs[key] = None
                self._mtimes[key] = self._clock()

    # ------------------------------------------------------------------
    # FileSystem protocol
    # ------------------------------------------------------------------

    def join(self, base: AbsolutePath, *parts: str) -> AbsolutePath:
        return safe_join(base, *parts)

    def is_file(self, path: AbsolutePath) -> bool:
        return str(path) in self._files

    def is_dir(self, path: AbsolutePath) -> bool:
        return str(path) in self._dirs

    def read_text(self, path: AbsolutePath, encoding: str = "utf-8") -> str:
        key = str(path)
        if key in self._dirs:
            raise IsADirectoryError(key)
        if key not in self._files:
            raise FileNotFoundError(key)
        content = self._files[key]
        if isinstance(content, bytes):
            return content.decode(encoding)
        return content

    def mtime(self, path: AbsolutePath) -> float:
        key = str(path)
        if key not in self._mtimes:
            raise FileNotFoundError(key)
        return self._mtimes[key]

    def write_text(
        self,
        path: AbsolutePath,
        content: str,
        encoding: str = "utf-8",
    ) -> WriteResult:
        key = str(path)
        parent = str(PurePosixPath(key).parent)
        if parent not in self._dirs:
            raise FileNotFoundError(f"Parent directory does not exist: {parent}")
        if key in self._dirs:
            raise IsADirectoryError(key)

        self._files[key] = content
        self._mtimes[key] = self._clock()
        self.writes.append(key)
        return WriteResult(path=key, bytes_written=len(content.encode(encoding)))

    def listdir(self, path: AbsolutePath) -> list[str]:
        key = str(path)
        if key in self._files:
            raise NotADirectoryError(key)
        if key not in self._dirs:
            raise FileNotFoundError(key)

        names: list[str] = []
        for entry in [*self._dirs, *self._files]:
            entry_path = PurePosixPath(entry)
            if entry != key and str(entry_path.parent) == key:
                names.append(entry_path.name)
        return names
