"""Filesystem implementation backed by the local OS."""

from __future__ import annotations

import os
from pathlib import Path
import tempfile

from .models import AbsolutePath, WriteResult
from .utils import safe_join


class RealFileSystem:
    """FileSystem over the real disk (also used for gvfs/MTP mounts)."""

    def join(self, base: AbsolutePath, *parts: str) -> AbsolutePath:
        return safe_join(base, *parts)

    def is_file(self, path: AbsolutePath) -> bool:
        return Path(path).is_file()

    def is_dir(self, path: AbsolutePath) -> bool:
        return Path(path).is_dir()

    def read_text(self, path: AbsolutePath, encoding: str = "utf-8") -> str:
        return Path(path).read_text(encoding=encoding)

    def mtime(self, path: AbsolutePath) -> float:
        return Path(path).stat().st_mtime

    def write_text(
        self,
        path: AbsolutePath,
        content: str,
        encoding: str = "utf-8",
    ) -> WriteResult:
        target = Path(path)
        data = content.encode(encoding)

        # Temp file lives beside the target so os.replace stays on one filesystem
        fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, target)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
            raise

        return WriteResult(path=str(target), bytes_written=len(data))

    def listdir(self, path: AbsolutePath) -> list[str]:
        return os.listdir(path)
