"""Playlist store.

Loads playlist descriptors from the device and writes back the ones that
changed. Each file is read and written independently: one malformed or
unwritable playlist never affects its siblings.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, ValidationError

from beatshelf.core.device.models import DeviceHandle
from beatshelf.core.io import FileSystem, sanitize_path_component
from beatshelf.core.models.playlist import Playlist, PlaylistOrigin
from beatshelf.core.utils.logging import get_logger


class PersistReport(BaseModel):
    """Outcome of persist_dirty, by playlist file name."""

    written: list[str] = Field(default_factory=list)
    failed: list[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


def derive_file_name(title: str, sanitize: bool = False) -> str:
    """File name for a new playlist.

    Example:
        >>> derive_file_name("Favorites")
        'Favorites.json'
        >>> derive_file_name("Rock/Metal", sanitize=True)
        'Rock_Metal.json'
    """
    stem = sanitize_path_component(title) if sanitize else title
    return f"{stem}.json"


class PlaylistStore:
    """Reads and writes playlist descriptor files on one device."""

    def __init__(self, fs: FileSystem, device: DeviceHandle) -> None:
        self.fs = fs
        self.device = device
        self._log = get_logger(__name__, device=device.name)

    def load_playlists(self) -> list[Playlist]:
        """Load every parseable descriptor in the playlist directory.

        Returns:
            Playlists in enumeration order, clean and marked LOADED. Empty
            when the directory can't be listed.
        """
        playlists_dir = self.device.playlists_dir
        try:
            entries = self.fs.listdir(playlists_dir)
        except OSError as e:
            self._log.warning(f"Can't access {playlists_dir}: {e}")
            return []

        playlists: list[Playlist] = []
        for file_name in entries:
            path = self.fs.join(playlists_dir, file_name)
            if not self.fs.is_file(path):
                continue
            try:
                raw = self.fs.read_text(path)
            except (OSError, UnicodeDecodeError) as e:
                self._log.warning(f"Can't read playlist: {e}", extra={"playlist": file_name})
                continue

            try:
                playlist = Playlist.model_validate_json(raw)
            except ValidationError as e:
                self._log.warning(
                    f"Can't deserialize ({e.error_count()} errors)", extra={"playlist": file_name}
                )
                continue

            playlist.file_name = file_name
            playlist.dirty = False
            playlist.origin = PlaylistOrigin.LOADED
            playlists.append(playlist)

        self._log.info(f"Loaded {len(playlists)} playlists")
        return playlists

    def persist_dirty(self, playlists: list[Playlist]) -> PersistReport:
        """Write every dirty playlist to <playlists_dir>/<file_name>.

        Clean playlists are never written. Flags are left untouched; callers
        clear them for the file names listed in report.written.

        Returns:
            PersistReport listing written and failed file names
        """
        report = PersistReport()
        for playlist in playlists:
            if not playlist.dirty:
                continue

            try:
                path = self.fs.join(self.device.playlists_dir, playlist.file_name)
                self.fs.write_text(path, playlist.to_descriptor_json())
            except (OSError, ValueError) as e:
                self._log.warning(
                    f"Can't save playlist: {e}", extra={"playlist": playlist.file_name}
                )
                report.failed.append(playlist.file_name)
                continue

            self._log.info("Playlist saved", extra={"playlist": playlist.file_name})
            report.written.append(playlist.file_name)

        return report
