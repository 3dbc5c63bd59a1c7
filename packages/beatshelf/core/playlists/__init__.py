"""Playlist persistence on the device."""

from beatshelf.core.playlists.store import PersistReport, PlaylistStore, derive_file_name

__all__ = ["PersistReport", "PlaylistStore", "derive_file_name"]
