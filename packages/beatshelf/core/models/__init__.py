"""Domain models for beatshelf."""

from beatshelf.core.models.library import LibraryItem, LibraryItemList
from beatshelf.core.models.playlist import Playlist, PlaylistOrigin, SongRef

__all__ = [
    "LibraryItem",
    "LibraryItemList",
    "Playlist",
    "PlaylistOrigin",
    "SongRef",
]
