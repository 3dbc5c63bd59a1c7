"""Reconciliation of the library against playlists.

The engine owns three collections: the scanned library, the playlists, and
the derived "available" list. It keeps

    available == library items whose id no playlist references

true after initialize() and after every mutation. Mutators return the
playlist that now needs persisting (None when the call was a no-op), so the
engine can be tested without a PlaylistStore.
"""

from __future__ import annotations

from collections.abc import Iterable
import logging

from pydantic import BaseModel

from beatshelf.core.models.library import LibraryItem
from beatshelf.core.models.playlist import Playlist, PlaylistOrigin, SongRef
from beatshelf.core.playlists.store import derive_file_name
from beatshelf.core.ranking import SortKey, rank_by_query, sort_items

logger = logging.getLogger(__name__)


class EngineSummary(BaseModel):
    """Counts describing the current engine state."""

    library: int
    playlists: int
    songs_in_playlists: int
    available: int
    dirty: int


class ReconciliationEngine:
    """Keeps the available set consistent with the library and playlists.

    Playlists and available items are addressed by list index, the way a
    list-based view selects them. Invalid indexes make the call a no-op.
    """

    def __init__(self, sanitize_file_names: bool = False) -> None:
        self.library: list[LibraryItem] = []
        self.playlists: list[Playlist] = []
        self.available: list[LibraryItem] = []
        self._sanitize_file_names = sanitize_file_names
        self._by_id: dict[str, LibraryItem] = {}

    # ------------------------------------------------------------------
    # Setup and lookup
    # ------------------------------------------------------------------

    def initialize(self, library: list[LibraryItem], playlists: list[Playlist]) -> None:
        """Replace state and recompute the available set (library order kept)."""
        self.library = list(library)
        self.playlists = list(playlists)
        self._by_id = {}
        for item in self.library:
            if item.id is not None:
                self._by_id.setdefault(item.id, item)

        referenced = self._referenced_ids()
        self.available = [item for item in self.library if item.id not in referenced]

        summary = self.summary()
        logger.info(f"Number of songs in all playlists: {summary.songs_in_playlists}")
        logger.info(f"Custom levels total: {summary.library}")
        logger.info(f"Custom levels that are not in any playlists: {summary.available}")

    def resolve(self, item_id: str) -> LibraryItem | None:
        """Library item for item_id, or None for a dangling reference."""
        return self._by_id.get(item_id)

    def resolve_song(self, song: SongRef) -> LibraryItem | None:
        return self.resolve(song.hash)

    def find_playlist(self, title: str) -> int | None:
        """Index of the playlist with exactly this title."""
        for index, playlist in enumerate(self.playlists):
            if playlist.title == title:
                return index
        return None

    def available_index(self, item_id: str) -> int | None:
        for index, item in enumerate(self.available):
            if item.id == item_id:
                return index
        return None

    def can_remove_playlist(self, playlist_index: int) -> bool:
        """Only playlists created in this session may be removed."""
        playlist = self._playlist_at(playlist_index)
        return playlist is not None and playlist.origin is PlaylistOrigin.CREATED

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_to_playlist(self, playlist_index: int, available_index: int) -> Playlist | None:
        """Move available[available_index] into the playlist.

        Returns:
            The modified (now dirty) playlist, or None if nothing changed
        """
        playlist = self._playlist_at(playlist_index)
        if playlist is None or not 0 <= available_index < len(self.available):
            logger.debug(
                f"Ignoring add: playlist={playlist_index}, available item={available_index}"
            )
            return None

        item = self.available[available_index]
        if item.id is None:
            logger.warning(f"Can't add '{item.song_name}': item has no id")
            return None

        del self.available[available_index]
        playlist.songs.append(SongRef(hash=item.id, name=item.song_name))
        playlist.dirty = True
        return playlist

    def remove_from_playlist(self, playlist_index: int, song_index: int) -> Playlist | None:
        """Remove a song from a playlist.

        The referenced item returns to the available set when it still
        resolves and no other playlist references it. A dangling reference is
        just dropped.

        Returns:
            The modified (now dirty) playlist, or None if nothing changed
        """
        playlist = self._playlist_at(playlist_index)
        if playlist is None or not 0 <= song_index < len(playlist.songs):
            logger.debug(f"Ignoring remove: playlist={playlist_index}, song={song_index}")
            return None

        song = playlist.songs.pop(song_index)
        playlist.dirty = True
        self._restore([song.hash])
        return playlist

    def create_playlist(self, title: str, description: str | None = None) -> Playlist | None:
        """Append a new, dirty playlist unless the title is already taken.

        Title comparison is exact and case-sensitive. A derived file name that
        another playlist already uses only logs a warning; saving then
        overwrites that file.

        Returns:
            The new playlist, or None when the title already exists
        """
        if self.find_playlist(title) is not None:
            logger.warning(f"Playlist with the same title already exists: {title}")
            return None

        file_name = derive_file_name(title, sanitize=self._sanitize_file_names)
        taken_by = next((p for p in self.playlists if p.file_name == file_name), None)
        if taken_by is not None:
            logger.warning(
                f"File {file_name} already holds playlist {taken_by.title}, "
                f"saving {title} will overwrite it"
            )

        playlist = Playlist(
            title=title,
            description=description,
            file_name=file_name,
            dirty=True,
            origin=PlaylistOrigin.CREATED,
        )
        self.playlists.append(playlist)
        return playlist

    def remove_playlist(self, playlist_index: int) -> Playlist | None:
        """Remove a playlist and return its songs to the available set.

        No origin check happens here; callers gate on can_remove_playlist().
        The file on the device, if any, is left in place.

        Returns:
            The removed playlist, or None for an invalid index
        """
        if self._playlist_at(playlist_index) is None:
            logger.debug(f"Ignoring remove of playlist {playlist_index}")
            return None

        playlist = self.playlists.pop(playlist_index)
        self._restore(song.hash for song in playlist.songs)
        return playlist

    # ------------------------------------------------------------------
    # Persistence bookkeeping
    # ------------------------------------------------------------------

    def dirty_playlists(self) -> list[Playlist]:
        return [playlist for playlist in self.playlists if playlist.dirty]

    def mark_persisted(self, file_names: Iterable[str]) -> None:
        """Clear the dirty flag of playlists that were written successfully."""
        written = set(file_names)
        for playlist in self.playlists:
            if playlist.file_name in written:
                playlist.dirty = False

    # ------------------------------------------------------------------
    # Ordering of the available set
    # ------------------------------------------------------------------

    def sort_available(self, key: SortKey, descending: bool = False) -> None:
        self.available = sort_items(self.available, key, descending)

    def search_available(self, query: str) -> None:
        """Reorder available items by closeness of their name to query."""
        self.available = rank_by_query(self.available, query)

    def summary(self) -> EngineSummary:
        return EngineSummary(
            library=len(self.library),
            playlists=len(self.playlists),
            songs_in_playlists=sum(len(playlist.songs) for playlist in self.playlists),
            available=len(self.available),
            dirty=len(self.dirty_playlists()),
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _playlist_at(self, index: int) -> Playlist | None:
        if 0 <= index < len(self.playlists):
            return self.playlists[index]
        return None

    def _referenced_ids(self) -> set[str]:
        referenced: set[str] = set()
        for playlist in self.playlists:
            referenced |= playlist.song_ids()
        return referenced

    def _restore(self, item_ids: Iterable[str]) -> None:
        """Append items that resolve and are no longer referenced anywhere."""
        referenced = self._referenced_ids()
        present = {item.id for item in self.available}
        for item_id in item_ids:
            if item_id in referenced or item_id in present:
                continue
            item = self.resolve(item_id)
            if item is None:
                logger.debug(f"Not restoring dangling reference {item_id}")
                continue
            self.available.append(item)
            present.add(item_id)
