"""Playlist models.

Playlist descriptors on the device use ``playlistTitle``,
``playlistDescription`` and ``songName``; the plain field names are accepted
too. Keys we don't model (cover image, author, custom data) are kept and
written back unchanged.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class PlaylistOrigin(str, Enum):
    """Where a playlist came from in this session."""

    LOADED = "loaded"
    CREATED = "created"


class SongRef(BaseModel):
    """Soft reference from a playlist to a library item.

    ``hash`` may point at an item that is no longer on the device; that is a
    valid state and simply fails to resolve.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    hash: str
    name: str = Field(alias="songName", description="Song name captured when the song was added")


class Playlist(BaseModel):
    """A named, ordered collection of song references backed by one file."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    title: str = Field(alias="playlistTitle")
    description: str | None = Field(default=None, alias="playlistDescription")
    songs: list[SongRef] = Field(default_factory=list)

    # Session state, never serialized
    file_name: str = Field(default="", exclude=True)
    dirty: bool = Field(default=False, exclude=True)
    origin: PlaylistOrigin = Field(default=PlaylistOrigin.LOADED, exclude=True)

    def song_ids(self) -> set[str]:
        return {song.hash for song in self.songs}

    def contains(self, item_id: str) -> bool:
        """Check whether any song in the playlist references item_id."""
        return any(song.hash == item_id for song in self.songs)

    def to_descriptor_json(self) -> str:
        """Serialize to the on-device descriptor format.

        An unset description is left out; unmodeled keys are written as read,
        nulls included.
        """
        exclude = {"description"} if self.description is None else None
        return self.model_dump_json(by_alias=True, exclude=exclude, indent=2)
