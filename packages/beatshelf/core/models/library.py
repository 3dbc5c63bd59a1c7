"""Library item model.

A library item is one custom level found on the device. On disk its
descriptor (``Info.dat``) uses the game's underscore-prefixed key names;
``id`` and ``modified`` are filled in by the scanner and only ever appear in
the local cache file.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class LibraryItem(BaseModel):
    """One custom level discovered on the device."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="ignore",
        # NaN tempo is written as a NaN literal, which validate_json reads back
        ser_json_inf_nan="constants",
    )

    version: str = Field(alias="_version", description="Descriptor schema version")
    song_name: str = Field(alias="_songName")
    song_sub_name: str = Field(alias="_songSubName")
    song_author: str = Field(alias="_songAuthorName")
    level_author: str = Field(alias="_levelAuthorName")
    cover_image_filename: str = Field(alias="_coverImageFilename")
    beats_per_minute: float = Field(alias="_beatsPerMinute", description="Tempo in BPM")

    id: str | None = Field(
        default=None,
        alias="hash",
        description="Content hash; the item's directory name on the device",
    )
    modified: int | None = Field(
        default=None,
        ge=0,
        description="Milliseconds elapsed since last modification, observed at scan time",
    )

    @property
    def display_label(self) -> str:
        return f"{self.song_name} by: {self.song_author}"


LibraryItemList = TypeAdapter(list[LibraryItem])
