"""Configuration models for beatshelf."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from beatshelf.core.caching.models import InvalidationPolicy


class DeviceConfig(BaseModel):
    """Where to look for the headset and where its content lives."""

    model_config = ConfigDict(extra="forbid")

    mounts_root: str = Field(
        default="/run/user/1000/gvfs",
        description="Directory holding one entry per mounted volume",
    )
    name_pattern: str = Field(
        default="quest",
        min_length=1,
        description="Case-insensitive substring identifying the device mount",
    )
    library_subpath: str = Field(
        default=(
            "Internal shared storage/ModData/com.beatgames.beatsaber/"
            "Mods/SongLoader/CustomLevels"
        ),
        description="Custom level directory, relative to the mount",
    )
    playlists_subpath: str = Field(
        default=(
            "Internal shared storage/ModData/com.beatgames.beatsaber/"
            "Mods/PlaylistManager/Playlists"
        ),
        description="Playlist directory, relative to the mount",
    )


class CacheConfig(BaseModel):
    """Local library metadata cache."""

    model_config = ConfigDict(extra="forbid")

    enabled: bool = Field(default=True, description="Disable to always scan the device")
    path: str = Field(
        default="custom_levels.json",
        description="Cache file; relative paths resolve against the working directory",
    )
    invalidation: InvalidationPolicy = Field(
        default=InvalidationPolicy.COUNT,
        description="'count' (item count heuristic) or 'fingerprint' (listing + mtimes)",
    )


class PlaylistConfig(BaseModel):
    """Playlist persistence options."""

    model_config = ConfigDict(extra="forbid")

    sanitize_file_names: bool = Field(
        default=False,
        description="Replace path-hostile characters when deriving new playlist file names",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = Field(default="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    structured: bool = Field(default=False, description="Emit JSON lines instead of text")
    filename: str | None = Field(default=None, description="Log file; stdout when unset")


class AppConfig(BaseModel):
    """Application-level configuration.

    Unknown top-level sections are ignored. Load it with load_app_config,
    which also applies environment overrides.
    """

    model_config = ConfigDict(extra="ignore")

    device: DeviceConfig = DeviceConfig()
    cache: CacheConfig = CacheConfig()
    playlists: PlaylistConfig = PlaylistConfig()
    logging: LoggingConfig = LoggingConfig()
