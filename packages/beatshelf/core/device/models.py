"""Device handle model."""

from pydantic import BaseModel, ConfigDict, Field

from beatshelf.core.io import AbsolutePath


class DeviceHandle(BaseModel):
    """Resolved locations on a located device."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(description="Mount entry name, e.g. 'mtp:host=Oculus_Quest_2_...'")
    root: AbsolutePath
    library_dir: AbsolutePath = Field(description="One subdirectory per library item")
    playlists_dir: AbsolutePath = Field(description="One descriptor file per playlist")
