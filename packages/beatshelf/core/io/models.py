"""Path types and result models for filesystem operations."""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import NewType

from pydantic import BaseModel, Field

AbsolutePath = NewType("AbsolutePath", PurePosixPath)
RelativePath = NewType("RelativePath", PurePosixPath)


def absolute_path(path: str | PurePosixPath) -> AbsolutePath:
    """Build an AbsolutePath, rejecting relative input.

    Example:
        >>> str(absolute_path("/run/user/1000/gvfs"))
        '/run/user/1000/gvfs'

    Raises:
        ValueError: If path is not absolute
    """
    p = PurePosixPath(path)
    if not p.is_absolute():
        raise ValueError(f"Expected absolute path, got: {path}")
    return AbsolutePath(p)


def relative_path(path: str | PurePosixPath) -> RelativePath:
    """Build a RelativePath, rejecting absolute input.

    Raises:
        ValueError: If path is absolute
    """
    p = PurePosixPath(path)
    if p.is_absolute():
        raise ValueError(f"Expected relative path, got: {path}")
    return RelativePath(p)


class WriteResult(BaseModel):
    """Outcome of a completed write."""

    path: str = Field(description="Absolute path that was written")
    bytes_written: int = Field(ge=0, description="Encoded size of the written content")
