"""Filesystem abstraction layer for beatshelf.

Provides safe, testable, blocking filesystem operations. Every component
that reads the device or writes the cache receives a FileSystem instead of
touching the OS directly.

Example:
    >>> from beatshelf.core.io import RealFileSystem, absolute_path
    >>> fs = RealFileSystem()
    >>> path = fs.join(absolute_path("/tmp"), "cache.json")
    >>> fs.write_text(path, "[]")
    >>> content = fs.read_text(path)
"""

from .impl_fake import FakeFileSystem
from .impl_real import RealFileSystem
from .models import AbsolutePath, RelativePath, WriteResult, absolute_path, relative_path
from .protocols import FileSystem
from .utils import safe_join, sanitize_path_component

__all__ = [
    # Path types and constructors
    "AbsolutePath",
    "RelativePath",
    "absolute_path",
    "relative_path",
    # Result types
    "WriteResult",
    # Protocol
    "FileSystem",
    # Implementations
    "RealFileSystem",
    "FakeFileSystem",
    # Utilities
    "safe_join",
    "sanitize_path_component",
]
