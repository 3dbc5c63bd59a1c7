"""Protocol for filesystem operations.

Every component that touches the device or the local cache receives a
FileSystem explicitly, so tests can substitute an in-memory implementation.
"""

from typing import Protocol

from .models import AbsolutePath, WriteResult


class FileSystem(Protocol):
    """
    Protocol for blocking filesystem operations.

    Implementations raise OSError subclasses (FileNotFoundError,
    NotADirectoryError, PermissionError, ...) on failure; callers decide
    whether a failure is fatal.
    """

    # Path operations (no I/O)
    def join(self, base: AbsolutePath, *parts: str) -> AbsolutePath:
        """
        Safely join path components.

        Args:
            base: Base absolute path
            *parts: Path segments to join

        Returns:
            New absolute path

        Raises:
            ValueError: If result escapes base directory
        """
        ...

    # Existence checks
    def is_file(self, path: AbsolutePath) -> bool:
        """Check if path exists and is a file."""
        ...

    def is_dir(self, path: AbsolutePath) -> bool:
        """Check if path exists and is a directory."""
        ...

    # Read operations
    def read_text(self, path: AbsolutePath, encoding: str = "utf-8") -> str:
        """
        Read text file contents.

        Raises:
            FileNotFoundError: If file doesn't exist
            OSError: On read failure
            UnicodeDecodeError: If the content is not valid in encoding
        """
        ...

    def mtime(self, path: AbsolutePath) -> float:
        """
        Last modification time of path as a Unix timestamp (seconds).

        Raises:
            FileNotFoundError: If path doesn't exist
            OSError: If metadata is unavailable
        """
        ...

    # Write operations (atomic)
    def write_text(
        self,
        path: AbsolutePath,
        content: str,
        encoding: str = "utf-8",
    ) -> WriteResult:
        """
        Atomically write text to file.

        Uses temp file + atomic replace so readers never observe partial
        writes. The parent directory must already exist.

        Raises:
            FileNotFoundError: If the parent directory doesn't exist
            OSError: On write failure
        """
        ...

    # Directory operations
    def listdir(self, path: AbsolutePath) -> list[str]:
        """
        List directory contents (names only, enumeration order).

        Raises:
            FileNotFoundError: If directory doesn't exist
            NotADirectoryError: If path is a file
            OSError: On read failure
        """
        ...
