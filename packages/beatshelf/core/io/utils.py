"""Path helpers shared by filesystem implementations."""

from __future__ import annotations

import posixpath
import re
import unicodedata

from .models import AbsolutePath, absolute_path

_UNSAFE_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]')


def safe_join(base: AbsolutePath, *parts: str) -> AbsolutePath:
    """Join parts onto base and refuse results outside base.

    Example:
        >>> str(safe_join(absolute_path("/dev"), "Playlists", "Fav.json"))
        '/dev/Playlists/Fav.json'

    Raises:
        ValueError: If a part is absolute or the normalized result escapes base
    """
    for part in parts:
        if part.startswith("/"):
            raise ValueError(f"Absolute path component not allowed: {part!r}")
        if "\x00" in part:
            raise ValueError("NUL byte in path component")

    base_str = posixpath.normpath(str(base))
    joined = posixpath.normpath(posixpath.join(base_str, *parts))
    if joined != base_str and not joined.startswith(base_str.rstrip("/") + "/"):
        raise ValueError(f"Path escapes base directory: {joined}")
    return absolute_path(joined)


def sanitize_path_component(name: str, replacement_char: str = "_") -> str:
    """Make a string safe to use as a single path component.

    Path separators, reserved characters and control characters are
    replaced; leading dots are stripped so the result can't be hidden or
    refer to a parent directory.

    Example:
        >>> sanitize_path_component("Rock/Metal: Best of")
        'Rock_Metal_ Best of'
    """
    name = unicodedata.normalize("NFC", name)
    name = _UNSAFE_CHARS.sub(replacement_char, name)
    name = name.strip().lstrip(".")
    return name or replacement_char
