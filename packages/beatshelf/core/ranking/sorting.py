"""Multi-key sorting of library items.

Sorts are stable in both directions so that re-sorting by the same key keeps
list positions (and therefore selections) meaningful. Items without a usable
key value (NaN tempo, unknown modification time) always go last, in their
prior relative order.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
import math

from beatshelf.core.models.library import LibraryItem


class SortKey(str, Enum):
    """Sortable attributes of a library item."""

    TEMPO = "tempo"
    NAME = "name"
    MODIFIED = "modified"


def _key_value(item: LibraryItem, key: SortKey) -> float | str | None:
    if key is SortKey.TEMPO:
        return None if math.isnan(item.beats_per_minute) else item.beats_per_minute
    if key is SortKey.NAME:
        return item.song_name
    return item.modified


def sort_items(
    items: Iterable[LibraryItem],
    key: SortKey,
    descending: bool = False,
) -> list[LibraryItem]:
    """Return items sorted by key.

    MODIFIED sorts on elapsed time since modification, so ascending puts the
    most recently modified items first. NAME compares code points (no
    locale or case folding).

    Example:
        >>> [i.song_name for i in sort_items(items, SortKey.TEMPO)]
        ['B', 'A']  # both 120 BPM: input order kept
    """
    keyed: list[tuple[float | str, LibraryItem]] = []
    missing: list[LibraryItem] = []
    for item in items:
        value = _key_value(item, key)
        if value is None:
            missing.append(item)
        else:
            keyed.append((value, item))

    keyed.sort(key=lambda pair: pair[0], reverse=descending)
    return [item for _, item in keyed] + missing
