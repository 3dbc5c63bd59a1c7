"""Fuzzy text ranking by edit distance."""

from __future__ import annotations

from collections.abc import Iterable

from Levenshtein import distance as levenshtein_distance

from beatshelf.core.models.library import LibraryItem


def rank_by_query(items: Iterable[LibraryItem], query: str) -> list[LibraryItem]:
    """Order items by Levenshtein distance between song name and query.

    Closest names first; ties keep their prior order. The comparison is
    case-sensitive and on the raw strings. An empty query leaves the order
    unchanged.

    Example:
        >>> [i.song_name for i in rank_by_query(items, "ergy")]
        ['Energy', 'Zebra']
    """
    items = list(items)
    if not query:
        return items
    return sorted(items, key=lambda item: levenshtein_distance(item.song_name, query))
