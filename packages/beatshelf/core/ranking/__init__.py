"""Ordering of the available set for presentation."""

from beatshelf.core.ranking.fuzzy import rank_by_query
from beatshelf.core.ranking.sorting import SortKey, sort_items

__all__ = ["SortKey", "rank_by_query", "sort_items"]
