"""Library scanning."""

from beatshelf.core.library.scanner import (
    DESCRIPTOR_NAMES,
    count_library_items,
    fingerprint_library,
    scan_library,
)

__all__ = [
    "DESCRIPTOR_NAMES",
    "count_library_items",
    "fingerprint_library",
    "scan_library",
]
