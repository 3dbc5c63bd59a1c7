"""Library metadata cache.

Avoids re-reading every descriptor on the device at startup:
- Flat JSON cache file validated with pydantic on load
- Commit-marker meta file carrying an optional library fingerprint
- Count or fingerprint invalidation against the live device
- Miss-on-error loads and non-raising saves
"""

from beatshelf.core.caching.library_cache import LibraryCache, NullLibraryCache
from beatshelf.core.caching.models import CacheMeta, InvalidationPolicy
from beatshelf.core.caching.policy import load_library
from beatshelf.core.caching.protocols import Cache

__all__ = [
    # Core
    "Cache",
    "CacheMeta",
    "InvalidationPolicy",
    # Backends
    "LibraryCache",
    "NullLibraryCache",
    # Policy
    "load_library",
]
