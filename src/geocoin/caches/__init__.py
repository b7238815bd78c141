"""Coin caches: the entity, its snapshot codec and the store that owns them.

A cell's cache is Active while the cell is in view and Dormant (a snapshot
string) otherwise. CacheStore performs every transition between the two.
"""

from geocoin.caches.base import Cache
from geocoin.caches.snapshot import deserialize, serialize
from geocoin.caches.store import CacheStore

__all__ = [
    "Cache",
    "CacheStore",
    "deserialize",
    "serialize",
]
