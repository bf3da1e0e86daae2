"""Response caching for restbase.

This package provides :class:`ResponseCache`, which stores successful GET
responses in any :class:`KeyValueStore`, together with two stores:
:class:`DiskStore` (persistent, :mod:`diskcache`-backed) and
:class:`MemoryStore` (in-process).  Entries are keyed by
:func:`cache_key`, a hash of the request method, path and query.

The cache is consumed by :class:`~restbase.client.dispatcher.Dispatcher`.
"""

from restbase.cache.cache import CACHE_HIT_HEADER, CACHE_HIT_VALUE, ResponseCache
from restbase.cache.keys import cache_key
from restbase.cache.stores import DiskStore, KeyValueStore, MemoryStore

__all__ = [
    "CACHE_HIT_HEADER",
    "CACHE_HIT_VALUE",
    "DiskStore",
    "KeyValueStore",
    "MemoryStore",
    "ResponseCache",
    "cache_key",
]
