"""Key/value stores that back :class:`~restbase.cache.ResponseCache`.

A store is anything with ``get(key)`` and ``set(key, value, ttl)``; see
:class:`KeyValueStore`.  Two implementations ship with restbase:

- :class:`DiskStore` -- persists entries on the filesystem with
  :mod:`diskcache`, so the cache survives between processes.
- :class:`MemoryStore` -- a dict with per-entry expiry, for tests and
  short-lived scripts.

Both treat a TTL of zero or less as "do not keep": the value is not stored
and any previous entry under the same key is removed.
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import Any, Callable, Optional, Protocol, runtime_checkable

import diskcache


@runtime_checkable
class KeyValueStore(Protocol):
    """Contract for the store behind a response cache."""

    def get(self, key: str) -> Any:
        """Return the value stored under *key*, or ``None`` if absent or expired."""
        ...

    def set(self, key: str, value: Any, ttl: int) -> None:
        """Store *value* under *key* for *ttl* seconds."""
        ...


class DiskStore:
    """Filesystem store backed by a :class:`diskcache.Cache` directory.

    Args:
        directory: Directory holding the cache database.  Created on
            first use.

    Example::

        store = DiskStore("/tmp/restbase-cache")
        store.set("key", {"status_code": 200}, ttl=300)
        store.get("key")
    """

    def __init__(self, directory: str | Path) -> None:
        self._directory = Path(directory)
        self._cache = diskcache.Cache(str(self._directory))

    @property
    def directory(self) -> Path:
        """The directory holding the cache database."""
        return self._directory

    def get(self, key: str) -> Any:
        return self._cache.get(key)

    def set(self, key: str, value: Any, ttl: int) -> None:
        if ttl <= 0:
            self._cache.delete(key)
            return
        self._cache.set(key, value, expire=ttl)

    def delete(self, key: str) -> None:
        self._cache.delete(key)

    def clear(self) -> int:
        """Remove every entry and return how many were removed."""
        return self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)

    def close(self) -> None:
        """Close the underlying :class:`diskcache.Cache` and release resources."""
        self._cache.close()


class MemoryStore:
    """In-process store with per-entry expiry.

    Expired entries are dropped lazily when they are read.

    Args:
        clock: Returns the current time in seconds.  Defaults to
            :func:`time.monotonic`; tests pass a fake clock.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None) -> None:
        self._clock = clock or time.monotonic
        self._entries: dict[str, tuple[Any, float]] = {}

    def get(self, key: str) -> Any:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at <= self._clock():
            self._entries.pop(key, None)
            return None
        return value

    def set(self, key: str, value: Any, ttl: int) -> None:
        if ttl <= 0:
            self._entries.pop(key, None)
            return
        self._entries[key] = (value, self._clock() + ttl)

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> int:
        """Remove every entry and return how many were removed."""
        count = len(self._entries)
        self._entries.clear()
        return count

    def __len__(self) -> int:
        return len(self._entries)

    def close(self) -> None:
        self._entries.clear()
