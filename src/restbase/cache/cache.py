"""Response caching on top of a pluggable key/value store.

:class:`ResponseCache` turns :class:`httpx.Response` objects into plain
dicts (``status_code``, ``headers``, ``content``) for storage and rebuilds
fresh responses on lookup.  A rebuilt response carries an extra
``cache-hit: hit`` header so callers can tell it did not come from the
network.

The cache never looks at status codes or methods: the dispatcher decides
what is cacheable and only hands over successful GET responses.

See Also:
    :mod:`restbase.cache.stores` -- the stores this class writes to.
    :mod:`restbase.cache.keys` -- how entries are keyed.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

import httpx

from restbase.cache.keys import cache_key
from restbase.cache.stores import KeyValueStore

logger = logging.getLogger(__name__)

CACHE_HIT_HEADER = "cache-hit"
CACHE_HIT_VALUE = "hit"

# The stored body is already decoded, so framing headers no longer describe it.
_DROPPED_HEADERS = frozenset({"content-encoding", "content-length", "transfer-encoding"})


class ResponseCache:
    """Read and write cached responses for requests.

    Every operation is a no-op when *store* is ``None``, so the dispatcher
    can use a ``ResponseCache`` unconditionally.

    Args:
        store: The backing key/value store, or ``None`` to disable caching.
        key_func: Derives the store key from a request.  Defaults to
            :func:`~restbase.cache.keys.cache_key`.

    Example::

        from restbase.cache import MemoryStore, ResponseCache

        cache = ResponseCache(MemoryStore())
        cache.store(request, response, ttl=300)
        hit = cache.lookup(request)
        assert hit.headers["cache-hit"] == "hit"
    """

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        key_func: Callable[[httpx.Request], str] = cache_key,
    ) -> None:
        self._store = store
        self._key_func = key_func

    @property
    def enabled(self) -> bool:
        """Whether a backing store is configured."""
        return self._store is not None

    def lookup(self, request: httpx.Request) -> Optional[httpx.Response]:
        """Return the cached response for *request*.

        Args:
            request: The request about to be sent.

        Returns:
            A new :class:`httpx.Response` with the ``cache-hit: hit`` header
            added, or ``None`` on a miss, on expiry, or when no store is
            configured.
        """
        if self._store is None:
            return None

        key = self._key_func(request)
        cached = self._store.get(key)
        if not cached:
            logger.debug("Cache miss: %s %s", request.method, request.url)
            return None

        logger.debug("Cache hit: %s %s", request.method, request.url)
        return self._deserialize(cached, request)

    def store(self, request: httpx.Request, response: httpx.Response, ttl: int) -> None:
        """Cache *response* as the answer to *request* for *ttl* seconds.

        Overwrites any entry already stored for the same key.

        Args:
            request: The request the response answers.
            response: The response to store.  Its body is read if it has
                not been read yet.
            ttl: Time to live in seconds, passed to the store unchanged.
        """
        if self._store is None:
            return

        key = self._key_func(request)
        self._store.set(key, self._serialize(response), ttl)
        logger.debug("Cached %s %s for %ss", request.method, request.url, ttl)

    def _serialize(self, response: httpx.Response) -> dict[str, Any]:
        """Turn a response into a plain, picklable dict."""
        return {
            "status_code": response.status_code,
            "headers": [
                [name, value]
                for name, value in response.headers.multi_items()
                if name.lower() not in _DROPPED_HEADERS
            ],
            "content": response.read(),
        }

    def _deserialize(self, data: dict[str, Any], request: httpx.Request) -> httpx.Response:
        """Rebuild a response from a stored dict, marking it as a cache hit."""
        headers = httpx.Headers([tuple(pair) for pair in data.get("headers", [])])
        headers[CACHE_HIT_HEADER] = CACHE_HIT_VALUE
        return httpx.Response(
            status_code=data["status_code"],
            headers=headers,
            content=data.get("content", b""),
            request=request,
        )
