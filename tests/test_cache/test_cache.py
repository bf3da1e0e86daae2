"""Tests for the ResponseCache module."""

from __future__ import annotations

import gzip
from unittest.mock import MagicMock

import httpx
import pytest

from restbase.cache import CACHE_HIT_HEADER, MemoryStore, ResponseCache, cache_key


URL = "https://api.example.com/v1/users?page=1"


@pytest.fixture()
def cache(memory_store: MemoryStore) -> ResponseCache:
    return ResponseCache(memory_store)


def _request(url: str = URL) -> httpx.Request:
    return httpx.Request("GET", url)


def _response(status_code: int = 200, **kwargs) -> httpx.Response:
    kwargs.setdefault("json", {"id": 1, "name": "test"})
    return httpx.Response(status_code, request=_request(), **kwargs)


# ------------------------------------------------------------------ #
# lookup / store
# ------------------------------------------------------------------ #


class TestLookupStore:
    def test_miss_returns_none(self, cache: ResponseCache) -> None:
        assert cache.lookup(_request()) is None

    def test_store_then_lookup(self, cache: ResponseCache) -> None:
        cache.store(_request(), _response(), ttl=60)
        hit = cache.lookup(_request())

        assert hit is not None
        assert hit.status_code == 200
        assert hit.json() == {"id": 1, "name": "test"}
        assert hit.headers["content-type"] == "application/json"

    def test_hit_carries_marker_header(self, cache: ResponseCache) -> None:
        cache.store(_request(), _response(), ttl=60)
        hit = cache.lookup(_request())
        assert hit.headers[CACHE_HIT_HEADER] == "hit"

    def test_stored_response_is_not_mutated(self, cache: ResponseCache) -> None:
        original = _response()
        cache.store(_request(), original, ttl=60)
        cache.lookup(_request())
        assert CACHE_HIT_HEADER not in original.headers

    def test_each_hit_is_a_fresh_response(self, cache: ResponseCache) -> None:
        cache.store(_request(), _response(), ttl=60)
        first = cache.lookup(_request())
        second = cache.lookup(_request())
        assert first is not second
        assert first.headers.get_list(CACHE_HIT_HEADER) == ["hit"]
        assert second.headers.get_list(CACHE_HIT_HEADER) == ["hit"]

    def test_hit_is_bound_to_lookup_request(self, cache: ResponseCache) -> None:
        cache.store(_request(), _response(), ttl=60)
        request = _request()
        assert cache.lookup(request).request is request

    def test_different_query_is_a_miss(self, cache: ResponseCache) -> None:
        cache.store(_request(), _response(), ttl=60)
        assert cache.lookup(_request("https://api.example.com/v1/users?page=2")) is None

    def test_store_overwrites(self, cache: ResponseCache) -> None:
        cache.store(_request(), _response(json={"v": 1}), ttl=60)
        cache.store(_request(), _response(json={"v": 2}), ttl=60)
        assert cache.lookup(_request()).json() == {"v": 2}

    def test_status_not_inspected(self, cache: ResponseCache) -> None:
        """The cache stores whatever it is given; callers decide what is cacheable."""
        cache.store(_request(), _response(status_code=404), ttl=60)
        assert cache.lookup(_request()).status_code == 404

    def test_repeated_headers_survive(self, cache: ResponseCache) -> None:
        response = httpx.Response(
            200,
            headers=[("set-cookie", "a=1"), ("set-cookie", "b=2")],
            content=b"{}",
            request=_request(),
        )
        cache.store(_request(), response, ttl=60)
        assert cache.lookup(_request()).headers.get_list("set-cookie") == ["a=1", "b=2"]

    def test_compressed_response_is_stored_decoded(self, cache: ResponseCache) -> None:
        body = b'{"zipped": true}'
        response = httpx.Response(
            200,
            headers={"content-encoding": "gzip", "content-type": "application/json"},
            content=gzip.compress(body),
            request=_request(),
        )
        cache.store(_request(), response, ttl=60)

        hit = cache.lookup(_request())
        assert hit.json() == {"zipped": True}
        assert "content-encoding" not in hit.headers


# ------------------------------------------------------------------ #
# TTL handling
# ------------------------------------------------------------------ #


class TestTTL:
    def test_ttl_passed_to_store(self) -> None:
        store = MagicMock()
        cache = ResponseCache(store)
        cache.store(_request(), _response(), ttl=42)

        key, value, ttl = store.set.call_args.args
        assert key == cache_key(_request())
        assert ttl == 42
        assert value["status_code"] == 200

    def test_expired_entry_is_a_miss(self, cache: ResponseCache, clock) -> None:
        cache.store(_request(), _response(), ttl=60)
        clock.advance(61)
        assert cache.lookup(_request()) is None


# ------------------------------------------------------------------ #
# No store configured
# ------------------------------------------------------------------ #


class TestDisabled:
    def test_lookup_returns_none(self) -> None:
        cache = ResponseCache(None)
        assert cache.enabled is False
        assert cache.lookup(_request()) is None

    def test_store_is_noop(self) -> None:
        cache = ResponseCache(None)
        cache.store(_request(), _response(), ttl=60)
        assert cache.lookup(_request()) is None


# ------------------------------------------------------------------ #
# Custom key function
# ------------------------------------------------------------------ #


class TestKeyFunc:
    def test_custom_key_func_used(self, memory_store: MemoryStore) -> None:
        cache = ResponseCache(memory_store, key_func=lambda request: "fixed")
        cache.store(_request(), _response(), ttl=60)

        assert memory_store.get("fixed") is not None
        assert cache.lookup(_request("https://api.example.com/other")) is not None
