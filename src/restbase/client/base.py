"""Base class for typed JSON REST API clients.

A concrete client subclasses :class:`ApiClientBase`, sets ``base_url`` and
adds one method per endpoint::

    class Swapi(ApiClientBase):
        base_url = "https://swapi.dev/api/"

        def get_person(self, person_id: str) -> dict:
            return self.get_json(f"people/{person_id}/")

The base class only wires collaborators together.  Caching and status
handling live in :class:`~restbase.client.dispatcher.Dispatcher`.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from restbase.cache import CACHE_HIT_HEADER, CACHE_HIT_VALUE, KeyValueStore, ResponseCache
from restbase.client.dispatcher import Dispatcher
from restbase.client.status import is_success
from restbase.client.transport import (
    DefaultRequestBuilder,
    HttpxTransport,
    RequestBuilder,
    Transport,
)
from restbase.models import RequestOptions


@dataclass(frozen=True)
class JsonResult:
    """Decoded JSON body together with the response it came from.

    Attributes:
        data: The decoded body, or ``None`` when the body was empty, was not
            valid JSON, or the status was not a success.
        response: The raw response.  Carries a ``cache-hit: hit`` header
            when it was served from cache.
    """

    data: Any
    response: httpx.Response

    @property
    def cache_hit(self) -> bool:
        return self.response.headers.get(CACHE_HIT_HEADER) == CACHE_HIT_VALUE


class ApiClientBase:
    """Shared plumbing for JSON REST API clients.

    Args:
        options: Client-wide options.  When omitted the client caches GET
            responses for :attr:`default_time_to_live` seconds.  Passing
            options replaces that default entirely.
        cache: Key/value store for GET responses.  ``None`` disables
            caching.
        transport: Sends requests.  Defaults to an
            :class:`~restbase.client.transport.HttpxTransport` owned (and
            closed) by this client.
        request_builder: Builds requests.  Defaults to
            :class:`~restbase.client.transport.DefaultRequestBuilder`.
        base_url: Overrides the class-level :attr:`base_url`.

    Example::

        with Swapi(cache=DiskStore("/tmp/swapi")) as api:
            luke = api.get_person("1")
    """

    base_url: str = ""
    """Absolute URL every endpoint is appended to."""

    default_time_to_live: int = 7 * 24 * 60 * 60
    """Cache lifetime in seconds used when no options are passed."""

    def __init__(
        self,
        options: Optional[RequestOptions] = None,
        cache: Optional[KeyValueStore] = None,
        transport: Optional[Transport] = None,
        request_builder: Optional[RequestBuilder] = None,
        base_url: Optional[str] = None,
    ) -> None:
        if base_url is not None:
            self.base_url = base_url
        self.options = (
            options
            if options is not None
            else RequestOptions(time_to_live=self.default_time_to_live)
        )
        self._owns_transport = transport is None
        self._transport: Transport = transport or HttpxTransport()
        self._request_builder: RequestBuilder = request_builder or DefaultRequestBuilder()
        self._dispatcher = Dispatcher(self._transport, ResponseCache(cache), self.options)

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self):
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the default transport if this client created it."""
        if self._owns_transport and isinstance(self._transport, HttpxTransport):
            self._transport.close()

    # ------------------------------------------------------------------ #
    # Public request methods
    # ------------------------------------------------------------------ #

    def get_json(self, endpoint: str, options: Optional[RequestOptions] = None) -> Any:
        """GET *endpoint* and return its decoded JSON body.

        The response may be served from cache, depending on *options* and
        the client's cache.

        Args:
            endpoint: Path relative to :attr:`base_url`, optionally with a
                query string.
            options: Per-call options.

        Returns:
            The decoded JSON, or ``None`` if the body is empty or not JSON.

        Raises:
            UserError: On a 4xx response.
            ServerError: On a 5xx response.
        """
        return self.fetch_json(endpoint, options).data

    def fetch_json(self, endpoint: str, options: Optional[RequestOptions] = None) -> JsonResult:
        """Like :meth:`get_json`, but also return the raw response."""
        response = self.request(self.create_request(endpoint), options)
        if not is_success(response.status_code):
            return JsonResult(data=None, response=response)
        return JsonResult(data=_decode_json(response), response=response)

    def request(
        self,
        request: httpx.Request,
        options: Optional[RequestOptions] = None,
    ) -> httpx.Response:
        """Send *request* through the dispatcher.

        GET requests may be served from or stored in the cache; every other
        method is always sent live.
        """
        return self._dispatcher.request(request, options)

    # ------------------------------------------------------------------ #
    # Helpers for subclasses
    # ------------------------------------------------------------------ #

    def create_request(self, endpoint: str, method: str = "GET") -> httpx.Request:
        """Build a request for *endpoint*, which may include a query string."""
        return self._request_builder.build(method, self.full_url(endpoint))

    def full_url(self, endpoint: str) -> str:
        """Turn a path relative to :attr:`base_url` into an absolute URL."""
        return self.base_url + endpoint


def _decode_json(response: httpx.Response) -> Any:
    """Decode a JSON body, returning ``None`` for empty or invalid bodies."""
    if not response.content:
        return None
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
