"""Transport and request-builder collaborators.

The dispatcher never talks to :mod:`httpx` directly.  It sends requests
through a :class:`Transport` and the API client builds them with a
:class:`RequestBuilder`; both are protocols so tests and applications can
swap in their own implementations.

Defaults:

- :class:`HttpxTransport` -- sends through an :class:`httpx.Client`.
- :class:`DefaultRequestBuilder` -- builds :class:`httpx.Request` objects
  that ask for JSON.

Transport errors (:class:`httpx.TransportError` and subclasses such as
:class:`httpx.ConnectError` or :class:`httpx.TimeoutException`) are not
caught here.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol, runtime_checkable

import httpx

from restbase.models import RequestConfig

logger = logging.getLogger(__name__)


@runtime_checkable
class Transport(Protocol):
    """Sends a request and returns the response."""

    def send(self, request: httpx.Request) -> httpx.Response:
        ...


@runtime_checkable
class RequestBuilder(Protocol):
    """Builds a request for a method and absolute URL."""

    def build(self, method: str, url: str) -> httpx.Request:
        ...


class DefaultRequestBuilder:
    """Builds bare :class:`httpx.Request` objects with an ``Accept: application/json`` header.

    Args:
        headers: Extra headers added to every request.  They take
            precedence over the default ``Accept`` header.
    """

    def __init__(self, headers: Optional[dict[str, str]] = None) -> None:
        self._headers: dict[str, str] = {"Accept": "application/json"}
        self._headers.update(headers or {})

    def build(self, method: str, url: str) -> httpx.Request:
        return httpx.Request(method.upper(), url, headers=self._headers)


class HttpxTransport:
    """Transport backed by a synchronous :class:`httpx.Client`.

    The client is created lazily on the first :meth:`send` unless one is
    passed in.  A client created here is closed by :meth:`close`; a client
    passed in belongs to the caller and is left open.

    Args:
        config: Timeout and SSL settings for a client created here.
        client: An existing client to send through.

    Example::

        with HttpxTransport(RequestConfig(timeout=5)) as transport:
            response = transport.send(httpx.Request("GET", "https://swapi.dev/api/"))
    """

    def __init__(
        self,
        config: Optional[RequestConfig] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self._config = config or RequestConfig()
        self._client = client
        self._owns_client = client is None

    def send(self, request: httpx.Request) -> httpx.Response:
        if self._client is None:
            self._client = httpx.Client(
                timeout=self._config.timeout,
                verify=self._config.verify_ssl,
                follow_redirects=True,
            )
        logger.debug("Sending %s %s", request.method, request.url)
        response = self._client.send(request)
        logger.debug("Received HTTP %s from %s", response.status_code, request.url)
        return response

    def close(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._client is not None and self._owns_client:
            self._client.close()
            self._client = None

    def __enter__(self) -> HttpxTransport:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
