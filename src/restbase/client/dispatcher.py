"""Request dispatch: cache lookup, live send, status classification.

:class:`Dispatcher` is the single path every request takes on its way out
of an :class:`~restbase.client.base.ApiClientBase`:

- **GET** -- served from the :class:`~restbase.cache.ResponseCache` when an
  unexpired entry exists.  Otherwise the request is sent, its status is
  classified, failures are raised as :class:`~restbase.exceptions.ApiError`
  subclasses and successes are cached with the resolved TTL.
- **Anything else** -- sent live and returned as-is.  No cache reads or
  writes and no status classification.

Each call makes at most one network round-trip.  Nothing is retried.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from restbase.cache import ResponseCache
from restbase.client.status import classify_status, error_class_for
from restbase.client.transport import Transport
from restbase.config import resolve_time_to_live
from restbase.models import RequestOptions

logger = logging.getLogger(__name__)


class Dispatcher:
    """Route requests to the cache or the transport.

    Args:
        transport: Sends requests that are not served from cache.
        cache: Response cache; pass ``ResponseCache(None)`` to disable
            caching.
        default_options: Client-wide options, consulted when a call does
            not set ``time_to_live`` itself.
    """

    def __init__(
        self,
        transport: Transport,
        cache: Optional[ResponseCache] = None,
        default_options: Optional[RequestOptions] = None,
    ) -> None:
        self._transport = transport
        self._cache = cache or ResponseCache(None)
        self._default_options = default_options or RequestOptions()

    @property
    def cache(self) -> ResponseCache:
        return self._cache

    def request(
        self,
        request: httpx.Request,
        options: Optional[RequestOptions] = None,
    ) -> httpx.Response:
        """Dispatch *request* according to its method.

        Args:
            request: The request to send.
            options: Per-call options.

        Returns:
            The response, possibly served from cache.

        Raises:
            UserError: On a 4xx response to a GET.
            ServerError: On a 5xx response to a GET.
            UnknownStatusError: On a GET response outside ``[200, 600)``.
        """
        if request.method.upper() == "GET":
            return self.get_request(request, options)
        return self.post_request(request, options)

    def get_request(
        self,
        request: httpx.Request,
        options: Optional[RequestOptions] = None,
    ) -> httpx.Response:
        """Serve a GET from cache, or send it and cache a successful response."""
        cached = self._cache.lookup(request)
        if cached is not None:
            return cached

        response = self._transport.send(request)

        error_class = error_class_for(classify_status(response.status_code))
        if error_class is not None:
            logger.debug(
                "%s %s failed with HTTP %s",
                request.method, request.url, response.status_code,
            )
            raise error_class(self._error_message(response), request, response)

        self._cache.store(request, response, self.time_to_live(options))
        return response

    def post_request(
        self,
        request: httpx.Request,
        options: Optional[RequestOptions] = None,
    ) -> httpx.Response:
        """Send a non-GET request live.  The response is never cached."""
        return self._transport.send(request)

    def time_to_live(self, options: Optional[RequestOptions] = None) -> int:
        """Resolve the cache lifetime for a call made with *options*."""
        return resolve_time_to_live(options, self._default_options)

    def _error_message(self, response: httpx.Response) -> str:
        """Message for an :class:`~restbase.exceptions.ApiError`: the raw response body."""
        response.read()
        return response.text
