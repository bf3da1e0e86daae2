"""API client core for restbase.

Classes:
    :class:`ApiClientBase` -- base class for concrete API clients.
    :class:`JsonResult` -- decoded JSON plus the raw response.
    :class:`Dispatcher` -- routes requests to the cache or the transport.
    :class:`HttpxTransport` / :class:`DefaultRequestBuilder` -- default
    collaborators built on :mod:`httpx`.

Example::

    from restbase.client import ApiClientBase

    class Swapi(ApiClientBase):
        base_url = "https://swapi.dev/api/"

    with Swapi() as api:
        planets = api.get_json("planets/")
"""

from restbase.client.base import ApiClientBase, JsonResult
from restbase.client.dispatcher import Dispatcher
from restbase.client.status import StatusClass, classify_status
from restbase.client.transport import (
    DefaultRequestBuilder,
    HttpxTransport,
    RequestBuilder,
    Transport,
)

__all__ = [
    "ApiClientBase",
    "DefaultRequestBuilder",
    "Dispatcher",
    "HttpxTransport",
    "JsonResult",
    "RequestBuilder",
    "StatusClass",
    "Transport",
    "classify_status",
]
