"""restbase -- base classes for typed, cached clients of JSON REST APIs.

A concrete API client subclasses :class:`~restbase.client.ApiClientBase`,
sets its ``base_url`` and adds typed endpoint methods on top of
:meth:`~restbase.client.ApiClientBase.get_json`. GET responses are cached
transparently when a key/value store is supplied, and HTTP error codes are
raised as :class:`~restbase.exceptions.UserError` (4xx) or
:class:`~restbase.exceptions.ServerError` (5xx).

Typical usage::

    from restbase import ApiClientBase
    from restbase.cache import MemoryStore

    class CatApi(ApiClientBase):
        base_url = "https://api.thecatapi.com/v1/"

        def get_random_cats(self):
            return self.get_json("images/search?limit=10")

    with CatApi(cache=MemoryStore()) as api:
        cats = api.get_random_cats()

Modules:
    client: Dispatcher, status classification and the ``ApiClientBase`` shell.
    cache: Cache keys, key/value stores and the response cache.
    apis: Ready-made clients for public APIs.
    models: Pydantic models for options and configuration.
    config: XDG-aware configuration loading and option precedence.
    exceptions: Exception hierarchy with exit-code mapping.
    app: Typer CLI entry point.
"""

__version__ = "0.1.0"

from restbase.client import ApiClientBase, JsonResult  # noqa: E402
from restbase.exceptions import ApiError, ServerError, UnknownStatusError, UserError  # noqa: E402

__all__ = [
    "ApiClientBase",
    "ApiError",
    "JsonResult",
    "ServerError",
    "UnknownStatusError",
    "UserError",
    "__version__",
]
