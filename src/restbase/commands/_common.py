"""Helpers shared by the CLI commands.

:func:`open_client` builds an API client from the resolved configuration
and :func:`cli_errors` turns restbase and transport exceptions into clean
error messages and exit codes.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional, TypeVar

import httpx
import typer

from restbase.client import ApiClientBase, HttpxTransport, JsonResult
from restbase.config import build_store, resolve_config
from restbase.exceptions import ApiError, ConnectionError_, RestBaseError
from restbase.models import RequestOptions
from restbase.output import error, format_response, info, warning

ClientT = TypeVar("ClientT", bound=ApiClientBase)


@contextmanager
def open_client(
    client_cls: type[ClientT],
    base_url: Optional[str] = None,
    no_cache: bool = False,
) -> Iterator[ClientT]:
    """Yield a *client_cls* instance wired to the configured cache and transport.

    The client's default cache lifetime comes from ``cache.ttl_seconds`` in
    the resolved config, and each base URL gets its own disk store.  The
    store and transport are closed on exit.
    """
    config = resolve_config()
    url = base_url if base_url is not None else client_cls.base_url
    store = None if no_cache else build_store(config, base_url=url)
    transport = HttpxTransport(config.request)
    client = client_cls(
        options=RequestOptions(time_to_live=config.cache.ttl_seconds),
        cache=store,
        transport=transport,
        base_url=base_url,
    )
    try:
        yield client
    finally:
        transport.close()
        if store is not None and hasattr(store, "close"):
            store.close()


@contextmanager
def cli_errors() -> Iterator[None]:
    """Report failures on stderr and exit with the matching exit code."""
    try:
        yield
    except ApiError as exc:
        error(f"HTTP {exc.status_code} from {exc.request.url}")
        if exc.message:
            info(exc.message)
        raise typer.Exit(code=exc.exit_code)
    except httpx.TransportError as exc:
        wrapped = ConnectionError_(f"Request failed: {exc}")
        error(str(wrapped))
        raise typer.Exit(code=wrapped.exit_code)
    except RestBaseError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code)


def print_result(result: JsonResult) -> None:
    """Print the decoded body to stdout and the status line to stderr."""
    response = result.response
    status = f"HTTP {response.status_code} {response.reason_phrase or ''}".rstrip()
    if result.cache_hit:
        status += " (cache hit)"
    info(status)
    if result.data is None:
        warning("Response body is empty or not JSON")
        return
    format_response(result.data)
