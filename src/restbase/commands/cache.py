"""Cache commands -- inspect and empty the on-disk response cache.

Each API base URL has its own disk store under ``<cache dir>/responses``.
Both commands act on all of them.  With the ``memory`` backend nothing
outlives a command, so there is nothing to inspect or clear.
"""

from __future__ import annotations

import typer

from restbase.cache import DiskStore
from restbase.commands._common import cli_errors
from restbase.config import list_store_dirs, resolve_config, responses_dir
from restbase.models import CacheBackend
from restbase.output import format_response, info, success

cache_app = typer.Typer(no_args_is_help=True)


def _count_entries() -> tuple[int, int]:
    """Return ``(stores, entries)`` across every disk store."""
    stores = entries = 0
    for directory in list_store_dirs():
        store = DiskStore(directory)
        try:
            entries += len(store)
        finally:
            store.close()
        stores += 1
    return stores, entries


@cache_app.command("stats")
def cache_stats() -> None:
    """Show the number of cached responses and where they live.

    Example::

        restbase cache stats --json
    """
    with cli_errors():
        config = resolve_config()
        stats = {
            "enabled": config.cache.enabled,
            "backend": config.cache.backend.value,
            "ttl_seconds": config.cache.ttl_seconds,
        }
        if config.cache.backend == CacheBackend.MEMORY:
            stats.update(directory=None, stores=0, size=0)
        else:
            stores, size = _count_entries()
            stats.update(directory=str(responses_dir()), stores=stores, size=size)
        format_response(stats)


@cache_app.command("clear")
def cache_clear() -> None:
    """Remove every cached response."""
    with cli_errors():
        config = resolve_config()
        if config.cache.backend == CacheBackend.MEMORY:
            info("The memory backend keeps no responses between commands.")
            return
        removed = 0
        for directory in list_store_dirs():
            store = DiskStore(directory)
            try:
                removed += store.clear()
            finally:
                store.close()
    success(f"Removed {removed} cached response(s).")
