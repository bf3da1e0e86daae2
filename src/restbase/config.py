"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles configuration for restbase:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.restbase/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_cache_dir`.
* **Global config** -- A single :class:`~restbase.models.GlobalConfig`
  JSON file storing transport and cache defaults, managed with
  :func:`load_global_config` and :func:`save_global_config`.
* **Environment overrides** -- :func:`apply_env_overrides` layers
  ``RESTBASE_*`` variables over the stored config.
* **Option precedence** -- :func:`resolve_time_to_live` picks the cache
  lifetime of a call from per-call options, then client options, then 0.
* **Store construction** -- :func:`build_store` turns a
  :class:`~restbase.models.CacheConfig` into a key/value store, with one
  disk store directory per API base URL (:func:`store_dir_for`).

All file writes use an atomic temp-file-then-rename strategy
(:func:`_atomic_write`) to prevent data loss on crash or power failure.
"""

from __future__ import annotations

import hashlib
import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Optional

from restbase.cache.stores import DiskStore, KeyValueStore, MemoryStore
from restbase.exceptions import ConfigError
from restbase.models import CacheBackend, GlobalConfig, RequestOptions

_APP_NAME = "restbase"
_CONFIG_FILENAME = "config.json"

ENV_CACHE_TTL = "RESTBASE_CACHE_TTL"
ENV_NO_CACHE = "RESTBASE_NO_CACHE"
ENV_TIMEOUT = "RESTBASE_TIMEOUT"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/restbase/`` (default ``~/.config/restbase/``).
    On macOS/Windows: ``~/.restbase/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_cache_dir() -> Path:
    """Return the cache directory, creating it if necessary.

    Holds the :class:`~restbase.cache.DiskStore` database. Cached data can
    be safely deleted at any time.

    On Linux/BSD: ``$XDG_CACHE_HOME/restbase/`` (default ``~/.cache/restbase/``).
    On macOS/Windows: ``~/.restbase/cache/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CACHE_HOME", (".cache",)) / _APP_NAME
    else:
        path = _fallback_base_dir() / "cache"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Global config ---


def global_config_path() -> Path:
    """Path to the global config file."""
    return get_config_dir() / _CONFIG_FILENAME


def load_global_config() -> GlobalConfig:
    """Load the global configuration from the XDG config directory.

    Returns:
        The stored :class:`~restbase.models.GlobalConfig`, or a default
        instance when no file exists.

    Raises:
        ConfigError: If the file contains invalid JSON or fails validation.
    """
    path = global_config_path()
    if not path.is_file():
        return GlobalConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return GlobalConfig.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    """Persist the global configuration atomically to disk."""
    data = config.model_dump(mode="json")
    _atomic_write(global_config_path(), json.dumps(data, indent=2) + "\n")


def apply_env_overrides(config: GlobalConfig) -> GlobalConfig:
    """Return a copy of *config* with ``RESTBASE_*`` environment variables applied.

    ``RESTBASE_CACHE_TTL`` sets the default cache lifetime in seconds,
    ``RESTBASE_TIMEOUT`` the transport timeout, and any non-empty
    ``RESTBASE_NO_CACHE`` disables caching.

    Raises:
        ConfigError: If a numeric variable cannot be parsed.
    """
    resolved = config.model_copy(deep=True)

    ttl = os.environ.get(ENV_CACHE_TTL)
    if ttl:
        resolved.cache.ttl_seconds = _parse_number(ENV_CACHE_TTL, ttl, int)

    timeout = os.environ.get(ENV_TIMEOUT)
    if timeout:
        resolved.request.timeout = _parse_number(ENV_TIMEOUT, timeout, float)

    if os.environ.get(ENV_NO_CACHE):
        resolved.cache.enabled = False

    return resolved


def _parse_number(name: str, value: str, kind: type):
    try:
        return kind(value)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got {value!r}") from exc


def resolve_config() -> GlobalConfig:
    """Resolve config with its precedence chain.

    Precedence (high to low):
        1. Environment variables (``RESTBASE_CACHE_TTL``, ``RESTBASE_TIMEOUT``,
           ``RESTBASE_NO_CACHE``)
        2. User config (``~/.config/restbase/config.json``)
        3. Defaults
    """
    return apply_env_overrides(load_global_config())


# --- Option precedence ---


def resolve_time_to_live(
    call_options: Optional[RequestOptions],
    client_options: Optional[RequestOptions],
) -> int:
    """Return the cache lifetime in seconds for a single call.

    Precedence (high to low):
        1. ``time_to_live`` of the per-call options
        2. ``time_to_live`` of the client-wide options
        3. ``0``

    A ``time_to_live`` of ``0`` counts as unset and falls through to the
    next level.
    """
    for options in (call_options, client_options):
        if options is not None and options.time_to_live:
            return int(options.time_to_live)
    return 0


# --- Store construction ---


def responses_dir() -> Path:
    """Directory holding one disk store per API base URL."""
    return get_cache_dir() / "responses"


def store_dir_for(base_url: str) -> Path:
    """Return the disk store directory for clients of *base_url*.

    Cache keys hash only the method, path and query, so every base URL gets
    a store of its own.
    """
    digest = hashlib.sha256(base_url.encode("utf-8")).hexdigest()[:16]
    return responses_dir() / digest


def list_store_dirs() -> list[Path]:
    """Return the existing per-base-URL store directories."""
    root = responses_dir()
    if not root.is_dir():
        return []
    return sorted(p for p in root.iterdir() if p.is_dir())


def build_store(
    config: GlobalConfig,
    base_url: str = "",
    cache_dir: Optional[Path] = None,
) -> Optional[KeyValueStore]:
    """Create the key/value store described by ``config.cache``.

    Args:
        config: The resolved configuration.
        base_url: Base URL of the client that will use the store.  Selects
            the disk store directory, see :func:`store_dir_for`.
        cache_dir: Explicit directory for the disk store.  Overrides
            *base_url*.

    Returns:
        A :class:`~restbase.cache.DiskStore` or
        :class:`~restbase.cache.MemoryStore`, or ``None`` when caching is
        disabled.
    """
    if not config.cache.enabled:
        return None
    if config.cache.backend == CacheBackend.MEMORY:
        return MemoryStore()
    return DiskStore(cache_dir or store_dir_for(base_url))
