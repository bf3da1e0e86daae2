"""Pydantic models shared across restbase.

**Per-call options** -- :class:`RequestOptions` travels with every call made
through :class:`~restbase.client.ApiClientBase` and is also used for the
client-wide defaults.

**Configuration models** -- serialised as JSON in the user's config
directory and read by the CLI: :class:`RequestConfig`, :class:`CacheConfig`
and :class:`GlobalConfig`.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RequestOptions(BaseModel):
    """Options accepted by a single API call or set as client defaults.

    Only ``time_to_live`` is interpreted by the dispatcher. Subclasses of
    :class:`~restbase.client.ApiClientBase` may read their own keys;
    unknown keys are preserved in ``model_extra``.

    Example::

        RequestOptions(time_to_live=60)
    """

    model_config = ConfigDict(extra="allow")

    time_to_live: Optional[int] = Field(
        default=None,
        description="Seconds a successful GET response stays cached",
    )


class CacheBackend(str, Enum):
    """Key/value store used by the CLI's response cache."""

    DISK = "disk"
    MEMORY = "memory"


class RequestConfig(BaseModel):
    """HTTP transport settings applied to every request."""

    timeout: float = Field(default=30, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")


class CacheConfig(BaseModel):
    """HTTP response cache settings stored in :class:`GlobalConfig`."""

    enabled: bool = Field(default=True, description="Enable response caching")
    ttl_seconds: int = Field(
        default=7 * 24 * 60 * 60, description="Default cache TTL in seconds"
    )
    backend: CacheBackend = Field(
        default=CacheBackend.DISK, description="Cache backend: disk or memory"
    )


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/restbase/config.json``.

    Loaded and saved by :func:`~restbase.config.load_global_config` and
    :func:`~restbase.config.save_global_config`. Environment variables
    override the stored values, see :func:`~restbase.config.apply_env_overrides`.
    """

    request: RequestConfig = Field(default_factory=RequestConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
