"""Cache key derivation for HTTP requests.

Keys are SHA-256 hashes of ``METHOD:path?query``. The scheme and host are
left out, so two clients pointed at mirrors of the same API share entries
when they share a store.
"""

from __future__ import annotations

import hashlib

import httpx


def cache_key(request: httpx.Request) -> str:
    """Return a stable identifier for *request*.

    Args:
        request: The request to key.  Only its method and the path and
            query of its URL are used.

    Returns:
        A 64-character hex digest.
    """
    endpoint = request.url.raw_path.decode("ascii")
    raw = f"{request.method.upper()}:{endpoint}"
    return hashlib.sha256(raw.encode()).hexdigest()
