"""Helper to create Redis clients, with TLS handling for hosted providers."""

from __future__ import annotations

import ssl
from typing import Any

from redis import Redis


def is_tls_url(url: str) -> bool:
    return url.startswith("rediss://") or ".upstash.io" in url


def normalize_redis_url(url: str) -> str:
    """Upgrade Upstash ``redis://`` URLs to ``rediss://``; they only accept TLS."""
    if ".upstash.io" in url and url.startswith("redis://"):
        return url.replace("redis://", "rediss://", 1)
    return url


def create_redis_client(url: str, **kwargs: Any) -> Redis:
    """Create a Redis client for ``url``.

    TLS connections skip certificate verification, matching what managed
    Redis endpoints require.
    """
    url = normalize_redis_url(url)
    client = Redis.from_url(url, **kwargs)

    if is_tls_url(url):
        pool_kwargs = getattr(client.connection_pool, "connection_kwargs", None)
        if pool_kwargs is not None:
            pool_kwargs["ssl_cert_reqs"] = ssl.CERT_NONE

    return client
