"""Construction of pooled ``httpx`` clients for provider adapters.

Purpose:
    Build the ``httpx.Client`` handed to an SDK when an adapter needs custom
    headers, connection-pool sizing or a client-level timeout. These are
    construction knobs; nothing here changes per-call behaviour.

External dependencies:
    - ``httpx`` for the client, pool limits and default transport.

Notes:
    - ``max_idle_connections`` and ``max_idle_per_host`` map onto httpx's
      single keep-alive limit; the smaller of the two bounds the pool.
    - When a ``base_transport`` is supplied (tests use
      ``httpx.MockTransport``) pool sizing is the caller's concern.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

import httpx

from .transport import HeaderTransport


@dataclass(frozen=True)
class PoolConfig:
    """Connection pool sizing for a provider's HTTP client."""

    max_idle_connections: int = 100
    max_idle_per_host: int = 100
    idle_timeout_seconds: float = 90.0

    def to_limits(self) -> httpx.Limits:
        return httpx.Limits(
            max_keepalive_connections=min(self.max_idle_connections, self.max_idle_per_host),
            keepalive_expiry=self.idle_timeout_seconds,
        )


def build_http_client(
    headers: Mapping[str, str],
    *,
    pool: Optional[PoolConfig] = None,
    timeout: Optional[float] = None,
    base_transport: Optional[httpx.BaseTransport] = None,
) -> httpx.Client:
    """Return an ``httpx.Client`` whose transport injects ``headers``.

    Parameters:
        headers: Static headers set on every request.
        pool: Optional pool sizing for the default transport.
        timeout: Client-level timeout in seconds; ``None`` keeps httpx's default.
        base_transport: Transport to decorate instead of a fresh
            ``httpx.HTTPTransport``.
    """
    if base_transport is None:
        base_transport = httpx.HTTPTransport(limits=pool.to_limits()) if pool else httpx.HTTPTransport()
    transport = HeaderTransport(headers, base=base_transport)
    if timeout is None:
        return httpx.Client(transport=transport)
    return httpx.Client(transport=transport, timeout=timeout)


__all__ = ["PoolConfig", "build_http_client"]
