"""HTTP helpers shared by provider adapters (transport decorator, client builder)."""

from .transport import HeaderTransport
from .client import PoolConfig, build_http_client

__all__ = ["HeaderTransport", "PoolConfig", "build_http_client"]
