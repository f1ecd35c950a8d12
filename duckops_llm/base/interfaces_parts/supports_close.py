"""SupportsClose Protocol (single-class module)."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class SupportsClose(Protocol):
    """Adapters owning network resources release them in ``close``.

    ``close`` must be idempotent.
    """

    def close(self) -> None:
        ...
