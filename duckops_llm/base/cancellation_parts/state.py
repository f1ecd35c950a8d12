"""Mutable state shared by a :class:`CancellationToken` and its waiters.

The event doubles as the cancelled flag so pollers and blocking waiters read
the same source of truth.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from threading import Event
from typing import Callable, List, Optional


@dataclass
class State:
    """Cancellation flag, reason and callbacks run once on cancel."""

    event: Event = field(default_factory=Event)
    reason: Optional[str] = None
    callbacks: List[Callable[[Optional[str]], None]] = field(default_factory=list)

    @property
    def cancelled(self) -> bool:
        return self.event.is_set()


__all__ = ["State"]
