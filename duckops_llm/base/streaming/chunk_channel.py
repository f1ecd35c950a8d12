"""Unbuffered hand-off channel carrying stream chunks to a single consumer.

Purpose
-------
Connect the producer thread of a stream to the consumer iterating over it.
The channel holds at most one chunk in flight and ``send`` returns only once
the consumer has taken it, so a slow consumer throttles the producer (and the
backend read loop behind it).

Lifecycle
---------
- The producer calls ``send`` for each chunk and ``close`` exactly once.
- The consumer iterates until the channel is exhausted. A closed channel
  stays exhausted; iterating again yields nothing.
- A consumer that stops early calls ``abandon`` (also done on context-manager
  exit). Any blocked ``send`` returns ``False`` and the producer winds down.

Thread-safety
-------------
One producer, one consumer. All state is guarded by a single
``threading.Condition``.
"""
from __future__ import annotations

import threading
from typing import Iterator, Optional

from ..cancellation import CancellationToken
from ..models import ChatChunk

_EMPTY = object()

# Seconds between token checks while a send waits for the consumer.
SEND_POLL_INTERVAL = 0.05


class ChunkChannel:
    """Capacity-zero channel of :class:`ChatChunk` values."""

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._item: object = _EMPTY
        self._closed = False
        self._abandoned = False

    @property
    def closed(self) -> bool:
        with self._cond:
            return self._closed

    @property
    def abandoned(self) -> bool:
        with self._cond:
            return self._abandoned

    # ---------------------------------------------------------------- producer
    def send(self, chunk: ChatChunk, token: Optional[CancellationToken] = None) -> bool:
        """Hand ``chunk`` to the consumer, blocking until it is taken.

        Returns ``False`` without delivering when the consumer abandoned the
        channel or ``token`` is cancelled before the chunk is taken; the chunk
        is discarded in that case.

        Raises:
            RuntimeError: When called after ``close``.
        """
        with self._cond:
            if self._closed:
                raise RuntimeError("send on closed chunk channel")
            if self._abandoned or (token is not None and token.cancelled):
                return False
            self._item = chunk
            self._cond.notify_all()
            while True:
                if self._item is not chunk:
                    return True
                if self._abandoned or (token is not None and token.cancelled):
                    self._item = _EMPTY
                    return False
                self._cond.wait(SEND_POLL_INTERVAL if token is not None else None)

    def close(self) -> bool:
        """Mark the end of the stream; return ``False`` if already closed."""
        with self._cond:
            if self._closed:
                return False
            self._closed = True
            self._cond.notify_all()
            return True

    # ---------------------------------------------------------------- consumer
    def __iter__(self) -> Iterator[ChatChunk]:
        return self

    def __next__(self) -> ChatChunk:
        with self._cond:
            while True:
                if self._abandoned:
                    raise StopIteration
                if self._item is not _EMPTY:
                    item = self._item
                    self._item = _EMPTY
                    self._cond.notify_all()
                    return item  # type: ignore[return-value]
                if self._closed:
                    raise StopIteration
                self._cond.wait()

    def abandon(self) -> None:
        """Stop consuming; pending and future sends are dropped.

        A pending chunk is left for its blocked ``send`` to withdraw, so that
        ``send`` reports it as not delivered.
        """
        with self._cond:
            self._abandoned = True
            self._cond.notify_all()

    def wait_closed(self, timeout: Optional[float] = None) -> bool:
        """Block until the producer has closed the channel."""
        with self._cond:
            return self._cond.wait_for(lambda: self._closed, timeout)

    def __enter__(self) -> "ChunkChannel":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.abandon()


__all__ = ["ChunkChannel", "SEND_POLL_INTERVAL"]
