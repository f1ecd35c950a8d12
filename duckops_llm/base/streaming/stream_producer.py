"""Producer thread driving one backend stream into a :class:`ChunkChannel`.

Purpose
-------
Shared streaming loop for every adapter. The adapter opens the backend stream
itself (so failures to open surface synchronously) and hands the open stream
to ``start_stream_producer``, which reads it on a daemon thread.

Behaviour
---------
- Each backend item goes through ``translate``; non-empty text becomes a
  ``ChatChunk`` sent on the channel.
- A backend error mid-stream is wrapped by ``wrap_error`` and delivered as one
  error chunk, then production stops.
- The token is checked between backend reads and while waiting for the
  consumer. Cancelling it also closes the backend stream right away, which
  interrupts a read stalled on the network. Once cancelled, undelivered
  chunks are dropped and no error chunk is sent.
- Whatever happens, the backend stream is closed and then the channel is
  closed, exactly once.
"""
from __future__ import annotations

import contextlib
import logging
import threading
import time
from typing import Any, Callable, Iterable, Optional

from ..cancellation import CancellationToken
from ..errors import ProviderError
from ..log_support import LogContext
from ..logging import normalized_log_event
from ..models import ChatChunk
from .chunk_channel import ChunkChannel


class StreamOutcome:
    COMPLETED = "completed"
    ERROR = "error"
    CANCELLED = "cancelled"
    ABANDONED = "abandoned"


def _is_cancelled(token: Optional[CancellationToken]) -> bool:
    return token is not None and token.cancelled


def _pump(
    channel: ChunkChannel,
    backend_stream: Iterable[Any],
    translate: Callable[[Any], Optional[str]],
    token: Optional[CancellationToken],
) -> tuple[str, int]:
    """Forward translated deltas; return ``(outcome, emitted_count)``."""
    emitted = 0
    for raw in backend_stream:
        if _is_cancelled(token):
            return StreamOutcome.CANCELLED, emitted
        text = translate(raw)
        if not text:
            continue
        if not channel.send(ChatChunk(content=text), token):
            if _is_cancelled(token):
                return StreamOutcome.CANCELLED, emitted
            return StreamOutcome.ABANDONED, emitted
        emitted += 1
    return StreamOutcome.COMPLETED, emitted


def start_stream_producer(
    channel: ChunkChannel,
    backend_stream: Iterable[Any],
    *,
    translate: Callable[[Any], Optional[str]],
    wrap_error: Callable[[Exception], ProviderError],
    close_stream: Optional[Callable[[], None]] = None,
    token: Optional[CancellationToken] = None,
    logger: Optional[logging.Logger] = None,
    ctx: Optional[LogContext] = None,
) -> threading.Thread:
    """Start the daemon thread feeding ``channel`` and return it."""
    close_lock = threading.Lock()
    backend_closed = threading.Event()

    def _close_backend(_reason: Optional[str] = None) -> None:
        # Runs on the producer thread or on whichever thread cancels the token.
        with close_lock:
            if backend_closed.is_set():
                return
            backend_closed.set()
        if close_stream is not None:
            with contextlib.suppress(Exception):
                close_stream()

    def _run() -> None:
        t0 = time.perf_counter()
        outcome, emitted, error_code = StreamOutcome.COMPLETED, 0, None
        unregister = token.on_cancel(_close_backend) if token is not None else None
        try:
            outcome, emitted = _pump(channel, backend_stream, translate, token)
            if outcome == StreamOutcome.COMPLETED and _is_cancelled(token):
                outcome = StreamOutcome.CANCELLED
        except Exception as exc:  # noqa: BLE001 - delivered to the consumer as an error chunk
            if _is_cancelled(token):
                outcome = StreamOutcome.CANCELLED
            else:
                outcome = StreamOutcome.ERROR
                err = wrap_error(exc)
                error_code = err.code.value
                if logger is not None:
                    normalized_log_event(
                        logger,
                        "stream.error",
                        ctx,
                        phase="mid_stream",
                        error_code=error_code,
                        emitted=emitted > 0,
                        error=str(err),
                    )
                channel.send(ChatChunk(error=err), token)
        finally:
            if unregister is not None:
                unregister()
            _close_backend()
            channel.close()
        if logger is not None:
            normalized_log_event(
                logger,
                "stream.end",
                ctx,
                phase="finalize",
                emitted=emitted > 0,
                outcome=outcome,
                chunks=emitted,
                latency_ms=round((time.perf_counter() - t0) * 1000.0, 2),
                level=logging.INFO,
            )

    name = f"stream-{ctx.provider}" if ctx is not None and ctx.provider else "stream-producer"
    thread = threading.Thread(target=_run, name=name, daemon=True)
    thread.start()
    return thread


__all__ = ["start_stream_producer", "StreamOutcome"]
