"""Run a blocking backend call so that a cancellation token can interrupt the wait.

Backend SDK clients used by the adapters are synchronous and cannot abort a
request that is already on the wire. ``run_cancellable`` moves the call onto a
short-lived worker thread and waits for either the result or the token,
whichever comes first. When the token wins, ``CancelledError`` is raised
immediately. A result the worker produces afterwards is handed to
``on_late_result`` (if given) so resources such as open response streams can
be released; otherwise it is discarded.
"""

from __future__ import annotations

import contextlib
import threading
from concurrent.futures import Future, TimeoutError as FutureTimeoutError
from typing import Any, Callable, Optional, TypeVar

from .cancellation_token import CancellationToken

T = TypeVar("T")

DEFAULT_POLL_INTERVAL = 0.05


def close_quietly(resource: Any) -> None:
    """Call ``resource.close()`` when it has one, ignoring any failure."""
    closer = getattr(resource, "close", None)
    if callable(closer):
        with contextlib.suppress(Exception):
            closer()


def _release_when_done(future: Future, on_late_result: Callable[[Any], None]) -> None:
    def _release(done: Future) -> None:
        if done.cancelled() or done.exception() is not None:
            return
        with contextlib.suppress(Exception):
            on_late_result(done.result())

    future.add_done_callback(_release)


def run_cancellable(
    fn: Callable[[], T],
    token: Optional[CancellationToken] = None,
    *,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
    name: str = "cancellable-call",
    on_late_result: Optional[Callable[[T], None]] = None,
) -> T:
    """Execute ``fn`` and return its result unless ``token`` is cancelled first.

    Parameters:
        fn: Zero-argument callable performing the blocking I/O.
        token: Optional cancellation token. Without one ``fn`` runs inline.
        poll_interval: Seconds between token checks while waiting.
        name: Worker thread name (shows up in thread dumps).
        on_late_result: Receives the result ``fn`` returns after the caller
            has already been cancelled (runs on the worker thread, or inline
            when the result was ready at cancellation time).

    Raises:
        CancelledError: When the token is cancelled before ``fn`` completes
            (including when it was already cancelled on entry).
        Exception: Whatever ``fn`` raised, re-raised in the caller's thread.
    """
    if token is None:
        return fn()
    token.raise_if_cancelled()

    future: Future = Future()

    def _target() -> None:
        if not future.set_running_or_notify_cancel():
            return
        try:
            future.set_result(fn())
        except BaseException as exc:  # noqa: BLE001 - re-raised in caller thread
            future.set_exception(exc)

    threading.Thread(target=_target, name=name, daemon=True).start()
    while True:
        try:
            return future.result(timeout=poll_interval)
        except FutureTimeoutError:
            if token.cancelled:
                if on_late_result is not None:
                    _release_when_done(future, on_late_result)
                token.raise_if_cancelled()


__all__ = ["run_cancellable", "close_quietly", "DEFAULT_POLL_INTERVAL"]
