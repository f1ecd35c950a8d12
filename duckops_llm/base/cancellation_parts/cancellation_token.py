"""Context token carried by every provider operation.

``CancellationToken`` is the execution context handed to ``generate``,
``stream``, ``health_check`` and ``GeminiProvider.connect``. Blocking calls
wait on it (``run_cancellable``), stream producers poll it between reads.
Cancellation is one-way and propagates from a token to the tokens derived
from it.
"""

from __future__ import annotations

from threading import Lock
from typing import Callable, Optional

from .cancelled_error import CancelledError
from .state import State


def _noop() -> None:
    return None


class CancellationToken:
    """One-shot cancellation signal with parent -> child propagation.

    ``cancel`` may be called from any thread; only the first call wins and
    its reason is kept.
    """

    def __init__(self, *, parent: Optional["CancellationToken"] = None) -> None:
        self._lock = Lock()
        self._state = State()
        if parent is not None:
            parent.link_child(self)

    @property
    def cancelled(self) -> bool:
        return self._state.cancelled

    @property
    def reason(self) -> Optional[str]:
        return self._state.reason

    def on_cancel(self, callback: Callable[[Optional[str]], None]) -> Callable[[], None]:
        """Run ``callback(reason)`` on cancellation (immediately if already cancelled).

        Returns a function that unregisters ``callback`` if it has not run yet.
        """
        with self._lock:
            if not self._state.cancelled:
                self._state.callbacks.append(callback)
                return lambda: self._discard_callback(callback)
        callback(self._state.reason)
        return _noop

    def _discard_callback(self, callback: Callable[[Optional[str]], None]) -> None:
        with self._lock:
            if callback in self._state.callbacks:
                self._state.callbacks.remove(callback)

    def cancel(self, reason: Optional[str] = None) -> None:
        with self._lock:
            if self._state.cancelled:
                return
            self._state.reason = reason
            self._state.event.set()
            callbacks, self._state.callbacks = self._state.callbacks, []
        for callback in callbacks:
            callback(reason)

    def link_child(self, token: "CancellationToken") -> "CancellationToken":
        """Make ``token`` follow this token's cancellation; returns ``token``."""
        self.on_cancel(token.cancel)
        return token

    def child(self) -> "CancellationToken":
        return CancellationToken(parent=self)

    def raise_if_cancelled(self) -> None:
        if self._state.cancelled:
            raise CancelledError(self._state.reason or "operation cancelled")

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until cancelled or ``timeout`` elapses; return ``cancelled``."""
        return self._state.event.wait(timeout)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"CancellationToken(cancelled={self.cancelled}, reason={self.reason!r})"


__all__ = ["CancellationToken"]
