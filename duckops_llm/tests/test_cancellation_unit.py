"""Unit tests for cooperative cancellation primitives.

Covers first-cancel-wins semantics, propagation to derived tokens, callbacks,
blocking waits and ``run_cancellable``.
"""
from __future__ import annotations

import threading
import time

import pytest

from duckops_llm.base.cancellation import (
    CancellationToken,
    CancelledError,
    close_quietly,
    run_cancellable,
)


def test_first_cancel_wins_and_reaches_every_child():
    root = CancellationToken()
    children = [root.child(), root.child()]
    grandchild = children[0].child()

    root.cancel(reason="stop")
    root.cancel(reason="ignored")

    for token in (root, *children, grandchild):
        assert token.cancelled and token.reason == "stop"  # nosec B101 - pytest assert in tests


def test_child_cancel_does_not_reach_parent():
    root = CancellationToken()
    root.child().cancel("local")
    assert not root.cancelled  # nosec B101 - pytest assert in tests


def test_token_derived_from_cancelled_parent_starts_cancelled():
    parent = CancellationToken()
    parent.cancel("done")
    late_child = CancellationToken(parent=parent)
    assert late_child.cancelled and late_child.reason == "done"  # nosec B101 - pytest assert in tests


def test_on_cancel_callbacks_run_once_with_reason():
    token = CancellationToken()
    seen = []
    token.on_cancel(seen.append)
    token.cancel("deadline")
    token.cancel("again")
    token.on_cancel(seen.append)
    assert seen == ["deadline", "deadline"]  # nosec B101 - pytest assert in tests


def test_raise_if_cancelled_carries_reason_or_default():
    token = CancellationToken()
    token.raise_if_cancelled()
    token.cancel("terminate")
    with pytest.raises(CancelledError, match="terminate"):
        token.raise_if_cancelled()
    anonymous = CancellationToken()
    anonymous.cancel()
    with pytest.raises(CancelledError, match="operation cancelled"):
        anonymous.raise_if_cancelled()


def test_wait_returns_when_cancelled_from_another_thread():
    token = CancellationToken()
    threading.Timer(0.05, token.cancel).start()
    assert token.wait(2.0) is True  # nosec B101 - pytest assert in tests


def test_run_cancellable_without_token_runs_inline():
    caller = threading.current_thread()
    seen = []
    assert run_cancellable(lambda: seen.append(threading.current_thread()) or 42) == 42  # nosec B101
    assert seen == [caller]  # nosec B101 - pytest assert in tests


def test_run_cancellable_returns_result_and_propagates_errors():
    token = CancellationToken()
    assert run_cancellable(lambda: "ok", token) == "ok"  # nosec B101 - pytest assert in tests

    def _boom():
        raise ValueError("backend down")

    with pytest.raises(ValueError, match="backend down"):
        run_cancellable(_boom, token)


def test_run_cancellable_with_cancelled_token_never_calls_fn():
    token = CancellationToken()
    token.cancel("early")
    called = []
    with pytest.raises(CancelledError):
        run_cancellable(lambda: called.append(1), token)
    assert called == []  # nosec B101 - pytest assert in tests


def test_run_cancellable_returns_promptly_when_cancelled_mid_wait():
    token = CancellationToken()
    release = threading.Event()
    threading.Timer(0.05, token.cancel, args=("deadline",)).start()
    t0 = time.perf_counter()
    try:
        with pytest.raises(CancelledError, match="deadline"):
            run_cancellable(lambda: release.wait(5), token)
        assert time.perf_counter() - t0 < 2.0  # nosec B101 - pytest assert in tests
    finally:
        release.set()


def test_unregistered_on_cancel_callback_does_not_run():
    token = CancellationToken()
    seen = []
    unregister = token.on_cancel(seen.append)
    unregister()
    token.cancel("late")
    assert seen == []  # nosec B101 - pytest assert in tests


def test_result_arriving_after_cancellation_is_handed_to_cleanup():
    token = CancellationToken()
    release = threading.Event()
    late = []

    def _slow_open():
        release.wait(5)
        return "open-stream"

    threading.Timer(0.05, token.cancel).start()
    with pytest.raises(CancelledError):
        run_cancellable(_slow_open, token, on_late_result=late.append)
    release.set()

    deadline = time.monotonic() + 2.0
    while not late and time.monotonic() < deadline:
        time.sleep(0.01)
    assert late == ["open-stream"]  # nosec B101 - pytest assert in tests


def test_late_failure_is_not_handed_to_cleanup():
    token = CancellationToken()
    release = threading.Event()
    late = []
    finished = threading.Event()

    def _slow_fail():
        release.wait(5)
        finished.set()
        raise ConnectionError("refused")

    threading.Timer(0.05, token.cancel).start()
    with pytest.raises(CancelledError):
        run_cancellable(_slow_fail, token, on_late_result=late.append)
    release.set()
    assert finished.wait(2)  # nosec B101 - pytest assert in tests
    time.sleep(0.05)
    assert late == []  # nosec B101 - pytest assert in tests


def test_close_quietly_ignores_missing_or_failing_close():
    class _Broken:
        def close(self):
            raise OSError("already gone")

    close_quietly(object())
    close_quietly(_Broken())
