"""Threads that can be asked to stop, checked through per-thread interruption flags."""

from __future__ import annotations

import threading
from collections.abc import Callable
from concurrent.futures import Future
from typing import Any

_state = threading.local()


class InterruptFlag:
    """Flag that one thread sets and another polls."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def set(self) -> None:
        self._event.set()

    def is_set(self) -> bool:
        return self._event.is_set()


def _this_thread_flag() -> InterruptFlag:
    flag = getattr(_state, "flag", None)
    if flag is None:
        flag = InterruptFlag()
        _state.flag = flag
    return flag


def interruption_point() -> bool:
    """Return True if the calling thread has been asked to stop."""
    return _this_thread_flag().is_set()


class InterruptibleThread:
    """Thread, started at once, whose target can poll :func:`interruption_point`.

    Joining re-raises any exception the target raised.
    """

    def __init__(self, target: Callable[[], Any]) -> None:
        ready: Future = Future()
        self._error: BaseException | None = None

        def run() -> None:
            ready.set_result(_this_thread_flag())
            try:
                target()
            except BaseException as exc:
                self._error = exc

        self._thread = threading.Thread(target=run, daemon=True)
        self._thread.start()
        self.flag: InterruptFlag = ready.result()

    def interrupt(self) -> None:
        """Ask the thread to stop at its next interruption point."""
        self.flag.set()

    def join(self) -> None:
        """Wait for the thread to finish and re-raise its exception, if any."""
        self._thread.join()
        if self._error is not None:
            raise self._error

    def __enter__(self) -> InterruptibleThread:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._thread.join()
        if exc_type is None and self._error is not None:
            raise self._error