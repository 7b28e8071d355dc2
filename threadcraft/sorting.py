"""Quicksort, sequential and with the upper partition sorted on another thread."""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable
from concurrent.futures import Future
from typing import Any


def _spawn(fn: Callable[..., Any], *args: Any) -> Future:
    future: Future = Future()

    def run() -> None:
        if not future.set_running_or_notify_cancel():
            return
        try:
            result = fn(*args)
        except BaseException as exc:
            future.set_exception(exc)
        else:
            future.set_result(result)

    threading.Thread(target=run, daemon=True).start()
    return future


def _partition(data: list[Any]) -> tuple[Any, list[Any], list[Any]]:
    pivot, rest = data[0], data[1:]
    lower = [item for item in rest if item < pivot]
    upper = [item for item in rest if not item < pivot]
    return pivot, lower, upper


def sequential_quick_sort(items: Iterable[Any]) -> list[Any]:
    """Return a new sorted list, taking the first element as each pivot."""
    data = list(items)
    if len(data) < 2:
        return data
    pivot, lower, upper = _partition(data)
    return sequential_quick_sort(lower) + [pivot] + sequential_quick_sort(upper)


def parallel_quick_sort(items: Iterable[Any]) -> list[Any]:
    """Return a new sorted list, sorting each upper partition on its own thread."""
    data = list(items)
    if len(data) < 2:
        return data
    pivot, lower, upper = _partition(data)
    upper_future = _spawn(parallel_quick_sort, upper)
    new_lower = parallel_quick_sort(lower)
    return new_lower + [pivot] + upper_future.result()