"""Parallel find, for-each and accumulate over sequences."""

from __future__ import annotations

import operator
import threading
from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import Future, wait
from functools import reduce
from typing import Any

from .timing import hardware_threads, thread_count

_MIN_PER_THREAD = 25
_MIN_BLOCK_SIZE = 1000
_MIN_ELEMENT_COUNT = 1000


def _spawn(fn: Callable[..., Any], *args: Any) -> Future:
    """Run ``fn(*args)`` on a new thread and return a future for its result."""
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


def _as_sequence(items: Iterable[Any]) -> Sequence[Any]:
    return items if isinstance(items, Sequence) else list(items)


def parallel_find(items: Iterable[Any], match: Any) -> int | None:
    """Return the index of an element equal to ``match``, or ``None`` if there is none.

    The sequence is split into blocks searched on separate threads; once one
    thread finds a match the others stop.
    """
    seq = _as_sequence(items)
    length = len(seq)
    if not length:
        return None
    num_threads = thread_count(length, _MIN_PER_THREAD)
    block_size = length // num_threads
    done = threading.Event()

    def find_block(start: int, end: int) -> int | None:
        try:
            for index in range(start, end):
                if done.is_set():
                    return None
                if seq[index] == match:
                    done.set()
                    return index
        except BaseException:
            done.set()
            raise
        return None

    futures = [
        _spawn(find_block, i * block_size, (i + 1) * block_size)
        for i in range(num_threads - 1)
    ]
    try:
        last = find_block((num_threads - 1) * block_size, length)
    finally:
        wait(futures)
    found = [future.result() for future in futures] + [last]
    return next((index for index in found if index is not None), None)


def _find_async(
    seq: Sequence[Any], start: int, end: int, match: Any, done: threading.Event
) -> int:
    try:
        length = end - start
        if length < 2 * _MIN_PER_THREAD:
            for index in range(start, end):
                if done.is_set():
                    break
                if seq[index] == match:
                    done.set()
                    return index
            return end
        mid = start + length // 2
        upper = _spawn(_find_async, seq, mid, end, match, done)
        try:
            direct = _find_async(seq, start, mid, match, done)
        finally:
            wait([upper])
        return upper.result() if direct == mid else direct
    except BaseException:
        done.set()
        raise


def parallel_find_async(items: Iterable[Any], match: Any) -> int | None:
    """Recursive variant of :func:`parallel_find` that halves the range on each level."""
    seq = _as_sequence(items)
    length = len(seq)
    index = _find_async(seq, 0, length, match, threading.Event())
    return None if index == length else index


def parallel_for_each(items: Iterable[Any], func: Callable[[Any], Any]) -> None:
    """Call ``func`` on every element, spreading blocks over threads.

    The first exception raised by ``func`` is re-raised once all blocks finish.
    """
    seq = _as_sequence(items)
    length = len(seq)
    if not length:
        return
    num_threads = thread_count(length, _MIN_PER_THREAD)
    block_size = length // num_threads

    def apply(start: int, end: int) -> None:
        for index in range(start, end):
            func(seq[index])

    futures = [
        _spawn(apply, i * block_size, (i + 1) * block_size)
        for i in range(num_threads - 1)
    ]
    try:
        apply((num_threads - 1) * block_size, length)
    finally:
        wait(futures)
    for future in futures:
        future.result()


def _for_each_async(seq: Sequence[Any], start: int, end: int, func: Callable[[Any], Any]) -> None:
    length = end - start
    if not length:
        return
    if length < 2 * _MIN_PER_THREAD:
        for index in range(start, end):
            func(seq[index])
        return
    mid = start + length // 2
    first_half = _spawn(_for_each_async, seq, start, mid, func)
    try:
        _for_each_async(seq, mid, end, func)
    finally:
        wait([first_half])
    first_half.result()


def parallel_for_each_async(items: Iterable[Any], func: Callable[[Any], Any]) -> None:
    """Recursive variant of :func:`parallel_for_each` that halves the range on each level."""
    seq = _as_sequence(items)
    _for_each_async(seq, 0, len(seq), func)


def _block_total(block: Sequence[Any]) -> Any:
    return reduce(operator.add, block) if block else None


def parallel_accumulate(items: Iterable[Any], init: Any) -> Any:
    """Return ``init`` plus every element, in order, summing blocks of at least 1000 on threads."""
    seq = _as_sequence(items)
    distance = len(seq)
    by_elements = (distance + 1) // _MIN_BLOCK_SIZE
    allowed = max(1, min(by_elements, hardware_threads() or 2))
    block_size = (distance + 1) // allowed

    futures = []
    start = 0
    for _ in range(allowed - 1):
        futures.append(_spawn(_block_total, seq[start:start + block_size]))
        start += block_size
    try:
        last_total = _block_total(seq[start:])
    finally:
        wait(futures)

    result = init
    for total in [future.result() for future in futures] + [last_total]:
        if total is not None:
            result = result + total
    return result


def recursive_accumulate(items: Iterable[Any]) -> Any:
    """Sum the elements, splitting ranges above 1000 items between threads."""
    seq = _as_sequence(items)
    length = len(seq)
    if length <= _MIN_ELEMENT_COUNT:
        return sum(seq)
    mid = (length + 1) // 2
    upper = _spawn(recursive_accumulate, seq[mid:])
    try:
        lower = recursive_accumulate(seq[:mid])
    finally:
        wait([upper])
    return lower + upper.result()