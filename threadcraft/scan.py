"""Prefix sums: block-parallel, barrier-synchronised and sequential."""

from __future__ import annotations

import threading
from collections.abc import Iterable
from concurrent.futures import Future
from itertools import accumulate
from typing import Any

from .sync import CountingBarrier, JoinThreads
from .timing import thread_count

_MIN_PER_THREAD = 25


def sequential_partial_sum(values: Iterable[Any]) -> list[Any]:
    """Return the running totals of ``values``."""
    return list(accumulate(values))


def parallel_partial_sum(values: Iterable[Any]) -> list[Any]:
    """Return the running totals of ``values``, computed in blocks on several threads.

    Each block sums itself, then adds the total carried from the block before it.
    """
    data = list(values)
    length = len(data)
    if not length:
        return data
    num_threads = thread_count(length, _MIN_PER_THREAD)
    block_size = length // num_threads

    def process_chunk(
        start: int, end: int, previous: Future | None, end_value: Future | None
    ) -> None:
        try:
            data[start:end] = accumulate(data[start:end])
            if previous is not None:
                addend = previous.result()
                data[end - 1] += addend
                if end_value is not None:
                    end_value.set_result(data[end - 1])
                for index in range(start, end - 1):
                    data[index] += addend
            elif end_value is not None:
                end_value.set_result(data[end - 1])
        except BaseException as exc:
            if end_value is None:
                raise
            end_value.set_exception(exc)

    end_values: list[Future] = [Future() for _ in range(num_threads - 1)]
    threads = [
        threading.Thread(
            target=process_chunk,
            args=(
                i * block_size,
                (i + 1) * block_size,
                end_values[i - 1] if i else None,
                end_values[i],
            ),
            daemon=True,
        )
        for i in range(num_threads - 1)
    ]
    with JoinThreads(threads):
        for thread in threads:
            thread.start()
        process_chunk(
            (num_threads - 1) * block_size,
            length,
            end_values[-1] if end_values else None,
            None,
        )
    return data


def parallel_partial_sum_barrier(values: Iterable[Any]) -> list[Any]:
    """Return the running totals of ``values`` with one thread per element.

    Threads double their stride each round and meet at a barrier between rounds;
    a thread whose stride passes its index leaves the barrier.
    """
    data = list(values)
    length = len(data)
    if length <= 1:
        return data
    buffer = list(data)
    barrier = CountingBarrier(length)
    errors: list[BaseException] = []

    def process_element(i: int) -> None:
        try:
            step = 0
            stride = 1
            while stride <= i:
                source, dest = (buffer, data) if step % 2 else (data, buffer)
                dest[i] = source[i] + source[i - stride]
                step += 1
                stride *= 2
                barrier.wait()
            if step % 2:
                data[i] = buffer[i]
            else:
                buffer[i] = data[i]
        except BaseException as exc:
            errors.append(exc)
        finally:
            barrier.done_waiting()

    threads = [
        threading.Thread(target=process_element, args=(i,), daemon=True)
        for i in range(length - 1)
    ]
    with JoinThreads(threads):
        for thread in threads:
            thread.start()
        process_element(length - 1)
    if errors:
        raise errors[0]
    return data