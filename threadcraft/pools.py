"""Thread pools: fire-and-forget, future-returning and work-stealing, plus pool-driven algorithms."""

from __future__ import annotations

import operator
import threading
import time
from collections import deque
from collections.abc import Callable, Iterable
from concurrent.futures import Future
from functools import partial, reduce
from typing import Any

from .queues import ThreadSafeQueue
from .timing import hardware_threads
from .timing import thread_count as _threads_for

_MIN_PER_THREAD = 25


def _resolve_count(thread_count: int | None) -> int:
    if thread_count is None:
        return hardware_threads() or 2
    if thread_count < 0:
        raise ValueError(f"thread_count must not be negative, got {thread_count}")
    return thread_count


def _package(func: Callable[[], Any]) -> tuple[Callable[[], None], Future]:
    """Wrap ``func`` in a task that reports its outcome through a future."""
    future: Future = Future()

    def task() -> None:
        if not future.set_running_or_notify_cancel():
            return
        try:
            result = func()
        except BaseException as exc:
            future.set_exception(exc)
        else:
            future.set_result(result)

    return task, future


class _WorkerSet:
    """Worker lifecycle shared by the pools: start, spin on tasks, stop on request."""

    def _start_workers(self, count: int) -> None:
        self._done = threading.Event()
        self._threads: list[threading.Thread] = []
        try:
            for index in range(count):
                thread = threading.Thread(
                    target=self._worker_loop, args=(index,), daemon=True
                )
                thread.start()
                self._threads.append(thread)
        except BaseException:
            self._stop_workers()
            raise

    def _worker_loop(self, index: int) -> None:
        self._bind_worker(index)
        while not self._done.is_set():
            self._run_one()

    def _bind_worker(self, index: int) -> None:
        """Hook run once on each worker thread before it starts taking tasks."""

    def _run_one(self) -> None:
        raise NotImplementedError

    def _check_open(self) -> None:
        if self._done.is_set():
            raise RuntimeError("thread pool has been shut down")

    def _stop_workers(self) -> None:
        self._done.set()
        current = threading.current_thread()
        for thread in self._threads:
            if thread is not current:
                thread.join()


def _run_from(queue: ThreadSafeQueue) -> None:
    task = queue.try_pop()
    if task is None:
        time.sleep(0)
    else:
        task()


class SimpleThreadPool(_WorkerSet):
    """Pool whose workers run submitted callables; results are not reported back.

    ``thread_count`` defaults to the number of CPUs (two if unknown).
    """

    def __init__(self, thread_count: int | None = None) -> None:
        count = _resolve_count(thread_count)
        self._work_queue = ThreadSafeQueue()
        self._start_workers(count)

    def _run_one(self) -> None:
        _run_from(self._work_queue)

    def submit(self, func: Callable[[], Any]) -> None:
        """Queue ``func`` to be called on a worker thread."""
        self._check_open()
        self._work_queue.push(func)

    def shutdown(self) -> None:
        """Stop the workers and wait for them; tasks still queued are dropped."""
        self._stop_workers()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()


class WaitingThreadPool(_WorkerSet):
    """Pool whose :meth:`submit` returns a future for the callable's result."""

    def __init__(self, thread_count: int | None = None) -> None:
        count = _resolve_count(thread_count)
        self._work_queue = ThreadSafeQueue()
        self._start_workers(count)

    def _run_one(self) -> None:
        _run_from(self._work_queue)

    def submit(self, func: Callable[[], Any]) -> Future:
        """Queue ``func`` and return a future that receives its result or exception."""
        self._check_open()
        task, future = _package(func)
        self._work_queue.push(task)
        return future

    def run_pending_task(self) -> None:
        """Run one queued task on the calling thread, or yield if there is none."""
        _run_from(self._work_queue)

    def shutdown(self) -> None:
        """Stop the workers and wait for them; tasks still queued are dropped."""
        self._stop_workers()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()


class WorkStealingQueue:
    """Per-worker task deque: the owner works at the front, thieves take from the back."""

    def __init__(self) -> None:
        self._tasks: deque[Callable[[], None]] = deque()
        self._lock = threading.Lock()

    def push(self, task: Callable[[], None]) -> None:
        with self._lock:
            self._tasks.appendleft(task)

    def try_pop(self) -> Callable[[], None] | None:
        """Take the most recently pushed task, or ``None`` if empty."""
        with self._lock:
            return self._tasks.popleft() if self._tasks else None

    def try_steal(self) -> Callable[[], None] | None:
        """Take the oldest task, or ``None`` if empty."""
        with self._lock:
            return self._tasks.pop() if self._tasks else None

    def empty(self) -> bool:
        with self._lock:
            return not self._tasks


class WorkStealingThreadPool(_WorkerSet):
    """Pool in which each worker has its own queue and idle workers steal from the others.

    Tasks submitted from a worker go to that worker's queue; tasks from any
    other thread go to a shared queue.
    """

    def __init__(self, thread_count: int | None = None) -> None:
        count = _resolve_count(thread_count)
        self._global_queue = ThreadSafeQueue()
        self._queues = [WorkStealingQueue() for _ in range(count)]
        self._local = threading.local()
        self._start_workers(count)

    def _bind_worker(self, index: int) -> None:
        self._local.queue = self._queues[index]
        self._local.index = index

    def _run_one(self) -> None:
        self.run_pending_task()

    def _pop_local(self) -> Callable[[], None] | None:
        queue = getattr(self._local, "queue", None)
        return queue.try_pop() if queue is not None else None

    def _steal(self) -> Callable[[], None] | None:
        my_index = getattr(self._local, "index", 0)
        count = len(self._queues)
        for offset in range(count):
            task = self._queues[(my_index + offset + 1) % count].try_steal()
            if task is not None:
                return task
        return None

    def submit(self, func: Callable[[], Any]) -> Future:
        """Queue ``func`` and return a future that receives its result or exception."""
        self._check_open()
        task, future = _package(func)
        local_queue = getattr(self._local, "queue", None)
        if local_queue is not None:
            local_queue.push(task)
        else:
            self._global_queue.push(task)
        return future

    def run_pending_task(self) -> None:
        """Run one task from the local, shared or another worker's queue, or yield."""
        task = self._pop_local() or self._global_queue.try_pop() or self._steal()
        if task is None:
            time.sleep(0)
        else:
            task()

    def shutdown(self) -> None:
        """Stop the workers and wait for them; tasks still queued are dropped."""
        self._stop_workers()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()


class Sorter:
    """Quicksort that hands each lower partition to a pool and helps out while waiting."""

    def __init__(self, pool: WaitingThreadPool | WorkStealingThreadPool) -> None:
        self.pool = pool

    def do_sort(self, chunk: Iterable[Any]) -> list[Any]:
        """Return a new sorted list, taking the first element as each pivot."""
        data = list(chunk)
        if len(data) < 2:
            return data
        pivot, rest = data[0], data[1:]
        lower = [item for item in rest if item < pivot]
        higher = [item for item in rest if not item < pivot]
        new_lower = self.pool.submit(partial(self.do_sort, lower))
        new_higher = self.do_sort(higher)
        while not new_lower.done():
            self.pool.run_pending_task()
        return new_lower.result() + [pivot] + new_higher


def pool_quick_sort(
    items: Iterable[Any], pool: WaitingThreadPool | WorkStealingThreadPool | None = None
) -> list[Any]:
    """Sort ``items`` with a :class:`Sorter`; a work-stealing pool is made if none is given."""
    data = list(items)
    if not data:
        return data
    if pool is not None:
        return Sorter(pool).do_sort(data)
    with WorkStealingThreadPool() as own_pool:
        return Sorter(own_pool).do_sort(data)


def _block_total(block: list[Any]) -> Any:
    return reduce(operator.add, block)


def pool_accumulate(items: Iterable[Any], init: Any) -> Any:
    """Return ``init`` plus every element, summing blocks on a :class:`WaitingThreadPool`."""
    data = list(items)
    length = len(data)
    if not length:
        return init
    num_threads = _threads_for(length, _MIN_PER_THREAD)
    block_size = length // num_threads
    with WaitingThreadPool() as pool:
        futures = [
            pool.submit(partial(_block_total, data[i * block_size:(i + 1) * block_size]))
            for i in range(num_threads - 1)
        ]
        last_total = _block_total(data[(num_threads - 1) * block_size:])
        result = init
        for future in futures:
            result += future.result()
    return result + last_total