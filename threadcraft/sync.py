"""Synchronisation primitives: barriers, a latch, a semaphore and join guards."""

from __future__ import annotations

import threading
import time
from collections.abc import Iterable


def _check_count(count: int) -> None:
    if count < 1:
        raise ValueError(f"count must be at least 1, got {count}")


class SpinBarrier:
    """Reusable barrier whose waiters spin, yielding the CPU, until released."""

    def __init__(self, count: int) -> None:
        _check_count(count)
        self._count = count
        self._spaces = count
        self._generation = 0
        self._lock = threading.Lock()

    def wait(self) -> None:
        """Block until ``count`` threads have called :meth:`wait`."""
        with self._lock:
            generation = self._generation
            self._spaces -= 1
            if self._spaces == 0:
                self._spaces = self._count
                self._generation += 1
                return
        while self._generation == generation:
            time.sleep(0)


class Barrier:
    """Reusable barrier built on a condition variable."""

    def __init__(self, count: int) -> None:
        _check_count(count)
        self._threshold = count
        self._count = count
        self._generation = 0
        self._cond = threading.Condition()

    def wait(self) -> None:
        """Block until ``count`` threads have called :meth:`wait`."""
        with self._cond:
            generation = self._generation
            self._count -= 1
            if self._count == 0:
                self._generation += 1
                self._count = self._threshold
                self._cond.notify_all()
            else:
                self._cond.wait_for(lambda: generation != self._generation)


class CountingBarrier:
    """Spinning barrier whose participants may drop out with :meth:`done_waiting`."""

    def __init__(self, count: int) -> None:
        _check_count(count)
        self._count = count
        self._spaces = count
        self._generation = 0
        self._lock = threading.Lock()

    def _release(self) -> None:
        self._spaces = self._count
        self._generation += 1

    def wait(self) -> None:
        """Block until every remaining participant has arrived."""
        with self._lock:
            generation = self._generation
            self._spaces -= 1
            if self._spaces == 0:
                self._release()
                return
        while self._generation == generation:
            time.sleep(0)

    def done_waiting(self) -> None:
        """Leave the barrier for good; later rounds expect one thread fewer."""
        with self._lock:
            if self._count == 0:
                raise RuntimeError("no participants left in the barrier")
            self._count -= 1
            self._spaces -= 1
            if self._spaces == 0:
                self._release()


class Latch:
    """Single-use rendezvous: the ``count``-th waiter releases all the others."""

    def __init__(self, count: int) -> None:
        _check_count(count)
        self._count = count
        self._spaces = count
        self._generation = 0
        self._lock = threading.Lock()

    def wait(self) -> None:
        """Block until ``count`` threads have arrived."""
        with self._lock:
            if self._spaces == 0:
                raise RuntimeError("latch has already been released")
            generation = self._generation
            self._spaces -= 1
            if self._spaces == 0:
                self._generation += 1
                return
        while self._generation == generation:
            time.sleep(0)


class Semaphore:
    """Counting semaphore; a binary semaphore by default."""

    def __init__(self, permissions: int = 1) -> None:
        if permissions < 0:
            raise ValueError(f"permissions must not be negative, got {permissions}")
        self.permissions = permissions
        self._available = permissions
        self._cond = threading.Condition()

    def acquire(self) -> None:
        """Take one permission, blocking until one is free."""
        with self._cond:
            self._cond.wait_for(lambda: self._available > 0)
            self._available -= 1

    def release(self) -> None:
        """Return one permission and wake one waiter."""
        with self._cond:
            self._available += 1
            self._cond.notify()

    def available(self) -> int:
        """Number of permissions currently free."""
        return self._available

    def __enter__(self) -> Semaphore:
        self.acquire()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()


def _join_if_joinable(thread: threading.Thread) -> None:
    if thread.ident is not None and thread is not threading.current_thread():
        thread.join()


class ThreadGuard:
    """Context manager that joins a thread on exit, even when an error escapes."""

    def __init__(self, thread: threading.Thread) -> None:
        self.thread = thread

    def __enter__(self) -> threading.Thread:
        return self.thread

    def __exit__(self, exc_type, exc, tb) -> None:
        _join_if_joinable(self.thread)


class JoinThreads:
    """Context manager that joins every started thread of a collection on exit."""

    def __init__(self, threads: Iterable[threading.Thread]) -> None:
        self.threads = threads

    def __enter__(self):
        return self.threads

    def __exit__(self, exc_type, exc, tb) -> None:
        for thread in self.threads:
            _join_if_joinable(thread)