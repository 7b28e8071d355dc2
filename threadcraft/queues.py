"""FIFO queues: a lock-guarded queue and linked-list queues of increasing concurrency."""

from __future__ import annotations

import threading
from collections import deque
from typing import Any


class ThreadSafeQueue:
    """Queue guarded by one lock, with blocking and non-blocking pops.

    Pops that find the queue empty return ``None``.
    """

    def __init__(self) -> None:
        self._items: deque[Any] = deque()
        self._not_empty = threading.Condition()

    def push(self, value: Any) -> None:
        """Append ``value`` and wake one waiting consumer."""
        with self._not_empty:
            self._items.append(value)
            self._not_empty.notify()

    def try_pop(self) -> Any:
        """Remove and return the front item, or ``None`` if the queue is empty."""
        with self._not_empty:
            if not self._items:
                return None
            return self._items.popleft()

    def wait_and_pop(self) -> Any:
        """Remove and return the front item, blocking until there is one."""
        with self._not_empty:
            self._not_empty.wait_for(lambda: bool(self._items))
            return self._items.popleft()

    def empty(self) -> bool:
        with self._not_empty:
            return not self._items

    def __len__(self) -> int:
        with self._not_empty:
            return len(self._items)


class _Node:
    __slots__ = ("data", "next")

    def __init__(self, data: Any = None) -> None:
        self.data = data
        self.next: _Node | None = None


class SequentialQueue:
    """Singly linked FIFO queue for use from one thread."""

    def __init__(self) -> None:
        self._head: _Node | None = None
        self._tail: _Node | None = None

    def push(self, value: Any) -> None:
        node = _Node(value)
        if self._tail is not None:
            self._tail.next = node
        else:
            self._head = node
        self._tail = node

    def pop(self) -> Any:
        """Remove and return the front item, or ``None`` if the queue is empty."""
        if self._head is None:
            return None
        node = self._head
        self._head = node.next
        if self._head is None:
            self._tail = None
        return node.data


class DummyNodeQueue:
    """Linked FIFO queue with a trailing dummy node, so head and tail never share a real node."""

    def __init__(self) -> None:
        self._head = _Node()
        self._tail = self._head

    def push(self, value: Any) -> None:
        new_tail = _Node()
        self._tail.data = value
        self._tail.next = new_tail
        self._tail = new_tail

    def pop(self) -> Any:
        """Remove and return the front item, or ``None`` if the queue is empty."""
        if self._head is self._tail:
            return None
        node = self._head
        self._head = node.next
        return node.data


class FineGrainedQueue:
    """Dummy-node queue with separate head and tail locks and a blocking pop."""

    def __init__(self) -> None:
        self._head = _Node()
        self._tail = self._head
        self._head_lock = threading.Lock()
        self._tail_lock = threading.Lock()
        self._not_empty = threading.Condition(self._head_lock)

    def _get_tail(self) -> _Node:
        with self._tail_lock:
            return self._tail

    def push(self, value: Any) -> None:
        """Append ``value`` and wake one waiting consumer."""
        new_tail = _Node()
        with self._tail_lock:
            self._tail.data = value
            self._tail.next = new_tail
            self._tail = new_tail
        with self._not_empty:
            self._not_empty.notify()

    def _take_head(self) -> Any:
        node = self._head
        self._head = node.next
        return node.data

    def pop(self) -> Any:
        """Remove and return the front item, or ``None`` if the queue is empty."""
        with self._head_lock:
            if self._head is self._get_tail():
                return None
            return self._take_head()

    def wait_pop(self) -> Any:
        """Remove and return the front item, blocking until there is one."""
        with self._not_empty:
            self._not_empty.wait_for(lambda: self._head is not self._get_tail())
            return self._take_head()