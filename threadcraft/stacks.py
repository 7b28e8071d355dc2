"""Stacks guarded by a lock."""

from __future__ import annotations

import threading
from typing import Any


class EmptyStackError(IndexError):
    """Raised when an item is requested from an empty stack."""

    def __init__(self) -> None:
        super().__init__("stack is empty")


class ThreadSafeStack:
    """LIFO stack whose pop checks and removes in one locked step."""

    def __init__(self) -> None:
        self._items: list[Any] = []
        self._lock = threading.Lock()

    def push(self, element: Any) -> None:
        with self._lock:
            self._items.append(element)

    def pop(self) -> Any:
        """Remove and return the top item; raise :class:`EmptyStackError` if empty."""
        with self._lock:
            if not self._items:
                raise EmptyStackError()
            return self._items.pop()

    def empty(self) -> bool:
        with self._lock:
            return not self._items

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


class TrivialStack:
    """LIFO stack exposing separate ``top`` and ``pop`` calls, each locked on its own."""

    def __init__(self) -> None:
        self._items: list[Any] = []
        self._lock = threading.Lock()

    def push(self, element: Any) -> None:
        with self._lock:
            self._items.append(element)

    def pop(self) -> None:
        """Discard the top item; raise :class:`EmptyStackError` if empty."""
        with self._lock:
            if not self._items:
                raise EmptyStackError()
            self._items.pop()

    def top(self) -> Any:
        """Return the top item without removing it."""
        with self._lock:
            if not self._items:
                raise EmptyStackError()
            return self._items[-1]

    def empty(self) -> bool:
        with self._lock:
            return not self._items

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)