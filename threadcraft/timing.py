"""Timing report helpers and the thread-count heuristic used by the parallel algorithms."""

from __future__ import annotations

import os


def format_results(tag: str, start: float, end: float) -> str:
    """Format an elapsed time; ``start`` and ``end`` are seconds from ``time.perf_counter``."""
    return f"{tag}: Time: {(end - start) * 1000.0:f}ms"


def print_results(tag: str, start: float, end: float) -> None:
    """Print the line built by :func:`format_results`."""
    print(format_results(tag, start, end))


def hardware_threads() -> int:
    """Number of CPUs available, or 0 when it cannot be determined."""
    return os.cpu_count() or 0


def thread_count(length: int, min_per_thread: int) -> int:
    """Threads to use for ``length`` items, each thread getting at least ``min_per_thread``.

    Falls back to two hardware threads when the CPU count is unknown.
    """
    if min_per_thread < 1:
        raise ValueError(f"min_per_thread must be at least 1, got {min_per_thread}")
    if length <= 0:
        return 0
    max_threads = (length + min_per_thread - 1) // min_per_thread
    return min(hardware_threads() or 2, max_threads)