"""Command-line benchmarks comparing sequential and threaded algorithms."""

from __future__ import annotations

import argparse
import heapq
import random
import time
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

from .scan import parallel_partial_sum, sequential_partial_sum
from .search import (
    parallel_find,
    parallel_find_async,
    parallel_for_each,
    parallel_for_each_async,
)
from .timing import format_results, hardware_threads

_WORK_LOOP = 10000


def _sequential_find(items: list[int], match: int) -> int | None:
    try:
        return items.index(match)
    except ValueError:
        return None


def benchmark_find(size: int = 1_000_000) -> list[str]:
    """Time finding the middle value of ``range(size)`` three ways."""
    ints = list(range(size))
    looking_for = size // 2
    lines = []
    for tag, finder in (
        ("Parallel-package_task_impl", parallel_find),
        ("Parallel-async", parallel_find_async),
        ("Sequential", _sequential_find),
    ):
        start = time.perf_counter()
        finder(ints, looking_for)
        end = time.perf_counter()
        lines.append(format_results(tag, start, end))
    return lines


def _long_function(n: int) -> None:
    total = 0
    for i in range(_WORK_LOOP):
        total += i - 499


def benchmark_for_each(size: int = 1000) -> list[str]:
    """Time a busy function applied to ``size`` elements three ways."""
    ints = [1] * size
    lines = []

    def sequential(items, func):
        for item in items:
            func(item)

    for tag, runner in (
        ("Sequential", sequential),
        ("Parallel-package_task", parallel_for_each),
        ("Parallel-async", parallel_for_each_async),
    ):
        start = time.perf_counter()
        runner(ints, _long_function)
        end = time.perf_counter()
        lines.append(format_results(tag, start, end))
    return lines


def benchmark_scan(size: int = 1000) -> list[str]:
    """Time prefix sums of ``size`` ones, sequentially and in parallel."""
    ints = [1] * size
    lines = []
    for tag, scanner in (
        ("sequential scan", sequential_partial_sum),
        ("parallel scan manual", parallel_partial_sum),
    ):
        start = time.perf_counter()
        scanner(ints)
        end = time.perf_counter()
        lines.append(format_results(tag, start, end))
    return lines


def _chunked_sort(values: list[float]) -> list[float]:
    workers = hardware_threads() or 2
    chunk = -(-len(values) // workers)
    pieces = [values[i:i + chunk] for i in range(0, len(values), chunk)]
    with ThreadPoolExecutor(max_workers=len(pieces)) as executor:
        sorted_pieces = list(executor.map(sorted, pieces))
    return list(heapq.merge(*sorted_pieces))


def _sort_line(tag: str, ordered: list[float], start: float, end: float) -> str:
    return (
        f"{tag}: Lowest: {ordered[0]:g} Highest: {ordered[-1]:g} "
        f"Time: {(end - start) * 1000.0:f}ms"
    )


def benchmark_sort(size: int = 1_000_000, iterations: int = 5) -> list[str]:
    """Time sorting ``size`` random doubles serially and in parallel, ``iterations`` times each."""
    if size < 1:
        raise ValueError(f"size must be at least 1, got {size}")
    if iterations < 0:
        raise ValueError(f"iterations must not be negative, got {iterations}")
    rng = random.SystemRandom()
    doubles = [float(rng.getrandbits(32)) for _ in range(size)]
    lines = [f"Testing with {size} doubles..."]
    for tag, sorter in (("Serial", sorted), ("Parallel", _chunked_sort)):
        for _ in range(iterations):
            start = time.perf_counter()
            ordered = sorter(list(doubles))
            end = time.perf_counter()
            lines.append(_sort_line(tag, ordered, start, end))
    return lines


def main(argv: Sequence[str] | None = None) -> int:
    """Run the chosen benchmark and print its report."""
    parser = argparse.ArgumentParser(
        prog="threadcraft", description="Benchmark sequential and threaded algorithms."
    )
    parser.add_argument("benchmark", choices=["find", "for_each", "scan", "sort"])
    parser.add_argument("--size", type=int, help="number of elements")
    parser.add_argument("--iterations", type=int, default=5, help="sort repetitions")
    args = parser.parse_args(argv)

    size_kw = {} if args.size is None else {"size": args.size}
    if args.benchmark == "find":
        lines = benchmark_find(**size_kw)
    elif args.benchmark == "for_each":
        lines = benchmark_for_each(**size_kw)
    elif args.benchmark == "scan":
        lines = benchmark_scan(**size_kw)
    else:
        try:
            lines = benchmark_sort(iterations=args.iterations, **size_kw)
        except ValueError as exc:
            parser.error(str(exc))
    for line in lines:
        print(line)
    return 0