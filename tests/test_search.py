import threading

import pytest

from threadcraft.search import (
    parallel_accumulate,
    parallel_find,
    parallel_find_async,
    parallel_for_each,
    parallel_for_each_async,
    recursive_accumulate,
)


@pytest.mark.parametrize("size, target", [(10, 3), (1000, 500), (5000, 4999), (5000, 0)])
def test_parallel_find_locates_element(size, target):
    assert parallel_find(list(range(size)), target) == target


def test_parallel_find_missing_returns_none():
    assert parallel_find(list(range(2000)), -5) is None


def test_parallel_find_empty():
    assert parallel_find([], 1) is None


def test_parallel_find_accepts_iterables():
    values = (x * 2 for x in range(300))
    assert parallel_find(values, 200) == 100


def test_parallel_find_result_points_at_match():
    items = [i % 7 for i in range(700)]
    index = parallel_find(items, 6)
    assert items[index] == 6


def test_parallel_find_async_missing_and_empty():
    assert parallel_find_async(list(range(3000)), 3000) is None
    assert parallel_find_async([], 0) is None


def _collecting():
    seen = []
    lock = threading.Lock()

    def record(value):
        with lock:
            seen.append(value)

    return seen, record


@pytest.mark.parametrize("func", [parallel_for_each, parallel_for_each_async])
@pytest.mark.parametrize("size", [0, 1, 49, 50, 1000])
def test_for_each_visits_every_element_once(func, size):
    seen, record = _collecting()
    items = list(range(size))
    func(items, record)
    assert sorted(seen) == items


@pytest.mark.parametrize("func", [parallel_for_each, parallel_for_each_async])
def test_for_each_propagates_errors(func):
    def explode(value):
        if value == 123:
            raise ValueError("bad element")

    with pytest.raises(ValueError, match="bad element"):
        func(list(range(1000)), explode)


def test_parallel_accumulate_source_example():
    assert parallel_accumulate([2] * 10000, 0) == 20000


def test_parallel_accumulate_adds_init():
    items = list(range(5000))
    assert parallel_accumulate(items, 17) == sum(items) + 17


def test_parallel_accumulate_small_and_empty():
    assert parallel_accumulate([], 5) == 5
    assert parallel_accumulate([1, 2, 3], 0) == sum([1, 2, 3])


def test_parallel_accumulate_preserves_order():
    chars = [chr(ord("a") + i % 26) for i in range(4000)]
    assert parallel_accumulate(chars, "") == "".join(chars)


def test_recursive_accumulate_source_example():
    assert recursive_accumulate([1] * 10000) == 10000


def test_recursive_accumulate_matches_sum():
    items = list(range(-300, 2700))
    assert recursive_accumulate(items) == sum(items)
    assert recursive_accumulate([]) == 0