from itertools import accumulate

import pytest

from threadcraft.scan import (
    parallel_partial_sum,
    parallel_partial_sum_barrier,
    sequential_partial_sum,
)


def test_sequential_worked_example():
    assert sequential_partial_sum([1, 2, 3, 4]) == [1, 3, 6, 10]


def test_sequential_empty():
    assert sequential_partial_sum([]) == []


@pytest.mark.parametrize("size", [1, 2, 24, 25, 26, 100, 1000, 4321])
def test_parallel_ones_give_counts(size):
    assert parallel_partial_sum([1] * size) == list(range(1, size + 1))


@pytest.mark.parametrize("size", [0, 1, 3, 77, 999])
def test_parallel_matches_sequential(size):
    values = [(i * 37) % 11 - 5 for i in range(size)]
    assert parallel_partial_sum(values) == sequential_partial_sum(values)


def test_parallel_does_not_mutate_input():
    values = [3] * 200
    parallel_partial_sum(values)
    assert values == [3] * 200


def test_parallel_last_is_total():
    values = list(range(500))
    assert parallel_partial_sum(values)[-1] == sum(values)


def test_parallel_propagates_errors():
    values = [1] * 100 + [None] + [1] * 100
    with pytest.raises(TypeError):
        parallel_partial_sum(values)


@pytest.mark.parametrize("size", [0, 1, 2, 3, 5, 8, 11, 16, 33])
def test_barrier_ones_give_counts(size):
    assert parallel_partial_sum_barrier([1] * size) == list(range(1, size + 1))


@pytest.mark.parametrize("size", [2, 7, 12, 20])
def test_barrier_matches_sequential(size):
    values = [(i * 13) % 7 - 3 for i in range(size)]
    assert parallel_partial_sum_barrier(values) == list(accumulate(values))


def test_barrier_worked_example():
    assert parallel_partial_sum_barrier([1, 2, 3, 4]) == [1, 3, 6, 10]