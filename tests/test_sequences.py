from itertools import islice

import pytest

from threadcraft.sequences import get_next, sieve_of_eratosthenes


def test_sieve_up_to_fifteen():
    assert sieve_of_eratosthenes(15) == [2, 3, 5, 7, 11, 13]


@pytest.mark.parametrize("num", [-5, 0, 1])
def test_sieve_below_two_is_empty(num):
    assert sieve_of_eratosthenes(num) == []


def test_sieve_includes_limit_when_prime():
    assert sieve_of_eratosthenes(2) == [2]
    assert sieve_of_eratosthenes(13)[-1] == 13


def test_sieve_results_are_exactly_the_primes():
    primes = sieve_of_eratosthenes(300)
    expected = [
        n for n in range(2, 301) if all(n % d for d in range(2, int(n ** 0.5) + 1))
    ]
    assert primes == expected


def test_sieve_is_monotonic_in_limit():
    small = sieve_of_eratosthenes(50)
    large = sieve_of_eratosthenes(100)
    assert large[: len(small)] == small


def test_get_next_defaults():
    assert list(islice(get_next(), 11)) == list(range(11))


def test_get_next_with_negative_step():
    assert list(islice(get_next(100, -10), 21)) == list(range(100, -110, -10))


def test_get_next_is_endless():
    gen = get_next(5, 3)
    for _ in range(1000):
        value = next(gen)
    assert value == 5 + 999 * 3