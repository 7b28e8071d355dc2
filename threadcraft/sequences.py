"""Number sequences: a prime sieve and an endless arithmetic generator."""

from __future__ import annotations

from collections.abc import Iterator


def sieve_of_eratosthenes(num: int) -> list[int]:
    """Return the primes less than or equal to ``num``."""
    if num < 2:
        return []
    is_prime = [True] * (num + 1)
    is_prime[0] = is_prime[1] = False
    i = 2
    while i * i <= num:
        if is_prime[i]:
            is_prime[i * 2::i] = [False] * len(range(i * 2, num + 1, i))
        i += 1
    return [n for n, prime in enumerate(is_prime) if prime]


def get_next(start: int = 0, step: int = 1) -> Iterator[int]:
    """Yield ``start``, ``start + step``, ``start + 2 * step`` and so on, forever."""
    value = start
    while True:
        yield value
        value += step