"""Fixed-size open-addressing hash table mapping 32-bit keys to 32-bit values."""

from __future__ import annotations

import threading

_MASK32 = 0xFFFFFFFF


def integer_hash(h: int) -> int:
    """Scramble a 32-bit integer with the MurmurHash3 finaliser."""
    h &= _MASK32
    h ^= h >> 16
    h = (h * 0x85EBCA6B) & _MASK32
    h ^= h >> 13
    h = (h * 0xC2B2AE35) & _MASK32
    h ^= h >> 16
    return h


def _check_uint32(name: str, number: int) -> None:
    if not 0 < number <= _MASK32:
        raise ValueError(f"{name} must be in 1..{_MASK32}, got {number}")


class ParallelHashTable:
    """Linear-probing hash table that many threads may fill at once.

    Key 0 marks a free slot and value 0 marks an unset entry, so neither may
    be stored. The table never grows and single items cannot be deleted;
    :meth:`clear` empties it while no other thread is using it.
    """

    def __init__(self, array_size: int) -> None:
        if array_size < 1 or array_size & (array_size - 1):
            raise ValueError(f"array_size must be a power of 2, got {array_size}")
        self.array_size = array_size
        self._keys = [0] * array_size
        self._values = [0] * array_size
        self._claim = threading.Lock()

    def _probe(self, key: int):
        mask = self.array_size - 1
        start = integer_hash(key)
        for offset in range(self.array_size):
            yield (start + offset) & mask

    def set_item(self, key: int, value: int) -> None:
        """Store ``value`` under ``key``, replacing any earlier value."""
        _check_uint32("key", key)
        _check_uint32("value", value)
        for idx in self._probe(key):
            probed = self._keys[idx]
            if probed != key:
                if probed != 0:
                    continue
                with self._claim:
                    previous = self._keys[idx]
                    if previous == 0:
                        self._keys[idx] = key
                    elif previous != key:
                        continue
            self._values[idx] = value
            return
        raise RuntimeError("hash table is full")

    def get_item(self, key: int) -> int:
        """Return the value stored under ``key``, or 0 if there is none."""
        _check_uint32("key", key)
        for idx in self._probe(key):
            probed = self._keys[idx]
            if probed == key:
                return self._values[idx]
            if probed == 0:
                return 0
        return 0

    def item_count(self) -> int:
        """Number of slots holding both a key and a value."""
        return sum(
            1 for key, value in zip(self._keys, self._values) if key and value
        )

    def clear(self) -> None:
        """Empty every slot."""
        self._keys = [0] * self.array_size
        self._values = [0] * self.array_size