"""Bank accounts whose transfers lock both sides without risking deadlock."""

from __future__ import annotations

import threading


class BankAccount:
    """Account balance guarded by its own lock."""

    def __init__(self, balance: float = 0.0, name: str = "") -> None:
        self.name = name
        self._balance = balance
        self._lock = threading.Lock()

    def withdraw(self, amount: float) -> None:
        """Take ``amount`` out of the account."""
        with self._lock:
            self._balance -= amount

    def deposit(self, amount: float) -> None:
        """Put ``amount`` into the account."""
        with self._lock:
            self._balance += amount

    def balance(self) -> float:
        """Current balance."""
        with self._lock:
            return self._balance

    def __repr__(self) -> str:
        return f"BankAccount(balance={self.balance()!r}, name={self.name!r})"


def transfer(source: BankAccount, destination: BankAccount, amount: float) -> None:
    """Move ``amount`` from ``source`` to ``destination`` holding both locks at once.

    The locks are always taken in the same global order, so two transfers in
    opposite directions cannot deadlock.
    """
    if source is destination:
        raise ValueError("cannot transfer between an account and itself")
    first, second = sorted((source, destination), key=id)
    with first._lock, second._lock:
        source._balance -= amount
        destination._balance += amount