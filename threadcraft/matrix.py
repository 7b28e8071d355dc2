"""Dense integer matrices with sequential and threaded multiply and transpose."""

from __future__ import annotations

import threading
from collections.abc import Callable

from .sync import JoinThreads
from .timing import thread_count

_MIN_PER_THREAD = 10000


class MatrixSizeError(ValueError):
    """Raised when matrix shapes do not fit the requested operation."""


def _run_in_blocks(length: int, worker: Callable[[int, int], None]) -> None:
    """Split ``range(length)`` into blocks; the calling thread takes the last one."""
    if not length:
        return
    num_threads = thread_count(length, _MIN_PER_THREAD)
    block_size = length // num_threads
    threads = [
        threading.Thread(target=worker, args=(i * block_size, (i + 1) * block_size))
        for i in range(num_threads - 1)
    ]
    with JoinThreads(threads):
        for thread in threads:
            thread.start()
        worker((num_threads - 1) * block_size, length)


class Matrix:
    """Row-major matrix of integers, initialised to zero."""

    def __init__(self, rows: int, columns: int) -> None:
        if rows < 0 or columns < 0:
            raise MatrixSizeError(f"invalid matrix shape {rows}x{columns}")
        self.rows = rows
        self.columns = columns
        self._data = [0] * (rows * columns)

    def set_value(self, i: int, j: int, value: int) -> None:
        self._data[self._index(i, j)] = value

    def get_value(self, i: int, j: int) -> int:
        return self._data[self._index(i, j)]

    def _index(self, i: int, j: int) -> int:
        if not (0 <= i < self.rows and 0 <= j < self.columns):
            raise IndexError(f"({i}, {j}) outside {self.rows}x{self.columns} matrix")
        return i * self.columns + j

    def set_all(self, value: int) -> None:
        self._data = [value] * (self.rows * self.columns)

    @staticmethod
    def _check_multiply(x: Matrix, y: Matrix, results: Matrix) -> None:
        if x.columns != y.rows or x.rows != results.rows or y.columns != results.columns:
            raise MatrixSizeError("Invalid matrix sizes for multiplication")

    @staticmethod
    def _multiply_range(x: Matrix, y: Matrix, results: Matrix, start: int, end: int) -> None:
        out = results._data
        cols = results.columns
        inner = x.columns
        for i in range(start, end):
            row_base = (i // cols) * inner
            col = i % cols
            out[i] += sum(
                x._data[row_base + j] * y._data[col + j * y.columns] for j in range(inner)
            )

    @staticmethod
    def multiply(x: Matrix, y: Matrix, results: Matrix) -> None:
        """Add the product ``x @ y`` into ``results``."""
        Matrix._check_multiply(x, y, results)
        Matrix._multiply_range(x, y, results, 0, results.rows * results.columns)

    @staticmethod
    def parallel_multiply(x: Matrix, y: Matrix, results: Matrix) -> None:
        """Add the product ``x @ y`` into ``results`` using several threads."""
        Matrix._check_multiply(x, y, results)
        _run_in_blocks(
            results.rows * results.columns,
            lambda start, end: Matrix._multiply_range(x, y, results, start, end),
        )

    @staticmethod
    def _check_transpose(x: Matrix, results: Matrix) -> None:
        if x.columns != results.rows or x.rows != results.columns:
            raise MatrixSizeError("Invalid matrix sizes for transpose")

    @staticmethod
    def _transpose_range(x: Matrix, results: Matrix, start: int, end: int) -> None:
        cols = results.columns
        for i in range(start, end):
            result_row, result_column = divmod(i, cols)
            results._data[i] = x._data[result_column * x.columns + result_row]

    @staticmethod
    def transpose(x: Matrix, results: Matrix) -> None:
        """Write the transpose of ``x`` into ``results``."""
        Matrix._check_transpose(x, results)
        Matrix._transpose_range(x, results, 0, results.rows * results.columns)

    @staticmethod
    def parallel_transpose(x: Matrix, results: Matrix) -> None:
        """Write the transpose of ``x`` into ``results`` using several threads."""
        Matrix._check_transpose(x, results)
        _run_in_blocks(
            results.rows * results.columns,
            lambda start, end: Matrix._transpose_range(x, results, start, end),
        )

    def format(self) -> str:
        """Render the matrix as text, or an empty string if it has 50 or more rows or columns."""
        if self.rows >= 50 or self.columns >= 50:
            return ""
        lines = []
        for i in range(self.rows):
            row = self._data[i * self.columns:(i + 1) * self.columns]
            lines.append("".join(f"{v} " for v in row) + "\n")
        return "".join(lines) + "\n"