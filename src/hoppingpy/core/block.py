"""Growable COO block holding the coordinates of one hopping family."""

from __future__ import annotations

from typing import Iterator

import numpy as np

from .types import Array, as_index_dtype


class CooBlock:
    """Ordered (row, col) pairs backed by two preallocated index arrays.

    Only ``len(block)`` leading entries of the backing arrays are meaningful;
    the rest is spare capacity. ``rows`` and ``cols`` return read-only views
    of the filled part.
    """

    __slots__ = ("_rows", "_cols", "_size")

    def __init__(
        self,
        rows: Array | None = None,
        cols: Array | None = None,
        dtype: str | np.dtype | None = None,
    ) -> None:
        dt = as_index_dtype(dtype)
        if rows is None and cols is None:
            self._rows = np.empty(0, dtype=dt)
            self._cols = np.empty(0, dtype=dt)
            self._size = 0
            return
        if rows is None or cols is None:
            raise ValueError("rows and cols must be given together.")
        r = np.array(rows, dtype=dt).reshape(-1)
        c = np.array(cols, dtype=dt).reshape(-1)
        if r.shape != c.shape:
            raise ValueError("rows and cols must have the same length.")
        self._rows = r
        self._cols = c
        self._size = int(r.size)

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[tuple[int, int]]:
        for r, c in zip(self._rows[: self._size].tolist(), self._cols[: self._size].tolist()):
            yield r, c

    def __repr__(self) -> str:
        return f"CooBlock(size={self._size}, capacity={self.capacity}, dtype={self.dtype})"

    @property
    def dtype(self) -> np.dtype:
        return self._rows.dtype

    @property
    def capacity(self) -> int:
        return int(self._rows.size)

    @property
    def rows(self) -> Array:
        view = self._rows[: self._size]
        view.flags.writeable = False
        return view

    @property
    def cols(self) -> Array:
        view = self._cols[: self._size]
        view.flags.writeable = False
        return view

    def reserve(self, capacity: int) -> None:
        """Grow the backing storage to hold at least ``capacity`` entries."""

        if capacity > self.capacity:
            self._reallocate(int(capacity))

    def push(self, row: int, col: int) -> None:
        if self._size == self.capacity:
            self._reallocate(max(4, 2 * self.capacity))
        self._rows[self._size] = row
        self._cols[self._size] = col
        self._size += 1

    def extend(self, rows: Array, cols: Array) -> None:
        r = np.asarray(rows).reshape(-1)
        c = np.asarray(cols).reshape(-1)
        if r.shape != c.shape:
            raise ValueError("rows and cols must have the same length.")
        n = int(r.size)
        if n == 0:
            return
        end = self._size + n
        if end > self.capacity:
            self._reallocate(max(end, 2 * self.capacity))
        self._rows[self._size : end] = r
        self._cols[self._size : end] = c
        self._size = end

    def to_array(self) -> Array:
        """Return a fresh ``(len, 2)`` array of (row, col) pairs."""

        return np.column_stack((self._rows[: self._size], self._cols[: self._size]))

    def copy(self) -> CooBlock:
        return CooBlock(self._rows[: self._size], self._cols[: self._size], dtype=self.dtype)

    def _reallocate(self, capacity: int) -> None:
        rows = np.empty(capacity, dtype=self.dtype)
        cols = np.empty(capacity, dtype=self.dtype)
        rows[: self._size] = self._rows[: self._size]
        cols[: self._size] = self._cols[: self._size]
        self._rows = rows
        self._cols = cols
