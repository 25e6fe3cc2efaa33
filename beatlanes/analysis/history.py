"""Bounded rolling history of scalar values."""

from __future__ import annotations

import numpy as np


class RollingHistory:
    """Fixed-capacity FIFO of floats; the oldest value is evicted first.

    Parameters
    ----------
    capacity:
        Maximum number of values held.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._buffer = np.zeros(capacity, dtype=np.float64)
        self._write_pos = 0
        self._length = 0  # how many valid values are in the buffer

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def push(self, value: float) -> None:
        """Append a value, evicting the oldest one when full."""
        self._buffer[self._write_pos] = value
        self._write_pos = (self._write_pos + 1) % self._capacity
        self._length = min(self._length + 1, self._capacity)

    def values(self, last_n: int | None = None) -> np.ndarray:
        """Return held values, oldest first.

        Parameters
        ----------
        last_n:
            If provided, return only the most recent *n* values.
        """
        n = self._length if last_n is None else min(last_n, self._length)
        if n == 0:
            return np.zeros(0, dtype=np.float64)

        start = (self._write_pos - n) % self._capacity
        if start + n <= self._capacity:
            return self._buffer[start:start + n].copy()

        first = self._capacity - start
        return np.concatenate([
            self._buffer[start:],
            self._buffer[:n - first],
        ])

    def mean(self, last_n: int | None = None) -> float:
        values = self.values(last_n)
        if len(values) == 0:
            return 0.0
        return float(np.mean(values))

    def variance(self) -> float:
        """Population variance of all held values."""
        values = self.values()
        if len(values) == 0:
            return 0.0
        return float(np.var(values))

    @property
    def last(self) -> float | None:
        if self._length == 0:
            return None
        return float(self._buffer[(self._write_pos - 1) % self._capacity])

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def is_full(self) -> bool:
        return self._length == self._capacity

    def __len__(self) -> int:
        return self._length
