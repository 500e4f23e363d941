# Copyright (c) 2026 Shmuel Link
# SPDX-License-Identifier: MIT

import numpy as np

from borderband.errors import DimensionMismatch, IndexOutOfRange


class Vector:
    """Fixed-length real vector with 1-based logical indexing.

    Storage is a contiguous float64 array of length ``size``; ``v[i]`` maps
    to ``values[i - 1]``. Arithmetic between vectors requires equal sizes.

    Attributes:
        size: number of entries.
        values: backing array (zero-based). Assigning it stores a copy.
    """

    def __init__(self, size):
        if size < 0:
            raise ValueError(f"size must be non-negative, got {size}")
        self._values = np.zeros(size)

    @classmethod
    def from_array(cls, values):
        arr = np.array(values, dtype=np.float64)
        if arr.ndim != 1:
            raise ValueError(f"expected a 1-D array, got shape {arr.shape}")
        v = cls(0)
        v._values = arr
        return v

    @property
    def size(self):
        return self._values.shape[0]

    @property
    def values(self):
        return self._values

    @values.setter
    def values(self, values):
        self._values = np.array(values, dtype=np.float64)

    def _offset(self, i):
        if i < 1 or i > self.size:
            raise IndexOutOfRange(f"index {i} outside [1, {self.size}]")
        return i - 1

    def __getitem__(self, i):
        return float(self._values[self._offset(i)])

    def __setitem__(self, i, value):
        self._values[self._offset(i)] = value

    def __len__(self):
        return self.size

    def __iter__(self):
        return iter(self._values.tolist())

    def fill_random(self, low, high, rng=None):
        """Fill with random integers in [low, high)."""
        rng = rng if rng is not None else np.random.default_rng()
        self._values[:] = rng.integers(low, high, size=self.size)
        return self

    def norm(self):
        """L1 norm: sum of absolute values."""
        return float(np.sum(np.abs(self._values)))

    def clone(self):
        return Vector.from_array(self._values)

    def _check_size(self, other):
        if self.size != other.size:
            raise DimensionMismatch(self.size, other.size)

    def __add__(self, other):
        self._check_size(other)
        return Vector.from_array(self._values + other._values)

    def __sub__(self, other):
        self._check_size(other)
        return Vector.from_array(self._values - other._values)

    def dot(self, other):
        self._check_size(other)
        return float(np.dot(self._values, other._values))

    __matmul__ = dot

    def __repr__(self):
        return f"Vector({self._values.tolist()!r})"

    def __str__(self):
        return "[ " + "".join(f"{x:g} " for x in self._values) + "]"
