# Copyright (c) 2026 Shmuel Link
# SPDX-License-Identifier: MIT

import numpy as np

from borderband.errors import DimensionMismatch, IndexOutOfRange
from borderband.solvers.operators import bordered_matvec
from borderband.vector import Vector


class BorderedBandMatrix:
    """Tridiagonal matrix with two extra dense columns at k and k+2.

          k   k+2
    | * *     *   *         |
    | * * *   *   *         |
    |   * * * *   *         |
    |     * * *   *         |
    |       * * * *         |
    |         * * *         |
    |         * * * *       |
    |         *   * * *     |
    |         *   * * * *   |
    |         *   *   * * * |
    |         *   *     * * |

    Stored as five length-n vectors: ``a`` (sub-diagonal, a[1] unused),
    ``b`` (diagonal), ``c`` (super-diagonal, c[n] unused), ``p`` (column k)
    and ``q`` (column k+2). Inside the border block k-1..k+3 some cells are
    both a band entry and a border entry; those tied cells hold the same
    value under both roles:

        p[k] = b[k], p[k+1] = a[k+1], q[k+1] = c[k+1], q[k+2] = b[k+2],
        p[k-1] = c[k-1] (k > 1), q[k+3] = a[k+3] (k+2 < n).

    With n = 3 the pivot is forced to k = 1 and the matrix is fully dense.

    Attributes:
        size: matrix dimension n (>= 3).
        k: 1-based border column, 1 <= k <= n-2, or None until assigned by
            ``fill_random``.
        a, b, c, p, q: the five Vector rows described above.
    """

    def __init__(self, size, k=None):
        if size < 3:
            raise ValueError(f"size must be >= 3 (border columns k and k+2 need three columns), got {size}")
        if k is not None and not 1 <= k <= size - 2:
            raise ValueError(f"k must lie in [1, {size - 2}], got {k}")

        self.size = size
        self.k = 1 if size == 3 else k

        self.a = Vector(size)
        self.b = Vector(size)
        self.c = Vector(size)
        self.p = Vector(size)
        self.q = Vector(size)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_bands(cls, a, b, c, low, high, k=None, rng=None):
        """Matrix with the given band vectors and a random border."""
        for band in (b, c):
            if band.size != a.size:
                raise DimensionMismatch(a.size, band.size)
        m = cls(a.size, k)
        m.a, m.b, m.c = a.clone(), b.clone(), c.clone()
        m.fill_random(low, high, k=m.k, generate_band=False, rng=rng)
        return m

    @classmethod
    def from_dense(cls, array, k):
        """Extract band and border vectors from a dense (n, n) array.

        Entries outside the bordered band pattern are ignored.
        """
        A = np.asarray(array, dtype=np.float64)
        if A.ndim != 2 or A.shape[0] != A.shape[1]:
            raise ValueError(f"expected a square matrix, got shape {A.shape}")
        m = cls(A.shape[0], k)
        m.b.values[:] = np.diag(A, 0)
        m.a.values[1:] = np.diag(A, -1)
        m.c.values[:-1] = np.diag(A, 1)
        m.p.values[:] = A[:, m.k - 1]
        m.q.values[:] = A[:, m.k + 1]
        return m

    def fill_random(self, low, high, k=None, generate_band=True, rng=None):
        """Fill with random integers in [low, high).

        The builder runs in a fixed order because later cells depend on
        earlier ones: band vectors, then the tied border cells copied from
        the band, then the free border cells drawn independently.

        Args:
            low, high: integer range of the random entries.
            k: border column. Defaults to the current ``self.k``, or a
                uniform draw from [1, n-2] when that is unset.
            generate_band: draw a, b, c. When False the existing band is
                kept and only the border is filled.
            rng: numpy Generator (default: fresh ``default_rng()``).
        """
        rng = rng if rng is not None else np.random.default_rng()
        n = self.size

        if k is None:
            k = self.k if self.k is not None else int(rng.integers(1, n - 1))
        if not 1 <= k <= n - 2:
            raise ValueError(f"k must lie in [1, {n - 2}], got {k}")
        self.k = k

        if generate_band:
            self.b.values[:] = rng.integers(low, high, size=n)
            self.a.values[1:] = rng.integers(low, high, size=n - 1)
            self.c.values[:-1] = rng.integers(low, high, size=n - 1)

        self._tie_border()
        self._fill_free_border(low, high, rng)
        return self

    def _tied_cells(self):
        """(border, band, i) triples of logical cells stored twice."""
        k, n = self.k, self.size
        cells = [
            (self.p, self.b, k),
            (self.p, self.a, k + 1),
            (self.q, self.c, k + 1),
            (self.q, self.b, k + 2),
        ]
        if k > 1:
            cells.append((self.p, self.c, k - 1))
        if k + 2 < n:
            cells.append((self.q, self.a, k + 3))
        return cells

    def _tie_border(self):
        for border, band, i in self._tied_cells():
            border[i] = band[i]

    def _fill_free_border(self, low, high, rng):
        k, n = self.k, self.size

        def draw(count=None):
            return rng.integers(low, high, size=count)

        self.p[k + 2] = draw()
        self.q[k] = draw()
        if n == 3:
            return

        # Rows 1..k-2 and k+4..n lie outside the band's reach.
        head = max(k - 2, 0)
        self.p.values[:head] = draw(head)
        self.q.values[:head] = draw(head)
        tail = n - (k + 3)
        if tail > 0:
            self.p.values[k + 3:] = draw(tail)
            self.q.values[k + 3:] = draw(tail)

        if k > 1:
            self.q[k - 1] = draw()
        if k + 2 < n:
            self.p[k + 3] = draw()

    def is_consistent(self):
        """True when every tied cell holds the same value under both roles."""
        if self.k is None:
            return False
        return all(border[i] == band[i] for border, band, i in self._tied_cells())

    # ------------------------------------------------------------------
    # Element access
    # ------------------------------------------------------------------

    def _check_cell(self, i, j):
        n = self.size
        if i < 1 or i > n or j < 1 or j > n:
            raise IndexOutOfRange(f"cell ({i}, {j}) outside [1, {n}] x [1, {n}]")

    def element(self, i, j):
        """Logical entry (i, j), 1-based."""
        self._check_cell(i, j)
        d = i - j
        if d == 1:
            return self.a[i]
        if d == 0:
            return self.b[i]
        if d == -1:
            return self.c[i]
        if self.k is not None:
            if j == self.k:
                return self.p[i]
            if j == self.k + 2:
                return self.q[i]
        return 0.0

    def __getitem__(self, index):
        i, j = index
        return self.element(i, j)

    def _roles(self, i, j):
        roles = []
        d = i - j
        if d == 1:
            roles.append((self.a, i))
        elif d == 0:
            roles.append((self.b, i))
        elif d == -1:
            roles.append((self.c, i))
        if self.k is not None:
            if j == self.k:
                roles.append((self.p, i))
            elif j == self.k + 2:
                roles.append((self.q, i))
        return roles

    def set_element(self, i, j, value):
        """Write logical entry (i, j) under every role that stores it."""
        self._check_cell(i, j)
        roles = self._roles(i, j)
        if not roles:
            raise ValueError(f"cell ({i}, {j}) is outside the bordered band pattern")
        for vec, idx in roles:
            vec[idx] = value

    def __setitem__(self, index, value):
        i, j = index
        self.set_element(i, j, value)

    def to_dense(self):
        """Dense (n, n) numpy array of the logical matrix."""
        n = self.size
        A = np.zeros((n, n))
        if self.k is not None:
            A[:, self.k - 1] = self.p.values
            A[:, self.k + 1] = self.q.values
        idx = np.arange(n)
        A[idx, idx] = self.b.values
        A[idx[1:], idx[:-1]] = self.a.values[1:]
        A[idx[:-1], idx[1:]] = self.c.values[:-1]
        return A

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------

    def multiply(self, v):
        """O(n) product exploiting the bordered band structure."""
        if self.size != v.size:
            raise DimensionMismatch(self.size, v.size)
        if self.k is None:
            raise ValueError("border column k is unset; call fill_random first")
        out = bordered_matvec(
            self.a.values, self.b.values, self.c.values,
            self.p.values, self.q.values, v.values, self.k - 1,
        )
        return Vector.from_array(out)

    __matmul__ = multiply

    def multiply_reference(self, v):
        """O(n^2) product through ``element``; a correctness oracle only."""
        if self.size != v.size:
            raise DimensionMismatch(self.size, v.size)
        n = self.size
        out = Vector(n)
        for i in range(1, n + 1):
            total = 0.0
            for j in range(1, n + 1):
                total += self.element(i, j) * v[j]
            out[i] = total
        return out

    # ------------------------------------------------------------------

    def clone(self):
        m = BorderedBandMatrix(self.size, self.k)
        m.a = self.a.clone()
        m.b = self.b.clone()
        m.c = self.c.clone()
        m.p = self.p.clone()
        m.q = self.q.clone()
        return m

    def to_string(self, digits=None, separator=" "):
        """Dense rendering, one matrix row per line, optionally rounded."""
        lines = []
        for row in self.to_dense():
            if digits is not None:
                row = np.round(row, digits)
            cells = separator.join(f"{x:g}" for x in row)
            lines.append(f"|{separator}{cells}{separator}|")
        return "\n".join(lines)

    def __str__(self):
        return self.to_string()

    def __repr__(self):
        return f"BorderedBandMatrix(size={self.size}, k={self.k})"
