# Copyright (c) 2026 Shmuel Link
# SPDX-License-Identifier: MIT

import numpy as np
import pytest
from borderband.errors import DimensionMismatch
from borderband.matrix import BorderedBandMatrix
from borderband.solvers.operators import bordered_matvec
from borderband.vector import Vector


def test_multiply_matches_reference_for_every_k():
    """The O(n) product must agree with the element-wise reference."""
    rng = np.random.default_rng(42)
    for n in range(3, 13):
        v = Vector(n).fill_random(-9, 10, rng=rng)
        for k in range(1, n - 1):
            m = BorderedBandMatrix(n, k).fill_random(-50, 50, rng=rng)
            fast = m.multiply(v)
            slow = m.multiply_reference(v)
            assert np.allclose(fast.values, slow.values, rtol=1e-14, atol=0.0), f"n={n}, k={k}"


def test_multiply_matches_dense_numpy():
    rng = np.random.default_rng(7)
    for n, k in [(50, 1), (50, 48), (50, 24), (51, 2), (51, 47)]:
        m = BorderedBandMatrix(n, k).fill_random(1, 100, rng=rng)
        v = Vector.from_array(rng.uniform(-1, 1, n))
        assert np.allclose(m.multiply(v).values, m.to_dense() @ v.values, rtol=1e-12)


def test_multiply_integer_entries_exact():
    """With small integer entries every partial sum is exact."""
    rng = np.random.default_rng(11)
    m = BorderedBandMatrix(20, 9).fill_random(1, 10, rng=rng)
    v = Vector(20).fill_random(1, 10, rng=rng)
    assert np.array_equal((m @ v).values, m.multiply_reference(v).values)


def test_multiply_three_by_three():
    A = np.array([[2.0, 1.0, 0.0], [1.0, 3.0, 1.0], [0.0, 1.0, 2.0]])
    m = BorderedBandMatrix.from_dense(A, 1)
    f = m.multiply(Vector.from_array([1.0, 2.0, 3.0]))
    assert np.array_equal(f.values, [4.0, 10.0, 8.0])


def test_kernel_does_not_modify_inputs():
    m = BorderedBandMatrix(15, 6).fill_random(1, 10, rng=np.random.default_rng(3))
    arrays = [m.a.values, m.b.values, m.c.values, m.p.values, m.q.values]
    originals = [arr.copy() for arr in arrays]
    v = np.arange(15, dtype=float)
    bordered_matvec(*arrays, v, m.k - 1)
    for arr, orig in zip(arrays, originals):
        assert np.array_equal(arr, orig)


def test_multiply_size_mismatch():
    m = BorderedBandMatrix(5, 2)
    with pytest.raises(DimensionMismatch):
        m.multiply(Vector(4))
    with pytest.raises(DimensionMismatch):
        m.multiply_reference(Vector(6))


def test_multiply_requires_k():
    m = BorderedBandMatrix(5)
    with pytest.raises(ValueError):
        m.multiply(Vector(5))
