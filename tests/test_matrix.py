# Copyright (c) 2026 Shmuel Link
# SPDX-License-Identifier: MIT

import numpy as np
import pytest
from borderband.errors import DimensionMismatch, IndexOutOfRange
from borderband.matrix import BorderedBandMatrix
from borderband.vector import Vector

DENSE_3 = np.array([
    [2.0, 1.0, 0.0],
    [1.0, 3.0, 1.0],
    [0.0, 1.0, 2.0],
])


def _pattern(n, k):
    """Boolean mask of the cells a bordered band matrix may occupy."""
    mask = np.zeros((n, n), dtype=bool)
    for i in range(n):
        for j in range(n):
            if abs(i - j) <= 1 or j in (k - 1, k + 1):
                mask[i, j] = True
    return mask


def test_three_by_three_forces_k_one():
    m = BorderedBandMatrix(3)
    assert m.k == 1


def test_three_by_three_is_dense():
    m = BorderedBandMatrix.from_dense(DENSE_3, 1)
    assert m.is_consistent()
    assert np.array_equal(m.to_dense(), DENSE_3)
    assert m.element(1, 3) == 0.0
    assert m.element(3, 1) == 0.0
    assert m[2, 2] == 3.0


def test_fill_random_keeps_aliases_for_every_k():
    rng = np.random.default_rng(0)
    for n in range(3, 12):
        for k in range(1, n - 1):
            m = BorderedBandMatrix(n, k).fill_random(1, 10, rng=rng)
            assert m.k == k
            assert m.is_consistent(), f"n={n}, k={k}"
            A = m.to_dense()
            assert np.all(A[~_pattern(n, k)] == 0.0)
            assert np.all(A[_pattern(n, k)] >= 1.0)
            assert np.all(A[_pattern(n, k)] < 10.0)


def test_fill_random_draws_k_in_range():
    rng = np.random.default_rng(1)
    seen = set()
    for _ in range(200):
        m = BorderedBandMatrix(7).fill_random(1, 10, rng=rng)
        seen.add(m.k)
    assert seen == {1, 2, 3, 4, 5}


def test_fill_random_uses_preset_k():
    m = BorderedBandMatrix(8, 4).fill_random(1, 10, rng=np.random.default_rng(2))
    assert m.k == 4


def test_from_bands_keeps_band_and_copies_inputs():
    rng = np.random.default_rng(4)
    n = 9
    a = Vector(n).fill_random(1, 100, rng=rng)
    b = Vector(n).fill_random(100, 200, rng=rng)
    c = Vector(n).fill_random(1, 100, rng=rng)
    m = BorderedBandMatrix.from_bands(a, b, c, 1, 100, k=3, rng=rng)

    assert m.is_consistent()
    assert np.array_equal(m.b.values, b.values)
    assert m.p[3] == b[3]
    assert m.q[6] == a[6]
    m.b[1] = -1.0
    assert b[1] != -1.0


def test_from_bands_size_mismatch():
    with pytest.raises(DimensionMismatch):
        BorderedBandMatrix.from_bands(Vector(5), Vector(5), Vector(4), 1, 10)


def test_element_matches_dense():
    m = BorderedBandMatrix(10, 4).fill_random(1, 50, rng=np.random.default_rng(5))
    A = m.to_dense()
    for i in range(1, 11):
        for j in range(1, 11):
            assert m.element(i, j) == A[i - 1, j - 1]


@pytest.mark.parametrize("cell", [(0, 1), (1, 0), (6, 1), (1, 6)])
def test_element_out_of_range(cell):
    m = BorderedBandMatrix(5, 2)
    with pytest.raises(IndexOutOfRange):
        m.element(*cell)


def test_set_element_writes_both_roles():
    m = BorderedBandMatrix(8, 3).fill_random(1, 10, rng=np.random.default_rng(6))
    m.set_element(3, 3, 77.0)      # b[k] and p[k]
    m[2, 3] = 66.0                 # c[k-1] and p[k-1]
    m[6, 5] = 55.0                 # a[k+3] and q[k+3]
    assert m.b[3] == m.p[3] == 77.0
    assert m.c[2] == m.p[2] == 66.0
    assert m.a[6] == m.q[6] == 55.0
    assert m.is_consistent()


def test_set_element_rejects_structural_zero():
    m = BorderedBandMatrix(8, 3)
    with pytest.raises(ValueError):
        m.set_element(1, 8, 1.0)


def test_direct_write_breaks_consistency():
    m = BorderedBandMatrix(6, 2).fill_random(1, 10, rng=np.random.default_rng(7))
    m.p[2] = m.b[2] + 1.0
    assert not m.is_consistent()


def test_clone_is_independent():
    m = BorderedBandMatrix(6, 2).fill_random(1, 10, rng=np.random.default_rng(8))
    m2 = m.clone()
    m2[2, 2] = -3.0
    assert m.b[2] != -3.0
    assert m2.k == m.k and m2.size == m.size
    assert np.array_equal(m.q.values, m2.q.values)


def test_from_dense_roundtrip():
    m = BorderedBandMatrix(12, 7).fill_random(-20, 20, rng=np.random.default_rng(9))
    m2 = BorderedBandMatrix.from_dense(m.to_dense(), 7)
    assert np.array_equal(m2.to_dense(), m.to_dense())
    assert m2.is_consistent()


def test_to_string_rows():
    m = BorderedBandMatrix.from_dense(DENSE_3, 1)
    text = m.to_string()
    assert text.splitlines()[0] == "| 2 1 0 |"
    assert len(text.splitlines()) == 3
