# Copyright (c) 2026 Shmuel Link
# SPDX-License-Identifier: MIT

import numpy as np
import pytest
from borderband.errors import DimensionMismatch, IndexOutOfRange
from borderband.vector import Vector


def test_one_based_indexing():
    v = Vector.from_array([10.0, 20.0, 30.0])
    assert v[1] == 10.0
    assert v[3] == 30.0
    v[2] = -5.0
    assert np.array_equal(v.values, [10.0, -5.0, 30.0])


@pytest.mark.parametrize("i", [0, 4, -1])
def test_index_out_of_range(i):
    v = Vector(3)
    with pytest.raises(IndexOutOfRange):
        v[i]
    with pytest.raises(IndexOutOfRange):
        v[i] = 1.0


def test_index_error_is_an_index_error():
    """IndexOutOfRange should still be catchable as the builtin IndexError."""
    with pytest.raises(IndexError):
        Vector(2)[3]


def test_norm_is_l1():
    v = Vector.from_array([1.0, -2.0, 3.5])
    assert v.norm() == 6.5


def test_arithmetic():
    v = Vector.from_array([1.0, 2.0, 3.0])
    w = Vector.from_array([4.0, 5.0, 6.0])
    assert np.array_equal((v + w).values, [5.0, 7.0, 9.0])
    assert np.array_equal((w - v).values, [3.0, 3.0, 3.0])
    assert v.dot(w) == 32.0
    assert v @ w == 32.0


def test_arithmetic_size_mismatch():
    v = Vector(3)
    w = Vector(4)
    with pytest.raises(DimensionMismatch):
        v + w
    with pytest.raises(DimensionMismatch):
        v - w
    with pytest.raises(DimensionMismatch):
        v.dot(w)


def test_fill_random_integers_in_half_open_range():
    rng = np.random.default_rng(3)
    v = Vector(500).fill_random(1, 5, rng=rng)
    assert np.all(v.values >= 1)
    assert np.all(v.values < 5)
    assert np.array_equal(v.values, np.round(v.values))


def test_clone_is_deep():
    v = Vector.from_array([1.0, 2.0])
    w = v.clone()
    w[1] = 99.0
    assert v[1] == 1.0


def test_values_setter_copies():
    src = np.array([1.0, 2.0, 3.0])
    v = Vector(0)
    v.values = src
    src[0] = 42.0
    assert v.size == 3
    assert v[1] == 1.0


def test_str_format():
    assert str(Vector.from_array([1.0, 2.5])) == "[ 1 2.5 ]"
