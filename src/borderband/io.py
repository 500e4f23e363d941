# Copyright (c) 2026 Shmuel Link
# SPDX-License-Identifier: MIT

import json
import numpy as np

from borderband.matrix import BorderedBandMatrix
from borderband.vector import Vector


class _NumpyEncoder(json.JSONEncoder):
    def default(self, obj):
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        if isinstance(obj, (np.float32, np.float64)):
            return float(obj)
        if isinstance(obj, (np.int32, np.int64)):
            return int(obj)
        if isinstance(obj, Vector):
            return obj.values.tolist()
        return super().default(obj)


def save_run(result, path):
    with open(path, "w") as f:
        json.dump(result, f, cls=_NumpyEncoder, indent=2)


def load_run(path):
    with open(path, "r") as f:
        return json.load(f)


def load_matrix(path):
    """Read a dense matrix file.

    Line 1 holds ``"<n> <k>"``; the next n lines hold the rows, n
    whitespace-separated reals each. Band and border vectors are taken from
    the tridiagonal neighbourhood and from columns k and k+2.
    """
    with open(path, "r") as f:
        header = f.readline().split()
        if len(header) != 2:
            raise ValueError(f"{path}: expected '<n> <k>' header, got {header!r}")
        n, k = int(header[0]), int(header[1])
        rows = [line.split() for line in f if line.strip()]

    if len(rows) != n:
        raise ValueError(f"{path}: expected {n} rows, got {len(rows)}")
    for i, row in enumerate(rows, start=1):
        if len(row) != n:
            raise ValueError(f"{path}: row {i} has {len(row)} values, expected {n}")
    return BorderedBandMatrix.from_dense(np.array(rows, dtype=np.float64), k)


def save_matrix(matrix, path):
    A = matrix.to_dense()
    with open(path, "w") as f:
        f.write(f"{matrix.size} {matrix.k}\n")
        for row in A:
            f.write(" ".join(repr(float(x)) for x in row) + "\n")


def load_vector(path):
    """Read a vector file: ``"<n>"`` on line 1, n reals on line 2."""
    with open(path, "r") as f:
        n = int(f.readline())
        values = f.readline().split()
    if len(values) != n:
        raise ValueError(f"{path}: expected {n} values, got {len(values)}")
    return Vector.from_array([float(x) for x in values])


def save_vector(vector, path):
    with open(path, "w") as f:
        f.write(f"{vector.size}\n")
        f.write(" ".join(repr(x) for x in vector) + "\n")
