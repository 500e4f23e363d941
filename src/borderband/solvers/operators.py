# Copyright (c) 2026 Shmuel Link
# SPDX-License-Identifier: MIT


import numpy as np
from numba import njit


# ---------------------------------------------------------------------------
# Bordered band matrix-vector product
# ---------------------------------------------------------------------------
#
# Arrays are zero-based storage of the 1-based logical vectors, so logical
# row i lives at index i - 1. ``k`` below is the zero-based border column.

@njit(cache=True)
def bordered_matvec(a, b, c, p, q, v, k):
    """Product of a bordered band matrix with v in O(n).

    Rows k-1..k+3 (the border block) use closed forms that depend on where
    k sits relative to the first and last rows. The remaining rows are the
    tridiagonal stencil plus the two border terms p[i]*v[k], q[i]*v[k+2].

    Args:
        a, b, c: sub-, main- and super-diagonal, length N.
        p, q: border columns k and k+2, length N.
        v: vector to multiply, length N.
        k: zero-based border column, 0 <= k <= N-3.

    Returns:
        out: product, length N.
    """
    N = len(b)
    out = np.zeros(N)

    # Border block. Tied cells (p[k]=b[k], p[k-1]=c[k-1], ...) are counted
    # once, under their band role.
    if k == 0:
        out[k] = b[k] * v[k] + c[k] * v[k + 1] + q[k] * v[k + 2]
    else:
        out[k] = a[k] * v[k - 1] + b[k] * v[k] + c[k] * v[k + 1] + q[k] * v[k + 2]
        if k == 1:
            out[k - 1] = b[k - 1] * v[k - 1] + c[k - 1] * v[k] + q[k - 1] * v[k + 2]
        else:
            out[k - 1] = (
                a[k - 1] * v[k - 2] + b[k - 1] * v[k - 1]
                + c[k - 1] * v[k] + q[k - 1] * v[k + 2]
            )

    out[k + 1] = a[k + 1] * v[k] + b[k + 1] * v[k + 1] + c[k + 1] * v[k + 2]

    if k + 2 == N - 1:
        out[k + 2] = p[k + 2] * v[k] + a[k + 2] * v[k + 1] + b[k + 2] * v[k + 2]
    else:
        out[k + 2] = (
            p[k + 2] * v[k] + a[k + 2] * v[k + 1]
            + b[k + 2] * v[k + 2] + c[k + 2] * v[k + 3]
        )
        if k + 3 == N - 1:
            out[k + 3] = p[k + 3] * v[k] + a[k + 3] * v[k + 2] + b[k + 3] * v[k + 3]
        else:
            out[k + 3] = (
                p[k + 3] * v[k] + a[k + 3] * v[k + 2]
                + b[k + 3] * v[k + 3] + c[k + 3] * v[k + 4]
            )

    # Rows above the block: first row has no a term.
    if k > 1:
        out[0] = b[0] * v[0] + c[0] * v[1] + p[0] * v[k] + q[0] * v[k + 2]
        for i in range(1, k - 1):
            out[i] = (
                a[i] * v[i - 1] + b[i] * v[i] + c[i] * v[i + 1]
                + p[i] * v[k] + q[i] * v[k + 2]
            )

    # Rows below the block: last row has no c term.
    if k + 2 < N - 2:
        out[N - 1] = (
            p[N - 1] * v[k] + q[N - 1] * v[k + 2]
            + a[N - 1] * v[N - 2] + b[N - 1] * v[N - 1]
        )
        for i in range(N - 2, k + 3, -1):
            out[i] = (
                p[i] * v[k] + q[i] * v[k + 2]
                + a[i] * v[i - 1] + b[i] * v[i] + c[i] * v[i + 1]
            )

    return out
