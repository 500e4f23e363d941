# Copyright (c) 2026 Shmuel Link
# SPDX-License-Identifier: MIT

"""Numba kernels for the four elimination phases and back substitution.

All kernels work in place on zero-based storage of the logical vectors
a, b, c, p, q (matrix) and f (right-hand side); ``k`` is the zero-based
border column, so logical row k-1 is index k-2 and so on. Index arithmetic
relative to k is therefore the same as in 1-based notation; only the edge
tests change (logical k == 1 is k == 0, logical k+2 == n is k + 2 == N - 1).

Kernels that divide by a pivot return the zero-based row of the first pivot
with |pivot| < eps, or -1 when the phase completed.
"""

import numpy as np
from numba import njit


@njit(cache=True)
def _tie(first, second, i, value):
    """Store a tied cell under both of its roles."""
    first[i] = value
    second[i] = value


@njit(cache=True)
def left_sweep(a, b, c, p, q, f, k, eps):
    """Eliminate the sub-diagonal of rows 0..k-1 (logical 1..k-1).

    Rows above the border block are normalised to a unit diagonal and
    subtracted from the row below, carrying p, q and f. The last two rows
    run into the block: row k-1's super-diagonal is the tied cell
    c[k-1] = p[k-1], and eliminating it lands on b[k] = p[k].
    """
    if k == 0:
        return -1

    i = 0
    while i <= k - 3:
        if abs(b[i]) < eps:
            return i
        r = 1.0 / b[i]
        b[i] = 1.0
        c[i] *= r
        p[i] *= r
        q[i] *= r
        f[i] *= r
        i += 1

        b[i] -= a[i] * c[i - 1]
        p[i] -= a[i] * p[i - 1]
        q[i] -= a[i] * q[i - 1]
        f[i] -= a[i] * f[i - 1]
        a[i] = 0.0

    # Row k-2 into row k-1, whose super-diagonal is tied to p.
    i = k - 2
    if k > 1:
        if abs(b[i]) < eps:
            return i
        r = 1.0 / b[i]
        b[i] = 1.0
        c[i] *= r
        p[i] *= r
        q[i] *= r
        f[i] *= r
        i += 1

        b[i] -= a[i] * c[i - 1]
        _tie(p, c, i, p[i] - a[i] * p[i - 1])
        q[i] -= a[i] * q[i - 1]
        f[i] -= a[i] * f[i - 1]
        a[i] = 0.0
    else:
        i += 1

    # Row k-1 into row k, whose diagonal is tied to p.
    if abs(b[i]) < eps:
        return i
    r = 1.0 / b[i]
    b[i] = 1.0
    _tie(p, c, i, p[i] * r)
    q[i] *= r
    f[i] *= r
    i += 1

    _tie(p, b, i, p[i] - a[i] * c[i - 1])
    q[i] -= a[i] * q[i - 1]
    f[i] -= a[i] * f[i - 1]
    a[i] = 0.0
    return -1


@njit(cache=True)
def right_sweep(a, b, c, p, q, f, k, eps):
    """Eliminate the super-diagonal of rows N-1..k+3, bottom up.

    Mirror image of ``left_sweep``: row k+3's sub-diagonal is the tied cell
    a[k+3] = q[k+3], and eliminating it lands on b[k+2] = q[k+2].
    """
    N = len(b)
    if k + 2 == N - 1:
        return -1

    i = N - 1
    while i >= k + 5:
        if abs(b[i]) < eps:
            return i
        r = 1.0 / b[i]
        b[i] = 1.0
        a[i] *= r
        p[i] *= r
        q[i] *= r
        f[i] *= r
        i -= 1

        b[i] -= c[i] * a[i + 1]
        p[i] -= c[i] * p[i + 1]
        q[i] -= c[i] * q[i + 1]
        f[i] -= c[i] * f[i + 1]
        c[i] = 0.0

    # Row k+4 into row k+3, whose sub-diagonal is tied to q.
    i = k + 4
    if k < N - 4:
        if abs(b[i]) < eps:
            return i
        r = 1.0 / b[i]
        b[i] = 1.0
        a[i] *= r
        p[i] *= r
        q[i] *= r
        f[i] *= r
        i -= 1

        b[i] -= c[i] * a[i + 1]
        _tie(q, a, i, q[i] - c[i] * q[i + 1])
        p[i] -= c[i] * p[i + 1]
        f[i] -= c[i] * f[i + 1]
        c[i] = 0.0
    else:
        i -= 1

    # Row k+3 into row k+2, whose diagonal is tied to q.
    if abs(b[i]) < eps:
        return i
    r = 1.0 / b[i]
    b[i] = 1.0
    _tie(q, a, i, q[i] * r)
    p[i] *= r
    f[i] *= r
    i -= 1

    _tie(q, b, i, q[i] - c[i] * a[i + 1])
    p[i] -= c[i] * p[i + 1]
    f[i] -= c[i] * f[i + 1]
    c[i] = 0.0
    return -1


@njit(cache=True)
def reduce_border_block(a, b, c, p, q, f, k, eps):
    """Reduce the 3x3 block on rows/columns k..k+2 to the identity.

    On entry the block reads

        | p[k]    c[k]    q[k]   |
        | p[k+1]  b[k+1]  q[k+1] |     (p[k+1] = a[k+1], q[k+1] = c[k+1])
        | p[k+2]  a[k+2]  q[k+2] |

    with p[k] = b[k] and q[k+2] = b[k+2]. Pivots are p[k], b[k+1] and
    q[k+2]. On exit f[k], f[k+1], f[k+2] hold the solution values.
    """
    if abs(p[k]) < eps:
        return k
    r = 1.0 / p[k]
    _tie(b, p, k, 1.0)
    c[k] *= r
    q[k] *= r
    f[k] *= r

    # Clear column k below the pivot.
    i = k + 1
    b[i] -= p[i] * c[i - 1]
    _tie(q, c, i, q[i] - p[i] * q[i - 1])
    f[i] -= p[i] * f[i - 1]
    _tie(p, a, i, 0.0)
    i += 1

    a[i] -= p[i] * c[i - 2]
    _tie(q, b, i, q[i] - p[i] * q[i - 2])
    f[i] -= p[i] * f[i - 2]
    p[i] = 0.0
    i -= 1

    # Second pivot, clear column k+1 below it.
    if abs(b[i]) < eps:
        return i
    r = 1.0 / b[i]
    b[i] = 1.0
    _tie(q, c, i, q[i] * r)
    f[i] *= r
    i += 1

    _tie(q, b, i, q[i] - a[i] * c[i - 1])
    f[i] -= a[i] * f[i - 1]
    a[i] = 0.0

    # Third pivot, then clear column k+2 and k+1 above the diagonal.
    if abs(q[i]) < eps:
        return i
    f[i] *= 1.0 / q[i]
    _tie(b, q, i, 1.0)
    i -= 1

    f[i] -= c[i] * f[i + 1]
    _tie(c, q, i, 0.0)
    i -= 1

    f[i] -= q[i] * f[i + 2]
    q[i] = 0.0

    f[i] -= c[i] * f[i + 1]
    c[i] = 0.0
    return -1


@njit(cache=True)
def clear_border_columns(a, c, p, q, f, k):
    """Substitute x[k] = f[k], x[k+2] = f[k+2] into every row off the block.

    Covers rows k-1..0 and k+3..N-1. Row k-1's super-diagonal and row
    k+3's sub-diagonal are the tied border cells, so they vanish with p, q.
    """
    N = len(f)
    fk = f[k]
    fk2 = f[k + 2]

    for i in range(k - 1, -1, -1):
        f[i] += -p[i] * fk + -q[i] * fk2
        p[i] = 0.0
        q[i] = 0.0

    for i in range(k + 3, N):
        f[i] += -p[i] * fk + -q[i] * fk2
        p[i] = 0.0
        q[i] = 0.0

    if k != 0:
        c[k - 1] = 0.0
    if k != N - 3:
        a[k + 3] = 0.0


@njit(cache=True)
def back_substitute(a, c, f, k):
    """Recover x from the reduced system.

    Rows k-1..k+3 are already x[i] = f[i]; the rest is a unit bidiagonal
    solve outward from the block in each direction.
    """
    N = len(f)
    x = np.empty(N)

    lo = max(k - 1, 0)
    hi = min(k + 3, N - 1)
    for i in range(lo, hi + 1):
        x[i] = f[i]

    for i in range(k - 2, -1, -1):
        x[i] = f[i] - x[i + 1] * c[i]

    for i in range(k + 4, N):
        x[i] = f[i] - x[i - 1] * a[i]

    return x
