# Copyright (c) 2026 Shmuel Link
# SPDX-License-Identifier: MIT

import logging
from dataclasses import dataclass
from typing import Optional

from borderband.errors import DimensionMismatch, SingularPivot
from borderband.solvers import elimination
from borderband.vector import Vector

logger = logging.getLogger(__name__)

DEFAULT_EPSILON = 1e-8

PHASES = (
    "left_sweep",
    "right_sweep",
    "reduce_border_block",
    "clear_border_columns",
)


@dataclass
class SolveResult:
    """Outcome of ``Solver.try_solve``: a solution or the pivot failure."""

    x: Optional[Vector] = None
    error: Optional[SingularPivot] = None

    @property
    def ok(self):
        return self.error is None


class Solver:
    """Direct O(n) solver for a bordered band system M x = f.

    The matrix and right-hand side are cloned on construction; the clones
    are reduced in place by four phases and then back-substituted:

        1. left sweep     rows 1..k-1, sub-diagonal eliminated downward
        2. right sweep    rows n..k+3, super-diagonal eliminated upward
        3. border block   3x3 block k..k+2 reduced to the identity
        4. border columns x[k], x[k+2] substituted into all other rows

    Parameters
    ----------
    matrix : BorderedBandMatrix
        System matrix with its border column k assigned.
    rhs : Vector
        Right-hand side f, same size as the matrix.
    eps : float
        Absolute pivot threshold; |pivot| < eps raises ``SingularPivot``.
        Not scaled by the coefficient magnitude.
    """

    def __init__(self, matrix, rhs, eps=DEFAULT_EPSILON):
        if matrix.size != rhs.size:
            raise DimensionMismatch(matrix.size, rhs.size)
        if matrix.k is None:
            raise ValueError("matrix border column k is unset")

        self.matrix = matrix.clone()
        self.f = rhs.clone()
        self.eps = eps
        self._reduced = False

    @property
    def k(self):
        return self.matrix.k

    @property
    def size(self):
        return self.matrix.size

    def _arrays(self):
        m = self.matrix
        return (m.a.values, m.b.values, m.c.values,
                m.p.values, m.q.values, self.f.values)

    def _check(self, phase, row):
        if row >= 0:
            raise SingularPivot(phase, row + 1, self.eps)
        logger.debug("%s done (n=%d, k=%d)", phase, self.size, self.k)

    # Phases ------------------------------------------------------------

    def left_sweep(self):
        row = elimination.left_sweep(*self._arrays(), self.k - 1, self.eps)
        self._check("left_sweep", row)

    def right_sweep(self):
        row = elimination.right_sweep(*self._arrays(), self.k - 1, self.eps)
        self._check("right_sweep", row)

    def reduce_border_block(self):
        row = elimination.reduce_border_block(*self._arrays(), self.k - 1, self.eps)
        self._check("reduce_border_block", row)

    def clear_border_columns(self):
        m = self.matrix
        elimination.clear_border_columns(
            m.a.values, m.c.values, m.p.values, m.q.values,
            self.f.values, self.k - 1,
        )
        logger.debug("clear_border_columns done (n=%d, k=%d)", self.size, self.k)

    def back_substitute(self):
        m = self.matrix
        x = elimination.back_substitute(m.a.values, m.c.values, self.f.values, self.k - 1)
        return Vector.from_array(x)

    # Drivers -----------------------------------------------------------

    def _start(self):
        if self._reduced:
            raise RuntimeError("solver state is already reduced; build a new Solver")
        self._reduced = True

    def solve(self):
        """Solve the system, raising ``SingularPivot`` on a too-small pivot."""
        self._start()
        for phase in PHASES:
            getattr(self, phase)()
        return self.back_substitute()

    def try_solve(self):
        """Like ``solve`` but return the pivot failure instead of raising it."""
        try:
            return SolveResult(x=self.solve())
        except SingularPivot as err:
            return SolveResult(error=err)

    def trace(self, x_accurate):
        """Solve while recording the residual of the reduced system.

        After each phase the partially reduced matrix still describes the
        same solution, so ``M_phase @ x_accurate - f_phase`` should stay at
        round-off level. Raises ``SingularPivot`` like ``solve``.

        Returns:
            (x, records): solution vector and a list of dicts with
            ``phase`` and ``residual_norm``; the last record is the
            ``solution`` error norm ``|x - x_accurate|``.
        """
        if x_accurate.size != self.size:
            raise DimensionMismatch(self.size, x_accurate.size)
        self._start()

        records = [{"phase": "initial", "residual_norm": self._residual(x_accurate)}]
        for phase in PHASES:
            getattr(self, phase)()
            records.append({"phase": phase, "residual_norm": self._residual(x_accurate)})
        x = self.back_substitute()
        records.append({"phase": "solution", "residual_norm": (x - x_accurate).norm()})

        for rec in records:
            logger.info("%-22s residual %.3e", rec["phase"], rec["residual_norm"])
        return x, records

    def _residual(self, x_accurate):
        return (self.matrix.multiply(x_accurate) - self.f).norm()


def solve(matrix, rhs, eps=DEFAULT_EPSILON):
    """Convenience wrapper: ``Solver(matrix, rhs, eps).solve()``."""
    return Solver(matrix, rhs, eps=eps).solve()
