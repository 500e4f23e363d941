# Copyright (c) 2026 Shmuel Link
# SPDX-License-Identifier: MIT

"""Exceptions raised by vectors, bordered band matrices and the solver."""


class BorderBandError(Exception):
    """Base class for borderband errors."""


class DimensionMismatch(BorderBandError, ValueError):
    """Operands of an operation that needs equal sizes have different sizes."""

    def __init__(self, left, right):
        super().__init__(f"size mismatch: {left} != {right}")
        self.left = left
        self.right = right

    def __reduce__(self):
        return (self.__class__, (self.left, self.right))


class IndexOutOfRange(BorderBandError, IndexError):
    """A 1-based logical index fell outside [1, n]."""


class SingularPivot(BorderBandError, ArithmeticError):
    """A pivot smaller than eps in magnitude was met during elimination.

    Attributes:
        phase: name of the elimination phase that failed.
        row: 1-based row of the offending pivot.
        eps: the threshold that was in force.
    """

    def __init__(self, phase, row, eps):
        super().__init__(f"singular pivot in {phase} at row {row} (|pivot| < {eps:g})")
        self.phase = phase
        self.row = row
        self.eps = eps

    def __reduce__(self):
        return (self.__class__, (self.phase, self.row, self.eps))
