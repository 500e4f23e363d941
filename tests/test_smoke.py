# Copyright (c) 2026 Shmuel Link
# SPDX-License-Identifier: MIT

# tests/test_smoke.py
def test_import():
    import borderband
    from borderband.matrix import BorderedBandMatrix
    from borderband.solvers.bordered import Solver
    from borderband.vector import Vector
