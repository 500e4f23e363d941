#!/usr/bin/env python3
# Copyright (c) 2026 Shmuel Link
# SPDX-License-Identifier: MIT

"""Solve one very large random system with large coefficients.

Fills a bordered band matrix of size N with random integers in [1, high),
multiplies a random exact solution into a right-hand side, solves, and
reports the L1 error and timings. The default N = 5e7 needs roughly 5 GB of
memory (matrix, right-hand side and the solver's clones).

Usage:
    python scripts/run_stress.py [--size N] [--high H] [--seed S] [--out FILE]

Examples:
    # Full-size run
    python scripts/run_stress.py

    # Quick check at a million unknowns, results saved as JSON
    python scripts/run_stress.py --size 1000000 --out stress.json
"""

import argparse
import logging
import time

import numpy as np

from borderband.errors import SingularPivot
from borderband.io import save_run
from borderband.matrix import BorderedBandMatrix
from borderband.solvers.bordered import DEFAULT_EPSILON, Solver
from borderband.vector import Vector

logger = logging.getLogger("borderband.stress")


def main():
    parser = argparse.ArgumentParser(description=__doc__.split("\n")[0])
    parser.add_argument("--size", type=int, default=50_000_000, help="Matrix size (default: 5e7)")
    parser.add_argument("--high", type=int, default=10000, help="Entries are < high (default: 10000)")
    parser.add_argument("--eps", type=float, default=DEFAULT_EPSILON, help="Singular-pivot threshold")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--out", type=str, default=None, help="Save the result dict as JSON")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    rng = np.random.default_rng(args.seed)

    t0 = time.perf_counter()
    x_accurate = Vector(args.size).fill_random(1, args.high, rng=rng)
    m = BorderedBandMatrix(args.size).fill_random(1, args.high, rng=rng)
    f = m.multiply(x_accurate)
    t_build = time.perf_counter() - t0
    logger.info("Built n=%d, k=%d in %.1f s", args.size, m.k, t_build)

    t0 = time.perf_counter()
    try:
        x = Solver(m, f, eps=args.eps).solve()
    except SingularPivot as err:
        logger.error("Solve failed: %s", err)
        return 1
    t_solve = time.perf_counter() - t0

    error = (x - x_accurate).norm()
    logger.info("Solved in %.1f s, L1 error %.6e (%.3e per entry)", t_solve, error, error / args.size)

    if args.out:
        save_run({
            "size": args.size,
            "k": m.k,
            "high": args.high,
            "error": error,
            "build_s": t_build,
            "solve_s": t_solve,
        }, args.out)
        logger.info("Result saved to %s", args.out)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
