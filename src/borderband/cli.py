# Copyright (c) 2026 Shmuel Link
# SPDX-License-Identifier: MIT

"""Command-line interface for borderband solves, traces and accuracy sweeps."""

import argparse
import os
import sys

import numpy as np

from borderband.errors import SingularPivot
from borderband.io import load_matrix, load_vector, save_vector
from borderband.matrix import BorderedBandMatrix
from borderband.solvers.bordered import DEFAULT_EPSILON, Solver
from borderband.sweep import SCENARIOS, build_sweep_grid, every_k_errors, run_sweep, size_ladder
from borderband.sweep_utils import (
    configure_logging,
    print_every_k_table,
    print_summary_table,
    save_sweep_results,
)
from borderband.vector import Vector


def _cmd_solve(args):
    matrix = load_matrix(args.matrix)
    rhs = load_vector(args.rhs)
    try:
        x = Solver(matrix, rhs, eps=args.eps).solve()
    except SingularPivot as err:
        print(f"error: {err}", file=sys.stderr)
        return 1

    if args.out:
        save_vector(x, args.out)
        print(f"Solution saved to {args.out}")
    else:
        print(x)
    if args.check:
        residual = (matrix.multiply(x) - rhs).norm()
        print(f"Residual |Mx - f|_1 = {residual:.3e}")
    return 0


def _cmd_trace(args):
    rng = np.random.default_rng(args.seed)
    size = args.size if args.size is not None else int(rng.integers(3, 9))
    matrix = BorderedBandMatrix(size, args.k).fill_random(args.low, args.high, rng=rng)
    x_accurate = Vector(size).fill_random(args.low, args.high, rng=rng)
    f = matrix.multiply(x_accurate)

    print(f"System: n={size}, k={matrix.k}")
    print(matrix.to_string(digits=2, separator="\t"))
    print(f"f         = {f}")
    print(f"x exact   = {x_accurate}")
    print()

    solver = Solver(matrix, f, eps=args.eps)
    try:
        x, records = solver.trace(x_accurate)
    except SingularPivot as err:
        print(f"error: {err}", file=sys.stderr)
        return 1

    print(f"{'phase':<22} {'|M x_exact - f|_1':>18}")
    print("-" * 41)
    for rec in records:
        print(f"{rec['phase']:<22} {rec['residual_norm']:>18.3e}")
    print()
    print("Reduced system:")
    print(solver.matrix.to_string(digits=2, separator="\t"))
    print(f"x computed = {x}")
    return 0


def _cmd_errors(args):
    if args.outdir:
        configure_logging(args.outdir, "errors")
    sizes = args.sizes or size_ladder(10, args.max_size, 10)
    param_list = build_sweep_grid(
        sizes,
        n_tests=args.tests,
        low=args.low,
        high=args.high,
        x_low=args.low,
        x_high=args.high,
        scenario=args.scenario,
        k=args.k,
        eps=args.eps,
        seed=args.seed,
    )

    print(f"Running {len(param_list)} sizes {sizes} x {args.tests} tests ({args.scenario})")
    print(f"Workers: {args.workers or 'auto'}")
    print()

    results = run_sweep(param_list, max_workers=args.workers, progress=not args.no_progress)

    if args.outdir:
        summary_rows = save_sweep_results(results, args.outdir)
        print_summary_table(summary_rows)
        print(f"\nResults saved to {args.outdir}/")
        print(f"Summary: {os.path.join(args.outdir, 'summary.csv')}")
    else:
        print_summary_table([
            dict(r, scenario=r["params"]["scenario"]) for r in results
        ])
    return 0


def _cmd_every_k(args):
    rows = every_k_errors(
        sizes=range(3, args.max_size + 1),
        low=args.low, high=args.high,
        eps=args.eps, seed=args.seed,
    )
    print_every_k_table(rows)
    return 0


def _cmd_bench(args):
    from borderband.benchmark import run_all_benchmarks
    run_all_benchmarks(N=args.size, large_N=args.large_size)
    return 0


def build_parser():
    parser = argparse.ArgumentParser(
        prog="borderband",
        description="Solve tridiagonal systems with two dense border columns at k and k+2.",
    )
    parser.add_argument(
        "--eps", type=float, default=DEFAULT_EPSILON,
        help=f"Absolute singular-pivot threshold (default: {DEFAULT_EPSILON:g})",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("solve", help="Solve a system read from matrix and vector files")
    p.add_argument("matrix", help="Dense matrix file ('<n> <k>' header, then n rows)")
    p.add_argument("rhs", help="Vector file ('<n>' header, then n values)")
    p.add_argument("--out", type=str, default=None, help="Write the solution to this file")
    p.add_argument("--check", action="store_true", help="Print the residual norm")
    p.set_defaults(func=_cmd_solve)

    p = sub.add_parser("trace", help="Solve a small random system phase by phase")
    p.add_argument("--size", type=int, default=None, help="Matrix size (default: random in [3, 8])")
    p.add_argument("--k", type=int, default=None, help="Border column (default: random)")
    p.add_argument("--low", type=int, default=1, help="Lowest random entry (default: 1)")
    p.add_argument("--high", type=int, default=9, help="Random entries are < high (default: 9)")
    p.add_argument("--seed", type=int, default=None, help="Random seed")
    p.set_defaults(func=_cmd_trace)

    p = sub.add_parser("errors", help="Mean and maximum solution error by matrix size")
    p.add_argument("--sizes", nargs="+", type=int, default=None,
                   help="Matrix sizes (default: 10, 100, ... up to --max-size)")
    p.add_argument("--max-size", type=int, default=100000,
                   help="Largest size of the default ladder (default: 100000)")
    p.add_argument("--tests", type=int, default=10, help="Random systems per size (default: 10)")
    p.add_argument("--scenario", type=str, default="random", choices=sorted(SCENARIOS),
                   help="Band generation scenario (default: random)")
    p.add_argument("--k", type=int, default=None, help="Fix the border column (default: random)")
    p.add_argument("--low", type=int, default=1, help="Lowest random entry (default: 1)")
    p.add_argument("--high", type=int, default=99, help="Random entries are < high (default: 99)")
    p.add_argument("--seed", type=int, default=None, help="Random seed")
    p.add_argument("--workers", type=int, default=None, help="Max parallel workers (default: cpu count)")
    p.add_argument("--no-progress", action="store_true", help="Disable the progress bar")
    p.add_argument("--outdir", type=str, default=None, help="Save JSON/CSV results and a log here")
    p.set_defaults(func=_cmd_errors)

    p = sub.add_parser("every-k", help="Error for every k at sizes 3..max-size")
    p.add_argument("--max-size", type=int, default=10, help="Largest size (default: 10)")
    p.add_argument("--low", type=int, default=1, help="Lowest random entry (default: 1)")
    p.add_argument("--high", type=int, default=10, help="Random entries are < high (default: 10)")
    p.add_argument("--seed", type=int, default=None, help="Random seed")
    p.set_defaults(func=_cmd_every_k)

    p = sub.add_parser("bench", help="Time multiply and solve")
    p.add_argument("--size", type=int, default=1000, help="Micro-benchmark size (default: 1000)")
    p.add_argument("--large-size", type=int, default=1_000_000,
                   help="Macro-benchmark size (default: 1000000)")
    p.set_defaults(func=_cmd_bench)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
