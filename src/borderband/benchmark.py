# Copyright (c) 2026 Shmuel Link
# SPDX-License-Identifier: MIT

"""Benchmarking utilities for profiling borderband hot paths.

Provides micro-benchmarks (product, solve, dense baseline) with median
timings and a cProfile helper for a single large solve.
"""

import time
import cProfile
import pstats
import io
import numpy as np


def _make_test_data(N=1000, seed=0):
    """Create a diagonally dominant system with known solution."""
    from borderband.matrix import BorderedBandMatrix
    from borderband.vector import Vector
    rng = np.random.default_rng(seed)
    b = Vector(N).fill_random(400, 1000, rng=rng)
    a = Vector(N).fill_random(1, 100, rng=rng)
    c = Vector(N).fill_random(1, 100, rng=rng)
    m = BorderedBandMatrix.from_bands(a, b, c, 1, 100, rng=rng)
    x = Vector(N).fill_random(1, 100, rng=rng)
    return m, x


def _time_fn(fn, args=(), kwargs=None, n_warmup=3, n_iter=100):
    """Time a function over n_iter calls, returning median and stats."""
    kwargs = kwargs or {}
    for _ in range(n_warmup):
        fn(*args, **kwargs)
    times = []
    for _ in range(n_iter):
        t0 = time.perf_counter_ns()
        fn(*args, **kwargs)
        t1 = time.perf_counter_ns()
        times.append((t1 - t0) * 1e-6)  # ms
    times = np.array(times)
    return {
        "median_ms": float(np.median(times)),
        "mean_ms": float(np.mean(times)),
        "std_ms": float(np.std(times)),
        "min_ms": float(np.min(times)),
        "max_ms": float(np.max(times)),
        "n_iter": n_iter,
    }


def bench_multiply(N=1000, n_iter=500):
    """Benchmark the O(n) bordered product."""
    m, x = _make_test_data(N)
    return _time_fn(m.multiply, args=(x,), n_iter=n_iter)


def bench_solve(N=1000, n_iter=200):
    """Benchmark Solver construction + solve (includes the two clones)."""
    from borderband.solvers.bordered import Solver
    m, x = _make_test_data(N)
    f = m.multiply(x)

    def one_solve():
        Solver(m, f).solve()

    return _time_fn(one_solve, n_iter=n_iter)


def bench_dense_reference(N=200, n_iter=50):
    """Benchmark numpy's dense LU solve of the same system, as a baseline."""
    m, x = _make_test_data(N)
    A = m.to_dense()
    f = m.multiply(x).values
    return _time_fn(np.linalg.solve, args=(A, f), n_iter=n_iter)


def bench_large_solve(N=1_000_000):
    """Time one solve of a large system (macro benchmark)."""
    from borderband.solvers.bordered import Solver
    m, x = _make_test_data(N)
    f = m.multiply(x)
    t0 = time.perf_counter()
    sol = Solver(m, f).solve()
    elapsed = time.perf_counter() - t0
    return {
        "elapsed_s": elapsed,
        "size": N,
        "error": (sol - x).norm(),
    }


def profile_solve(N=1_000_000):
    """Run cProfile on one large solve, return stats as string."""
    from borderband.solvers.bordered import Solver
    m, x = _make_test_data(N)
    f = m.multiply(x)
    Solver(m.clone(), f).solve()  # compile kernels outside the profile
    pr = cProfile.Profile()
    pr.enable()
    Solver(m, f).solve()
    pr.disable()
    s = io.StringIO()
    ps = pstats.Stats(pr, stream=s).sort_stats("cumulative")
    ps.print_stats(30)
    return s.getvalue()


def run_all_benchmarks(N=1000, large_N=1_000_000, verbose=True):
    """Run all micro and macro benchmarks. Returns dict of results."""
    results = {}

    benches = [
        ("multiply", bench_multiply),
        ("solve", bench_solve),
    ]

    for name, fn in benches:
        if verbose:
            print(f"  {name}...", end="", flush=True)
        r = fn(N=N)
        results[name] = r
        if verbose:
            print(f" {r['median_ms']:.3f} ms (median, n={r['n_iter']})")

    dense_N = min(N, 500)
    if verbose:
        print(f"  dense_reference (N={dense_N})...", end="", flush=True)
    r = bench_dense_reference(N=dense_N)
    results["dense_reference"] = r
    if verbose:
        print(f" {r['median_ms']:.3f} ms (median, n={r['n_iter']})")

    if verbose:
        print(f"  large_solve (N={large_N})...", end="", flush=True)
    r = bench_large_solve(N=large_N)
    results["large_solve"] = r
    if verbose:
        print(f" {r['elapsed_s']:.2f} s, error {r['error']:.3e}")

    return results


def compare_results(before, after):
    """Print a comparison table of two benchmark result sets."""
    print(f"\n{'Benchmark':<22} {'Before':>10} {'After':>10} {'Speedup':>10}")
    print("-" * 55)
    for key in before:
        if key == "large_solve":
            b = before[key]["elapsed_s"]
            a = after[key]["elapsed_s"]
            speedup = b / a if a > 0 else float("inf")
            print(f"{key:<22} {b:>9.2f}s {a:>9.2f}s {speedup:>9.1f}x")
        else:
            b = before[key]["median_ms"]
            a = after[key]["median_ms"]
            speedup = b / a if a > 0 else float("inf")
            print(f"{key:<22} {b:>8.3f}ms {a:>8.3f}ms {speedup:>9.1f}x")


if __name__ == "__main__":
    print("=" * 55)
    print("borderband Benchmarks")
    print("=" * 55)
    print()

    print("cProfile of one solve (N=1,000,000):")
    print(profile_solve())

    print("Micro-benchmarks (N=1000):")
    run_all_benchmarks(N=1000)
