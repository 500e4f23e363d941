# Copyright (c) 2026 Shmuel Link
# SPDX-License-Identifier: MIT

# src/borderband/sweep.py
import logging
import numpy as np
from concurrent.futures import ProcessPoolExecutor, as_completed
from borderband.diagnostics import ErrorStatistics
from borderband.matrix import BorderedBandMatrix
from borderband.solvers.bordered import DEFAULT_EPSILON, Solver
from borderband.vector import Vector

logger = logging.getLogger(__name__)

# Band vector drawn from the dominant range in each scenario.
SCENARIOS = {
    "random": None,
    "dominant_diagonal": "b",
    "dominant_upper": "c",
    "dominant_lower": "a",
}


def random_system(params, rng):
    """Draw a random matrix and exact solution for one accuracy case.

    Returns:
        (matrix, x_accurate)
    """
    n = params["size"]
    low, high = params.get("low", 1), params.get("high", 100)
    k = params.get("k")
    scenario = params.get("scenario", "random")
    if scenario not in SCENARIOS:
        raise ValueError(f"Unknown scenario: {scenario!r}")

    if SCENARIOS[scenario] is None:
        m = BorderedBandMatrix(n, k).fill_random(low, high, rng=rng)
    else:
        bands = {name: Vector(n).fill_random(low, high, rng=rng) for name in "abc"}
        bands[SCENARIOS[scenario]].fill_random(
            params.get("dominant_low", 400), params.get("dominant_high", 1000), rng=rng,
        )
        m = BorderedBandMatrix.from_bands(
            bands["a"], bands["b"], bands["c"], low, high, k=k, rng=rng,
        )

    x = Vector(n).fill_random(params.get("x_low", 1), params.get("x_high", 100), rng=rng)
    return m, x


def single_run(params):
    """Solve ``n_tests`` random systems of one size and collect their errors.

    A system whose elimination meets a singular pivot is discarded and a new
    one drawn (with a new k unless k is fixed), up to ``max_resamples``.

    Args:
        params: dict with size, n_tests, low, high, x_low, x_high, scenario,
            k, seed, eps, max_resamples.

    Returns:
        dict of error statistics plus the case params.
    """
    n = params["size"]
    n_tests = params.get("n_tests", 10)
    max_resamples = params.get("max_resamples", 100)
    eps = params.get("eps", DEFAULT_EPSILON)
    rng = np.random.default_rng(params.get("seed"))

    stats = ErrorStatistics(n)
    while len(stats.errors) < n_tests:
        m, x_accurate = random_system(params, rng)
        f = m.multiply(x_accurate)

        outcome = Solver(m, f, eps=eps).try_solve()
        if not outcome.ok:
            if stats.n_resampled >= max_resamples:
                raise RuntimeError(
                    f"size={n}: gave up after {max_resamples} singular systems"
                ) from outcome.error
            stats.resampled()
            logger.debug("size=%d k=%d resampled: %s", n, m.k, outcome.error)
            continue

        stats.accumulate((outcome.x - x_accurate).norm(), m.k)

    result = stats.finalize()
    result["params"] = {
        "size": n,
        "scenario": params.get("scenario", "random"),
        "n_tests": n_tests,
    }
    return result


def size_ladder(start=10, stop=100000, factor=10):
    """Geometric list of sizes start, start*factor, ... up to stop."""
    sizes = []
    n = start
    while n <= stop:
        sizes.append(n)
        n *= factor
    return sizes


def build_sweep_grid(sizes, n_tests=10, low=1, high=100, x_low=1, x_high=100,
                     scenario="random", k=None, eps=DEFAULT_EPSILON, seed=None,
                     max_resamples=100):
    """Build list of parameter dicts for an accuracy sweep over sizes."""
    grid = []
    for i, size in enumerate(sizes):
        grid.append(dict(
            size=size, n_tests=n_tests, low=low, high=high,
            x_low=x_low, x_high=x_high, scenario=scenario, k=k, eps=eps,
            seed=None if seed is None else seed + i,
            max_resamples=max_resamples,
        ))
    return grid


def run_sweep(param_list, max_workers=None, progress=True):
    """Run accuracy sweep in parallel.

    Args:
        param_list: list of param dicts from build_sweep_grid.
        max_workers: number of parallel processes (None = cpu count).
        progress: show tqdm progress bar if available.

    Returns:
        list of result dicts, in the same order as param_list.
    """
    n = len(param_list)
    logger.info("Starting sweep: %d cases, max_workers=%s", n, max_workers)

    # Soft import of tqdm
    tqdm_bar = None
    if progress:
        try:
            from tqdm.auto import tqdm
            tqdm_bar = tqdm(total=n, desc="Sweep", unit="case")
        except ImportError:
            pass

    results = [None] * n

    with ProcessPoolExecutor(max_workers=max_workers) as pool:
        future_to_index = {}
        for i, params in enumerate(param_list):
            future = pool.submit(single_run, params)
            future_to_index[future] = i

        for future in as_completed(future_to_index):
            idx = future_to_index[future]
            results[idx] = future.result()
            r = results[idx]
            logger.debug(
                "Case %d/%d done: size=%d scenario=%s -> mean %.3e, max %.3e",
                idx + 1, n, r["size"], r["params"]["scenario"],
                r["mean_error"], r["max_error"],
            )
            if tqdm_bar is not None:
                tqdm_bar.update(1)

    if tqdm_bar is not None:
        tqdm_bar.close()

    logger.info("Sweep complete: %d cases finished", n)
    return results


def every_k_errors(sizes=range(3, 11), low=1, high=10, x_low=1, x_high=9,
                   eps=DEFAULT_EPSILON, seed=None, max_resamples=100):
    """Solve one random system for every valid k at each size.

    Returns:
        list of dicts with size, k, error and n_resampled.
    """
    rng = np.random.default_rng(seed)
    rows = []
    for n in sizes:
        x_accurate = Vector(n).fill_random(x_low, x_high, rng=rng)
        for k in range(1, n - 1):
            resampled = 0
            while True:
                m = BorderedBandMatrix(n, k).fill_random(low, high, rng=rng)
                outcome = Solver(m, m.multiply(x_accurate), eps=eps).try_solve()
                if outcome.ok:
                    break
                if resampled >= max_resamples:
                    raise RuntimeError(
                        f"size={n} k={k}: gave up after {max_resamples} singular systems"
                    ) from outcome.error
                resampled += 1
            error = (outcome.x - x_accurate).norm()
            logger.debug("size=%d k=%d error=%.3e", n, k, error)
            rows.append({"size": n, "k": k, "error": error, "n_resampled": resampled})
    return rows
