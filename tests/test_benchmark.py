# Copyright (c) 2026 Shmuel Link
# SPDX-License-Identifier: MIT

"""Smoke tests for the benchmark module."""

import pytest


@pytest.mark.slow
def test_run_all_benchmarks_smoke():
    """Smoke test: run_all_benchmarks returns expected keys with positive timings."""
    from borderband.benchmark import run_all_benchmarks

    results = run_all_benchmarks(N=64, large_N=10_000, verbose=False)

    for key in ("multiply", "solve", "dense_reference"):
        assert key in results, f"Missing micro-benchmark key: {key}"
        assert results[key]["median_ms"] > 0, f"{key} median_ms should be positive"

    assert "large_solve" in results, "Missing large_solve macro-benchmark"
    assert results["large_solve"]["elapsed_s"] > 0
    assert results["large_solve"]["size"] == 10_000
    assert results["large_solve"]["error"] < 1e-6


def test_compare_results_prints_speedup(capsys):
    from borderband.benchmark import compare_results

    before = {"solve": {"median_ms": 2.0}, "large_solve": {"elapsed_s": 4.0}}
    after = {"solve": {"median_ms": 1.0}, "large_solve": {"elapsed_s": 1.0}}
    compare_results(before, after)
    out = capsys.readouterr().out
    assert "2.0x" in out
    assert "4.0x" in out
