# Copyright (c) 2026 Shmuel Link
# SPDX-License-Identifier: MIT

"""Shared utilities for sweeps: save/load results, logging, summary tables."""

import csv
import logging
import os

from borderband.io import save_run

_FLOAT_COLUMNS = ("mean_error", "max_error", "min_error", "std_error", "mean_error_per_entry")
_INT_COLUMNS = ("size", "n_solves", "n_resampled")


def save_sweep_results(results, outdir):
    """Save per-case JSON files and a summary CSV.

    Args:
        results: list of result dicts from single_run.
        outdir: output directory path.

    Returns:
        list of summary row dicts.
    """
    os.makedirs(outdir, exist_ok=True)
    summary_rows = []

    for r in results:
        p = r["params"]
        fname = f"n{p['size']}_{p['scenario']}.json"
        save_run(r, os.path.join(outdir, fname))

        summary_rows.append({
            "size": r["size"],
            "scenario": p["scenario"],
            "n_solves": r["n_solves"],
            "n_resampled": r["n_resampled"],
            "mean_error": r["mean_error"],
            "max_error": r["max_error"],
            "min_error": r["min_error"],
            "std_error": r["std_error"],
            "mean_error_per_entry": r["mean_error_per_entry"],
        })

    # Write summary CSV
    if summary_rows:
        csv_path = os.path.join(outdir, "summary.csv")
        with open(csv_path, "w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=summary_rows[0].keys())
            writer.writeheader()
            writer.writerows(summary_rows)

    return summary_rows


def load_sweep_summary(csv_path):
    """Read a summary CSV into a list of dicts with proper types.

    Error columns are converted to float, counts and sizes to int.
    """
    rows = []
    with open(csv_path, "r") as f:
        reader = csv.DictReader(f)
        for row in reader:
            typed = {}
            for k, v in row.items():
                if k in _FLOAT_COLUMNS:
                    typed[k] = float(v)
                elif k in _INT_COLUMNS:
                    typed[k] = int(v)
                else:
                    typed[k] = v
            rows.append(typed)
    return rows


def configure_logging(outdir, run_name):
    """Set up file + console logging on the 'borderband' logger.

    Args:
        outdir: directory for the log file.
        run_name: used in the log filename.

    Returns:
        the configured logger.
    """
    os.makedirs(outdir, exist_ok=True)
    logger = logging.getLogger("borderband")
    logger.setLevel(logging.INFO)

    fmt = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")

    # File handler
    log_path = os.path.join(outdir, f"{run_name}.log")
    fh = logging.FileHandler(log_path)
    fh.setLevel(logging.INFO)
    fh.setFormatter(fmt)
    logger.addHandler(fh)

    # Console handler (only if none already exists)
    if not any(isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
               for h in logger.handlers):
        ch = logging.StreamHandler()
        ch.setLevel(logging.INFO)
        ch.setFormatter(fmt)
        logger.addHandler(ch)

    return logger


def print_summary_table(summary_rows):
    """Print a formatted error table to stdout."""
    header = f"{'size':>10} {'scenario':>18} {'solves':>7} {'resamp':>7} {'mean error':>12} {'max error':>12}"
    print(header)
    print("-" * len(header))
    for row in summary_rows:
        print(
            f"{row['size']:>10d} {row['scenario']:>18} {row['n_solves']:>7d} "
            f"{row['n_resampled']:>7d} {row['mean_error']:>12.4e} {row['max_error']:>12.4e}"
        )


def print_every_k_table(rows):
    """Print one line per (size, k) from every_k_errors."""
    header = f"{'size':>6} {'k':>6} {'error':>12} {'resamp':>7}"
    print(header)
    print("-" * len(header))
    for row in rows:
        print(f"{row['size']:>6d} {row['k']:>6d} {row['error']:>12.4e} {row['n_resampled']:>7d}")
