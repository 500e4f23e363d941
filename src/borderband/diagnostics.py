# Copyright (c) 2026 Shmuel Link
# SPDX-License-Identifier: MIT

# src/borderband/diagnostics.py
import numpy as np


class ErrorStatistics:
    """Accumulate solution errors over repeated random solves of one size.

    Usage:
        stats = ErrorStatistics(size)
        for each random system:
            stats.accumulate(error, k)     # or stats.resampled() on failure
        result = stats.finalize()
    """

    def __init__(self, size):
        self.size = size
        self.errors = []
        self.pivots = []
        self.n_resampled = 0

    def accumulate(self, error, k):
        """Store the L1 error of one successful solve and its border column."""
        self.errors.append(float(error))
        self.pivots.append(int(k))

    def resampled(self):
        """Count a system discarded after a singular pivot."""
        self.n_resampled += 1

    def finalize(self):
        """Summary statistics of the accumulated errors."""
        errors = np.array(self.errors)
        n = len(errors)
        if n == 0:
            return {
                "size": self.size,
                "n_solves": 0,
                "n_resampled": self.n_resampled,
                "mean_error": float("nan"),
                "max_error": float("nan"),
                "min_error": float("nan"),
                "std_error": float("nan"),
                "mean_error_per_entry": float("nan"),
                "worst_k": None,
            }

        worst = int(np.argmax(errors))
        return {
            "size": self.size,
            "n_solves": n,
            "n_resampled": self.n_resampled,
            "mean_error": float(np.mean(errors)),
            "max_error": float(errors[worst]),
            "min_error": float(np.min(errors)),
            "std_error": float(np.std(errors)),
            # L1 error grows with n by construction; per-entry error does not.
            "mean_error_per_entry": float(np.mean(errors) / self.size),
            "worst_k": self.pivots[worst],
        }
