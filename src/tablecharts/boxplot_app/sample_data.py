"""Bundled sample results table used when no CSV is given."""

from __future__ import annotations

import numpy as np
import pandas as pd


def sample_results_table(n_per_label: int = 12, seed: int = 0) -> pd.DataFrame:
    """Results-style table: Label column, integer Slice column, measurements.

    Angle is in degrees so the table also feeds the polar plot.
    """
    rng = np.random.default_rng(seed)
    rows = []
    for i, label in enumerate(["control", "treated", "knockout"]):
        for j in range(n_per_label):
            rows.append({
                "Label": label,
                "Slice": j % 3 + 1,
                "Area": float(rng.normal(100 + 20 * i, 15)),
                "Mean": float(rng.normal(50 - 5 * i, 8)),
                "Circ.": float(np.clip(rng.normal(0.8 - 0.1 * i, 0.05), 0, 1)),
                "Angle": float(j * 360.0 / n_per_label),
            })
    return pd.DataFrame(rows)
