"""
Statistical analysis functions for experiment results.

Summarizes repeated runs per experiment and exports them.
"""

from typing import List, Optional
import numpy as np
import pandas as pd
from scipy import stats

METADATA_COLS = {"experiment", "run", "seed", "best_x", "converged"}

def compute_statistics(df: pd.DataFrame, metrics: Optional[List[str]] = None) -> pd.DataFrame:
    """
    Compute mean, std, 95% CI for each metric grouped by experiment.

    Args:
        df: DataFrame with columns: experiment, run, seed, and metric columns
        metrics: Metric columns to summarize (all numeric non-metadata columns if None)

    Returns:
        DataFrame with aggregated statistics per experiment
    """
    if df.empty or "experiment" not in df.columns:
        return pd.DataFrame()

    if metrics is None:
        metrics = [
            col for col in df.columns
            if col not in METADATA_COLS and pd.api.types.is_numeric_dtype(df[col])
        ]

    results = []

    for exp_name, group in df.groupby("experiment", sort=False):
        row = {"experiment": exp_name, "n_runs": len(group)}

        for metric in metrics:
            values = group[metric].replace([np.inf, -np.inf], np.nan).dropna()

            if len(values) > 0:
                mean = values.mean()
                std = values.std() if len(values) > 1 else 0.0
                n = len(values)

                if n > 1:
                    ci = stats.t.ppf(0.975, n - 1) * std / np.sqrt(n)
                else:
                    ci = 0.0

                row[f"{metric}_mean"] = mean
                row[f"{metric}_std"] = std
                row[f"{metric}_ci95"] = ci
                row[f"{metric}_min"] = values.min()
                row[f"{metric}_max"] = values.max()

        if "converged" in group.columns:
            row["success_rate"] = float(group["converged"].astype(bool).mean())

        results.append(row)

    return pd.DataFrame(results)

def success_rate(df: pd.DataFrame, tolerance: float, target: float = 0.0) -> pd.Series:
    """
    Fraction of runs per experiment whose best fitness is within tolerance of target.

    Args:
        df: Raw run data with experiment and best_fitness columns
        tolerance: Allowed distance from target
        target: Known optimum fitness

    Returns:
        Series indexed by experiment name
    """
    if df.empty or "experiment" not in df.columns:
        return pd.Series(dtype=float)

    hits = (df["best_fitness"] - target).abs() <= tolerance
    return hits.groupby(df["experiment"], sort=False).mean()

def export_csv_summary(summary_df: pd.DataFrame, path: str) -> None:
    """
    Export summary statistics to CSV file.

    Args:
        summary_df: DataFrame from compute_statistics()
        path: Output file path
    """
    summary_df.to_csv(path, index=False)
