"""
Evaluation package for PSO experiments.

Provides tools for running reproducible seeded experiments and summarizing
convergence over repeated runs.

Modules:
    experiment: ExperimentConfig, ExperimentResult, ExperimentRunner
    analysis: Statistical analysis and export functions
"""

from .experiment import (
    ExperimentConfig,
    ExperimentResult,
    ExperimentRunner,
    load_experiment_config,
)
from .analysis import (
    compute_statistics,
    success_rate,
    export_csv_summary,
)

__all__ = [
    # Experiment
    "ExperimentConfig",
    "ExperimentResult",
    "ExperimentRunner",
    "load_experiment_config",
    # Analysis
    "compute_statistics",
    "success_rate",
    "export_csv_summary",
]
