"""
Experiment configuration and runner for repeated seeded runs.

PSO is stochastic, so convergence is judged over many runs with controlled
random seeds rather than a single trace.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Any, Optional
import logging
import copy

import numpy as np
import pandas as pd
import yaml

from config.settings import SwarmSettings, RunSettings
from pso.core import OptimizationPolicy, build_optimizer, shifted_square
from pso.core.objectives import Objective

logger = logging.getLogger(__name__)


@dataclass
class ExperimentConfig:
    """Configuration for a single experiment."""

    name: str
    seed: int
    n_particles: int
    iterations: Optional[int]  # None runs until the threshold is reached
    swarm: SwarmSettings = field(default_factory=SwarmSettings)
    run: RunSettings = field(default_factory=RunSettings)

    @classmethod
    def from_dict(
        cls,
        data: Dict[str, Any],
        seed: int,
        defaults: Optional[SwarmSettings] = None,
    ) -> "ExperimentConfig":
        """Create config from dictionary with a specific seed."""
        swarm = copy.deepcopy(defaults) if defaults else SwarmSettings()
        for key, value in (data.get("swarm") or {}).items():
            if hasattr(swarm, key):
                setattr(swarm, key, value)
        swarm.validate()

        run = RunSettings()
        for key, value in (data.get("run") or {}).items():
            if hasattr(run, key):
                setattr(run, key, value)
        run.validate()

        return cls(
            name=data["name"],
            seed=seed,
            n_particles=data.get("n_particles", 5),
            iterations=data.get("iterations", 50),
            swarm=swarm,
            run=run,
        )


@dataclass
class ExperimentResult:
    """Result from a single experiment run."""

    config: ExperimentConfig
    history: np.ndarray  # global best fitness per iteration
    summary: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "config_name": self.config.name,
            "seed": self.config.seed,
            "n_particles": self.config.n_particles,
            "iterations": self.config.iterations,
            "summary": self.summary,
        }


class ExperimentRunner:
    """
    Runs seeded optimizations for benchmarking.

    Handles seed control, result collection, and multi-run comparisons.
    """

    def __init__(self, objective: Objective = shifted_square):
        """
        Initialize experiment runner.

        Args:
            objective: Function every experiment optimizes
        """
        self.objective = objective
        self._results: List[ExperimentResult] = []

    def run(self, config: ExperimentConfig) -> ExperimentResult:
        """
        Run a single experiment.

        Args:
            config: Experiment configuration

        Returns:
            ExperimentResult with convergence history and summary
        """
        logger.info(f"Running experiment: {config.name} (seed={config.seed})")

        rng = np.random.default_rng(config.seed)
        optimizer = build_optimizer(
            config.n_particles, self.objective, rng, settings=config.swarm
        )

        if config.iterations is None:
            run_result = optimizer.run_until(config.run.threshold, config.run.max_iterations)
            converged = bool(run_result.converged)
        else:
            run_result = optimizer.run(config.iterations)
            policy = OptimizationPolicy(config.swarm.policy)
            converged = policy.reached(run_result.best_fitness, config.run.threshold)

        best_x = run_result.best_x
        summary = {
            "best_x": best_x if isinstance(best_x, float) else str(best_x),
            "best_fitness": run_result.best_fitness,
            "iterations": run_result.iterations,
            "converged": converged,
            "initial_fitness": float(run_result.history[0]),
        }

        result = ExperimentResult(
            config=config,
            history=run_result.history,
            summary=summary,
        )

        self._results.append(result)
        return result

    def run_comparison(
        self,
        configs: List[Dict[str, Any]],
        n_runs: int = 10,
        base_seed: int = 0,
        defaults: Optional[SwarmSettings] = None,
    ) -> pd.DataFrame:
        """
        Run multiple configs with multiple seeds, return comparison table.

        Args:
            configs: List of experiment configuration dictionaries
            n_runs: Number of runs per configuration (each with different seed)
            base_seed: Starting seed (seeds will be base_seed, base_seed+1, ...)
            defaults: Swarm settings the configs override

        Returns:
            DataFrame with one row per run
        """
        all_results: List[Dict[str, Any]] = []

        for config_dict in configs:
            for run_idx in range(n_runs):
                seed = base_seed + run_idx
                try:
                    config = ExperimentConfig.from_dict(config_dict, seed, defaults)
                    result = self.run(config)
                except ValueError as e:
                    logger.error(
                        f"Experiment {config_dict.get('name')} run {run_idx} failed: {e}"
                    )
                    continue

                row = {
                    "experiment": config.name,
                    "run": run_idx,
                    "seed": seed,
                    **result.summary,
                }
                all_results.append(row)

        return pd.DataFrame(all_results)

    def get_all_results(self) -> List[ExperimentResult]:
        """Get all results from this runner."""
        return self._results

    def clear_results(self) -> None:
        """Clear all stored results."""
        self._results.clear()


def load_experiment_config(path: str) -> Dict[str, Any]:
    """
    Load experiment configuration from YAML file.

    Args:
        path: Path to YAML configuration file

    Returns:
        Configuration dictionary
    """
    with open(path, "r") as f:
        return yaml.safe_load(f) or {}
