"""
Tests for repeated seeded experiments and their statistics.
"""

import importlib.util
from pathlib import Path

import numpy as np
import pandas as pd
import pytest
import yaml

from config.settings import SwarmSettings
from pso.evaluation import (
    ExperimentConfig,
    ExperimentRunner,
    compute_statistics,
    export_csv_summary,
    load_experiment_config,
    success_rate,
)

CONFIGS = [
    {"name": "small", "n_particles": 3, "iterations": 10},
    {"name": "conventional", "n_particles": 5, "iterations": 50,
     "swarm": {"w": 0.7, "c1": 1.5, "c2": 1.5, "position_range": [-10, 10]}},
]


@pytest.mark.unit
class TestExperimentConfig:

    def test_from_dict_overrides(self):
        config = ExperimentConfig.from_dict(
            {"name": "custom", "n_particles": 7, "iterations": 3,
             "swarm": {"c1": 2.0, "velocity_range": [-0.5, 0.5]},
             "run": {"threshold": 0.5}},
            seed=4,
        )

        assert config.seed == 4
        assert config.n_particles == 7
        assert config.swarm.c1 == 2.0
        assert config.swarm.velocity_range == (-0.5, 0.5)
        assert config.run.threshold == 0.5

    def test_defaults_are_copied(self):
        defaults = SwarmSettings(w=0.4)
        config = ExperimentConfig.from_dict({"name": "x", "swarm": {"w": 0.9}}, 0, defaults)

        assert config.swarm.w == 0.9
        assert defaults.w == 0.4

    def test_null_iterations_means_threshold_mode(self):
        config = ExperimentConfig.from_dict({"name": "t", "iterations": None}, 0)
        assert config.iterations is None

    def test_empty_sections_use_defaults(self):
        config = ExperimentConfig.from_dict({"name": "e", "swarm": None, "run": None}, 0)

        assert config.swarm == SwarmSettings()

    def test_bad_swarm_value_rejected(self):
        with pytest.raises(ValueError, match="w"):
            ExperimentConfig.from_dict({"name": "bad", "swarm": {"w": "fast"}}, 0)


@pytest.mark.integration
class TestExperimentRunner:

    @pytest.fixture
    def runner(self):
        return ExperimentRunner()

    def test_run_is_reproducible(self, runner):
        config = ExperimentConfig.from_dict(CONFIGS[0], seed=12)

        first = runner.run(config)
        second = runner.run(config)

        np.testing.assert_array_equal(first.history, second.history)
        assert first.summary == second.summary
        assert len(runner.get_all_results()) == 2

        runner.clear_results()
        assert runner.get_all_results() == []

    def test_run_comparison_table(self, runner):
        df = runner.run_comparison(CONFIGS, n_runs=4, base_seed=10)

        assert len(df) == 8
        assert list(df["seed"].unique()) == [10, 11, 12, 13]
        assert {"experiment", "run", "seed", "best_x", "best_fitness",
                "iterations", "converged"} <= set(df.columns)
        assert (df["best_fitness"] <= df["initial_fitness"]).all()

    def test_threshold_experiment(self, runner):
        config = ExperimentConfig.from_dict(
            {"name": "until", "n_particles": 10, "iterations": None,
             "run": {"threshold": 0.001, "max_iterations": 500}},
            seed=0,
        )

        result = runner.run(config)

        assert result.summary["converged"]
        assert result.summary["best_fitness"] <= 0.001

    def test_failed_run_is_skipped(self, runner):
        df = runner.run_comparison(
            [{"name": "broken", "n_particles": 0, "iterations": 5}, CONFIGS[0]],
            n_runs=2,
        )

        assert list(df["experiment"].unique()) == ["small"]

    def test_to_dict(self, runner):
        result = runner.run(ExperimentConfig.from_dict(CONFIGS[0], seed=1))
        data = result.to_dict()

        assert data["config_name"] == "small"
        assert data["summary"]["iterations"] == 10


@pytest.mark.unit
class TestAnalysis:

    @pytest.fixture
    def raw(self):
        return pd.DataFrame({
            "experiment": ["a", "a", "a", "b", "b"],
            "run": [0, 1, 2, 0, 1],
            "seed": [0, 1, 2, 0, 1],
            "best_x": [1.0, 1.1, 0.9, 2.0, 0.0],
            "best_fitness": [0.0, 0.01, 0.01, 1.0, 1.0],
            "iterations": [50, 50, 50, 10, 10],
            "converged": [True, False, False, False, False],
        })

    def test_compute_statistics(self, raw):
        summary = compute_statistics(raw)

        assert list(summary["experiment"]) == ["a", "b"]
        row_a = summary.iloc[0]
        assert row_a["n_runs"] == 3
        assert row_a["best_fitness_mean"] == pytest.approx(0.02 / 3)
        assert row_a["best_fitness_min"] == 0.0
        assert row_a["best_fitness_ci95"] > 0
        assert row_a["success_rate"] == pytest.approx(1 / 3)
        assert summary.iloc[1]["best_fitness_std"] == 0.0
        assert "best_x_mean" not in summary.columns

    def test_success_rate(self, raw):
        rates = success_rate(raw, tolerance=0.01)

        assert rates["a"] == 1.0
        assert rates["b"] == 0.0

    def test_export_csv_summary(self, raw, tmp_path):
        path = tmp_path / "summary.csv"
        export_csv_summary(compute_statistics(raw), str(path))

        loaded = pd.read_csv(path)
        assert list(loaded["experiment"]) == ["a", "b"]

    def test_load_experiment_config(self, tmp_path):
        path = tmp_path / "exp.yaml"
        path.write_text(yaml.dump({"experiments": CONFIGS}))

        assert load_experiment_config(str(path))["experiments"][0]["name"] == "small"

    def test_shipped_experiment_config(self):
        path = Path(__file__).parent.parent / "config" / "experiments" / "convergence.yaml"
        config = load_experiment_config(str(path))

        names = [exp["name"] for exp in config["experiments"]]
        assert "conventional" in names
        assert config["settings"]["tolerance"] == 0.01

    def test_empty_results(self):
        empty = pd.DataFrame()

        assert compute_statistics(empty).empty
        assert success_rate(empty, tolerance=0.01).empty


def load_script(name):
    path = Path(__file__).parent.parent / "scripts" / f"{name}.py"
    spec = importlib.util.spec_from_file_location(name, path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.mark.integration
class TestRunExperimentsScript:

    def test_writes_tables(self, tmp_path, capsys):
        config = tmp_path / "exp.yaml"
        config.write_text(yaml.dump({"experiments": [CONFIGS[0]], "settings": {"n_runs": 3}}))
        output = tmp_path / "out"

        load_script("run_experiments").main(["--config", str(config), "--output", str(output)])

        raw = pd.read_csv(output / "raw_data.csv")
        summary = pd.read_csv(output / "summary_table.csv")
        assert len(raw) == 3
        assert list(summary["experiment"]) == ["small"]
        assert "EXPERIMENT SUMMARY" in capsys.readouterr().out

    def test_all_runs_failing_writes_nothing(self, tmp_path):
        config = tmp_path / "exp.yaml"
        config.write_text(yaml.dump({
            "experiments": [{"name": "broken", "n_particles": 0, "iterations": 5}],
            "settings": {"n_runs": 2},
        }))
        output = tmp_path / "out"

        with pytest.raises(SystemExit) as excinfo:
            load_script("run_experiments").main(["--config", str(config), "--output", str(output)])

        assert excinfo.value.code == 1
        assert not (output / "raw_data.csv").exists()
