#!/usr/bin/env python3
"""
CLI for running repeated seeded PSO experiments.

Usage:
    python scripts/run_experiments.py --config config/experiments/convergence.yaml --output results/

Outputs:
    results/raw_data.csv         - One row per run
    results/summary_table.csv    - Aggregated statistics per experiment
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Run repeated seeded PSO experiments"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=str(project_root / "config" / "experiments" / "convergence.yaml"),
        help="Path to experiment configuration YAML file",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="results/",
        help="Output directory for results (default: results/)",
    )
    parser.add_argument(
        "--n-runs",
        type=int,
        default=None,
        help="Override number of runs per experiment (default: from config)",
    )
    parser.add_argument(
        "--base-seed",
        type=int,
        default=0,
        help="Base seed for random number generation (default: 0)",
    )
    parser.add_argument(
        "--tolerance",
        type=float,
        default=None,
        help="Best fitness counted as a success (default: from config)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args(argv)

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )
    logger = logging.getLogger(__name__)

    from config.settings import get_settings
    from pso.evaluation.experiment import load_experiment_config, ExperimentRunner
    from pso.evaluation.analysis import (
        compute_statistics,
        export_csv_summary,
        success_rate,
    )

    logger.info(f"Loading configuration from {args.config}")
    config = load_experiment_config(args.config)

    experiments = config.get("experiments", [])
    settings = config.get("settings", {})

    n_runs = args.n_runs or settings.get("n_runs", 20)
    tolerance = args.tolerance if args.tolerance is not None else settings.get("tolerance", 0.01)

    if not experiments:
        logger.error(f"No experiments defined in {args.config}")
        sys.exit(1)

    runner = ExperimentRunner()

    logger.info(f"Running {len(experiments)} experiments, {n_runs} runs each")

    df = runner.run_comparison(
        configs=experiments,
        n_runs=n_runs,
        base_seed=args.base_seed,
        defaults=get_settings().swarm,
    )

    if df.empty:
        logger.error("Every experiment run failed, no results written")
        sys.exit(1)

    output_dir = Path(args.output)
    output_dir.mkdir(parents=True, exist_ok=True)

    raw_path = output_dir / "raw_data.csv"
    df.to_csv(raw_path, index=False)
    logger.info(f"Raw data saved to {raw_path}")

    summary_df = compute_statistics(df)
    rates = success_rate(df, tolerance)
    summary_df[f"within_{tolerance}"] = summary_df["experiment"].map(rates)

    summary_path = output_dir / "summary_table.csv"
    export_csv_summary(summary_df, str(summary_path))
    logger.info(f"Summary table saved to {summary_path}")

    print("\n" + "=" * 60)
    print("EXPERIMENT SUMMARY")
    print("=" * 60)
    print(summary_df.to_string())
    print("=" * 60 + "\n")

    logger.info("Experiments completed successfully!")


if __name__ == "__main__":
    main()
