#!/usr/bin/env python3
"""
Particle Swarm Optimization Demo

Minimizes y = (x - 1)^2 with a swarm of particles.

Run with: python main.py <n> <iter>
    n:    number of particles
    iter: number of iterations (omit to run until the error threshold is met)
"""

import sys
import argparse
import copy
import logging
from pathlib import Path
from typing import List, Optional

import numpy as np

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from config.constants import DEMO_TITLE, DEMO_FUNCTION
from config.settings import Settings, get_settings
from pso.core import RunResult, Swarm, build_optimizer, shifted_square

logger = logging.getLogger(__name__)


class Application:
    """Main application class."""

    def __init__(self, args: argparse.Namespace) -> None:
        self.args = args

        if args.config:
            config_path = Path(args.config)
            if not config_path.is_file():
                raise ValueError(f"Config file not found: {config_path}")
            self.settings = Settings.load(config_path)
        else:
            self.settings = copy.deepcopy(get_settings())

        # Override settings from args
        if args.maximize:
            self.settings.swarm.policy = "maximize"
        if args.mode:
            self.settings.swarm.mode = args.mode
        if args.threshold is not None:
            self.settings.run.threshold = args.threshold

        if args.seed is not None:
            logger.info(f"Using seed {args.seed}")
        else:
            logger.info("Using random seed")
        self.rng = np.random.default_rng(args.seed)

    def run(self) -> RunResult:
        """Build the swarm, optimize, and print the result."""
        args = self.args

        optimizer = build_optimizer(
            args.n,
            shifted_square,
            self.rng,
            settings=self.settings.swarm,
            init=args.init,
            vinit=args.vinit,
        )

        print(DEMO_TITLE)
        print(f"Function to optimize: {DEMO_FUNCTION}")
        print(f"Initialized {args.n} particles:")
        if args.verbose:
            print(f"{optimizer.swarm}\n")

        callback = self._print_iteration if args.verbose else None

        if args.iterations is not None:
            result = optimizer.run(args.iterations, callback=callback)
        else:
            result = optimizer.run_until(
                self.settings.run.threshold,
                self.settings.run.max_iterations,
                callback=callback,
            )
            print(f"Finished in {result.iterations} iterations")

        print(f"Best value of x: {result.best_x}")
        print(f"Best value of y: {result.best_fitness}")
        return result

    def _print_iteration(self, iteration: int, swarm: Swarm) -> None:
        """Print swarm state after an iteration."""
        print(f"Iteration {iteration}")
        print(f"{swarm}\n")


def positive_int(value: str) -> int:
    """argparse type for the particle count."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number of particles: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"number of particles must be at least 1, got {number}")
    return number


def non_negative_int(value: str) -> int:
    """argparse type for the iteration count."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number of iterations: {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"number of iterations must be non-negative, got {number}")
    return number


def float_list(value: str) -> List[float]:
    """argparse type for comma-separated values such as 0.5,1.0,2.5."""
    try:
        return [float(x) for x in value.split(",")]
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid list of numbers: {value!r}")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Particle Swarm Optimization Demo: minimize y = (x - 1)^2"
    )

    parser.add_argument(
        "n",
        type=positive_int,
        help="Number of particles"
    )

    parser.add_argument(
        "iterations",
        type=non_negative_int,
        nargs="?",
        default=None,
        metavar="iter",
        help="Number of iterations (uses the error threshold if not provided)"
    )

    parser.add_argument(
        "-e", "--threshold",
        type=float,
        default=None,
        help="Error threshold when no iteration count is given (default: from config)"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Print the swarm after every iteration and enable debug logging"
    )

    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Use a fixed seed for random number generation"
    )

    parser.add_argument(
        "--init",
        type=float_list,
        default=None,
        help="Initial positions of particles, e.g. 0.1,2.0,-3.5"
    )

    parser.add_argument(
        "--vinit",
        type=float_list,
        default=None,
        help="Initial velocities of particles (requires --init)"
    )

    parser.add_argument(
        "--maximize",
        action="store_true",
        help="Search for a maximum instead of a minimum"
    )

    parser.add_argument(
        "--mode",
        choices=["synchronous", "asynchronous"],
        default=None,
        help="Global best update mode (default: from config)"
    )

    parser.add_argument(
        "-c", "--config",
        type=str,
        help="Path to swarm configuration YAML file"
    )

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        app = Application(args)
        app.run()
    except KeyboardInterrupt:
        print("\nExiting...", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
