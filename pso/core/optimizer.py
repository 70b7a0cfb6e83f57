"""Particle Swarm Optimization update loop."""

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple
import logging
import math

import numpy as np

from config.settings import SwarmSettings
from .objectives import Objective
from .policy import OptimizationPolicy, UpdateMode
from .swarm import Swarm

logger = logging.getLogger(__name__)

# Called after every iteration with (iteration number, swarm)
IterationCallback = Callable[[int, Swarm], None]


@dataclass
class RunResult:
    """Outcome of an optimization run."""

    best_position: np.ndarray
    best_fitness: float
    iterations: int
    history: np.ndarray  # global best fitness, index 0 is the initial swarm
    converged: Optional[bool] = None  # only set in threshold mode

    @property
    def best_x(self) -> float | List[float]:
        """Best position as a scalar for one-dimensional problems."""
        if self.best_position.shape[0] == 1:
            return float(self.best_position[0])
        return self.best_position.tolist()


class SwarmOptimizer:
    """
    Moves a swarm with the standard inertia-weight PSO update.

    For every particle, each iteration:
        v <- w*v + c1*r1*(pbest - x) + c2*r2*(gbest - x)
        x <- x + v
    then the personal and global bests are updated.
    """

    def __init__(
        self,
        swarm: Swarm,
        rng: np.random.Generator,
        w: float = 0.7,
        c1: float = 1.5,
        c2: float = 1.5,
        mode: UpdateMode = UpdateMode.SYNCHRONOUS,
        velocity_clamp: Optional[float] = None,
        position_bounds: Optional[Tuple[float, float]] = None,
    ) -> None:
        self.swarm = swarm
        self.rng = rng
        self.w = w    # Inertia weight
        self.c1 = c1  # Cognitive coefficient
        self.c2 = c2  # Social coefficient
        self.mode = mode
        self.velocity_clamp = velocity_clamp
        self.position_bounds = position_bounds

        self.iterations = 0
        self._history: List[float] = [swarm.global_best_fitness]
        self._diverged = False

    @classmethod
    def from_settings(
        cls,
        swarm: Swarm,
        rng: np.random.Generator,
        settings: SwarmSettings,
    ) -> "SwarmOptimizer":
        """Create an optimizer from swarm settings."""
        return cls(
            swarm,
            rng,
            w=settings.w,
            c1=settings.c1,
            c2=settings.c2,
            mode=UpdateMode(settings.mode),
            velocity_clamp=settings.velocity_clamp,
            position_bounds=settings.position_bounds,
        )

    @property
    def history(self) -> np.ndarray:
        return np.array(self._history)

    def step(self) -> float:
        """
        Run one PSO iteration over every particle.

        Overflow and NaN are left in place; the optimizer never raises on
        numeric divergence.

        Returns:
            Global best fitness after the iteration
        """
        swarm = self.swarm

        with np.errstate(all="ignore"):
            for particle in swarm.particles:
                r1, r2 = self.rng.random(), self.rng.random()

                # Velocity update (standard PSO formula)
                cognitive = self.c1 * r1 * (particle.best_position - particle.position)
                social = self.c2 * r2 * (swarm.global_best_position - particle.position)
                particle.velocity = self.w * particle.velocity + cognitive + social

                if self.velocity_clamp is not None:
                    particle.velocity = np.clip(
                        particle.velocity, -self.velocity_clamp, self.velocity_clamp
                    )

                # Position update
                particle.position = particle.position + particle.velocity

                if self.position_bounds is not None:
                    particle.position = np.clip(
                        particle.position, self.position_bounds[0], self.position_bounds[1]
                    )

                particle.evaluate(swarm.objective, swarm.policy)

                if self.mode is UpdateMode.ASYNCHRONOUS:
                    swarm.offer(particle)

            if self.mode is UpdateMode.SYNCHRONOUS:
                swarm.refresh_global_best()

        self.iterations += 1
        self._history.append(swarm.global_best_fitness)

        self._check_divergence()
        logger.debug(
            f"Iteration {self.iterations}: best fitness {swarm.global_best_fitness}"
        )

        return swarm.global_best_fitness

    def _check_divergence(self) -> None:
        """Warn once when the swarm state stops being finite."""
        if self._diverged:
            return

        if not math.isfinite(self.swarm.global_best_fitness) or not np.all(
            np.isfinite(self.swarm.velocities)
        ):
            self._diverged = True
            logger.warning(
                f"Swarm diverged at iteration {self.iterations}; "
                f"reporting best result found so far"
            )

    def run(
        self,
        iterations: int,
        callback: Optional[IterationCallback] = None,
    ) -> RunResult:
        """
        Run a fixed number of iterations.

        Args:
            iterations: Number of iterations (0 returns the initial best)
            callback: Called after each iteration

        Returns:
            RunResult with the global best
        """
        if iterations < 0:
            raise ValueError(f"Number of iterations must be non-negative, got {iterations}")

        for _ in range(iterations):
            self.step()
            if callback is not None:
                callback(self.iterations, self.swarm)

        return self.result()

    def run_until(
        self,
        threshold: float,
        max_iterations: int,
        callback: Optional[IterationCallback] = None,
    ) -> RunResult:
        """
        Iterate until the global best reaches a fitness threshold.

        Args:
            threshold: Target fitness (upper bound when minimizing, lower bound when maximizing)
            max_iterations: Hard cap on the number of iterations
            callback: Called after each iteration

        Returns:
            RunResult with converged set
        """
        if max_iterations < 0:
            raise ValueError(f"Maximum iterations must be non-negative, got {max_iterations}")

        policy = self.swarm.policy
        start = self.iterations

        while not policy.reached(self.swarm.global_best_fitness, threshold):
            if self.iterations - start >= max_iterations:
                logger.warning(
                    f"Threshold {threshold} not reached after {max_iterations} iterations"
                )
                break
            self.step()
            if callback is not None:
                callback(self.iterations, self.swarm)

        result = self.result()
        result.converged = policy.reached(self.swarm.global_best_fitness, threshold)
        return result

    def result(self) -> RunResult:
        """Snapshot of the current global best."""
        return RunResult(
            best_position=self.swarm.global_best_position.copy(),
            best_fitness=self.swarm.global_best_fitness,
            iterations=self.iterations,
            history=self.history,
        )


def build_optimizer(
    n: int,
    objective: Objective,
    rng: np.random.Generator,
    settings: Optional[SwarmSettings] = None,
    init: Optional[Sequence[float]] = None,
    vinit: Optional[Sequence[float]] = None,
) -> SwarmOptimizer:
    """
    Create a swarm and its optimizer.

    Args:
        n: Number of particles
        objective: Fitness function
        rng: Random number generator
        settings: Swarm settings (defaults if None)
        init: Explicit initial positions, one per particle
        vinit: Explicit initial velocities, only used with init

    Returns:
        SwarmOptimizer ready to run
    """
    settings = settings or SwarmSettings()
    settings.validate()

    if n < 1:
        raise ValueError(f"Number of particles must be at least 1, got {n}")

    policy = OptimizationPolicy(settings.policy)

    if init is not None:
        swarm = Swarm.from_positions(init, objective, velocities=vinit, n=n, policy=policy)
    else:
        if vinit is not None:
            raise ValueError("Initial velocities require initial positions")
        swarm = Swarm.random(
            n,
            objective,
            rng,
            position_range=settings.position_range,
            velocity_range=settings.velocity_range,
            dimension=settings.dimension,
            policy=policy,
        )

    return SwarmOptimizer.from_settings(swarm, rng, settings)
