"""A single candidate solution in the swarm."""

from dataclasses import dataclass
import math

import numpy as np

from .objectives import Objective
from .policy import OptimizationPolicy


@dataclass
class Particle:
    """A particle in the swarm."""

    position: np.ndarray  # Current position
    velocity: np.ndarray  # Current velocity
    best_position: np.ndarray  # Personal best position
    best_fitness: float = math.inf  # Personal best fitness

    @classmethod
    def create(
        cls,
        position: np.ndarray,
        velocity: np.ndarray,
        objective: Objective,
    ) -> "Particle":
        """Create a particle whose personal best is its starting point."""
        position = np.array(position, dtype=float)
        return cls(
            position=position,
            velocity=np.array(velocity, dtype=float),
            best_position=position.copy(),
            best_fitness=objective(position),
        )

    def evaluate(self, objective: Objective, policy: OptimizationPolicy) -> float:
        """
        Evaluate the current position and update the personal best.

        Args:
            objective: Fitness function
            policy: Direction of improvement

        Returns:
            Fitness of the current position
        """
        fitness = objective(self.position)

        if policy.is_better(fitness, self.best_fitness):
            self.best_fitness = fitness
            self.best_position = self.position.copy()

        return fitness
