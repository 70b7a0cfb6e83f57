"""Swarm of particles and its global best."""

from typing import Iterator, List, Optional, Sequence, Tuple
import logging

import numpy as np

from .objectives import Objective
from .particle import Particle
from .policy import OptimizationPolicy

logger = logging.getLogger(__name__)


class Swarm:
    """
    Ordered collection of particles optimized together.

    The global best is an explicit field. It is only ever replaced by a
    strictly better personal best, so it is never worse than any personal
    best the swarm has seen.
    """

    def __init__(
        self,
        particles: List[Particle],
        objective: Objective,
        policy: OptimizationPolicy = OptimizationPolicy.MINIMIZE,
    ) -> None:
        if not particles:
            raise ValueError("Swarm needs at least one particle")

        self.particles = particles
        self.objective = objective
        self.policy = policy

        best = self.best_particle()
        self.global_best_position: np.ndarray = best.best_position.copy()
        self.global_best_fitness: float = best.best_fitness

        logger.debug(
            f"Swarm initialized with {len(particles)} particles, "
            f"best fitness {self.global_best_fitness}"
        )

    @classmethod
    def random(
        cls,
        n: int,
        objective: Objective,
        rng: np.random.Generator,
        position_range: Tuple[float, float],
        velocity_range: Tuple[float, float],
        dimension: int = 1,
        policy: OptimizationPolicy = OptimizationPolicy.MINIMIZE,
    ) -> "Swarm":
        """
        Create a swarm with uniformly random positions and velocities.

        All positions are drawn first, then all velocities.

        Args:
            n: Number of particles
            objective: Fitness function
            rng: Random number generator
            position_range: (low, high) for initial positions
            velocity_range: (low, high) for initial velocities
            dimension: Length of each position vector
            policy: Direction of improvement
        """
        if n < 1:
            raise ValueError(f"Number of particles must be at least 1, got {n}")

        positions = rng.uniform(position_range[0], position_range[1], size=(n, dimension))
        velocities = rng.uniform(velocity_range[0], velocity_range[1], size=(n, dimension))

        particles = [
            Particle.create(position, velocity, objective)
            for position, velocity in zip(positions, velocities)
        ]
        return cls(particles, objective, policy)

    @classmethod
    def from_positions(
        cls,
        positions: Sequence,
        objective: Objective,
        velocities: Optional[Sequence] = None,
        n: Optional[int] = None,
        policy: OptimizationPolicy = OptimizationPolicy.MINIMIZE,
    ) -> "Swarm":
        """
        Create a swarm from explicit starting points.

        Args:
            positions: One scalar or vector per particle
            objective: Fitness function
            velocities: One velocity per particle (zeros if omitted)
            n: Expected particle count, checked when given
            policy: Direction of improvement
        """
        count = len(positions)
        if count < 1:
            raise ValueError("Swarm needs at least one initial position")
        if n is not None and count != n:
            raise ValueError(
                f"Expected {n} initial positions, got {count}"
            )

        position_array = np.asarray(positions, dtype=float).reshape(count, -1)

        if velocities is None:
            velocity_array = np.zeros_like(position_array)
        else:
            if len(velocities) != count:
                raise ValueError(
                    f"Expected {count} initial velocities, got {len(velocities)}"
                )
            velocity_array = np.asarray(velocities, dtype=float).reshape(count, -1)
            if velocity_array.shape != position_array.shape:
                raise ValueError(
                    f"Velocity shape {velocity_array.shape} does not match "
                    f"position shape {position_array.shape}"
                )

        particles = [
            Particle.create(position, velocity, objective)
            for position, velocity in zip(position_array, velocity_array)
        ]
        return cls(particles, objective, policy)

    def best_particle(self) -> Particle:
        """Particle with the best personal best (first one wins ties)."""
        best = self.particles[0]
        for particle in self.particles[1:]:
            if self.policy.is_better(particle.best_fitness, best.best_fitness):
                best = particle
        return best

    def offer(self, particle: Particle) -> bool:
        """
        Replace the global best with a particle's personal best if strictly better.

        Returns:
            True if the global best changed
        """
        if not self.policy.is_better(particle.best_fitness, self.global_best_fitness):
            return False

        self.global_best_position = particle.best_position.copy()
        self.global_best_fitness = particle.best_fitness
        return True

    def refresh_global_best(self) -> bool:
        """Reduce personal bests into the global best."""
        return self.offer(self.best_particle())

    @property
    def dimension(self) -> int:
        return int(self.particles[0].position.shape[0])

    @property
    def positions(self) -> np.ndarray:
        return np.array([p.position for p in self.particles])

    @property
    def velocities(self) -> np.ndarray:
        return np.array([p.velocity for p in self.particles])

    def __len__(self) -> int:
        return len(self.particles)

    def __iter__(self) -> Iterator[Particle]:
        return iter(self.particles)

    def __str__(self) -> str:
        positions = self.positions
        velocities = self.velocities
        if self.dimension == 1:
            positions = positions[:, 0]
            velocities = velocities[:, 0]
        return f"Positions: {positions.tolist()}\nVelocities: {velocities.tolist()}"

    def __repr__(self) -> str:
        return f"Swarm(n={len(self)}, best_fitness={self.global_best_fitness})"
