"""Optimization direction and global-best update timing."""

from enum import Enum
import math


class OptimizationPolicy(Enum):
    """Whether the swarm searches for a minimum or a maximum."""

    MINIMIZE = "minimize"
    MAXIMIZE = "maximize"

    @property
    def worst(self) -> float:
        """Fitness that every finite value improves on."""
        return math.inf if self is OptimizationPolicy.MINIMIZE else -math.inf

    def is_better(self, candidate: float, incumbent: float) -> bool:
        """
        Strict comparison in the policy's direction.

        NaN is never better than anything, and any number is better than NaN.
        """
        if math.isnan(candidate):
            return False
        if math.isnan(incumbent):
            return True
        if self is OptimizationPolicy.MINIMIZE:
            return candidate < incumbent
        return candidate > incumbent

    def reached(self, fitness: float, threshold: float) -> bool:
        """Check whether a fitness satisfies a stopping threshold."""
        if self is OptimizationPolicy.MINIMIZE:
            return fitness <= threshold
        return fitness >= threshold


class UpdateMode(Enum):
    """When an improved personal best becomes the swarm's global best."""

    SYNCHRONOUS = "synchronous"    # reduction over personal bests after each step
    ASYNCHRONOUS = "asynchronous"  # visible to the next particle in the same step
