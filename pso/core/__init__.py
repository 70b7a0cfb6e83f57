"""Core PSO components."""

from .objectives import Objective, shifted_square
from .policy import OptimizationPolicy, UpdateMode
from .particle import Particle
from .swarm import Swarm
from .optimizer import SwarmOptimizer, RunResult, build_optimizer

__all__ = [
    "Objective",
    "shifted_square",
    "OptimizationPolicy",
    "UpdateMode",
    "Particle",
    "Swarm",
    "SwarmOptimizer",
    "RunResult",
    "build_optimizer",
]
