"""Particle Swarm Optimization demo."""

from .core import (
    OptimizationPolicy,
    UpdateMode,
    Particle,
    Swarm,
    SwarmOptimizer,
    RunResult,
    build_optimizer,
    shifted_square,
)

__all__ = [
    "OptimizationPolicy",
    "UpdateMode",
    "Particle",
    "Swarm",
    "SwarmOptimizer",
    "RunResult",
    "build_optimizer",
    "shifted_square",
]
