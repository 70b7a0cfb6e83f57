"""Objective functions for the swarm."""

from typing import Callable

import numpy as np

# Pure mapping from a position vector to its fitness
Objective = Callable[[np.ndarray], float]


def shifted_square(x: np.ndarray) -> float:
    """y = (x - 1)^2, summed over dimensions. Minimum y = 0 at x = 1."""
    return float(np.sum((np.asarray(x, dtype=float) - 1.0) ** 2))
