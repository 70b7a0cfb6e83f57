"""
Pytest configuration for the PSO demo test suite.
"""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from config.settings import SwarmSettings


def pytest_configure(config):
    """Called after command line options have been parsed."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )


class FixedRandom:
    """Stand-in generator whose random() always returns the same value."""

    def __init__(self, value: float = 0.5):
        self.value = value
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        return self.value


@pytest.fixture
def fixed_rng():
    """Generator that makes every r1, r2 equal to 0.5."""
    return FixedRandom(0.5)


@pytest.fixture
def rng():
    """Seeded numpy generator."""
    return np.random.default_rng(42)


@pytest.fixture
def conventional_settings():
    """Coefficients with well-known convergence on (x - 1)^2."""
    return SwarmSettings(
        w=0.7,
        c1=1.5,
        c2=1.5,
        position_range=(-10.0, 10.0),
        velocity_range=(-1.0, 1.0),
    )
