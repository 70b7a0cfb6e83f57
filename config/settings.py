"""Global settings and constants for the swarm optimizer."""

from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Optional, Tuple
import yaml

from .constants import (
    DEFAULT_INERTIA,
    DEFAULT_COGNITIVE,
    DEFAULT_SOCIAL,
    DEFAULT_POSITION_RANGE,
    DEFAULT_VELOCITY_RANGE,
    DEFAULT_DIMENSION,
    DEFAULT_THRESHOLD,
    DEFAULT_MAX_ITERATIONS,
    UPDATE_MODES,
    POLICIES,
)

def _as_number(name: str, value, kind):
    """Convert a YAML value to int or float, rejecting anything else."""
    if isinstance(value, bool):
        raise ValueError(f"Invalid {name}: {value!r}")
    try:
        number = kind(value)
    except (TypeError, ValueError, OverflowError):
        raise ValueError(f"Invalid {name}: {value!r}")
    if kind is int and number != value and not isinstance(value, str):
        raise ValueError(f"Invalid {name}: {value!r}")
    return number

def _as_bounds(name: str, value) -> Tuple[float, float]:
    try:
        bounds = tuple(float(v) for v in value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid {name}: {value!r}")
    if len(bounds) != 2 or bounds[0] > bounds[1]:
        raise ValueError(f"Invalid {name}: {value!r}")
    return bounds

@dataclass
class SwarmSettings:
    """Swarm coefficients and initialization ranges."""
    w: float = DEFAULT_INERTIA
    c1: float = DEFAULT_COGNITIVE
    c2: float = DEFAULT_SOCIAL
    dimension: int = DEFAULT_DIMENSION
    position_range: Tuple[float, float] = DEFAULT_POSITION_RANGE
    velocity_range: Tuple[float, float] = DEFAULT_VELOCITY_RANGE
    velocity_clamp: Optional[float] = None
    position_bounds: Optional[Tuple[float, float]] = None
    mode: str = "synchronous"
    policy: str = "minimize"

    def validate(self) -> None:
        """Normalize field types and reject settings the optimizer cannot run with."""
        for name in ("w", "c1", "c2"):
            setattr(self, name, _as_number(name, getattr(self, name), float))

        self.dimension = _as_number("dimension", self.dimension, int)
        if self.dimension < 1:
            raise ValueError(f"Dimension must be at least 1, got {self.dimension}")

        for name in ("position_range", "velocity_range", "position_bounds"):
            bounds = getattr(self, name)
            if bounds is not None:
                setattr(self, name, _as_bounds(name, bounds))

        if self.velocity_clamp is not None:
            self.velocity_clamp = _as_number("velocity_clamp", self.velocity_clamp, float)
            if self.velocity_clamp <= 0:
                raise ValueError(f"Velocity clamp must be positive, got {self.velocity_clamp}")

        if self.mode not in UPDATE_MODES:
            raise ValueError(f"Unknown update mode: {self.mode!r}")
        if self.policy not in POLICIES:
            raise ValueError(f"Unknown policy: {self.policy!r}")

@dataclass
class RunSettings:
    """Termination parameters."""
    threshold: float = DEFAULT_THRESHOLD
    max_iterations: int = DEFAULT_MAX_ITERATIONS

    def validate(self) -> None:
        self.threshold = _as_number("threshold", self.threshold, float)
        self.max_iterations = _as_number("max_iterations", self.max_iterations, int)
        if self.max_iterations < 0:
            raise ValueError(f"max_iterations must be non-negative, got {self.max_iterations}")

def _apply_section(target, data: dict, section: str) -> None:
    values = data.get(section) or {}
    if not isinstance(values, dict):
        raise ValueError(f"Section '{section}' must be a mapping")
    for key, value in values.items():
        if hasattr(target, key):
            setattr(target, key, value)

@dataclass
class Settings:
    """Main settings container."""
    swarm: SwarmSettings = field(default_factory=SwarmSettings)
    run: RunSettings = field(default_factory=RunSettings)

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Settings":
        """Load settings from YAML file, falling back to defaults."""
        settings = cls()

        if config_path and config_path.exists():
            with open(config_path) as f:
                try:
                    data = yaml.safe_load(f) or {}
                except yaml.YAMLError as e:
                    raise ValueError(f"Could not parse {config_path}: {e}")

            if not isinstance(data, dict):
                raise ValueError(f"Config file {config_path} must contain a mapping")

            _apply_section(settings.swarm, data, "swarm")
            _apply_section(settings.run, data, "run")

        settings.swarm.validate()
        settings.run.validate()
        return settings

    def save(self, config_path: Path) -> None:
        """Save current settings to YAML file."""
        swarm = asdict(self.swarm)
        for key, value in swarm.items():
            if isinstance(value, tuple):
                swarm[key] = list(value)

        data = {
            "swarm": swarm,
            "run": asdict(self.run),
        }

        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

_settings: Settings | None = None

def get_settings() -> Settings:
    """Get global settings instance."""
    global _settings
    if _settings is None:
        config_path = Path(__file__).parent / "swarm.yaml"
        _settings = Settings.load(config_path)
    return _settings
