"""Centralized constants for the swarm optimizer."""

# Swarm coefficients
DEFAULT_INERTIA = 0.7      # w
DEFAULT_COGNITIVE = 1.5    # c1, pull toward personal best
DEFAULT_SOCIAL = 1.5       # c2, pull toward global best

# Initialization ranges
DEFAULT_POSITION_RANGE = (-10.0, 10.0)
DEFAULT_VELOCITY_RANGE = (-1.0, 1.0)
DEFAULT_DIMENSION = 1

# Threshold mode
DEFAULT_THRESHOLD = 0.0001
DEFAULT_MAX_ITERATIONS = 10000

# Demo output
DEMO_TITLE = "Particle Swarm Optimization Demo"
DEMO_FUNCTION = "y = (x - 1)^2"

# Accepted values for the string settings
UPDATE_MODES = ("synchronous", "asynchronous")
POLICIES = ("minimize", "maximize")
