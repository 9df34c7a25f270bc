"""Particle swarm optimization over full-mesh and scale-free neighbourhoods.

Each particle follows either its single best neighbour or, when its degree
exceeds a threshold `k`, the fully-informed average of all its neighbours.
"""

from sipso.config import PSOParams, from_preset, uniform_bounds
from sipso.errors import (
    ConfigurationError,
    EmptyNeighborhoodError,
    NonFiniteObjectiveError,
    SwarmError,
)
from sipso.algorithm.components import Particle
from sipso.algorithm.core import Phase, SwarmRunner, pso_run
from sipso.logging import RunLogger

__version__ = "0.1.0"

__all__ = [
    "PSOParams",
    "from_preset",
    "uniform_bounds",
    "ConfigurationError",
    "EmptyNeighborhoodError",
    "NonFiniteObjectiveError",
    "SwarmError",
    "Particle",
    "Phase",
    "SwarmRunner",
    "pso_run",
    "RunLogger",
]
