"""Exceptions raised by the swarm engine.

- ConfigurationError: bad parameters, raised before any sweep runs
- EmptyNeighborhoodError: an update rule was asked to move a particle that
  has no neighbours
- NonFiniteObjectiveError: the objective returned NaN or +/-inf
"""

from typing import Optional

import numpy as np


class SwarmError(Exception):
    """Base class for all errors raised by sipso."""


class ConfigurationError(SwarmError, ValueError):
    pass


class EmptyNeighborhoodError(SwarmError, RuntimeError):
    def __init__(self, particle_id: int, rule: str):
        self.particle_id = particle_id
        self.rule = rule
        super().__init__(
            f"{rule} needs at least one neighbour but particle {particle_id} has none "
            f"(was the swarm built with neighborhood='none'?)"
        )


class NonFiniteObjectiveError(SwarmError, ArithmeticError):
    def __init__(self, value: float, position: np.ndarray, particle_id: Optional[int] = None):
        self.value = value
        self.position = np.array(position, dtype=float, copy=True)
        self.particle_id = particle_id
        where = "" if particle_id is None else f" for particle {particle_id}"
        super().__init__(
            f"Objective returned non-finite value {value!r}{where} at position {self.position.tolist()}"
        )
