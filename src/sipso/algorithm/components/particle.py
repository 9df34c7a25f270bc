"""Particle state for the swarm engine.

A particle owns its position, velocity, personal best and the list of
neighbour indices it listens to. Arrays are float64 and always share the
same length D for the whole run.
"""

from dataclasses import dataclass, field
from typing import List

import numpy as np


@dataclass
class Particle:
    position: np.ndarray
    velocity: np.ndarray
    best_position: np.ndarray
    best_score: float
    neighbors: List[int] = field(default_factory=list)

    @classmethod
    def spawn(cls, position, velocity, score: float) -> "Particle":
        """New particle whose personal best is its starting point."""
        position = np.array(position, dtype=float)
        return cls(
            position=position,
            velocity=np.array(velocity, dtype=float),
            best_position=position.copy(),
            best_score=float(score),
        )

    @property
    def degree(self) -> int:
        return len(self.neighbors)

    @property
    def n_dim(self) -> int:
        return self.position.shape[0]

    def try_improve(self, score: float) -> bool:
        """Adopt the current position as personal best on strict improvement."""
        if score < self.best_score:
            self.best_score = float(score)
            self.best_position = self.position.copy()
            return True
        return False
