"""Evaluation and best tracking.

`evaluate` wraps every objective call so that NaN / inf results surface as
NonFiniteObjectiveError instead of silently losing every `<` comparison.
`global_best` is the stateless swarm-level aggregate: it rescans all
personal bests on each call and is never cached.
"""

import math
from typing import Callable, Optional, Sequence, Tuple

import numpy as np

from ...errors import NonFiniteObjectiveError
from ..components.particle import Particle

Objective = Callable[[np.ndarray], float]


def evaluate(f: Objective, position: np.ndarray, particle_id: Optional[int] = None) -> float:
    score = float(f(position))
    if not math.isfinite(score):
        raise NonFiniteObjectiveError(score, position, particle_id)
    return score


def update_best(particle: Particle, f: Objective, particle_id: Optional[int] = None) -> bool:
    """Score the particle's current position; keep it only on strict improvement."""
    return particle.try_improve(evaluate(f, particle.position, particle_id))


def best_neighbor(particles: Sequence[Particle], particle_id: int) -> int:
    """Index of the neighbour with the lowest personal best; first one wins ties."""
    neighbors = particles[particle_id].neighbors
    best = neighbors[0]
    best_score = particles[best].best_score
    for j in neighbors[1:]:
        if best_score > particles[j].best_score:
            best = j
            best_score = particles[j].best_score
    return best


def global_best(particles: Sequence[Particle]) -> Tuple[float, np.ndarray]:
    """Return (score, position) of the best personal best in the swarm."""
    best = particles[0]
    for p in particles[1:]:
        if best.best_score > p.best_score:
            best = p
    return best.best_score, best.best_position


def mean_best_score(particles: Sequence[Particle]) -> float:
    return float(np.mean([p.best_score for p in particles]))
