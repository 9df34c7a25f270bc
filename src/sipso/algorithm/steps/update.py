"""Update phase: the two per-particle velocity/position rules.

Both rules mutate `particles[particle_id]` in place and finish with the
strict-improvement personal-best update, so particles moved later in the
same sweep already see the new bests.

- single_best_update: canonical constricted PSO toward the particle's own
  best and its best neighbour's best (two draws: r1, then r2)
- fully_informed_update: FIPS, averaging pulls toward every neighbour's
  best (one draw per neighbour entry, in list order). There is no separate
  own-best term; nostalgia and social weights are folded into the single
  acceleration coefficient.
"""

from typing import Sequence

import numpy as np

from ...errors import EmptyNeighborhoodError
from ..components.particle import Particle
from .evaluate import Objective, best_neighbor, update_best


def single_best_update(particles: Sequence[Particle], particle_id: int, constriction_coef: float,
                       nostalgia_coef: float, social_coef: float, f: Objective,
                       rng: np.random.Generator) -> bool:
    """Move one particle with the single-best-neighbour rule.

    Returns True when the move improved the particle's personal best.
    """
    p = particles[particle_id]
    if not p.neighbors:
        raise EmptyNeighborhoodError(particle_id, "single_best_update")

    c1 = rng.random() * nostalgia_coef
    c2 = rng.random() * social_coef
    nbest = particles[best_neighbor(particles, particle_id)].best_position

    nostalgia = c1 * (p.best_position - p.position)
    social = c2 * (nbest - p.position)
    p.velocity = constriction_coef * (p.velocity + nostalgia + social)
    p.position = p.position + p.velocity
    return update_best(p, f, particle_id)


def fully_informed_update(particles: Sequence[Particle], particle_id: int, constriction_coef: float,
                          acceleration_coef: float, f: Objective, rng: np.random.Generator) -> bool:
    """Move one particle with the fully-informed rule.

    Duplicate neighbour entries are summed once per entry and count toward
    the degree the pull is averaged over.
    """
    p = particles[particle_id]
    degree = p.degree
    if degree == 0:
        raise EmptyNeighborhoodError(particle_id, "fully_informed_update")

    pull = np.zeros_like(p.position)
    for j in p.neighbors:
        c = rng.random()
        pull += acceleration_coef * c * (particles[j].best_position - p.position)

    p.velocity = constriction_coef * (p.velocity + pull / degree)
    p.position = p.position + p.velocity
    return update_best(p, f, particle_id)
