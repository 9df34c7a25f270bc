"""Initialization phase: spawn the swarm inside the search box.

Draw order per particle is D position draws followed by D velocity draws,
both uniform on [lower, upper) of each axis.
"""

from typing import Callable, List, Sequence, Tuple

import numpy as np

from ..components.particle import Particle
from .evaluate import evaluate


def initialize_particles(
    n_particles: int,
    bounds: Sequence[Tuple[float, float]],
    f: Callable[[np.ndarray], float],
    rng: np.random.Generator,
) -> List[Particle]:
    lo_v = np.array([lo for lo, _ in bounds], dtype=float)
    hi_v = np.array([hi for _, hi in bounds], dtype=float)

    particles: List[Particle] = []
    for i in range(n_particles):
        position = rng.uniform(lo_v, hi_v)
        velocity = rng.uniform(lo_v, hi_v)
        particles.append(Particle.spawn(position, velocity, evaluate(f, position, i)))
    return particles
