"""Neighbourhood graphs over particle indices.

Builders write directly into each particle's `neighbors` list:
- full_neighbors: complete graph, ascending index order
- scale_free_neighbors: Barabasi-Albert preferential attachment
- no_neighbors: leaves every list empty
"""

from typing import List, Sequence

import numpy as np

from ...errors import ConfigurationError
from ..constants import BA_M, BA_M0
from .particle import Particle


def full_neighbors(particles: Sequence[Particle]) -> None:
    """
    Fully-connected neighbourhood (gbest PSO).

    Particle i sees every j != i, so each degree is N - 1.
    """
    n_particles = len(particles)
    for i in range(n_particles):
        particles[i].neighbors = [j for j in range(n_particles) if j != i]


def scale_free_neighbors(
    particles: Sequence[Particle],
    rng: np.random.Generator,
    m: int = BA_M,
    m0: int = BA_M0,
) -> List[int]:
    """
    Preferential-attachment (scale-free) neighbourhood.

    Parameters
    ----------
    particles : sequence of Particle
        Swarm to wire up; neighbour lists are appended to in place.
    rng : np.random.Generator
        Source of the attachment draws (one `rng.random()` per sample).
    m : int, default=2
        Edges added for every particle outside the seed clique.
    m0 : int, default=4
        Size of the seed clique; clamped to the swarm size.

    Returns
    -------
    repeated : list of int
        The attachment multiset after construction: every index appears once
        per edge endpoint it owns, so its frequency equals its degree.

    Notes
    -----
    - The first m0 particles form a complete graph.
    - Each later particle i draws m entries of the multiset without
      replacement, so a node is picked with probability proportional to
      its degree. Two entries may hold the same index; the resulting
      parallel edge is kept and shows up twice in both neighbour lists.
    - Both endpoints of every new edge go back into the multiset before
      the next particle attaches.
    """
    n_particles = len(particles)
    m0 = min(m0, n_particles)

    repeated: List[int] = []
    for i in range(m0):
        for j in range(m0):
            if j != i:
                particles[i].neighbors.append(j)
                repeated.append(j)

    for i in range(m0, n_particles):
        pool = list(repeated)
        for _ in range(m):
            target = pool.pop(int(rng.random() * len(pool)))
            particles[i].neighbors.append(target)
            particles[target].neighbors.append(i)
            repeated.append(i)
            repeated.append(target)
    return repeated


def no_neighbors(particles: Sequence[Particle]) -> None:
    for p in particles:
        p.neighbors = []


def build_topology(particles: Sequence[Particle], neighborhood: str, rng: np.random.Generator,
                   m: int = BA_M, m0: int = BA_M0) -> None:
    """Dispatch on the (already normalised) neighbourhood name."""
    if neighborhood == "full":
        full_neighbors(particles)
    elif neighborhood == "scale-free":
        scale_free_neighbors(particles, rng, m=m, m0=m0)
    elif neighborhood == "none":
        no_neighbors(particles)
    else:
        raise ConfigurationError(f"Unknown topology: {neighborhood}")


def adjacency_counts(particles: Sequence[Particle]) -> np.ndarray:
    """Edge-multiplicity matrix: entry (i, j) counts j in i's neighbour list."""
    n_particles = len(particles)
    nb = np.zeros((n_particles, n_particles), dtype=int)
    for i, p in enumerate(particles):
        for j in p.neighbors:
            nb[i, j] += 1
    return nb
