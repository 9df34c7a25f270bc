from .particle import Particle
from .topologies import (
    adjacency_counts,
    build_topology,
    full_neighbors,
    no_neighbors,
    scale_free_neighbors,
)

__all__ = [
    "Particle",
    "adjacency_counts",
    "build_topology",
    "full_neighbors",
    "no_neighbors",
    "scale_free_neighbors",
]
