from .initialize import initialize_particles
from .evaluate import best_neighbor, evaluate, global_best, mean_best_score, update_best
from .update import fully_informed_update, single_best_update

__all__ = [
    "initialize_particles",
    "best_neighbor",
    "evaluate",
    "global_best",
    "mean_best_score",
    "update_best",
    "fully_informed_update",
    "single_best_update",
]
