"""Hybrid full / scale-free PSO runner.

This module orchestrates a run:
- spawns the swarm and wires its neighbourhood (init phase)
- sweeps the particles in index order, picking the update rule per particle
  from its current degree (running phase)
- reports the global best (done phase)

Updates are asynchronous: each particle is written back before the next one
moves, so later particles in a sweep read neighbours' fresh personal bests.
Reproducing a run bit for bit needs the same seed, the same parameters and
this sweep order.
"""

import time
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple

import numpy as np

from sipso.algorithm import steps
from sipso.algorithm.components.topologies import build_topology
from sipso.algorithm.constants import REPORT_EVERY
from sipso.config import PSOParams
from sipso.logging import SWEEP_FIELDS, RunLogger


class Phase(Enum):
    INIT = "init"
    RUNNING = "running"
    DONE = "done"


class SwarmRunner:
    """Owns one swarm for one run.

    Parameters are validated and the swarm is built in the constructor, so
    configuration errors surface before any sweep. `run()` may be called
    once.
    """

    def __init__(self,
                 f: Callable[[np.ndarray], float],
                 params: PSOParams,
                 rng: Optional[np.random.Generator] = None,
                 logger: Optional[RunLogger] = None):
        self.params = params.validate()
        self.f = f
        self.rng = rng if rng is not None else np.random.default_rng(params.seed)
        self.logger = logger
        self.phase = Phase.INIT

        self.particles = steps.initialize_particles(params.n_particles, params.bounds, f, self.rng)
        build_topology(self.particles, params.neighborhood, self.rng, m=params.m, m0=params.m0)

        self.sweeps_done = 0
        self.n_fully_informed = 0
        self.n_single_best = 0
        self.gbest_history = []

    # -----------------------------------------------
    def uses_fully_informed(self, particle_id: int) -> bool:
        return self.particles[particle_id].degree > self.params.k

    def global_best(self) -> Tuple[float, np.ndarray]:
        score, position = steps.global_best(self.particles)
        return score, position.copy()

    def sweep(self) -> Tuple[int, int]:
        """Move every particle once, in index order.

        Returns (fully_informed, single_best) rule counts for this sweep.
        """
        p = self.params
        n_full = 0
        for i in range(len(self.particles)):
            if self.uses_fully_informed(i):
                steps.fully_informed_update(self.particles, i, p.constriction_coef,
                                            p.acceleration_coef, self.f, self.rng)
                n_full += 1
            else:
                steps.single_best_update(self.particles, i, p.constriction_coef,
                                         p.nostalgia_coef, p.social_coef, self.f, self.rng)
        n_single = len(self.particles) - n_full
        self.n_fully_informed += n_full
        self.n_single_best += n_single
        self.sweeps_done += 1
        return n_full, n_single

    def run(self) -> Dict[str, Any]:
        """Run all sweeps and return the result dict."""
        if self.phase is not Phase.INIT:
            raise RuntimeError(f"SwarmRunner.run() called in phase {self.phase.value!r}; build a new runner")
        p = self.params
        start_time = time.time()
        if self.logger is not None:
            self.logger.update_metadata(
                neighborhood=p.neighborhood,
                k=p.k,
                n_particles=p.n_particles,
                n_dim=p.n_dim,
                constriction_coef=p.constriction_coef,
                nostalgia_coef=p.nostalgia_coef,
                social_coef=p.social_coef,
                seed=p.seed,
            )

        self.phase = Phase.RUNNING
        stopped_early = False
        for iteration in range(p.n_iter):
            n_full, n_single = self.sweep()
            gbest_now = self.global_best()[0]
            self.gbest_history.append(gbest_now)

            if self.logger is not None:
                row = (
                    iteration,
                    gbest_now,
                    steps.mean_best_score(self.particles),
                    n_full,
                    n_single,
                    (time.time() - start_time) * 1000,
                )
                self.logger.log_iteration(**dict(zip(SWEEP_FIELDS, row)))

            if p.verbosity == 2 and iteration % REPORT_EVERY == 0:
                print(f"Iter {iteration}: {gbest_now}")

            if p.stop_threshold is not None and gbest_now <= p.stop_threshold:
                stopped_early = True
                break

        self.phase = Phase.DONE
        best_f, best_x = self.global_best()
        if p.verbosity in (1, 2):
            print(f"Neigh: {p.neighborhood} | k: {p.k} | score: {best_f}")

        return {
            "best_x": best_x,
            "best_f": float(best_f),
            "gbest_curve": np.array(self.gbest_history, dtype=float),
            "evals_used": int(p.n_particles * (1 + self.sweeps_done)),
            "iters_run": int(self.sweeps_done),
            "stopped_early": bool(stopped_early),
            "n_fully_informed": int(self.n_fully_informed),
            "n_single_best": int(self.n_single_best),
            "degrees": [particle.degree for particle in self.particles],
            "runtime": time.time() - start_time,
        }


def pso_run(
    f: Callable[[np.ndarray], float],
    params: PSOParams,
    rng: Optional[np.random.Generator] = None,
    logger: Optional[RunLogger] = None,
) -> Dict[str, Any]:
    """Run one PSO trial and return best solution + convergence curve."""
    return SwarmRunner(f, params, rng=rng, logger=logger).run()
