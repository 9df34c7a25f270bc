# experiment.py
"""
Runs the function x neighbourhood x threshold grid and persists results in a
reproducible way: one CSV row per run, one .npy convergence curve per run,
and a summary CSV aggregated per grid cell.
"""
from __future__ import annotations

import csv
import json
import os
import time
import zlib
from typing import Iterable, Mapping, Optional

import numpy as np
import pandas as pd

from sipso.algorithm.core import pso_run
from sipso.config import PSOParams, normalize_neighborhood, uniform_bounds
from sipso.functions import FUNCTIONS

RUN_FIELDS = ["func", "n", "neighborhood", "k", "run", "seed", "best_f", "best_x_json",
              "evals", "n_fully_informed", "n_single_best", "success", "time_s"]


def run_seed(seed0: int, fname: str, n: int, neighborhood: str, k: int, run: int) -> int:
    """Deterministic per-run seed; stable across processes (unlike hash())."""
    key = f"{fname}|{n}|{neighborhood}|{k}|{run}".encode()
    return (seed0 + zlib.crc32(key)) % (2**31 - 1)


def run_suite(
    *,
    outdir: str,
    functions: Iterable[str],
    dim: int,
    neighborhoods: Iterable[str],
    ks: Iterable[int],
    runs: int,
    seed0: int,
    base_params: PSOParams,
    thresholds: Optional[Mapping[str, Optional[float]]] = None,
):
    """
    Args:
      outdir: output directory for CSVs and curves.
      functions: benchmark names from FUNCTIONS (e.g. ['rastrigin', 'rosenbrock']).
      dim: search space dimension; bounds come from each function's domain.
      neighborhoods: neighbourhood names ('full', 'scale-free').
      ks: degree thresholds to sweep.
      runs: independent seeded runs per (function, neighbourhood, k).
      seed0: base integer seed to derive per-run seeds deterministically.
      base_params: every other PSO setting (n_iter, n_particles, coefficients ...).
      thresholds: optional function name -> success threshold. Missing or
                  None means success is not computed (written as 0).
    Returns:
      (log_csv_path, summary_csv_path)
    """
    if not isinstance(outdir, str) or not outdir:
        raise ValueError("outdir must be a non-empty string.")
    functions = [f.lower() for f in functions]
    unknown = [f for f in functions if f not in FUNCTIONS]
    if not functions or unknown:
        raise ValueError(f"functions must be a non-empty subset of {sorted(FUNCTIONS)}; unknown: {unknown}")
    if not isinstance(dim, int) or dim <= 0:
        raise ValueError("dim must be a positive int.")
    neighborhoods = [normalize_neighborhood(n) for n in neighborhoods]
    if "none" in neighborhoods:
        raise ValueError("neighborhood 'none' cannot drive an update rule.")
    ks = list(ks)
    if not neighborhoods or not ks:
        raise ValueError("neighborhoods and ks must be non-empty.")
    if not isinstance(runs, int) or runs <= 0:
        raise ValueError("runs must be a positive int.")
    thresholds = dict(thresholds or {})

    os.makedirs(outdir, exist_ok=True)
    curves_dir = os.path.join(outdir, "curves")
    os.makedirs(curves_dir, exist_ok=True)

    log_path = os.path.join(outdir, "runs.csv")
    with open(log_path, "w", newline="") as fh:
        w = csv.writer(fh)
        w.writerow(RUN_FIELDS)

        for fname in functions:
            meta = FUNCTIONS[fname]
            lo, hi = meta["bounds"]
            thr = thresholds.get(fname)

            for neigh in neighborhoods:
                for k in ks:
                    for r in range(runs):
                        seed = run_seed(seed0, fname, dim, neigh, k, r)
                        params = base_params.with_overrides(
                            bounds=uniform_bounds(lo, hi, dim),
                            dim=dim,
                            neighborhood=neigh,
                            k=k,
                            seed=seed,
                        )

                        t0 = time.time()
                        res = pso_run(meta["f"], params, rng=np.random.default_rng(seed))
                        dt = time.time() - t0

                        curve_path = os.path.join(curves_dir, f"{fname}_n{dim}_{neigh}_k{k}_run{r}.npy")
                        np.save(curve_path, res["gbest_curve"])

                        best_f = float(res["best_f"])
                        success = int(best_f <= thr) if thr is not None else 0
                        w.writerow([
                            fname,
                            dim,
                            neigh,
                            k,
                            r,
                            seed,
                            best_f,
                            json.dumps([float(v) for v in res["best_x"]]),
                            int(res["evals_used"]),
                            int(res["n_fully_informed"]),
                            int(res["n_single_best"]),
                            success,
                            float(dt),
                        ])

    agg_path = os.path.join(outdir, "summary.csv")
    aggregate(log_path, agg_path)
    return log_path, agg_path


def aggregate(log_csv: str, out_csv: str) -> pd.DataFrame:
    df = pd.read_csv(log_csv)
    keys = ["func", "n", "neighborhood", "k"]
    g = df.groupby(keys, as_index=False)
    summ = g["best_f"].agg(mean="mean", median="median", min="min", max="max", std="std")
    sr = g["success"].mean().rename(columns={"success": "success_rate"})
    out = pd.merge(summ, sr, on=keys)
    out.to_csv(out_csv, index=False)
    return out
