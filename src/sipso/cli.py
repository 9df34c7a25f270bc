from __future__ import annotations

import argparse
from math import isfinite
from pathlib import Path

import matplotlib
import numpy as np

from sipso.algorithm.constants import PRESETS
from sipso.algorithm.core import pso_run
from sipso.config import from_preset, uniform_bounds
from sipso.errors import SwarmError
from sipso.experiment import run_suite
from sipso.functions import FUNCTIONS, SUCCESS_THRESHOLDS, get_bounds, get_function
from sipso.logging import RunLogger

DEFAULT_OUTDIR = Path("results")


def _parse_preset(value: str) -> str:
    """Return an uppercase preset name if it exists, else raise."""
    name = value.upper()
    if name not in PRESETS:
        valid = ", ".join(sorted(PRESETS))
        raise argparse.ArgumentTypeError(f"Unknown preset '{value}'. Choose from: {valid}.")
    return name


def _add_swarm_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--preset", type=_parse_preset, default="DEFAULT",
                   help=f"Parameter profile ({', '.join(sorted(PRESETS))}); flags below override it.")
    p.add_argument("--dim", type=int, default=30)
    p.add_argument("--seed", type=int, default=123)

    # Optional manual overrides: use None so they only apply if explicitly set
    p.add_argument("--iters", type=int, default=None)
    p.add_argument("--swarm", type=int, default=None)
    p.add_argument("--m", type=int, default=None, help="edges per particle (scale-free)")
    p.add_argument("--m0", type=int, default=None, help="seed clique size (scale-free)")
    p.add_argument("--chi", type=float, default=None, help="constriction coefficient")
    p.add_argument("--phi1", type=float, default=None, help="nostalgia coefficient")
    p.add_argument("--phi2", type=float, default=None, help="social coefficient")
    p.add_argument("--verbosity", type=int, choices=[0, 1, 2], default=None)


def parse_args(argv=None):
    ap = argparse.ArgumentParser(prog="sipso", description="Hybrid full / scale-free PSO.")
    sub = ap.add_subparsers(dest="cmd", required=True)

    # ---- RUN ----
    p_run = sub.add_parser("run", help="Minimize one benchmark function")
    _add_swarm_args(p_run)
    p_run.add_argument("--func", type=str.lower, choices=sorted(FUNCTIONS), default="rastrigin")
    p_run.add_argument("--neighborhood", choices=["full", "scale-free", "ba", "none"], default=None)
    p_run.add_argument("--k", type=int, default=None, help="degree threshold for the fully-informed rule")
    p_run.add_argument("--log-dir", dest="log_dir", type=Path, default=None,
                       help="Optional directory to store the sweep-level CSV trace")
    p_run.add_argument("--plot", type=Path, default=None, help="Optional path for a convergence plot")

    # ---- GRID ----
    p_grid = sub.add_parser("grid", help="Function x neighbourhood x k experiment grid")
    _add_swarm_args(p_grid)
    p_grid.add_argument("--outdir", type=Path, default=DEFAULT_OUTDIR)
    p_grid.add_argument("--runs", type=int, default=5)
    p_grid.add_argument("--funcs", nargs="+", choices=sorted(FUNCTIONS), default=["rastrigin", "rosenbrock"])
    p_grid.add_argument("--neighborhoods", nargs="+", choices=["full", "scale-free", "ba"],
                        default=["scale-free", "full"])
    p_grid.add_argument("--ks", type=int, nargs="+", default=[0, 5, 50])
    p_grid.add_argument("--no-boxplots", dest="no_boxplots", action="store_true")
    return ap.parse_args(argv)


def make_params(args, bounds, **extra):
    """Preset first, then any flag the user set explicitly."""
    overrides = {
        "n_iter": args.iters,
        "n_particles": args.swarm,
        "m": args.m,
        "m0": args.m0,
        "verbosity": args.verbosity,
        "seed": args.seed,
        "dim": args.dim,
    }
    if args.chi is not None and isfinite(args.chi): overrides["constriction_coef"] = args.chi
    if args.phi1 is not None and isfinite(args.phi1): overrides["nostalgia_coef"] = args.phi1
    if args.phi2 is not None and isfinite(args.phi2): overrides["social_coef"] = args.phi2
    overrides.update(extra)
    return from_preset(args.preset, bounds, **overrides)


def cmd_run(args) -> int:
    f = get_function(args.func)
    lo, hi = get_bounds(args.func)
    params = make_params(args, uniform_bounds(lo, hi, args.dim),
                         neighborhood=args.neighborhood, k=args.k)

    logger = None
    if args.log_dir is not None:
        logger = RunLogger(
            base_dir=args.log_dir,
            filename=f"{args.func}_{params.neighborhood}_k{params.k}_log.csv",
            metadata={'runner': 'cli', 'func': args.func, 'preset': args.preset},
        )

    res = pso_run(f, params, rng=np.random.default_rng(params.seed), logger=logger)
    print(f"Function : {args.func} (D={params.n_dim})")
    print(f"Neigh    : {params.neighborhood} | k: {params.k}")
    print(f"  best   : {res['best_f']}")
    print(f"  evals  : {res['evals_used']}")
    print(f"  rules  : fully-informed={res['n_fully_informed']} single-best={res['n_single_best']}")
    print(f"  runtime: {res['runtime']:.2f}s")
    if logger is not None and len(logger):
        print(f"  log    : {logger.flush()}")
    if args.plot is not None:
        from sipso.plots import plot_convergence
        plot_convergence({f"{params.neighborhood} k={params.k}": res["gbest_curve"]}, args.plot)
    return 0


def cmd_grid(args) -> int:
    args.outdir.mkdir(parents=True, exist_ok=True)
    base = make_params(args, ())
    runs_csv, summary_csv = run_suite(
        outdir=str(args.outdir),
        functions=args.funcs,
        dim=args.dim,
        neighborhoods=args.neighborhoods,
        ks=args.ks,
        runs=args.runs,
        seed0=args.seed,
        base_params=base,
        thresholds=SUCCESS_THRESHOLDS,
    )
    if not args.no_boxplots:
        from sipso.plots import boxplot_from_runs
        boxplot_from_runs(runs_csv, args.outdir / "boxplot.png")
    print("wrote:", runs_csv, summary_csv)
    return 0


def main(argv=None) -> int:
    args = parse_args(argv)
    # headless: figures are only ever written to files
    matplotlib.use("Agg")
    try:
        if args.cmd == "run":
            return cmd_run(args)
        return cmd_grid(args)
    except SwarmError as exc:
        print(f"[ERROR] {exc}")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
