import os
from pathlib import Path
from typing import Mapping, Sequence, Union

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

PathLike = Union[str, Path]


def boxplot_from_runs(runs_csv: PathLike, outpath: PathLike) -> Path:
    """Compact boxplot of final best score per (function, neighbourhood, k)."""
    df = pd.read_csv(runs_csv)
    df["combo"] = df["func"] + "_" + df["neighborhood"] + "_k" + df["k"].astype(str)
    order = sorted(df["combo"].unique())
    data = [df.loc[df["combo"] == c, "best_f"].values for c in order]

    fig, ax = plt.subplots()
    ax.boxplot(data, showfliers=False)
    ax.set_xticks(range(1, len(order) + 1))
    ax.set_xticklabels(order, rotation=30, ha="right")
    ax.set_ylabel("Final best score")
    ax.set_title("PSO final score across runs")
    outpath = Path(outpath)
    os.makedirs(outpath.parent, exist_ok=True)
    fig.savefig(outpath, bbox_inches="tight")
    plt.close(fig)
    return outpath


def plot_convergence(curves: Mapping[str, Sequence[float]], outpath: PathLike, log_scale: bool = True) -> Path:
    """Global best per sweep, one line per labelled run."""
    fig, ax = plt.subplots()
    for label, curve in curves.items():
        curve = np.asarray(curve, dtype=float)
        ax.plot(np.arange(curve.size), curve, linewidth=1.5, label=label)
    if log_scale:
        ax.set_yscale("symlog", linthresh=1e-8)
    ax.set_xlabel("Sweep")
    ax.set_ylabel("Global best score")
    if curves:
        ax.legend()
    outpath = Path(outpath)
    outpath.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(outpath, bbox_inches="tight", dpi=150)
    plt.close(fig)
    return outpath
