"""
Dataclass definition for PSO hyperparameters.

Defaults reproduce the driver the solver was developed with (50 particles,
5000 sweeps, scale-free neighbourhood with m=2 / m0=4, threshold k=5 and
Clerc-Kennedy coefficients). `bounds` has no usable default: the search
space dimension is inferred from it.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, fields, replace
from typing import Optional, Sequence, Tuple

from sipso.algorithm.constants import (
    BA_M,
    BA_M0,
    CONSTRICTION,
    DEGREE_THRESHOLD,
    NEIGHBORHOOD_ALIASES,
    NEIGHBORHOODS,
    NOSTALGIA,
    PRESETS,
    SOCIAL,
    VERBOSITY_LEVELS,
)
from sipso.errors import ConfigurationError

Bounds = Tuple[Tuple[float, float], ...]


def uniform_bounds(lo: float, hi: float, dim: int) -> Bounds:
    """Same (lo, hi) interval on every one of `dim` axes."""
    return tuple((float(lo), float(hi)) for _ in range(dim))


def normalize_neighborhood(name: str) -> str:
    key = str(name).strip().lower()
    key = NEIGHBORHOOD_ALIASES.get(key, key)
    if key not in NEIGHBORHOODS:
        raise ConfigurationError(
            f"Unknown neighborhood {name!r}; expected one of {NEIGHBORHOODS} "
            f"(aliases: {sorted(NEIGHBORHOOD_ALIASES)})"
        )
    return key


@dataclass(frozen=True)
class PSOParams:
    n_iter: int = 5000
    n_particles: int = 50
    bounds: Bounds = ()
    neighborhood: str = "scale-free"
    m: int = BA_M
    m0: int = BA_M0
    k: int = DEGREE_THRESHOLD
    constriction_coef: float = CONSTRICTION
    nostalgia_coef: float = NOSTALGIA
    social_coef: float = SOCIAL
    verbosity: int = 0
    dim: Optional[int] = None
    seed: Optional[int] = None
    stop_threshold: Optional[float] = None

    def __post_init__(self):
        try:
            pairs = tuple((float(lo), float(hi)) for lo, hi in self.bounds)
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"bounds must be a sequence of (lower, upper) pairs: {exc}") from exc
        object.__setattr__(self, "bounds", pairs)
        object.__setattr__(self, "neighborhood", normalize_neighborhood(self.neighborhood))

    @property
    def n_dim(self) -> int:
        return len(self.bounds)

    @property
    def acceleration_coef(self) -> float:
        """Combined coefficient used by the fully-informed rule."""
        return self.nostalgia_coef + self.social_coef

    def with_overrides(self, **overrides) -> "PSOParams":
        """Copy with the given fields replaced; `None` values are ignored."""
        names = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - names)
        if unknown:
            raise ConfigurationError(f"Unknown PSOParams fields: {unknown}")
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def validate(self) -> "PSOParams":
        """Raise ConfigurationError on any inconsistent setting, else return self."""
        if self.n_particles <= 0:
            raise ConfigurationError(f"n_particles must be positive, got {self.n_particles}")
        if self.n_iter < 0:
            raise ConfigurationError(f"n_iter must be >= 0, got {self.n_iter}")
        if self.n_dim == 0:
            raise ConfigurationError("bounds must define at least one dimension")
        if self.dim is not None and self.dim != self.n_dim:
            raise ConfigurationError(
                f"dim={self.dim} does not match the {self.n_dim} bound pairs given"
            )
        for d, (lo, hi) in enumerate(self.bounds):
            if not (math.isfinite(lo) and math.isfinite(hi)):
                raise ConfigurationError(f"bounds[{d}] = ({lo}, {hi}) must be finite")
            if lo >= hi:
                raise ConfigurationError(f"bounds[{d}] lower bound {lo} must be below upper bound {hi}")

        if self.neighborhood == "scale-free":
            if self.m < 1:
                raise ConfigurationError(f"m must be >= 1, got {self.m}")
            if self.m >= self.m0:
                raise ConfigurationError(
                    f"m ({self.m}) must be smaller than the seed clique size m0 ({self.m0})"
                )
        if self.k < 0:
            raise ConfigurationError(f"k must be >= 0, got {self.k}")

        coefs = {
            "constriction_coef": self.constriction_coef,
            "nostalgia_coef": self.nostalgia_coef,
            "social_coef": self.social_coef,
        }
        bad = [name for name, value in coefs.items() if not math.isfinite(value)]
        if bad:
            raise ConfigurationError(f"coefficients must be finite: {bad}")
        if self.verbosity not in VERBOSITY_LEVELS:
            raise ConfigurationError(f"verbosity must be one of {VERBOSITY_LEVELS}, got {self.verbosity}")
        if self.stop_threshold is not None and math.isnan(self.stop_threshold):
            raise ConfigurationError("stop_threshold must not be NaN")
        return self


def from_preset(name: str, bounds: Sequence[Tuple[float, float]], **overrides) -> PSOParams:
    """Build PSOParams from a named preset, then apply explicit overrides."""
    key = name.upper()
    if key not in PRESETS:
        raise ConfigurationError(f"Unknown preset {name!r}. Choose from: {', '.join(sorted(PRESETS))}.")
    return PSOParams(bounds=tuple(bounds), **PRESETS[key]).with_overrides(**overrides)
