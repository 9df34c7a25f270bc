"""Benchmark objectives for exercising the swarm.

Every function takes a 1-D position and returns a float; all have their
global minimum 0.0 (at the origin, except rosenbrock at (1, ..., 1)).
"""

from typing import Callable, Dict, Tuple

import numpy as np

from sipso.errors import ConfigurationError


def sphere(x) -> float:
    x = np.asarray(x, dtype=np.float64)
    return float(np.dot(x, x))


def rosenbrock(x) -> float:
    """Banana valley; needs D >= 2 to be non-trivial."""
    x = np.asarray(x, dtype=np.float64)
    head, tail = x[:-1], x[1:]
    return float(np.sum(100.0 * (tail - head ** 2) ** 2 + (1.0 - head) ** 2))


def rastrigin(x) -> float:
    x = np.asarray(x, dtype=np.float64)
    return float(10.0 * x.size + np.sum(x ** 2 - 10.0 * np.cos(2.0 * np.pi * x)))


def ackley(x) -> float:
    x = np.asarray(x, dtype=np.float64)
    a, b, c = 20.0, 0.2, 2.0 * np.pi
    rms = np.sqrt(max(np.dot(x, x) / x.size, 0.0))
    return float(a + np.e - a * np.exp(-b * rms) - np.exp(np.mean(np.cos(c * x))))


# Search domains follow the benchmark driver the solver was tuned on.
FUNCTIONS: Dict[str, Dict[str, object]] = {
    "sphere":     {"f": sphere,     "bounds": (-5.0, 5.0)},
    "rosenbrock": {"f": rosenbrock, "bounds": (-30.0, 30.0)},
    "rastrigin":  {"f": rastrigin,  "bounds": (-5.12, 5.12)},
    "ackley":     {"f": ackley,     "bounds": (-32.768, 32.768)},
}

SUCCESS_THRESHOLDS = {
    "sphere": 1e-8,
    "rosenbrock": 1e-2,
    "rastrigin": 1e-4,
    "ackley": 1e-4,
}


def _entry(name: str) -> dict:
    try:
        return FUNCTIONS[name.lower()]
    except KeyError:
        raise ConfigurationError(
            f"Unknown benchmark {name!r}; choose from {', '.join(sorted(FUNCTIONS))}"
        ) from None


def get_function(name: str) -> Callable[[np.ndarray], float]:
    """Look up a benchmark by name, ignoring case."""
    return _entry(name)["f"]


def get_bounds(name: str) -> Tuple[float, float]:
    """Per-coordinate search domain (lo, hi) of a benchmark."""
    return _entry(name)["bounds"]
