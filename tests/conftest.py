#!/usr/bin/env python
# -*- coding: utf-8 -*-

# Import modules
import matplotlib
import numpy as np
import pytest

# Import from sipso
from sipso import PSOParams, uniform_bounds
from sipso.algorithm.components import Particle
from sipso.functions import sphere

matplotlib.use("Agg")


@pytest.fixture
def sphere_params():
    """Small full-mesh swarm on the 2-D sphere, canonical gbest rule everywhere"""
    return PSOParams(
        n_iter=200,
        n_particles=20,
        bounds=uniform_bounds(-5.0, 5.0, 2),
        neighborhood="full",
        k=19,
        seed=42,
    )


@pytest.fixture
def rng():
    return np.random.default_rng(7)


@pytest.fixture
def blank_swarm():
    """Factory for hand-built swarms: positions given, zero velocity, scored on the sphere"""

    def _make(positions):
        return [Particle.spawn(x, np.zeros(len(x)), sphere(x)) for x in positions]

    return _make
