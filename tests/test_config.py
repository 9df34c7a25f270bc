#!/usr/bin/env python
# -*- coding: utf-8 -*-

# Import modules
import pytest

# Import from sipso
from sipso import ConfigurationError, PSOParams, SwarmRunner, from_preset, uniform_bounds
from sipso.algorithm.constants import PRESETS


class TestPSOParams:
    def test_dimension_from_bounds(self):
        params = PSOParams(bounds=[(-1, 1), (0, 2), (-3, 3.5)])
        assert params.n_dim == 3
        assert params.bounds == ((-1.0, 1.0), (0.0, 2.0), (-3.0, 3.5))

    def test_defaults_match_driver(self):
        params = PSOParams(bounds=uniform_bounds(-5.12, 5.12, 30))
        assert (params.n_particles, params.n_iter) == (50, 5000)
        assert (params.m, params.m0, params.k) == (2, 4, 5)
        assert params.acceleration_coef == pytest.approx(4.1)
        assert params.validate() is params

    @pytest.mark.parametrize("alias", ["ba", "BA", "scale_free", "Scale-Free"])
    def test_neighborhood_aliases(self, alias):
        assert PSOParams(neighborhood=alias).neighborhood == "scale-free"

    def test_with_overrides_skips_none(self):
        params = PSOParams(bounds=uniform_bounds(0, 1, 2), k=7)
        assert params.with_overrides(k=None, n_iter=3).k == 7
        with pytest.raises(ConfigurationError):
            params.with_overrides(swarm_size=3)


class TestValidation:
    @pytest.fixture
    def good(self):
        return PSOParams(n_iter=10, n_particles=10, bounds=uniform_bounds(-1, 1, 2))

    @pytest.mark.parametrize(
        "overrides",
        [
            {"n_particles": 0},
            {"n_iter": -1},
            {"bounds": ()},
            {"dim": 3},
            {"bounds": ((1.0, 1.0), (0.0, 1.0))},
            {"bounds": ((0.0, float("inf")), (0.0, 1.0))},
            {"m": 4, "m0": 4},
            {"m": 0},
            {"k": -1},
            {"verbosity": 3},
            {"constriction_coef": float("nan")},
            {"stop_threshold": float("nan")},
        ],
    )
    def test_rejected(self, good, overrides):
        with pytest.raises(ConfigurationError):
            good.with_overrides(**overrides).validate()

    def test_bad_neighborhood(self):
        with pytest.raises(ConfigurationError):
            PSOParams(neighborhood="ring")

    def test_bad_bounds_shape(self):
        with pytest.raises(ConfigurationError):
            PSOParams(bounds=[1.0, 2.0])

    def test_m_only_checked_for_scale_free(self, good):
        good.with_overrides(neighborhood="full", m=9, m0=2).validate()

    def test_fails_before_objective_runs(self, good):
        calls = []

        def f(x):
            calls.append(x)
            return 0.0

        with pytest.raises(ConfigurationError):
            SwarmRunner(f, good.with_overrides(m=5))
        assert calls == []

    def test_configuration_error_is_value_error(self):
        assert issubclass(ConfigurationError, ValueError)


class TestPresets:
    @pytest.mark.parametrize("name", sorted(PRESETS))
    def test_presets_validate(self, name):
        from_preset(name, uniform_bounds(-1, 1, 3)).validate()

    def test_override_wins(self):
        params = from_preset("quick_test", uniform_bounds(-1, 1, 2), k=0, n_iter=None)
        assert params.k == 0
        assert params.n_iter == PRESETS["QUICK_TEST"]["n_iter"]

    def test_unknown_preset(self):
        with pytest.raises(ConfigurationError):
            from_preset("turbo", uniform_bounds(-1, 1, 2))
