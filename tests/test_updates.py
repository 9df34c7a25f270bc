#!/usr/bin/env python
# -*- coding: utf-8 -*-

# Import modules
import numpy as np
import pytest

# Import from sipso
from sipso.algorithm import steps
from sipso.algorithm.components import Particle
from sipso.errors import EmptyNeighborhoodError, NonFiniteObjectiveError
from sipso.functions import sphere

CHI, PHI1, PHI2 = 0.7298, 2.05, 2.05


@pytest.fixture
def trio(blank_swarm):
    """Particle 0 listens to 1 and 2; particle 2 holds the better best"""
    particles = blank_swarm([[3.0, -1.0], [2.0, 2.0], [0.5, 0.5]])
    particles[0].velocity = np.array([0.25, -0.5])
    particles[0].neighbors = [1, 2]
    particles[1].neighbors = [0]
    particles[2].neighbors = [0]
    return particles


class TestBestNeighbor:
    def test_lowest_best_score(self, trio):
        assert steps.best_neighbor(trio, 0) == 2

    def test_first_occurrence_wins_ties(self, blank_swarm):
        particles = blank_swarm([[0.0], [1.0], [-1.0]])
        particles[0].neighbors = [2, 1]
        assert steps.best_neighbor(particles, 0) == 2
        particles[0].neighbors = [1, 2]
        assert steps.best_neighbor(particles, 0) == 1


class TestSingleBestUpdate:
    def test_matches_hand_computation(self, trio, rng):
        reference = np.random.default_rng(7)
        c1 = reference.random() * PHI1
        c2 = reference.random() * PHI2
        x = np.array([3.0, -1.0])
        v = np.array([0.25, -0.5])
        expected_v = CHI * (v + c1 * (x - x) + c2 * (np.array([0.5, 0.5]) - x))

        steps.single_best_update(trio, 0, CHI, PHI1, PHI2, sphere, rng)

        np.testing.assert_array_equal(trio[0].velocity, expected_v)
        np.testing.assert_array_equal(trio[0].position, x + expected_v)

    def test_consumes_two_draws(self, trio, rng):
        reference = np.random.default_rng(7)
        steps.single_best_update(trio, 0, CHI, PHI1, PHI2, sphere, rng)
        reference.random(2)
        assert rng.random() == reference.random()

    def test_personal_best_tracks_objective(self, trio, rng):
        steps.single_best_update(trio, 0, CHI, PHI1, PHI2, sphere, rng)
        p = trio[0]
        assert p.best_score == sphere(p.best_position)
        assert p.best_score <= sphere([3.0, -1.0])

    def test_ties_do_not_replace_best(self, trio, rng):
        flat = lambda x: 1.0  # noqa: E731
        p = trio[0]
        p.best_score = 1.0
        before = p.best_position.copy()
        improved = steps.single_best_update(trio, 0, CHI, PHI1, PHI2, flat, rng)
        assert not improved
        np.testing.assert_array_equal(p.best_position, before)

    def test_empty_neighborhood(self, blank_swarm, rng):
        particles = blank_swarm([[1.0, 1.0], [2.0, 2.0]])
        with pytest.raises(EmptyNeighborhoodError) as exc:
            steps.single_best_update(particles, 1, CHI, PHI1, PHI2, sphere, rng)
        assert exc.value.particle_id == 1


class TestFullyInformedUpdate:
    def test_matches_hand_computation(self, trio, rng):
        alpha = PHI1 + PHI2
        reference = np.random.default_rng(7)
        x = np.array([3.0, -1.0])
        v = np.array([0.25, -0.5])
        pull = np.zeros(2)
        for best in ([2.0, 2.0], [0.5, 0.5]):
            pull += alpha * reference.random() * (np.array(best) - x)
        expected_v = CHI * (v + pull / 2)

        steps.fully_informed_update(trio, 0, CHI, alpha, sphere, rng)

        np.testing.assert_array_equal(trio[0].velocity, expected_v)
        np.testing.assert_array_equal(trio[0].position, x + expected_v)

    def test_duplicate_neighbors_count_twice(self, trio, rng):
        trio[0].neighbors = [2, 2, 1]
        reference = np.random.default_rng(7)
        steps.fully_informed_update(trio, 0, CHI, 4.1, sphere, rng)
        reference.random(3)
        assert rng.random() == reference.random()

    def test_no_own_best_term(self, blank_swarm, rng):
        # neighbour best equals own position, velocity zero: nothing moves
        particles = blank_swarm([[1.0, 1.0], [1.0, 1.0]])
        particles[0].neighbors = [1]
        particles[0].best_position = np.array([-4.0, -4.0])
        steps.fully_informed_update(particles, 0, CHI, 4.1, sphere, rng)
        np.testing.assert_array_equal(particles[0].position, [1.0, 1.0])

    def test_empty_neighborhood(self, blank_swarm, rng):
        particles = blank_swarm([[1.0, 1.0]])
        with pytest.raises(EmptyNeighborhoodError):
            steps.fully_informed_update(particles, 0, CHI, 4.1, sphere, rng)


class TestEvaluate:
    @pytest.mark.parametrize("value", [np.nan, np.inf, -np.inf])
    def test_non_finite_objective(self, value):
        with pytest.raises(NonFiniteObjectiveError) as exc:
            steps.evaluate(lambda x: value, np.array([1.0, 2.0]), particle_id=4)
        assert exc.value.particle_id == 4
        np.testing.assert_array_equal(exc.value.position, [1.0, 2.0])

    def test_nan_after_move_is_reported(self, trio, rng):
        with pytest.raises(NonFiniteObjectiveError):
            steps.single_best_update(trio, 0, CHI, PHI1, PHI2, lambda x: float("nan"), rng)

    def test_nan_after_fully_informed_move(self, trio, rng):
        with pytest.raises(NonFiniteObjectiveError) as exc:
            steps.fully_informed_update(trio, 0, CHI, PHI1 + PHI2, lambda x: float("nan"), rng)
        assert exc.value.particle_id == 0
        np.testing.assert_array_equal(exc.value.position, trio[0].position)

    def test_global_best(self, blank_swarm):
        particles = blank_swarm([[3.0], [-1.0], [1.0], [2.0]])
        score, position = steps.global_best(particles)
        assert score == 1.0
        np.testing.assert_array_equal(position, [-1.0])
        assert score == min(p.best_score for p in particles)


class TestParticle:
    def test_spawn_copies_position(self):
        x = np.array([1.0, 2.0])
        p = Particle.spawn(x, [0.0, 0.0], 5.0)
        x[0] = 99.0
        assert p.position[0] == 1.0
        assert p.best_position is not p.position
        assert p.n_dim == 2 and p.degree == 0
