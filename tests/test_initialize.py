"""Tests for building the first generation of walkers."""

import logging

import numpy as np
import pytest

from stretchwalk import (
    InsufficientWalkers,
    InvalidStart,
    initialize,
    initialize_from_distribution,
    initialize_from_points,
)


class TestFromPoints:
    def test_evaluates_each_point(self, gaussian):
        points = np.array([[0.0, 0.0], [1.0, 0.0], [0.0, 2.0]])
        gen = initialize_from_points(points, gaussian)

        assert len(gen) == 3
        np.testing.assert_array_equal(gen.positions, points)
        np.testing.assert_allclose(gen.log_densities, [0.0, -0.5, -2.0])

    def test_ragged_points(self, gaussian):
        with pytest.raises(InvalidStart):
            initialize_from_points([[0.0, 1.0], [0.0], [1.0, 1.0]], gaussian)

    def test_scalar_points(self, gaussian):
        with pytest.raises(InvalidStart):
            initialize_from_points([0.0, 1.0, 2.0], gaussian)

    def test_single_point(self, gaussian):
        with pytest.raises(InsufficientWalkers):
            initialize_from_points([[0.0, 1.0]], gaussian)

    def test_all_infeasible(self):
        with pytest.raises(InvalidStart):
            initialize_from_points([[0.0], [1.0]], lambda x: -np.inf)

    def test_some_infeasible_warns(self, caplog):
        def half_plane(x):
            return 0.0 if x[0] > 0 else -np.inf

        with caplog.at_level(logging.WARNING, logger="stretchwalk.initialize"):
            gen = initialize_from_points([[1.0], [-1.0], [2.0]], half_plane)
        assert len(gen) == 3
        assert "1 of 3 initial walkers" in caplog.text


class TestFromDistribution:
    def test_independent_draws(self, rng, gaussian):
        draws = []

        def draw(r):
            x = r.uniform(-5.0, 5.0, size=4)
            draws.append(x)
            return x

        evaluated = []

        def counting(x):
            evaluated.append(x)
            return gaussian(x)

        gen = initialize_from_distribution(rng, draw, 7, counting)

        assert len(draws) == 7
        assert len(evaluated) == 7
        np.testing.assert_array_equal(gen.positions, np.array(draws))

    def test_too_few_walkers(self, rng, gaussian):
        with pytest.raises(InsufficientWalkers):
            initialize_from_distribution(rng, lambda r: r.normal(size=2), 1, gaussian)


class TestInitialize:
    def test_prefers_explicit_points(self, rng, gaussian):
        points = [[0.0], [1.0]]
        gen = initialize(rng, gaussian, 2, start=points, draw=lambda r: [99.0])
        np.testing.assert_array_equal(gen.positions, [[0.0], [1.0]])

    def test_uses_distribution(self, rng, gaussian):
        gen = initialize(rng, gaussian, 5, draw=lambda r: r.normal(size=3))
        assert gen.n_walkers == 5
        assert gen.n_dim == 3

    def test_nothing_given(self, rng, gaussian):
        with pytest.raises(InvalidStart):
            initialize(rng, gaussian, 4)

    def test_wrong_number_of_points(self, rng, gaussian):
        with pytest.raises(InvalidStart):
            initialize(rng, gaussian, 4, start=[[0.0], [1.0], [2.0]])
