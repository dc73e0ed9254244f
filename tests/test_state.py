"""Tests for walker and generation value types."""

import numpy as np
import pytest

from stretchwalk import (
    DimensionMismatch,
    EnsembleGeneration,
    InsufficientWalkers,
    StretchParameters,
    WalkerState,
)


class TestWalkerState:
    def test_params_are_read_only_copy(self):
        src = np.array([1.0, 2.0, 3.0])
        w = WalkerState(src, -1.5)
        src[0] = 99.0

        assert w.params[0] == 1.0
        with pytest.raises(ValueError):
            w.params[0] = 5.0

    def test_casts_to_float(self):
        w = WalkerState([1, 2], np.float32(-2.0))
        assert w.params.dtype == np.float64
        assert isinstance(w.log_density, float)
        assert w.n_dim == 2

    def test_rejects_non_vector(self):
        with pytest.raises(DimensionMismatch):
            WalkerState(np.zeros((2, 2)), 0.0)

    def test_frozen(self):
        w = WalkerState([0.0], 0.0)
        with pytest.raises(AttributeError):
            w.log_density = 1.0

    def test_equality_is_identity(self):
        a = WalkerState([0.0, 1.0], 0.0)
        b = WalkerState([0.0, 1.0], 0.0)
        assert a == a
        assert a != b


class TestEnsembleGeneration:
    def test_basic_views(self):
        walkers = [WalkerState([i, -i], -float(i)) for i in range(4)]
        gen = EnsembleGeneration(walkers)

        assert len(gen) == 4
        assert gen.n_walkers == 4
        assert gen.n_dim == 2
        assert gen[2] is walkers[2]
        assert list(gen) == walkers
        assert gen.positions.shape == (4, 2)
        np.testing.assert_array_equal(gen.log_densities, [0.0, -1.0, -2.0, -3.0])

    def test_walkers_stored_as_tuple(self):
        walkers = [WalkerState([0.0], 0.0), WalkerState([1.0], 0.0)]
        gen = EnsembleGeneration(walkers)
        walkers.append(WalkerState([2.0], 0.0))
        assert isinstance(gen.walkers, tuple)
        assert len(gen) == 2

    @pytest.mark.parametrize("n", [0, 1])
    def test_needs_two_walkers(self, n):
        with pytest.raises(InsufficientWalkers):
            EnsembleGeneration([WalkerState([0.0], 0.0) for _ in range(n)])

    def test_mixed_dimensions(self):
        with pytest.raises(DimensionMismatch):
            EnsembleGeneration([WalkerState([0.0], 0.0), WalkerState([0.0, 1.0], 0.0)])


class TestStretchParameters:
    def test_default(self):
        assert StretchParameters().a == 2.0

    @pytest.mark.parametrize("a", [1.0, 0.5, -2.0, float("nan")])
    def test_invalid_scale(self, a):
        with pytest.raises(ValueError):
            StretchParameters(a)
