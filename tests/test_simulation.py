"""
Unit tests for GBM price path generation.

Tests cover:
- Path shape, immutability and the multiplicative recurrence
- Reproducibility with seeded generators
- Parameter validation
"""

import pytest
import numpy as np
from numpy.testing import assert_allclose, assert_array_equal

from crossover_mc.errors import PreconditionViolation
from crossover_mc.simulation import PriceSimulator, generate_gbm_path


class TestGenerateGbmPath:
    """Tests for the functional path generator."""

    def test_path_length(self) -> None:
        """Test that the path has exactly n_steps prices."""
        path = generate_gbm_path(0.0, 0.01, 100.0, 250, np.random.default_rng(0))
        assert path.shape == (250,)

    def test_path_is_read_only(self) -> None:
        """Test that generated paths cannot be modified."""
        path = generate_gbm_path(0.0, 0.01, 100.0, 10, np.random.default_rng(0))
        with pytest.raises(ValueError):
            path[0] = 1.0

    def test_matches_sequential_recurrence(self) -> None:
        """Test S <- S * (1 + r) with r drawn from N(drift, volatility)."""
        drift, vol, s0, n = 0.0005, 0.02, 50.0, 500
        path = generate_gbm_path(drift, vol, s0, n, np.random.default_rng(11))

        returns = np.random.default_rng(11).normal(drift, vol, n)
        expected = []
        s = s0
        for r in returns:
            s = s * (1 + r)
            expected.append(s)

        assert_allclose(path, expected, rtol=1e-12)

    def test_initial_price_not_included(self) -> None:
        """Test that the first element is already one step past S_0."""
        path = generate_gbm_path(0.01, 0.0, 100.0, 3, np.random.default_rng(0))
        assert_allclose(path, [101.0, 102.01, 103.0301])

    def test_zero_volatility_zero_drift_is_constant(self) -> None:
        """Test that without noise or drift the price never moves."""
        path = generate_gbm_path(0.0, 0.0, 100.0, 50, np.random.default_rng(0))
        assert_array_equal(path, np.full(50, 100.0))

    def test_zero_steps(self) -> None:
        """Test that zero steps gives an empty path."""
        path = generate_gbm_path(0.0, 0.01, 100.0, 0, np.random.default_rng(0))
        assert path.shape == (0,)

    def test_return_statistics(self) -> None:
        """Test that realized per-step returns have the requested moments."""
        drift, vol = 0.001, 0.01
        path = generate_gbm_path(drift, vol, 100.0, 20000, np.random.default_rng(5))
        returns = path[1:] / path[:-1] - 1.0

        assert np.isclose(np.mean(returns), drift, atol=5e-4)
        assert np.isclose(np.std(returns), vol, atol=5e-4)

    def test_negative_steps_rejected(self) -> None:
        """Test that a negative length is rejected."""
        with pytest.raises(PreconditionViolation, match="n_steps"):
            generate_gbm_path(0.0, 0.01, 100.0, -1, np.random.default_rng(0))

    def test_negative_volatility_rejected(self) -> None:
        """Test that a negative volatility is rejected."""
        with pytest.raises(PreconditionViolation, match="volatility"):
            generate_gbm_path(0.0, -0.01, 100.0, 10, np.random.default_rng(0))


class TestPriceSimulator:
    """Tests for the parameterised simulator."""

    def test_same_seed_same_path(self) -> None:
        """Test that identical seeds give identical paths."""
        sim = PriceSimulator(drift=0.0, volatility=0.01, initial_price=100.0)
        path1 = sim.generate(1000, random_seed=42)
        path2 = sim.generate(1000, random_seed=42)
        assert_array_equal(path1, path2)

    def test_same_generator_state_same_path(self) -> None:
        """Test that explicitly passed generators with equal seeds agree."""
        sim = PriceSimulator()
        path1 = sim.generate(200, rng=np.random.default_rng(3))
        path2 = sim.generate(200, rng=np.random.default_rng(3))
        assert_array_equal(path1, path2)

    def test_different_seeds_different_paths(self) -> None:
        """Test that different seeds give different paths."""
        sim = PriceSimulator()
        path1 = sim.generate(1000, random_seed=1)
        path2 = sim.generate(1000, random_seed=2)
        assert not np.array_equal(path1, path2)

    def test_consecutive_draws_differ(self) -> None:
        """Test that one generator advances between paths."""
        sim = PriceSimulator()
        rng = np.random.default_rng(9)
        assert not np.array_equal(sim.generate(100, rng=rng), sim.generate(100, rng=rng))

    def test_defaults(self) -> None:
        """Test default parameters."""
        sim = PriceSimulator()
        assert sim.drift == 0.0
        assert sim.volatility == 0.01
        assert sim.initial_price == 100.0

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"volatility": -0.1},
            {"initial_price": 0.0},
            {"initial_price": -5.0},
            {"drift": float("nan")},
            {"volatility": float("inf")},
        ],
    )
    def test_invalid_parameters_rejected(self, kwargs) -> None:
        """Test that out-of-range parameters raise."""
        with pytest.raises(PreconditionViolation):
            PriceSimulator(**kwargs)

    def test_repr(self) -> None:
        """Test string representation."""
        assert "PriceSimulator" in repr(PriceSimulator())
