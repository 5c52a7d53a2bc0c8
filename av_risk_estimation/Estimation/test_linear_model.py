"""Tests for the incremental linear model."""

import pytest
import numpy as np

from ..exceptions import DimensionMismatch
from .linear_model import LinearModel, fit_linear_model


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


class TestConstruction:
    """Tests for a freshly constructed model."""

    @pytest.mark.parametrize("dim", [1, 2, 5])
    def test_zero_initialized(self, dim):
        model = LinearModel(dim)
        assert model.theta.shape == (dim,)
        assert np.all(model.theta == 0)
        assert model.XTX.shape == (dim, dim)
        assert np.all(model.XTX == 0)
        assert np.all(model.XTy == 0)

    def test_invalid_dimension(self):
        with pytest.raises(ValueError):
            LinearModel(0)

    def test_from_parameters(self):
        model = LinearModel.from_parameters([1.0, 2.0])
        assert model.dim == 2
        assert np.allclose(model.theta, [1.0, 2.0])
        assert np.all(model.XTX == 0)

    def test_theta_override_checks_shape(self):
        model = LinearModel(2)
        with pytest.raises(DimensionMismatch):
            model.theta = [1.0, 2.0, 3.0]


class TestFit:
    """Tests for fitting."""

    def test_recovers_noiseless_parameters(self, rng):
        X = rng.random((100, 2))
        theta_true = np.array([1.0, 2.0])
        y = X @ theta_true

        model = LinearModel(2)
        theta = model.fit(X, y)

        assert np.allclose(model.theta, theta_true, rtol=1e-5, atol=1e-5)
        assert np.allclose(theta, model.theta)

    def test_batch_equivalence(self, rng):
        """Fitting two batches in turn equals fitting their concatenation."""
        X = rng.random((100, 2))
        X2 = rng.random((100, 2))
        y = X @ np.array([1.0, 2.0])
        y2 = rng.random(100)

        two_part = LinearModel(2)
        two_part.fit(X, y)
        two_part.fit(X2, y2)

        full = LinearModel(2)
        full.fit(np.vstack([X, X2]), np.concatenate([y, y2]))

        assert np.allclose(two_part.theta, full.theta, rtol=1e-5, atol=1e-5)
        assert np.allclose(two_part.XTX, full.XTX)
        assert np.allclose(two_part.XTy, full.XTy)

    def test_many_partitions_equivalent(self, rng):
        X = rng.normal(size=(60, 3))
        y = rng.normal(size=60)

        full = LinearModel(3)
        full.fit(X, y)

        for splits in ([10, 30], [1, 2, 59], [20, 40]):
            model = LinearModel(3)
            for Xb, yb in zip(np.split(X, splits), np.split(y, splits)):
                model.fit(Xb, yb)
            assert np.allclose(model.theta, full.theta, rtol=1e-5, atol=1e-5)

    def test_zero_target_guard(self, rng):
        X = rng.random((10, 2))
        model = LinearModel(2)
        result = model.fit(X, np.zeros(10))

        assert np.all(result == 0)
        assert np.all(model.theta == 0)
        # statistics still accumulate
        assert np.allclose(model.XTX, X.T @ X)
        assert model.num_samples == 10

    def test_zero_target_guard_keeps_override(self):
        model = LinearModel.from_parameters([0.5])
        result = model.fit(np.ones((3, 1)), np.zeros(3))
        assert np.all(result == 0)
        assert np.allclose(model.theta, [0.5])

    def test_singular_design_is_not_an_error(self):
        # Both columns identical: X^T X is singular
        X = np.ones((5, 2))
        y = np.full(5, 3.0)
        model = LinearModel(2)
        model.fit(X, y)
        assert np.allclose(model.forward(X), y, atol=1e-4)

    def test_single_row(self):
        model = LinearModel(2)
        model.fit(np.array([1.0, 0.0]), [2.0])
        assert model.num_samples == 1
        assert model.theta[0] == pytest.approx(2.0, abs=1e-4)

    def test_dimension_mismatch(self, rng):
        model = LinearModel(2)
        with pytest.raises(DimensionMismatch):
            model.fit(rng.random((10, 3)), np.ones(10))

    def test_target_length_mismatch(self, rng):
        model = LinearModel(2)
        with pytest.raises(DimensionMismatch):
            model.fit(rng.random((10, 2)), np.ones(9))

    def test_fit_linear_model_helper(self, rng):
        X = rng.random((50, 3))
        y = X @ np.array([0.5, -1.0, 2.0])
        model = fit_linear_model(X, y)
        assert model.dim == 3
        assert np.allclose(model.theta, [0.5, -1.0, 2.0], atol=1e-5)


class TestForward:
    """Tests for evaluation."""

    def test_forward_is_matrix_product(self, rng):
        X = rng.random((100, 2))
        model = LinearModel.from_parameters([1.0, 2.0])
        assert np.all(model.forward(X) == X @ np.array([1.0, 2.0]))

    def test_forward_does_not_mutate(self, rng):
        model = LinearModel.from_parameters([1.0, -1.0])
        before = model.theta.copy()
        model.forward(rng.random((4, 2)))
        assert np.all(model.theta == before)
        assert model.num_samples == 0

    def test_forward_single_row(self):
        model = LinearModel.from_parameters([1.0, 2.0])
        out = model.forward(np.array([3.0, 4.0]))
        assert out.shape == (1,)
        assert out[0] == 11.0

    def test_forward_dimension_mismatch(self):
        model = LinearModel(2)
        with pytest.raises(DimensionMismatch):
            model.forward(np.ones((4, 3)))

    def test_copy_is_independent(self, rng):
        model = LinearModel(2)
        model.fit(rng.random((5, 2)), rng.random(5))
        clone = model.copy()
        clone.fit(rng.random((5, 2)), rng.random(5))
        assert clone.num_samples == 10
        assert model.num_samples == 5
