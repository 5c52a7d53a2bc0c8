"""Linear regression model that retains sufficient statistics for online fitting.

Only the accumulated normal-equation terms X^T X and X^T y are stored, so
each call to `fit` refits on all data seen so far without replaying it.
Fitting batches one at a time is therefore identical to fitting their
concatenation. Intended for small feature dimensions: every fit computes a
pseudo-inverse of a d x d matrix.
"""

from typing import Optional

import numpy as np

from ..exceptions import DimensionMismatch

RIDGE = 1e-6


class LinearModel:
    """Least-squares model y ~ X theta, fit incrementally.

    Attributes
    ----------
    dim : int
        Feature dimension d
    XTX : np.ndarray
        Accumulated sum of X^T X, shape (d, d)
    XTy : np.ndarray
        Accumulated sum of X^T y, shape (d,)
    num_samples : int
        Number of rows passed to `fit` so far
    """

    def __init__(self, dim: int):
        if dim < 1:
            raise ValueError(f"dim must be >= 1, got {dim}")
        self.dim = int(dim)
        self._theta = np.zeros(self.dim)
        self.XTX = np.zeros((self.dim, self.dim))
        self.XTy = np.zeros(self.dim)
        self.num_samples = 0

    @classmethod
    def from_parameters(cls, theta) -> "LinearModel":
        """Create a model seeded with known parameters and empty statistics."""
        theta = np.asarray(theta, dtype=float).ravel()
        model = cls(theta.size)
        model.theta = theta
        return model

    @property
    def theta(self) -> np.ndarray:
        return self._theta

    @theta.setter
    def theta(self, value):
        value = np.asarray(value, dtype=float).ravel()
        if value.shape != (self.dim,):
            raise DimensionMismatch(
                f"theta must have shape ({self.dim},), got {value.shape}"
            )
        self._theta = value.copy()

    def _as_matrix(self, X) -> np.ndarray:
        X = np.asarray(X, dtype=float)
        if X.ndim == 1:
            X = X.reshape(1, -1)
        if X.ndim != 2 or X.shape[1] != self.dim:
            raise DimensionMismatch(
                f"expected feature rows of length {self.dim}, got array of shape {X.shape}"
            )
        return X

    def fit(self, X, y) -> np.ndarray:
        """Add (X, y) to the accumulated data and refit.

        Parameters
        ----------
        X : array-like
            Feature matrix of shape (n, d), or a single row of length d
        y : array-like
            Targets of length n

        Returns
        -------
        np.ndarray
            The fitted parameters, or the zero vector if no informative
            data has been seen (accumulated X^T y is exactly zero)
        """
        X = self._as_matrix(X)
        y = np.asarray(y, dtype=float).ravel()
        if y.shape[0] != X.shape[0]:
            raise DimensionMismatch(
                f"X has {X.shape[0]} rows but y has {y.shape[0]} entries"
            )

        self.XTX += X.T @ X
        self.XTy += X.T @ y
        self.num_samples += X.shape[0]

        if np.all(self.XTy == 0):
            return np.zeros(self.dim)

        A = self.XTX + RIDGE * np.eye(self.dim)
        self._theta = np.linalg.pinv(A) @ self.XTy
        return self._theta.copy()

    def forward(self, X) -> np.ndarray:
        """Evaluate X theta for a feature matrix (or a single row)."""
        return self._as_matrix(X) @ self._theta

    def copy(self) -> "LinearModel":
        model = LinearModel(self.dim)
        model._theta = self._theta.copy()
        model.XTX = self.XTX.copy()
        model.XTy = self.XTy.copy()
        model.num_samples = self.num_samples
        return model

    def __repr__(self) -> str:
        return f"LinearModel(dim={self.dim}, theta={self._theta}, num_samples={self.num_samples})"


def fit_linear_model(X, y, dim: Optional[int] = None) -> LinearModel:
    """Fit a fresh model on a single batch."""
    X = np.asarray(X, dtype=float)
    if dim is None:
        dim = X.shape[-1]
    model = LinearModel(dim)
    model.fit(X, y)
    return model
