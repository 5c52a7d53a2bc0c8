"""Evaluation of failure-probability estimators against ground truth."""

from .convergence import (
    mse,
    policy_values,
    ideal_model_error,
    track_convergence,
    compare_estimators,
)

__all__ = [
    "mse",
    "policy_values",
    "ideal_model_error",
    "track_convergence",
    "compare_estimators",
]
