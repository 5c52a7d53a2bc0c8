"""Failure-probability estimators: baselines and the online linear correction."""

from .linear_model import LinearModel, fit_linear_model, RIDGE
from .baselines import (
    EstimateFunction,
    zero_estimate,
    ConstantEstimate,
    CombinationStyle,
    combine_estimates,
    SubproblemEstimate,
)

__all__ = [
    "LinearModel",
    "fit_linear_model",
    "RIDGE",
    "EstimateFunction",
    "zero_estimate",
    "ConstantEstimate",
    "CombinationStyle",
    "combine_estimates",
    "SubproblemEstimate",
]
