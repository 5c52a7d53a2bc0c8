"""Baseline failure-probability estimators.

An estimator is any callable `estimate(process, state) -> float`. The
importance-sampled policy adds a learned linear correction on top of it.
"""

from enum import Enum
from typing import Any, Callable, List, Sequence, Union

import numpy as np

from ..exceptions import InvalidCombinationStyle

EstimateFunction = Callable[[Any, Any], float]


def zero_estimate(process, state) -> float:
    """Baseline that assumes nothing: the correction model learns everything."""
    return 0.0


class ConstantEstimate:
    """Baseline returning the same value at every state."""

    def __init__(self, value: float):
        self.value = float(value)

    def __call__(self, process, state) -> float:
        return self.value

    def __repr__(self) -> str:
        return f"ConstantEstimate({self.value})"


class CombinationStyle(Enum):
    """How failure probabilities of subproblems are combined."""
    MEAN = "mean"
    MIN = "min"
    MAX = "max"

    @classmethod
    def parse(cls, value: Union["CombinationStyle", str]) -> "CombinationStyle":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.lower())
            except ValueError:
                pass
        raise InvalidCombinationStyle(value)


def combine_estimates(
    values: Sequence[float],
    style: Union[CombinationStyle, str] = CombinationStyle.MEAN
) -> float:
    """Combine subproblem failure probabilities into a single estimate."""
    style = CombinationStyle.parse(style)
    values = np.asarray(values, dtype=float)
    if values.size == 0:
        raise ValueError("Cannot combine an empty set of subproblem estimates")

    if style is CombinationStyle.MEAN:
        return float(np.mean(values))
    elif style is CombinationStyle.MIN:
        return float(np.min(values))
    elif style is CombinationStyle.MAX:
        return float(np.max(values))
    raise InvalidCombinationStyle(style)


class SubproblemEstimate:
    """Estimate the failure probability of a joint state from its subproblems.

    Each subproblem has a value function over the sub-state formed by the
    joint-state components listed in its index group, e.g. the pairwise
    problems of a multi-agent scene.

    Parameters
    ----------
    value_fns : list of callable
        value_fns[i](sub_state) -> failure probability of subproblem i
    index_groups : list of sequence of int
        index_groups[i] selects the components of the joint state that
        make up the state of subproblem i
    style : CombinationStyle or str
        How the subproblem values are combined
    """

    def __init__(
        self,
        value_fns: List[Callable[[Any], float]],
        index_groups: List[Sequence[int]],
        style: Union[CombinationStyle, str] = CombinationStyle.MEAN
    ):
        if len(value_fns) != len(index_groups):
            raise ValueError(
                f"Got {len(value_fns)} value functions for {len(index_groups)} index groups"
            )
        if not value_fns:
            raise ValueError("At least one subproblem is required")
        self.value_fns = list(value_fns)
        self.index_groups = [tuple(g) for g in index_groups]
        self.style = CombinationStyle.parse(style)

    def subproblem_values(self, state) -> List[float]:
        return [
            float(fn(tuple(state[i] for i in group)))
            for fn, group in zip(self.value_fns, self.index_groups)
        ]

    def __call__(self, process, state) -> float:
        return combine_estimates(self.subproblem_values(state), self.style)
