"""Importance-sampling policy driven by estimated failure probabilities.

The policy steers rollouts toward failure: each action is weighted by the
native probability of taking it times the estimated failure probability of
the state it leads to. Rollouts drawn this way are reweighted by the ratio
of native to sampling probabilities, so the weighted returns remain
unbiased estimates of the failure probability under the native policy.
"""

from typing import Any, Callable, List, Optional, Sequence, Tuple
import warnings

import numpy as np

from ..exceptions import DimensionMismatch, DegenerateWeightsWarning
from ..Estimation.baselines import EstimateFunction, zero_estimate
from ..Estimation.linear_model import LinearModel
from ..Models.decision_process import DecisionProcess


class ISPolicy:
    """Failure-seeking sampling policy with a learned linear correction.

    The failure probability of a state is estimated as
    clamp(estimate(process, s) + corrective_model.forward(feature(s)), 0, 1).

    Parameters
    ----------
    process : DecisionProcess
        The process being evaluated
    corrective_model : LinearModel
        Model of the residual between observed and estimated failure
        probability. Its dimension must match the process features.
    estimate : callable, optional
        Baseline estimate(process, state) -> float. Defaults to zero.
    on_degenerate : callable, optional
        Called as on_degenerate(state, actions) whenever every action
        gets zero weight and sampling falls back to uniform
    warn_on_degenerate : bool
        Also emit a DegenerateWeightsWarning in that case
    """

    def __init__(
        self,
        process: DecisionProcess,
        corrective_model: LinearModel,
        estimate: EstimateFunction = zero_estimate,
        on_degenerate: Optional[Callable[[Any, Sequence[Any]], None]] = None,
        warn_on_degenerate: bool = False
    ):
        feature_dim = process.feature_dim
        if feature_dim != corrective_model.dim:
            raise DimensionMismatch(
                f"process features have dimension {feature_dim} but the "
                f"corrective model has dimension {corrective_model.dim}"
            )
        self.process = process
        self.corrective_model = corrective_model
        self.estimate = estimate
        self.on_degenerate = on_degenerate
        self.warn_on_degenerate = warn_on_degenerate
        self.degenerate_count = 0

    @property
    def theta(self) -> np.ndarray:
        """Parameters of the corrective model."""
        return self.corrective_model.theta

    def correction(self, state) -> float:
        return float(self.corrective_model.forward(self.process.feature(state))[0])

    def value(self, state) -> float:
        """Estimated probability of failure from `state`, bounded to [0, 1]."""
        est = self.estimate(self.process, state)
        return min(1.0, max(0.0, est + self.correction(state)))

    def action_distribution(
        self,
        state,
        rng: np.random.Generator
    ) -> Tuple[List[Any], np.ndarray]:
        """Sampling distribution over the actions enabled at `state`.

        Draws one generative sample per action to score its successor.

        Returns
        -------
        actions : list
            Enumerated actions
        probs : np.ndarray
            Sampling probability of each action (sums to 1)
        """
        actions = list(self.process.actions(state))
        num_actions = len(actions)
        if num_actions == 0:
            raise ValueError(f"No actions available at state {state!r}")

        pf = np.empty(num_actions)
        for i, a in enumerate(actions):
            sp, _ = self.process.generative_step(state, a, rng)
            pf[i] = self.process.action_probability(state, a) * self.value(sp)

        total = pf.sum()
        if total == 0:
            self._handle_degenerate(state, actions)
            return actions, np.ones(num_actions) / num_actions
        return actions, pf / total

    def action(self, state, rng: np.random.Generator) -> Tuple[Any, float]:
        """Sample an action and return it with its sampling probability."""
        actions, probs = self.action_distribution(state, rng)
        i = rng.choice(len(actions), p=probs)
        return actions[i], float(probs[i])

    def _handle_degenerate(self, state, actions: List[Any]):
        self.degenerate_count += 1
        if self.on_degenerate is not None:
            self.on_degenerate(state, actions)
        if self.warn_on_degenerate:
            warnings.warn(
                f"All {len(actions)} actions have zero weight at state {state!r}; "
                "sampling uniformly",
                DegenerateWeightsWarning
            )
