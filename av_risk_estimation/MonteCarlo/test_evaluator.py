"""Tests for the policy-evaluation loop and failure-probability estimates."""

import pytest
import numpy as np

from ..Estimation import LinearModel
from ..CaseStudies.AbsorbingChain import (
    build_absorbing_chain,
    chain_failure_probability,
    FAIL,
)
from .evaluator import estimate_failure_probability, mc_policy_eval
from .is_policy import ISPolicy


def failure_indicator_estimate(process, state):
    return 1.0 if state == FAIL else 0.0


class TestPolicyEvaluation:

    def test_first_iteration_fits_weighted_failure(self):
        """Failure-seeking rollouts crash with weight q, so theta becomes q."""
        process = build_absorbing_chain(length=2, crash_probability=0.3)
        policy = ISPolicy(process, LinearModel(1), failure_indicator_estimate)

        model = mc_policy_eval(policy, 1, 50, seed=0, verbose=False)

        assert model is policy.corrective_model
        assert model.num_samples == 50
        assert model.theta[0] == pytest.approx(0.3, abs=1e-6)

    @pytest.mark.parametrize("estimate", [
        None,
        failure_indicator_estimate,
    ])
    def test_two_state_chain_converges(self, estimate):
        q = 0.3
        process = build_absorbing_chain(length=2, crash_probability=q)
        if estimate is None:
            policy = ISPolicy(process, LinearModel(1))
        else:
            policy = ISPolicy(process, LinearModel(1), estimate)

        mc_policy_eval(policy, 20, 50, seed=123, verbose=False)

        truth = chain_failure_probability(0, length=2, crash_probability=q)
        assert truth == pytest.approx(q)
        assert policy.value(0) == pytest.approx(truth, abs=0.05)

    def test_callback_per_iteration(self):
        process = build_absorbing_chain(length=3, crash_probability=0.2)
        policy = ISPolicy(process, LinearModel(1))
        seen = []

        def callback(iteration, pol, batch):
            seen.append((iteration, batch.num_episodes, pol.theta.copy()))

        mc_policy_eval(policy, 3, 10, seed=1, verbose=False, callback=callback)

        assert [s[0] for s in seen] == [1, 2, 3]
        assert all(s[1] == 10 for s in seen)
        assert np.allclose(seen[-1][2], policy.theta)

    def test_model_matches_single_batch_fit(self):
        """Iterative fitting accumulates every batch."""
        process = build_absorbing_chain(length=3, crash_probability=0.2)
        policy = ISPolicy(process, LinearModel(1))
        batches = []

        mc_policy_eval(policy, 4, 10, seed=9, verbose=False,
                       callback=lambda i, p, b: batches.append(b))

        reference = LinearModel(1)
        reference.fit(
            np.vstack([b.X for b in batches]),
            np.concatenate([b.targets() for b in batches]),
        )
        assert np.allclose(policy.theta, reference.theta, rtol=1e-5, atol=1e-5)

    def test_terminal_start_skips_fit(self):
        process = build_absorbing_chain(length=3, start=2)
        policy = ISPolicy(process, LinearModel(1))

        mc_policy_eval(policy, 2, 5, seed=0, verbose=False)

        assert policy.corrective_model.num_samples == 0
        assert np.all(policy.theta == 0)

    def test_verbose_output(self, capsys):
        process = build_absorbing_chain(length=2, crash_probability=0.3)
        policy = ISPolicy(process, LinearModel(1))

        mc_policy_eval(policy, 2, 3, seed=0, verbose=True)

        out = capsys.readouterr().out
        assert "iteration: 1" in out
        assert "iteration: 2" in out


class TestFailureProbabilityEstimate:

    def test_unbiased_under_uniform_sampling(self):
        length, q = 4, 0.1
        process = build_absorbing_chain(length=length, crash_probability=q)
        policy = ISPolicy(process, LinearModel(1))

        result = estimate_failure_probability(policy, 4000, seed=2024)

        truth = chain_failure_probability(0, length, q)
        assert result.num_episodes == 4000
        assert result.std_error > 0
        assert abs(result.estimate - truth) < 5 * result.std_error
        assert abs(result.estimate - truth) < 0.05

    def test_confidence_interval(self):
        process = build_absorbing_chain(length=3, crash_probability=0.2)
        policy = ISPolicy(process, LinearModel(1))

        result = estimate_failure_probability(policy, 200, seed=0, confidence=0.9)

        low, high = result.confidence_interval
        assert low <= result.estimate <= high
        assert result.confidence == 0.9
        assert "90% CI" in str(result)

    def test_exact_with_failure_seeking_baseline(self):
        """Every episode crashes immediately and carries weight q."""
        process = build_absorbing_chain(length=2, crash_probability=0.3)
        policy = ISPolicy(process, LinearModel(1), failure_indicator_estimate)

        result = estimate_failure_probability(policy, 50, seed=0)

        assert result.estimate == pytest.approx(0.3)
        assert result.std_error == pytest.approx(0.0, abs=1e-12)

    def test_terminal_start(self):
        process = build_absorbing_chain(length=3, start=2)
        policy = ISPolicy(process, LinearModel(1))

        result = estimate_failure_probability(policy, 10, seed=0)

        assert result.estimate == 0.0

    @pytest.mark.parametrize("kwargs", [
        {"num_episodes": 0},
        {"num_episodes": 10, "confidence": 1.5},
    ])
    def test_invalid_arguments(self, kwargs):
        policy = ISPolicy(build_absorbing_chain(), LinearModel(1))
        with pytest.raises(ValueError):
            estimate_failure_probability(policy, **kwargs)
