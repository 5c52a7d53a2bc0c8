"""Absorbing chain case study with a closed-form failure probability."""

from .chain import (
    chain_states,
    chain_feature,
    build_absorbing_chain,
    chain_failure_probability,
    FAIL,
    CONTINUE,
    CRASH,
)

__all__ = [
    'chain_states',
    'chain_feature',
    'build_absorbing_chain',
    'chain_failure_probability',
    'FAIL',
    'CONTINUE',
    'CRASH',
]
