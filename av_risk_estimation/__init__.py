"""
Importance-Sampling Failure-Probability Evaluation

A library for estimating rare-event (collision) probabilities of
decision processes with adaptive importance sampling and an online-fit
linear correction of baseline failure-probability estimates.

Modules:
- Models: Decision-process oracle interface, tabular MDP, rewards
- Estimation: Incremental linear model and baseline estimators
- MonteCarlo: Importance-sampling policy, rollouts, policy evaluation
- Evaluation: Convergence against ground truth
- CaseStudies: Small processes with known failure probabilities
"""

from . import Models
from . import Estimation
from . import MonteCarlo
from . import Evaluation
from . import CaseStudies

__all__ = ['Models', 'Estimation', 'MonteCarlo', 'Evaluation', 'CaseStudies']
__version__ = '0.1.0'
