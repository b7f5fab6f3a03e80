"""
bincov - coverage simulation for binomial proportion confidence intervals.

Measures, by Monte-Carlo simulation, how often the normal approximation,
Wilson score, Agresti-Coull and modified Clopper-Pearson intervals
contain the true success probability.
"""

__version__ = "0.1.0"

from bincov.core.config import SimulationConfig
from bincov.experiment.runner import run_experiment, simulate_condition

__all__ = ["SimulationConfig", "run_experiment", "simulate_condition", "__version__"]
