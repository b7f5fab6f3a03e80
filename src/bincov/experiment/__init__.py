"""Experimentation layer: simulation driver and coverage analysis."""

from bincov.experiment.runner import run_experiment, simulate_condition
from bincov.experiment.analysis import (
    coverage_ci,
    summarize_coverage,
    compare_estimators,
)

__all__ = [
    "run_experiment",
    "simulate_condition",
    "coverage_ci",
    "summarize_coverage",
    "compare_estimators",
]
