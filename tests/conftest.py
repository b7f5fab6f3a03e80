"""Pytest fixtures for bincov tests."""

import pytest

from bincov.core.config import SimulationConfig
from bincov.core.entities import Condition
from bincov.model.estimators import resolve_estimators


@pytest.fixture
def default_seed() -> int:
    """Seed used by the reference experiment."""
    return 1


@pytest.fixture
def condition() -> Condition:
    """Small-sample condition used across tests."""
    return Condition(p=0.05, num_trials=100, confidence_level=0.95)


@pytest.fixture
def estimators():
    """All four estimators in evaluation order."""
    return resolve_estimators([
        "normal_approximation",
        "modified_clopper_pearson",
        "wilson_score",
        "agresti_coull",
    ])


@pytest.fixture
def tiny_config() -> SimulationConfig:
    """Config small enough to run in well under a second."""
    return SimulationConfig(
        proportions=[0.1, 0.05],
        sample_sizes=[20, 50],
        num_simulations=50,
        parallel=False,
    )
