"""Core foundation layer: data model, errors, experiment configuration."""

from bincov.core.entities import Condition, TrialOutcome, Interval
from bincov.core.errors import BincovError, ConfigurationError, NumericalDomainError
from bincov.core.config import SimulationConfig, load_config, save_config

__all__ = [
    "Condition",
    "TrialOutcome",
    "Interval",
    "BincovError",
    "ConfigurationError",
    "NumericalDomainError",
    "SimulationConfig",
    "load_config",
    "save_config",
]
