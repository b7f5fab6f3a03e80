"""Model layer: interval estimators and the binomial trial generator."""

from bincov.model.estimators import (
    BinomialConfidenceInterval,
    NormalApproximationInterval,
    WilsonScoreInterval,
    AgrestiCoullInterval,
    ModifiedClopperPearsonInterval,
    MemoizedEstimator,
    ESTIMATORS,
    resolve_estimators,
)
from bincov.model.trials import TrialGenerator, create_rng

__all__ = [
    "BinomialConfidenceInterval",
    "NormalApproximationInterval",
    "WilsonScoreInterval",
    "AgrestiCoullInterval",
    "ModifiedClopperPearsonInterval",
    "MemoizedEstimator",
    "ESTIMATORS",
    "resolve_estimators",
    "TrialGenerator",
    "create_rng",
]
