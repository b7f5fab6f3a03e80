"""Simulation configuration dataclass and its YAML/JSON loader."""

import itertools
import json
import numbers
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import List, Optional

import yaml

from bincov.core.entities import Condition
from bincov.core.errors import ConfigurationError


# Experiment grid of the original coverage study
DEFAULT_PROPORTIONS: List[float] = [
    0.10, 0.09, 0.08, 0.07, 0.06, 0.05, 0.04, 0.03, 0.02, 0.01,
    0.009, 0.008, 0.007, 0.006, 0.005, 0.004, 0.003, 0.002, 0.001,
]

DEFAULT_SAMPLE_SIZES: List[int] = [
    100, 200, 300, 400, 500, 600, 700, 800, 900,
    1000, 2000, 3000, 4000, 5000, 6000, 7000, 8000, 9000,
    10000,
]

# Evaluation order of the estimators; also the column order of the report
DEFAULT_ESTIMATOR_NAMES: List[str] = [
    "normal_approximation",
    "modified_clopper_pearson",
    "wilson_score",
    "agresti_coull",
]

CONFIG_ENV_VAR = "BINCOV_CONFIG"


@dataclass
class SimulationConfig:
    """Parameters of a coverage experiment.

    Attributes:
        proportions: True success probabilities to simulate.
        sample_sizes: Numbers of trials per simulated sample.
        confidence_level: Nominal confidence level shared by all conditions.
        num_simulations: Repetitions per condition.
        random_seed: Seed given to every condition's random stream.
        estimators: Estimator names, in evaluation order.
        parallel: Run conditions on a process pool.
        max_workers: Pool size. None uses os.cpu_count().
        memoize_intervals: Cache intervals per distinct success count
            within a condition. Elapsed times then measure cache lookups.
    """
    proportions: List[float] = field(default_factory=lambda: list(DEFAULT_PROPORTIONS))
    sample_sizes: List[int] = field(default_factory=lambda: list(DEFAULT_SAMPLE_SIZES))
    confidence_level: float = 0.95
    num_simulations: int = 1_000_000
    random_seed: int = 1
    estimators: List[str] = field(default_factory=lambda: list(DEFAULT_ESTIMATOR_NAMES))
    parallel: bool = True
    max_workers: Optional[int] = None
    memoize_intervals: bool = False

    def __post_init__(self) -> None:
        if not self.proportions:
            raise ConfigurationError("proportions must not be empty")
        if not self.sample_sizes:
            raise ConfigurationError("sample_sizes must not be empty")
        _check_integer("num_simulations", self.num_simulations)
        _check_integer("random_seed", self.random_seed)
        if self.max_workers is not None:
            _check_integer("max_workers", self.max_workers)
        if self.num_simulations <= 0:
            raise ConfigurationError(
                f"num_simulations must be positive, got {self.num_simulations}"
            )
        if not self.estimators:
            raise ConfigurationError("at least one estimator is required")
        if len(set(self.estimators)) != len(self.estimators):
            raise ConfigurationError(f"duplicate estimator names in {self.estimators}")
        if self.max_workers is not None and self.max_workers <= 0:
            raise ConfigurationError(
                f"max_workers must be positive, got {self.max_workers}"
            )
        # Builds every condition once so bad p / n / confidence values fail here
        self.conditions()

    def conditions(self) -> List[Condition]:
        """Cross product of proportions and sample sizes, proportion-major."""
        return [
            Condition(p=p, num_trials=n, confidence_level=self.confidence_level)
            for p, n in itertools.product(self.proportions, self.sample_sizes)
        ]


def _check_integer(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")


def load_config(config_path: Path) -> SimulationConfig:
    """Load a simulation config from a YAML or JSON file.

    Keys missing from the file keep their defaults.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigurationError: If the format is unsupported or a value is invalid.
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        if config_path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(f)
        elif config_path.suffix == ".json":
            data = json.load(f)
        else:
            raise ConfigurationError(
                f"Unsupported config format: {config_path.suffix}. "
                "Use .yaml, .yml, or .json"
            )

    data = data or {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file must contain a mapping: {config_path}")

    try:
        return SimulationConfig(**data)
    except TypeError as e:
        raise ConfigurationError(f"Invalid config keys in {config_path}: {e}") from e


def save_config(config: SimulationConfig, config_path: Path) -> None:
    """Save a simulation config to a YAML or JSON file."""
    config_path = Path(config_path)
    if config_path.suffix not in (".yaml", ".yml", ".json"):
        raise ConfigurationError(
            f"Unsupported config format: {config_path.suffix}. "
            "Use .yaml, .yml, or .json"
        )

    config_path.parent.mkdir(parents=True, exist_ok=True)
    data = asdict(config)

    with open(config_path, "w") as f:
        if config_path.suffix == ".json":
            json.dump(data, f, indent=2)
        else:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)


def get_config_path() -> Optional[Path]:
    """Config file named by the BINCOV_CONFIG environment variable, if set."""
    if env_path := os.environ.get(CONFIG_ENV_VAR):
        return Path(env_path)
    return None
