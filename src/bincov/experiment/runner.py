"""Per-condition simulation loop and the parallel experiment runner."""

import logging
import os
import time
from concurrent.futures import ProcessPoolExecutor
from functools import partial
from typing import Callable, List, Optional, Sequence

from bincov.core.config import SimulationConfig
from bincov.core.entities import Condition
from bincov.model.estimators import (
    BinomialConfidenceInterval,
    MemoizedEstimator,
    resolve_estimators,
)
from bincov.model.trials import TrialGenerator, create_rng
from bincov.results.collector import CoverageAccumulator, Report, Timer

logger = logging.getLogger(__name__)


def simulate_condition(
    condition: Condition,
    estimators: Sequence[BinomialConfidenceInterval],
    num_simulations: int,
    seed: int,
    memoize_intervals: bool = False,
    timer: Optional[Timer] = time.perf_counter,
) -> Report:
    """Run all repetitions for one condition.

    The condition gets its own random stream seeded with ``seed``; every
    condition of an experiment uses the same seed, so all of them are
    driven by the same uniform sequence. Repetitions are sequential and
    each outcome is evaluated by every estimator, in order.

    Args:
        condition: Experiment configuration to simulate.
        estimators: Estimators in evaluation order.
        num_simulations: Number of repetitions.
        seed: Seed of the condition's random stream.
        memoize_intervals: Cache intervals per success count.
        timer: Clock for estimator timing. None disables timing.

    Returns:
        Report with one accumulator per estimator.
    """
    if memoize_intervals:
        estimators = [MemoizedEstimator(estimator) for estimator in estimators]

    rng = create_rng(seed)
    generator = TrialGenerator(condition)
    accumulators = [CoverageAccumulator(label=estimator.label) for estimator in estimators]

    for _ in range(num_simulations):
        outcome = generator.draw(rng)
        accumulators = [
            acc.record(estimator, outcome, timer)
            for acc, estimator in zip(accumulators, estimators)
        ]

    return Report(condition=condition, accumulators=tuple(accumulators))


def run_experiment(
    config: SimulationConfig,
    progress_callback: Optional[Callable[[int, int], None]] = None,
) -> List[Report]:
    """Simulate every condition of an experiment.

    Conditions run independently, on a process pool when
    ``config.parallel`` is set. Reports come back in the declared
    (proportion, sample size) order regardless of completion order.

    Args:
        config: Experiment configuration.
        progress_callback: Optional callback(done, total) invoked as each
            report is collected.

    Returns:
        One Report per condition.

    Raises:
        ConfigurationError: If the config names an unknown estimator.
    """
    estimators = resolve_estimators(config.estimators)
    conditions = config.conditions()
    total = len(conditions)

    run_condition = partial(
        simulate_condition,
        estimators=estimators,
        num_simulations=config.num_simulations,
        seed=config.random_seed,
        memoize_intervals=config.memoize_intervals,
    )

    logger.info(
        f"Simulating {total} conditions x {config.num_simulations} repetitions "
        f"with {len(estimators)} estimators"
    )
    start_time = time.time()

    reports: List[Report] = []

    if config.parallel and total > 1:
        max_workers = config.max_workers or os.cpu_count() or 1
        logger.info(f"Using a process pool of {max_workers} workers")
        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            for report in executor.map(run_condition, conditions):
                reports.append(report)
                _log_progress(report, len(reports), total, progress_callback)
    else:
        for condition in conditions:
            report = run_condition(condition)
            reports.append(report)
            _log_progress(report, len(reports), total, progress_callback)

    logger.info(f"Experiment finished in {time.time() - start_time:.1f}s")
    return reports


def _log_progress(
    report: Report,
    done: int,
    total: int,
    progress_callback: Optional[Callable[[int, int], None]],
) -> None:
    failures = sum(acc.num_failures for acc in report.accumulators)
    logger.info(f"[{done}/{total}] {report.condition} ({failures} estimator failures)")

    if progress_callback is not None:
        progress_callback(done, total)
