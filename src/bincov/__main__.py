"""Run the coverage experiment and print one TSV line per condition.

Takes no arguments. Parameters come from the file named by BINCOV_CONFIG
when it is set, otherwise from the built-in defaults.
"""

import logging
import sys

from bincov.core.config import SimulationConfig, get_config_path, load_config
from bincov.experiment.runner import run_experiment
from bincov.results.formatting import write_tsv

logger = logging.getLogger(__name__)


def main() -> int:
    logging.basicConfig(
        level=logging.INFO,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config_path = get_config_path()
    if config_path is not None:
        logger.info(f"Loading config from {config_path}")
        config = load_config(config_path)
    else:
        config = SimulationConfig()

    reports = run_experiment(config)
    write_tsv(reports, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
