"""Entry point for the Namelista wheel picker.

Supports two modes:
- GUI (default): build a list of items and spin the wheel to pick one
- --simulate N: headless Monte-Carlo check that every slice is equally likely
"""

import argparse
import logging
import random
import sys

from PyQt6.QtWidgets import QApplication

from app_window import AppWindow
from picker.config import WheelConfig
from picker.errors import SpinError
from picker.stats import simulate_outcomes, uniformity_report

logger = logging.getLogger(__name__)


def _parse_args(argv):
    parser = argparse.ArgumentParser(
        description="Pick an item at random with a spinning wheel.",
    )
    parser.add_argument(
        "--duration",
        type=float,
        default=5.0,
        help="Spin duration in seconds (default: 5.0)",
    )
    parser.add_argument(
        "--max-items",
        type=int,
        default=10,
        help="Maximum number of items on the wheel (default: 10)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for reproducible spins (default: unseeded)",
    )
    parser.add_argument(
        "--simulate",
        type=int,
        metavar="N",
        default=None,
        help="Run a uniformity simulation for an N-item wheel and exit",
    )
    parser.add_argument(
        "--trials",
        type=int,
        default=100_000,
        help="Number of simulated spins for --simulate (default: 100000)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    return parser.parse_args(argv)


def run_simulation(n, trials, seed, config):
    """Print per-slice frequencies for ``trials`` simulated spins."""
    counts = simulate_outcomes(n, trials, seed=seed, config=config)
    report = uniformity_report(counts)
    print(f"{trials} spins over {n} slices (expected {1 / n:.4f} each)")
    for index, (count, freq) in enumerate(zip(report.counts, report.frequencies)):
        print(f"  slice {index}: {count:7d}  {freq:.4f}")
    print(f"max deviation {report.max_deviation:.4f}, chi-square p={report.p_value:.3f}")
    return report


def main(argv=None):
    args = _parse_args(sys.argv[1:] if argv is None else argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    try:
        config = WheelConfig(duration_seconds=args.duration, max_items=args.max_items)
    except ValueError as e:
        logger.error("Invalid configuration: %s", e)
        return 2

    if args.simulate is not None:
        try:
            run_simulation(args.simulate, args.trials, args.seed, config)
        except SpinError as e:
            logger.error("Simulation failed: %s", e)
            return 2
        return 0

    rng = random.Random(args.seed) if args.seed is not None else None

    app = QApplication(sys.argv[:1])
    window = AppWindow(config=config, rng=rng)
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
