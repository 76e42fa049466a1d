"""
Run a Monte Carlo simulation of the adaptive quiz CAT algorithm.

Prints a plain-text report (or JSON with --json) describing test length,
measure precision and stopping reasons for the given activity configuration.

Exit codes:
    0 - Success
    2 - Simulation error
    3 - Configuration/import error
"""
import argparse
import json
import logging
import sys
from dataclasses import asdict

logger = logging.getLogger("cat_simulation")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("--examinees", type=int, default=500)
    parser.add_argument("--theta-mean", type=float, default=0.0)
    parser.add_argument("--theta-sd", type=float, default=1.0)
    parser.add_argument("--lowest-level", type=int, default=1)
    parser.add_argument("--highest-level", type=int, default=100)
    parser.add_argument("--starting-level", type=int, default=50)
    parser.add_argument(
        "--standard-error",
        type=float,
        default=10.0,
        help="Stopping standard error as a percent (0-50)",
    )
    parser.add_argument("--min-questions", type=int, default=5)
    parser.add_argument("--max-questions", type=int, default=30)
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--json", action="store_true", help="Emit JSON instead of text")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    # Defer imports so config/import failures produce exit code 3
    try:
        from adaptivequiz.core.catalgorithm.simulation import (
            SimulationConfig,
            generate_report,
            run_simulation,
        )
        from adaptivequiz.core.logging_config import setup_logging
    except Exception as exc:
        logging.basicConfig(level=logging.INFO)
        logger.error("Failed to import required modules: %s", exc)
        return 3

    setup_logging()

    config = SimulationConfig(
        n_examinees=args.examinees,
        theta_mean=args.theta_mean,
        theta_sd=args.theta_sd,
        lowest_level=args.lowest_level,
        highest_level=args.highest_level,
        starting_level=args.starting_level,
        standard_error_percent=args.standard_error,
        min_questions=args.min_questions,
        max_questions=args.max_questions,
        seed=args.seed,
    )

    try:
        result = run_simulation(config)
    except ValueError as exc:
        logger.error("CAT simulation failed: %s", exc)
        return 2

    if args.json:
        summary = {
            "config": asdict(config),
            "mean_questions": result.mean_questions,
            "median_questions": result.median_questions,
            "mean_standard_error": result.mean_standard_error,
            "mean_bias": result.mean_bias,
            "rmse": result.rmse,
            "convergence_rate": result.convergence_rate,
            "stopping_reason_counts": result.stopping_reason_counts,
        }
        print(json.dumps(summary, indent=2))
    else:
        print(generate_report(result))

    return 0


if __name__ == "__main__":
    sys.exit(main())
