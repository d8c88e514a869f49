# event_model/cli.py
# Command-line interface entry point (argparse)
import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd

from event_model.config.loaders import ConfigLoadError, load_simulation_config
from event_model.config.models import SimulationConfigError
from event_model.reporting.metrics import demographic_breakdown, summarize
from event_model.simulation import SimulationEngine, SimulationError
from event_model.state.event_log import save_results
from logging_config import setup_logging

# Get logger for this module
logger = logging.getLogger(__name__)

# Directory for log files
LOG_DIR = Path("output_dev/simulation_logs")

EXIT_RUN_FAILED = 1
EXIT_BAD_CONFIG = 2


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Generate a synthetic workforce event history.")

    # Required arguments
    parser.add_argument(
        "--config",
        type=str,
        required=True,
        help="Path to the YAML scenario file."
    )

    # Optional arguments
    parser.add_argument("--start", type=str, default=None, help="Override start date (YYYY-MM-DD).")
    parser.add_argument("--end", type=str, default=None, help="Override end date (YYYY-MM-DD).")
    parser.add_argument("--seed", type=int, default=None, help="Override the random seed.")
    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Directory to save output tables. Nothing is written if omitted."
    )
    parser.add_argument(
        "--format",
        choices=("parquet", "csv"),
        default="parquet",
        help="Output table format (default: parquet)."
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default=str(LOG_DIR),
        help=f"Directory to store log files (default: {LOG_DIR})"
    )

    return parser.parse_args(argv)


def initialize_logging(debug: bool = False, log_dir: Path = LOG_DIR) -> None:
    """Initialize the logging configuration.

    Args:
        debug: Whether to enable debug logging
        log_dir: Directory to store log files
    """
    setup_logging(log_dir=log_dir, debug=debug)

    # Log startup information
    logger.info("Starting event history generation")
    logger.info(f"Command line arguments: {sys.argv}")
    logger.info(f"Python version: {sys.version}")
    logger.info(f"Pandas version: {pd.__version__}")
    logger.info(f"NumPy version: {np.__version__}")

    if debug:
        logger.debug("Debug logging enabled")


def build_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {"seed": args.seed}
    date_range = {k: v for k, v in (("start", args.start), ("end", args.end)) if v is not None}
    if date_range:
        overrides["date_range"] = date_range
    return overrides


def print_summary(result) -> None:
    totals = summarize(result)
    print(f"Scenario: {result.config.scenario_name} (seed {result.seed})")
    print(f"Days simulated: {len(result.daily_events)}")
    for key, value in totals.items():
        print(f"  {key.replace('_', ' ').title()}: {value}")
    for dim, counts in demographic_breakdown(result.employees).items():
        shown = ", ".join(f"{cat}={n}" for cat, n in counts.items())
        print(f"  {dim.title()}: {shown}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the event history CLI."""
    args = parse_arguments(argv)
    initialize_logging(debug=args.debug, log_dir=Path(args.log_dir))

    try:
        config = load_simulation_config(args.config, overrides=build_overrides(args))
    except (ConfigLoadError, SimulationConfigError) as e:
        logger.error(f"Configuration error: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_BAD_CONFIG

    try:
        result = SimulationEngine(config).run()
    except SimulationConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_BAD_CONFIG
    except SimulationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUN_FAILED

    print_summary(result)
    if args.output_dir:
        written = save_results(result, args.output_dir, fmt=args.format)
        for name, path in written.items():
            print(f"  wrote {name}: {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
