# Directory: main.py
"""
Command-line entry point for the employee pair finder.
"""
import argparse
import logging
import sys
import time
from datetime import datetime
from typing import List, Optional

from analysis.formatting import overlaps_to_dataframe, top_pair_message
from analysis.overlap import all_overlaps, top_pair, totals_from_overlaps
from config import LOG_LEVELS, load_config
from exceptions import PairFinderError
from parsing.loader import load_records
from utils.generators import DataGenerator
from utils.logger import logger, setup_logger
from visualization import export_overlaps_to_excel

BANNER = "--- Employee Pair Finder (CLI Mode: Top Pair Only) ---"


def parse_as_of(value: str) -> datetime:
    """argparse type for --as-of."""
    try:
        return datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got '{value}'")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Find the employees who worked together the longest on common projects"
    )
    parser.add_argument("csv_file", nargs="?", help="Path to the assignments CSV file")
    parser.add_argument("--config", help="Path to configuration file")
    parser.add_argument(
        "--all", action="store_true", help="Also print every per-project overlap"
    )
    parser.add_argument("--export", metavar="XLSX", help="Export results to an Excel file")
    parser.add_argument(
        "--as-of",
        type=parse_as_of,
        help="Evaluation date for ongoing assignments (default: now)",
    )
    parser.add_argument(
        "--generate-sample",
        metavar="PATH",
        help="Write a generated sample CSV to PATH and exit",
    )
    parser.add_argument(
        "--rows", type=int, default=50, help="Number of rows for --generate-sample"
    )
    parser.add_argument("--seed", type=int, default=42, help="Seed for --generate-sample")
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default=None,
        help="Set the logging level (overrides the config file)",
    )
    parser.add_argument("--log-file", help="Also write logs to this file")
    return parser


def run(args: argparse.Namespace) -> int:
    """
    Run the CLI with parsed arguments.

    Returns:
        int: Process exit status
    """
    print(BANNER)

    try:
        config = load_config(args.config)
    except PairFinderError as e:
        print(f"An error occurred: {e}")
        return 1

    log_level = getattr(logging, (args.log_level or config.log_level).upper())
    setup_logger(level=log_level, log_file=args.log_file)

    if not args.csv_file and not args.generate_sample:
        print("Error: Missing CSV file argument.")
        print("Usage: python main.py <path/to/your/file.csv>")
        return 1

    try:
        if args.generate_sample:
            generator = DataGenerator(seed=args.seed, app_config=config)
            generator.write_csv(args.generate_sample, num_rows=args.rows)
            print(f"Sample file written to {args.generate_sample}")
            return 0

        records = load_records(args.csv_file, config)
        as_of = args.as_of or datetime.now()
        result = top_pair(records, as_of)

        print("\n--- Final Result --- ")
        print(top_pair_message(result))

        if args.all or args.export:
            overlaps = all_overlaps(records, as_of)
            if args.all:
                print("\n--- All Common Project Overlaps ---")
                if overlaps:
                    print(overlaps_to_dataframe(overlaps).to_string(index=False))
                else:
                    print("(none)")
            if args.export:
                if not export_overlaps_to_excel(
                    args.export, overlaps, totals_from_overlaps(overlaps)
                ):
                    print(f"An error occurred: could not write {args.export}")
                    return 1
                print(f"Results exported to {args.export}")
    except (PairFinderError, OSError) as e:
        logger.debug("Run aborted", exc_info=True)
        print(f"An error occurred: {e}")
        return 1

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point."""
    args = build_parser().parse_args(argv)
    return run(args)


if __name__ == "__main__":
    start_time = time.time()
    status = main()
    logger.debug("--- %s seconds ---" % round((time.time() - start_time), 2))
    sys.exit(status)
