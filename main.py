# pgn_insight/main.py
"""
Main entry point for the PGN Insight application.

This script handles command-line argument parsing, sets up logging, and
either analyses a whole PGN file in batch (JSON and optional CSV output) or
prints the analysis of a single game read from standard input.
"""
import argparse
import logging
import os
import sys

# Adjust the Python path to include the project's root directory.
# This allows the script to be run directly from the project root via `python main.py`.
sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

from pgn_insight.config import settings
from pgn_insight.exceptions import PGNInsightError
from pgn_insight.game_analyzer import GameAnalyzer
from pgn_insight.pipeline import AnalysisPipeline
from pgn_insight.serialization import record_to_json
from pgn_insight.utils.logging_config import TqdmLoggingHandler, setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Turns PGN game transcripts into structured analysis records.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument(
        "input_pgn", nargs="?", default="-",
        help="Path to the input PGN file, or '-' to read a single game from stdin."
    )
    parser.add_argument(
        "-o", "--output", default=None,
        help="Path of the JSON file for the analysed games. Required for file input."
    )
    parser.add_argument(
        "-r", "--report", dest="report_path", default=None,
        help=f"Path for a CSV summary report, e.g. '{settings.DEFAULT_CUSTOM_REPORT_FILENAME}'."
    )
    parser.add_argument(
        "--strict", action="store_true",
        help="Reject a game on its first malformed movetext token instead of skipping the token."
    )
    parser.add_argument(
        "--log-level", default=settings.DEFAULT_LOG_LEVEL,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help="Set the logging level for console and file output."
    )
    parser.add_argument(
        "--log-file", default=settings.DEFAULT_LOG_FILENAME,
        help="Path to the log file."
    )
    parser.add_argument(
        "--no-console-log", action="store_true", help="Disable logging to the console."
    )
    parser.add_argument(
        "--no-file-log", action="store_true", help="Disable logging to the log file."
    )
    return parser


def main(argv=None) -> int:
    """Parses command-line arguments and runs the analysis."""
    args = build_parser().parse_args(argv)

    batch_mode = args.input_pgn != "-"
    setup_logging(
        log_level_str=args.log_level,
        log_file=args.log_file,
        log_to_console=not args.no_console_log,
        log_to_file=not args.no_file_log,
        # Batch runs draw a progress bar on stderr; log above it.
        extra_handlers=[TqdmLoggingHandler()] if batch_mode else None,
    )

    if not batch_mode:
        record = GameAnalyzer(strict=args.strict).analyze(sys.stdin.read())
        sys.stdout.write(record_to_json(record) + "\n")
        return 1 if record.error else 0

    if not args.output:
        logging.critical("An output path (-o/--output) is required when analysing a PGN file.")
        return 2

    logging.info(f"{settings.APP_NAME} starting up...")
    try:
        pipeline = AnalysisPipeline(strict=args.strict)
        pipeline.run(args.input_pgn, args.output, report_path=args.report_path)
    except PGNInsightError as e:
        logging.critical(f"Analysis failed: {e}")
        return 1
    except Exception as e:
        logging.critical(f"A fatal, unhandled exception occurred at the top level: {e}", exc_info=True)
        return 1

    logging.info(f"{settings.APP_NAME} has finished successfully.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
