from __future__ import annotations

import argparse
import logging

from .. import config as _config
from ..config import VERSION
from ..logging_config import setup_logging
from ..session import CalculatorSession
from ..utils.formatting import print_result_pretty
from .repl_core import REPL

_logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="eqcalc",
        description="Evaluate expressions and solve equations or equation systems.",
    )
    parser.add_argument(
        "-e",
        "--eval",
        type=str,
        help="Evaluate or solve one input and exit (non-interactive)",
        dest="eval_expr",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["json", "human"],
        default="human",
        help="Output format: json (machine-readable) or human (human-readable)",
    )
    parser.add_argument(
        "-p", "--precision", type=int, help="Maximum decimal digits in output (default: 8)"
    )
    parser.add_argument(
        "--scan-range",
        type=float,
        nargs=2,
        metavar=("LO", "HI"),
        help="Root scan range for single equations (default: -1000 1000)",
    )
    parser.add_argument(
        "-v", "--version", action="store_true", help="Show program version"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging level",
    )
    parser.add_argument("--log-file", type=str, help="Write logs to file")
    return parser


def run_once(session: CalculatorSession, text: str, output_format: str = "human") -> int:
    """Solve (input with '=') or evaluate *text*, print it, return the exit code."""
    text = text.strip()
    if text.startswith(">>>"):
        text = text[3:].strip()
    if "=" in text:
        result = session.solve(text)
    else:
        result = session.evaluate(text)
    print_result_pretty(result, output_format)
    return 0 if result.get("ok") else 1


def main_entry(argv: list[str] | None = None) -> int:
    """
    Main entry point for the eqcalc CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    args = _build_parser().parse_args(argv)

    setup_logging(level=args.log_level, log_file=args.log_file)
    # Direct module variable modification; the formatter reads it at call time
    if args.precision and args.precision > 0:
        _config.OUTPUT_DECIMALS = int(args.precision)

    if args.version:
        print(VERSION)
        return 0

    session = CalculatorSession()
    if args.scan_range:
        lo, hi = args.scan_range
        if not lo < hi:
            print("Error: --scan-range needs LO < HI.")
            return 2
        session.scan_range = (lo, hi)

    if args.eval_expr is not None:
        if not args.eval_expr.strip():
            print("Error: Empty input. Please enter a valid expression or equation.")
            return 1
        return run_once(session, args.eval_expr, args.format)

    _logger.debug("Starting REPL")
    REPL(session, output_format=args.format).start()
    return 0
