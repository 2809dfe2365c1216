#!/usr/bin/env python3
"""
eqcalc: calculator equation-solving engine

Main entry point for the eqcalc command line. This file is a thin wrapper
that delegates all functionality to the eqcalc_pkg package.

Usage:
    python eqcalc.py                                 # Interactive REPL
    python eqcalc.py -e "x^2 - 4 = 0"                # Solve one equation
    python eqcalc.py -e "x + y = 3; x - y = 1"       # Solve a system
    python eqcalc.py -e "2*(3+4)" --format json      # Evaluate, JSON output
    python eqcalc.py --help                          # Show help
"""

from __future__ import annotations

import sys


def main() -> int:
    """
    Main entry point for eqcalc.

    Delegates to eqcalc_pkg.cli, which handles argument parsing, solving,
    evaluation and output formatting.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    try:
        from eqcalc_pkg.cli import main_entry

        return main_entry(sys.argv[1:])
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
        return 1
    except ImportError as e:
        print(f"Error: Failed to import eqcalc_pkg: {e}")
        print("Please ensure all dependencies are installed: pip install -e .")
        return 1


if __name__ == "__main__":
    sys.exit(main())
