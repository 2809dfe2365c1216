"""Centralized configuration for eqcalc.

This module defines:
- Root finder scan and bisection limits
- Elimination and Newton-Raphson tolerances
- The multi-start initial guess bank
- Output formatting precision
- The reserved function table and regex patterns for parsing

Configuration can be overridden via:
- CLI flags (see cli/app.py)
- Environment variables (prefixed with EQCALC_)
"""

import math
import os
import re

import sympy as sp

# Version is defined in pyproject.toml [project] section
VERSION = "1.0.0"

# Input validation limits
MAX_INPUT_LENGTH = int(os.getenv("EQCALC_MAX_INPUT_LENGTH", "10000"))  # characters

# Cache configuration
CACHE_SIZE_PARSE = int(os.getenv("EQCALC_CACHE_SIZE_PARSE", "1024"))

# Single-variable root finder
ROOT_SCAN_STEPS = int(
    os.getenv("EQCALC_ROOT_SCAN_STEPS", "400")
)  # Uniform sample points across the scan range
ROOT_BISECT_ITERATIONS = int(
    os.getenv("EQCALC_ROOT_BISECT_ITERATIONS", "60")
)  # Bisection refinements per bracket
ROOT_TOLERANCE = float(
    os.getenv("EQCALC_ROOT_TOLERANCE", "1e-10")
)  # |f(mid)| below this ends bisection early
ROOT_SCAN_MIN = float(os.getenv("EQCALC_ROOT_SCAN_MIN", "-1000"))
ROOT_SCAN_MAX = float(os.getenv("EQCALC_ROOT_SCAN_MAX", "1000"))

# Gaussian elimination
PIVOT_TOLERANCE = float(
    os.getenv("EQCALC_PIVOT_TOLERANCE", "1e-14")
)  # Largest candidate pivot below this means singular
BACKSUB_TOLERANCE = float(
    os.getenv("EQCALC_BACKSUB_TOLERANCE", "1e-15")
)  # Diagonal entry below this during back-substitution

# Damped Newton-Raphson
NEWTON_MAX_ITERATIONS = int(os.getenv("EQCALC_NEWTON_MAX_ITERATIONS", "100"))
NEWTON_TOLERANCE = float(
    os.getenv("EQCALC_NEWTON_TOLERANCE", "1e-8")
)  # Residual norm that counts as converged
VERIFY_TOLERANCE = float(
    os.getenv("EQCALC_VERIFY_TOLERANCE", "1e-6")
)  # Residual norm required when re-checking a converged point
JACOBIAN_STEP = float(
    os.getenv("EQCALC_JACOBIAN_STEP", "1e-6")
)  # Central difference step
JACOBIAN_DET_TOLERANCE = float(os.getenv("EQCALC_JACOBIAN_DET_TOLERANCE", "1e-12"))
LINE_SEARCH_HALVINGS = int(os.getenv("EQCALC_LINE_SEARCH_HALVINGS", "10"))
LINE_SEARCH_ACCEPT_RATIO = float(
    os.getenv("EQCALC_LINE_SEARCH_ACCEPT_RATIO", "1.1")
)  # Accept a step whose norm is below ratio * current norm

# Multi-start seeds, tried in order. Each seed is cycled or truncated to the
# system dimension.
DEFAULT_INITIAL_GUESSES: tuple[tuple[float, ...], ...] = (
    (1.0,),
    (0.5,),
    (2.0,),
    (-1.0,),
    (0.1,),
    (5.0,),
    (3.0, 4.0, 5.0),
    (-2.0, 3.0, -1.0),
)

# Output formatting
OUTPUT_DECIMALS = int(os.getenv("EQCALC_OUTPUT_DECIMALS", "8"))
INTEGER_SNAP_TOLERANCE = float(os.getenv("EQCALC_INTEGER_SNAP_TOLERANCE", "1e-10"))

# Names never treated as variables (functions and the pi constant)
RESERVED_FUNCTIONS = frozenset(
    {
        "sin",
        "cos",
        "tan",
        "exp",
        "log",
        "sqrt",
        "abs",
        "asin",
        "acos",
        "atan",
        "sinh",
        "cosh",
        "tanh",
        "pi",
    }
)

# Substrings that make a left-hand side nonlinear for the classifier
NONLINEAR_MARKERS = ("sin", "cos", "tan", "exp", "log", "sqrt")

ALLOWED_SYMPY_NAMES = {
    "pi": sp.pi,
    "sqrt": sp.sqrt,
    "sin": sp.sin,
    "cos": sp.cos,
    "tan": sp.tan,
    "asin": sp.asin,
    "acos": sp.acos,
    "atan": sp.atan,
    "log": sp.log,
    "exp": sp.exp,
    "abs": sp.Abs,
    "sinh": sp.sinh,
    "cosh": sp.cosh,
    "tanh": sp.tanh,
}

PI_LITERAL = repr(math.pi)
E_LITERAL = repr(math.e)
# π and the script e that a standalone "e" is rewritten to
CONSTANT_GLYPHS = (("π", PI_LITERAL), ("ℯ", E_LITERAL))
# Where a constant touches a number, name or parenthesis an explicit "*" goes in
CONSTANT_LEFT_NEIGHBOUR_REGEX = re.compile(r"(?<=[A-Za-z0-9_.)πℯ])(?=[πℯ])")
CONSTANT_RIGHT_NEIGHBOUR_REGEX = re.compile(r"(?<=[πℯ])(?=[A-Za-z0-9_.(πℯ])")

# Numbers are consumed first so "2x" yields x and "1e5" yields nothing
NAME_TOKEN_REGEX = re.compile(
    r"(\d+(?:\.\d*)?(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?)|([A-Za-z][A-Za-z0-9_]*)"
)

# A bare e: not touching letters, digits, '_' or '.', so "exp", "2e5" and
# "x1e" keep theirs
STANDALONE_E_REGEX = re.compile(r"(?<![A-Za-z0-9_.])e(?![A-Za-z0-9_])")
EQUATION_SPLIT_REGEX = re.compile(r"[;\r\n]+")
# The one shape of '*' a linear left-hand side may contain: 2*x, 2 * x
COEFFICIENT_PRODUCT_REGEX = re.compile(r"\d+\s*\*\s*[A-Za-z]")
LINEAR_TERM_REGEX = re.compile(
    r"([+-])(\d+(?:\.\d*)?(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?)?([A-Za-z][A-Za-z0-9_]*)?"
)
