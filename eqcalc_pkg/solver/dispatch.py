from __future__ import annotations

from typing import Any

from ..config import ROOT_SCAN_MAX
from ..config import ROOT_SCAN_MIN
from ..evaluator import build
from ..logging_config import get_logger
from ..parser import extract_variables
from ..parser import preprocess
from ..parser import residual_expression
from ..parser import validate_input
from ..types import DimensionMismatchError
from ..types import EquationError
from ..types import NoRootFoundError
from ..types import ParseError
from ..types import SolveResult
from ..utils.formatting import format_solution
from .classify import LINEAR
from .classify import SINGLE
from .classify import classify
from .linear import solve_linear_system
from .numeric import find_root
from .system import solve_nonlinear_system

logger = get_logger("solver.dispatch")


def solve_single_equation(
    equation: str,
    scan_range: tuple[float, float] | None = None,
) -> dict[str, float]:
    """Solve one preprocessed equation in exactly one unknown by root scanning."""
    variables = extract_variables([equation])
    if not variables:
        raise ParseError("No variable found. Include a letter like x, y, or z.")
    if len(variables) > 1:
        raise DimensionMismatchError(
            f"A single equation needs exactly one unknown, found {len(variables)} "
            f"({', '.join(variables)})."
        )
    var_name = variables[0]
    # Surface syntax errors as such rather than as a failed scan
    build(residual_expression(equation), [var_name])

    lo, hi = scan_range if scan_range is not None else (ROOT_SCAN_MIN, ROOT_SCAN_MAX)
    root = find_root(equation, var_name, lo, hi)
    if root is None:
        raise NoRootFoundError(
            f"No solution found for {var_name} in [{lo:g}, {hi:g}]."
        )
    return {var_name: root}


def solve_equation(
    raw: str,
    scan_range: tuple[float, float] | None = None,
) -> dict[str, Any]:
    """
    Solve an equation or a system of equations.

    Args:
        raw: One equation ("2*x = 4") or several separated by ';' or newlines
        scan_range: Root scan range for single equations (default from config)

    Returns:
        Dictionary with keys:
            - ok: Boolean indicating success
            - type: "single", "linear" or "nonlinear"
            - solutions: Variable values in order of first appearance
            - formatted: One "name = value" line per variable
            - error: Error message if ok is False
            - error_code: Stable error kind if ok is False
    """
    try:
        text = preprocess(validate_input(raw))
        classification = classify(text)
        logger.debug(f"Classified {raw!r} as {classification.kind}")
        if classification.kind == SINGLE:
            solutions = solve_single_equation(classification.equations[0], scan_range)
        elif classification.kind == LINEAR:
            solutions = solve_linear_system(classification.equations)
        else:
            solutions = solve_nonlinear_system(classification.equations)
    except EquationError as e:
        logger.info(f"Could not solve {raw!r}: [{e.error_code}] {e}")
        return SolveResult.failure(e).to_dict()

    return SolveResult(
        ok=True,
        type=classification.kind,
        solutions=solutions,
        formatted=format_solution(solutions),
    ).to_dict()
