from __future__ import annotations

import math
import re
from dataclasses import dataclass

import numpy as np

from ..config import BACKSUB_TOLERANCE
from ..config import LINEAR_TERM_REGEX
from ..config import PIVOT_TOLERANCE
from ..evaluator import build
from ..evaluator import evaluate_arithmetic
from ..logging_config import get_logger
from ..parser import split_equation
from ..types import DimensionMismatchError
from ..types import DomainError
from ..types import ParseError
from ..types import SingularMatrixError

logger = get_logger("solver.linear")

_EXPLICIT_COEFFICIENT_RE = re.compile(r"(\d)\*([A-Za-z])")


@dataclass
class LinearSystem:
    variables: list[str]
    A: np.ndarray
    b: np.ndarray

    @property
    def size(self) -> int:
        return len(self.variables)


def parse_linear_terms(lhs: str) -> tuple[dict[str, float], float]:
    """Split a linear left-hand side into per-variable coefficients and a constant.

    Terms have the shape ``[sign][number][variable]`` and must follow each
    other with nothing in between: ``2x-y+3`` gives ``({"x": 2, "y": -1}, 3)``.
    """
    s = _EXPLICIT_COEFFICIENT_RE.sub(r"\1\2", lhs.replace(" ", ""))
    if not s:
        raise ParseError("Empty left-hand side.")
    if s[0] not in "+-":
        s = "+" + s

    coefficients: dict[str, float] = {}
    constant = 0.0
    pos = 0
    while pos < len(s):
        match = LINEAR_TERM_REGEX.match(s, pos)
        if match is None or not (match.group(2) or match.group(3)):
            raise ParseError(f"Cannot parse term at '{s[pos:]}' in '{lhs}'")
        sign, number, name = match.groups()
        value = float(number) if number else 1.0
        if sign == "-":
            value = -value
        if name:
            coefficients[name] = coefficients.get(name, 0.0) + value
        else:
            constant += value
        pos = match.end()
    return coefficients, constant


def evaluate_rhs(rhs: str) -> float:
    """Constant right-hand side, through SymPy first, then plain arithmetic."""
    try:
        value = build(rhs).evaluate()
        if math.isfinite(value):
            return value
    except ParseError as e:
        logger.debug(f"Falling back to direct arithmetic for '{rhs}': {e}")
    value = evaluate_arithmetic(rhs)
    if not math.isfinite(value):
        raise DomainError(f"Right-hand side '{rhs}' is not a finite number.")
    return value


def build_linear_system(equations: list[str] | tuple[str, ...]) -> LinearSystem:
    variables: list[str] = []
    rows: list[dict[str, float]] = []
    rhs_values: list[float] = []
    for equation in equations:
        lhs, rhs = split_equation(equation)
        coefficients, constant = parse_linear_terms(lhs)
        for name in coefficients:
            if name not in variables:
                variables.append(name)
        rows.append(coefficients)
        rhs_values.append(evaluate_rhs(rhs) - constant)

    if len(variables) != len(equations):
        raise DimensionMismatchError(
            f"{len(equations)} equation(s) but {len(variables)} variable(s) "
            f"({', '.join(variables) or 'none'}); a unique solution needs as many "
            "equations as unknowns."
        )

    A = np.array(
        [[row.get(name, 0.0) for name in variables] for row in rows], dtype=float
    )
    b = np.array(rhs_values, dtype=float)
    return LinearSystem(variables, A, b)


def gaussian_solve(
    A: np.ndarray,
    b: np.ndarray,
    pivot_tolerance: float = PIVOT_TOLERANCE,
    backsub_tolerance: float = BACKSUB_TOLERANCE,
) -> np.ndarray:
    """Solve ``A x = b`` by elimination with partial pivoting.

    Raises:
        SingularMatrixError: A pivot column has no entry of magnitude at least
            ``pivot_tolerance``, or a diagonal entry falls below
            ``backsub_tolerance`` during back-substitution.
    """
    a = np.array(A, dtype=float)
    rhs = np.array(b, dtype=float)
    n = len(rhs)
    if a.shape != (n, n):
        raise DimensionMismatchError(f"Matrix of shape {a.shape} does not match {n} right-hand sides.")

    for k in range(n):
        pivot_row = k + int(np.argmax(np.abs(a[k:, k])))
        if abs(a[pivot_row, k]) < pivot_tolerance:
            raise SingularMatrixError(
                "Matrix is singular: the system has no unique solution."
            )
        if pivot_row != k:
            logger.debug(f"Swapping rows {k} and {pivot_row}")
            a[[k, pivot_row]] = a[[pivot_row, k]]
            rhs[[k, pivot_row]] = rhs[[pivot_row, k]]
        for i in range(k + 1, n):
            factor = a[i, k] / a[k, k]
            a[i, k:] -= factor * a[k, k:]
            rhs[i] -= factor * rhs[k]

    x = np.zeros(n)
    for i in range(n - 1, -1, -1):
        if abs(a[i, i]) < backsub_tolerance:
            raise SingularMatrixError("Division by zero during back-substitution.")
        x[i] = (rhs[i] - a[i, i + 1 :] @ x[i + 1 :]) / a[i, i]
    return x


def solve_linear_system(equations: list[str] | tuple[str, ...]) -> dict[str, float]:
    """Solve a linear system; the result follows the variables' first appearance."""
    system = build_linear_system(equations)
    logger.debug(f"Linear system over {system.variables}: A={system.A.tolist()}, b={system.b.tolist()}")
    values = gaussian_solve(system.A, system.b)
    return {name: float(value) for name, value in zip(system.variables, values)}
