"""Stateless public functions.

Everything here returns plain values or result dicts and keeps no state;
memory and the last answer live on :class:`eqcalc_pkg.session.CalculatorSession`.
"""

from __future__ import annotations

import math
from typing import Any

from .evaluator import build
from .logging_config import get_logger
from .parser import preprocess
from .parser import validate_input
from .solver import solve_equation
from .types import DomainError
from .types import EquationError
from .types import EvalResult
from .utils.formatting import format_number

logger = get_logger("api")

__all__ = ["calculate_value", "evaluate", "solve_equation", "format_number"]


def calculate_value(expression: str) -> float:
    """Evaluate a variable-free expression.

    Raises:
        ParseError: the expression is malformed or mentions a variable
        DomainError: the result is undefined (NaN) or infinite
    """
    text = preprocess(validate_input(expression))
    value = build(text).evaluate()
    if math.isnan(value):
        raise DomainError("Result is undefined.")
    if math.isinf(value):
        raise DomainError("Result is infinite.")
    return value


def evaluate(expression: str) -> dict[str, Any]:
    """Evaluate *expression* and report the outcome as a result dict."""
    try:
        value = calculate_value(expression)
    except EquationError as e:
        logger.info(f"Could not evaluate {expression!r}: [{e.error_code}] {e}")
        return EvalResult(ok=False, error=str(e), error_code=e.error_code).to_dict()
    return EvalResult(ok=True, result=format_number(value), value=value).to_dict()
