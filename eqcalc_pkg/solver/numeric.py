from __future__ import annotations

import math

import numpy as np

from ..config import ROOT_BISECT_ITERATIONS
from ..config import ROOT_SCAN_MAX
from ..config import ROOT_SCAN_MIN
from ..config import ROOT_SCAN_STEPS
from ..config import ROOT_TOLERANCE
from ..evaluator import CompiledExpression
from ..evaluator import build
from ..logging_config import get_logger
from ..parser import residual_expression
from ..types import ParseError

logger = get_logger("solver.numeric")


def _bisect(
    func: CompiledExpression,
    var_name: str,
    a: float,
    b: float,
    fa: float,
    iterations: int,
    tolerance: float,
) -> float:
    for _ in range(iterations):
        mid = (a + b) / 2
        fmid = func.evaluate({var_name: mid})
        if abs(fmid) < tolerance:
            return mid
        if fa * fmid < 0:
            b = mid
        else:
            a, fa = mid, fmid
    return (a + b) / 2


def find_root(
    equation: str,
    var_name: str,
    lo: float = ROOT_SCAN_MIN,
    hi: float = ROOT_SCAN_MAX,
    steps: int = ROOT_SCAN_STEPS,
    iterations: int = ROOT_BISECT_ITERATIONS,
    tolerance: float = ROOT_TOLERANCE,
) -> float | None:
    """Find one real root of a single-variable equation inside ``[lo, hi]``.

    Splits the range into ``steps`` equal segments and samples their ends left
    to right. An exact zero at a sample is returned at once; the first sign
    change between two finite neighbours is refined by bisection. Points where
    the residual is NaN or infinite are stepped over and never used as bracket
    ends.

    Args:
        equation: ``LHS = RHS`` text, already preprocessed
        var_name: The one unknown
        lo, hi: Scan range
        steps: Number of scan segments
        iterations: Bisection budget per bracket
        tolerance: ``|f(mid)|`` that ends bisection early

    Returns:
        The root, or None when no sign change or zero was seen, or the
        equation does not parse.
    """
    try:
        func = build(residual_expression(equation), [var_name])
    except ParseError as e:
        logger.warning(f"Root scan aborted, equation does not parse: {e}")
        return None

    prev_x: float | None = None
    prev_y = math.nan
    for x in np.linspace(lo, hi, steps + 1):
        x = float(x)
        y = func.evaluate({var_name: x})
        if not math.isfinite(y):
            prev_x, prev_y = x, y
            continue
        if y == 0:
            return x
        if prev_x is not None and math.isfinite(prev_y) and prev_y * y < 0:
            logger.debug(f"Sign change for {var_name} in [{prev_x}, {x}]")
            return _bisect(func, var_name, prev_x, x, prev_y, iterations, tolerance)
        prev_x, prev_y = x, y
    return None
