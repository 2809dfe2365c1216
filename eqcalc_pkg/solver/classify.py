from __future__ import annotations

from dataclasses import dataclass

from ..config import COEFFICIENT_PRODUCT_REGEX
from ..config import NONLINEAR_MARKERS
from ..parser import extract_variables
from ..parser import split_equations
from ..types import ParseError

SINGLE = "single"
LINEAR = "linear"
NONLINEAR = "nonlinear"


@dataclass(frozen=True)
class Classification:
    kind: str
    equations: tuple[str, ...]

    @property
    def is_system(self) -> bool:
        return self.kind != SINGLE


def is_system_input(raw: str) -> bool:
    """Input holds several equations: ';', several lines, or several '='."""
    return ";" in raw or len(raw.splitlines()) > 1 or raw.count("=") > 1


def is_linear_lhs(lhs: str) -> bool:
    """Syntactic linearity test on a left-hand side.

    Rejects '^', the function names in NONLINEAR_MARKERS (as substrings) and
    any '*' other than a number times a variable. The right-hand side is not
    inspected.
    """
    if "^" in lhs:
        return False
    if any(marker in lhs for marker in NONLINEAR_MARKERS):
        return False
    return lhs.count("*") == len(COEFFICIENT_PRODUCT_REGEX.findall(lhs))


def is_linear_system(equations: list[str] | tuple[str, ...]) -> bool:
    for equation in equations:
        lhs = equation.split("=", 1)[0]
        if not is_linear_lhs(lhs):
            return False
    return True


def classify(raw: str) -> Classification:
    """Decide whether *raw* is one equation, a linear system or a nonlinear one.

    A lone equation in more than one unknown goes through the linearity test
    like a system does, so "x + 2*y = 3" classifies as linear.
    """
    if is_system_input(raw) or (
        raw.count("=") == 1 and len(extract_variables([raw])) > 1
    ):
        equations = tuple(split_equations(raw))
        if not equations:
            raise ParseError("No equations found.")
        kind = LINEAR if is_linear_system(equations) else NONLINEAR
        return Classification(kind, equations)

    equation = raw.strip()
    if equation.count("=") != 1:
        raise ParseError("Equation must contain exactly one '='. Example: 2*x = 4")
    return Classification(SINGLE, (equation,))
