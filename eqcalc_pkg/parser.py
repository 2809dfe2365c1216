"""Input normalization, equation splitting and variable extraction."""

from __future__ import annotations

from .config import CONSTANT_GLYPHS
from .config import CONSTANT_LEFT_NEIGHBOUR_REGEX
from .config import CONSTANT_RIGHT_NEIGHBOUR_REGEX
from .config import EQUATION_SPLIT_REGEX
from .config import MAX_INPUT_LENGTH
from .config import NAME_TOKEN_REGEX
from .config import RESERVED_FUNCTIONS
from .config import STANDALONE_E_REGEX
from .types import ParseError

_SYMBOL_REPLACEMENTS = (
    ("(−)", "(-1)"),
    ("×", "*"),
    ("÷", "/"),
    ("√", "sqrt"),
    ("（", "("),
    ("）", ")"),
)


def preprocess(raw: str) -> str:
    """Normalize calculator glyphs into plain arithmetic.

    Replaces the negation key ``(−)``, ``×``, ``÷``, ``√`` and full-width
    parentheses with their ASCII forms and strips ASCII spaces. ``π`` and a
    standalone ``e`` become their numeric values, joined to a neighbouring
    number, name or parenthesis with an explicit ``*`` (``2π`` is ``2*3.14...``).
    ``e`` inside names (``exp``, ``speed``) or numbers (``2e5``) is left alone.
    """
    if not raw:
        return ""
    s = raw
    for glyph, replacement in _SYMBOL_REPLACEMENTS:
        s = s.replace(glyph, replacement)
    # Before spaces go, so "2 e" stays a standalone e
    s = STANDALONE_E_REGEX.sub("ℯ", s)
    s = s.replace(" ", "")
    s = CONSTANT_LEFT_NEIGHBOUR_REGEX.sub("*", s)
    s = CONSTANT_RIGHT_NEIGHBOUR_REGEX.sub("*", s)
    for glyph, literal in CONSTANT_GLYPHS:
        s = s.replace(glyph, literal)
    return s


def validate_input(text: str) -> str:
    if text is None or not text.strip():
        raise ParseError("Input cannot be empty.")
    if len(text) > MAX_INPUT_LENGTH:
        raise ParseError(
            f"Input too long ({len(text)} characters, limit {MAX_INPUT_LENGTH})."
        )
    return text


def split_equations(raw: str) -> list[str]:
    """Split on ';' or line breaks, trimming and dropping empty pieces."""
    return [part.strip() for part in EQUATION_SPLIT_REGEX.split(raw) if part.strip()]


def split_equation(equation: str) -> tuple[str, str]:
    """Return ``(lhs, rhs)`` of an equation with exactly one ``=``."""
    count = equation.count("=")
    if count == 0:
        raise ParseError(f"Equation must contain '=': '{equation}'")
    if count > 1:
        raise ParseError(f"Equation must contain exactly one '=': '{equation}'")
    lhs, rhs = equation.split("=", 1)
    lhs, rhs = lhs.strip(), rhs.strip()
    if not lhs or not rhs:
        raise ParseError(f"Both sides of the equation must have expressions: '{equation}'")
    return lhs, rhs


def extract_variables(equations: list[str]) -> list[str]:
    """Distinct identifiers across *equations*, in order of first appearance.

    Reserved function names are skipped. Numbers are tokenized as a whole, so
    the ``e`` of ``1e-5`` is never taken for a variable.
    """
    seen: dict[str, None] = {}
    for equation in equations:
        for _number, name in NAME_TOKEN_REGEX.findall(equation):
            if name and name not in RESERVED_FUNCTIONS and name not in seen:
                seen[name] = None
    return list(seen)


def residual_expression(equation: str) -> str:
    """``LHS = RHS`` as the residual string ``(LHS)-(RHS)``."""
    lhs, rhs = split_equation(equation)
    return f"({lhs})-({rhs})"
