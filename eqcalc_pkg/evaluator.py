"""Expression evaluation used by every solver.

``build`` compiles an arithmetic string over a declared set of variables into
a :class:`CompiledExpression` (SymPy parse, NumPy lambdify). Evaluation never
raises for numeric trouble: domain errors come back as NaN, overflow and
division by zero as infinity. Only malformed text raises, as ``ParseError``,
at build time.
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable, Mapping
from functools import lru_cache
from tokenize import TokenError

import numpy as np
import sympy as sp
from sympy.core.function import AppliedUndef
from sympy.parsing.sympy_parser import convert_xor
from sympy.parsing.sympy_parser import implicit_multiplication
from sympy.parsing.sympy_parser import parse_expr
from sympy.parsing.sympy_parser import standard_transformations

from .config import ALLOWED_SYMPY_NAMES
from .config import CACHE_SIZE_PARSE
from .logging_config import get_logger
from .types import ParseError

logger = get_logger("evaluator")

TRANSFORMATIONS = standard_transformations + (
    implicit_multiplication,
    convert_xor,
)

_PARSE_FAILURES = (SyntaxError, TokenError, TypeError, ValueError, AttributeError)


class CompiledExpression:
    """A parsed expression bound to an ordered tuple of variable names."""

    def __init__(self, source: str, variables: tuple[str, ...], expr: sp.Expr):
        self.source = source
        self.variables = variables
        self.expr = expr
        self._constant = _special_constant(expr)
        self._func = sp.lambdify(
            [sp.Symbol(name) for name in variables], expr, modules="numpy"
        )

    def evaluate(self, bindings: Mapping[str, float] | None = None) -> float:
        if self._constant is not None:
            return self._constant
        bindings = bindings or {}
        try:
            args = [np.float64(bindings[name]) for name in self.variables]
        except KeyError as e:
            raise ParseError(f"No value bound for variable {e.args[0]!r}") from None
        with np.errstate(all="ignore"):
            try:
                value = self._func(*args)
            except (OverflowError, ZeroDivisionError):
                return math.inf
        return _to_float(value)

    def __repr__(self) -> str:
        return f"CompiledExpression({self.source!r}, variables={self.variables!r})"


def _special_constant(expr: sp.Expr) -> float | None:
    """Map expressions SymPy already collapsed to nan/zoo/oo to a float."""
    if expr.has(sp.nan):
        return math.nan
    if expr.has(sp.zoo):
        return math.inf
    if expr == sp.S.NegativeInfinity:
        return -math.inf
    if expr.has(sp.oo, sp.S.NegativeInfinity):
        return math.inf
    return None


def _to_float(value) -> float:
    try:
        if isinstance(value, complex) or np.iscomplexobj(value):
            value = complex(value)
            if abs(value.imag) > 0:
                return math.nan
            return float(value.real)
        return float(value)
    except OverflowError:
        # Exact SymPy integers too large for a double
        return math.inf if value > 0 else -math.inf
    except (TypeError, ValueError):
        return math.nan


@lru_cache(maxsize=CACHE_SIZE_PARSE)
def _build_cached(expr_str: str, variables: tuple[str, ...]) -> CompiledExpression:
    local_dict: dict = dict(ALLOWED_SYMPY_NAMES)
    local_dict.update({name: sp.Symbol(name) for name in variables})
    try:
        expr = parse_expr(expr_str, local_dict=local_dict, transformations=TRANSFORMATIONS)
    except _PARSE_FAILURES as e:
        raise ParseError(f"Could not parse expression: '{expr_str}'. Error: {e}") from e

    if not isinstance(expr, sp.Expr):
        raise ParseError(f"Not an arithmetic expression: '{expr_str}'")
    unknown_functions = sorted(str(f.func) for f in expr.atoms(AppliedUndef))
    if unknown_functions:
        raise ParseError(f"Unknown function(s) {', '.join(unknown_functions)} in '{expr_str}'")
    unknown = sorted(s.name for s in expr.free_symbols if s.name not in variables)
    if unknown:
        raise ParseError(f"Undeclared variable(s) {', '.join(unknown)} in '{expr_str}'")
    logger.debug("Compiled %r over %s", expr_str, variables)
    return CompiledExpression(expr_str, variables, expr)


def build(expr_str: str, variables: Iterable[str] = ()) -> CompiledExpression:
    """Compile *expr_str* with *variables* as the only admissible free names."""
    if not expr_str or not expr_str.strip():
        raise ParseError("Empty expression.")
    return _build_cached(expr_str, tuple(sorted(set(variables))))


def clear_cache() -> None:
    _build_cached.cache_clear()


# ---------------------------------------------------------------------------
# Direct arithmetic fallback: numbers, + - * /, unary sign, parentheses.
# ---------------------------------------------------------------------------

_ARITH_TOKEN_RE = re.compile(r"\s*(?:(\d+(?:\.\d*)?(?:[eE][+-]?\d+)?|\.\d+)|(.))")


class _ArithmeticParser:
    def __init__(self, text: str):
        self.text = text
        self.tokens: list[tuple[str, str]] = []
        for number, op in _ARITH_TOKEN_RE.findall(text):
            if number:
                self.tokens.append(("NUM", number))
            elif op.strip():
                if op not in "+-*/()":
                    raise ParseError(f"Unexpected character {op!r} in '{text}'")
                self.tokens.append(("OP", op))
        self.pos = 0

    def peek(self) -> tuple[str, str] | None:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def consume(self) -> tuple[str, str]:
        tok = self.peek()
        if tok is None:
            raise ParseError(f"Unexpected end of expression '{self.text}'")
        self.pos += 1
        return tok

    def parse(self) -> float:
        value = self.parse_add_sub()
        if self.peek() is not None:
            raise ParseError(f"Unexpected token {self.peek()[1]!r} in '{self.text}'")
        return value

    def parse_add_sub(self) -> float:
        value = self.parse_mul_div()
        while self.peek() in (("OP", "+"), ("OP", "-")):
            tok = self.consume()
            right = self.parse_mul_div()
            value = value + right if tok[1] == "+" else value - right
        return value

    def parse_mul_div(self) -> float:
        value = self.parse_unary()
        while self.peek() in (("OP", "*"), ("OP", "/")):
            tok = self.consume()
            right = self.parse_unary()
            if tok[1] == "*":
                value *= right
            elif right == 0:
                value = math.copysign(math.inf, value) if value else math.nan
            else:
                value /= right
        return value

    def parse_unary(self) -> float:
        tok = self.peek()
        if tok in (("OP", "+"), ("OP", "-")):
            self.consume()
            value = self.parse_unary()
            return -value if tok[1] == "-" else value
        return self.parse_primary()

    def parse_primary(self) -> float:
        kind, text = self.consume()
        if kind == "NUM":
            return float(text)
        if text == "(":
            value = self.parse_add_sub()
            if self.consume() != ("OP", ")"):
                raise ParseError(f"Unbalanced parentheses in '{self.text}'")
            return value
        raise ParseError(f"Unexpected token {text!r} in '{self.text}'")


def evaluate_arithmetic(text: str) -> float:
    """Evaluate a constant ``+ - * /`` expression without SymPy."""
    if not text or not text.strip():
        raise ParseError("Empty expression.")
    return _ArithmeticParser(text).parse()
