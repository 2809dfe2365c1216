"""eqcalc package: equation-solving engine of a desktop calculator."""

__version__ = "1.0.0"

from . import api, cli, config, logging_config, parser, solver, types
from .api import calculate_value, evaluate, solve_equation
from .session import CalculatorSession
from .types import (
    DimensionMismatchError,
    DivergenceError,
    DomainError,
    EquationError,
    NoRootFoundError,
    ParseError,
    SingularMatrixError,
)

__all__ = [
    "config",
    "parser",
    "solver",
    "cli",
    "types",
    "api",
    "logging_config",
    "evaluate",
    "calculate_value",
    "solve_equation",
    "CalculatorSession",
    "EquationError",
    "ParseError",
    "DimensionMismatchError",
    "SingularMatrixError",
    "DomainError",
    "DivergenceError",
    "NoRootFoundError",
]
