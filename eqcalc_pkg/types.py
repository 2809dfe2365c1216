from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


class EquationError(ValueError):
    """Base class for every failure the engine reports to its callers."""

    error_code = "EQUATION_ERROR"


class ParseError(EquationError):
    """Malformed equation, expression or linear term."""

    error_code = "PARSE_ERROR"


class DimensionMismatchError(EquationError):
    """Number of equations differs from the number of variables."""

    error_code = "DIMENSION_MISMATCH"


class SingularMatrixError(EquationError):
    """Pivot, diagonal or Jacobian determinant below its threshold."""

    error_code = "SINGULAR_MATRIX"


class DomainError(EquationError):
    """NaN or infinity produced mid-computation."""

    error_code = "DOMAIN_ERROR"


class DivergenceError(EquationError):
    """Newton-Raphson failed from every initial guess."""

    error_code = "DIVERGENCE"

    def __init__(self, message: str, last_error: Exception | None = None):
        super().__init__(message)
        self.last_error = last_error


class NoRootFoundError(EquationError):
    """No sign change and no exact zero over the scan range."""

    error_code = "NO_ROOT"


@dataclass
class EvalResult:
    ok: bool
    result: str | None = None
    value: float | None = None
    error: str | None = None
    error_code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        if not self.ok:
            return {"ok": False, "error": self.error, "error_code": self.error_code}
        return {"ok": True, "result": self.result, "value": self.value}


@dataclass
class SolveResult:
    ok: bool
    type: str | None = None
    solutions: dict[str, float] = field(default_factory=dict)
    formatted: str | None = None
    error: str | None = None
    error_code: str | None = None

    @classmethod
    def failure(cls, exc: EquationError) -> "SolveResult":
        return cls(ok=False, error=str(exc), error_code=exc.error_code)

    def to_dict(self) -> dict[str, Any]:
        if not self.ok:
            return {"ok": False, "error": self.error, "error_code": self.error_code}
        return {
            "ok": True,
            "type": self.type,
            "solutions": dict(self.solutions),
            "formatted": self.formatted,
        }
