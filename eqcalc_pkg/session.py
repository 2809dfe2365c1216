from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .api import calculate_value
from .api import evaluate
from .config import ROOT_SCAN_MAX
from .config import ROOT_SCAN_MIN
from .solver import solve_equation
from .utils.formatting import format_number


@dataclass
class CalculatorSession:
    """Memory register and last answer for one calculator front end.

    A session is owned by its caller. Sharing one between threads needs
    external locking; separate sessions are independent.
    """

    memory: float = 0.0
    last_answer: str = "0"
    scan_range: tuple[float, float] = field(
        default_factory=lambda: (ROOT_SCAN_MIN, ROOT_SCAN_MAX)
    )

    def calculate(self, expression: str) -> str:
        """Evaluate *expression*, remember and return the formatted result.

        Raises ParseError or DomainError; the last answer is left unchanged
        on failure.
        """
        self.last_answer = format_number(calculate_value(expression))
        return self.last_answer

    def evaluate(self, expression: str) -> dict[str, Any]:
        """Like :meth:`calculate` but reports the outcome as a result dict."""
        result = evaluate(expression)
        if result.get("ok"):
            self.last_answer = result["result"]
        return result

    def solve(self, text: str) -> dict[str, Any]:
        """Solve an equation or system; on success the first value becomes the last answer."""
        result = solve_equation(text, scan_range=self.scan_range)
        if result.get("ok") and result["solutions"]:
            first = next(iter(result["solutions"].values()))
            self.last_answer = format_number(first)
        return result

    def memory_store(self, value: float) -> None:
        self.memory = float(value)

    def memory_add(self, value: float) -> None:
        self.memory += float(value)

    def memory_subtract(self, value: float) -> None:
        self.memory -= float(value)

    def memory_clear(self) -> None:
        self.memory = 0.0

    def memory_recall(self) -> float:
        return self.memory
