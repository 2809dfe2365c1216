"""Nonlinear systems: multi-start damped Newton-Raphson.

Each residual ``f_i = LHS_i - RHS_i`` is compiled once. From every seed of
the initial guess bank a damped Newton iteration runs with a central
difference Jacobian; the first seed whose result also passes a residual
re-check wins.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from ..config import DEFAULT_INITIAL_GUESSES
from ..config import JACOBIAN_DET_TOLERANCE
from ..config import JACOBIAN_STEP
from ..config import LINE_SEARCH_ACCEPT_RATIO
from ..config import LINE_SEARCH_HALVINGS
from ..config import NEWTON_MAX_ITERATIONS
from ..config import NEWTON_TOLERANCE
from ..config import VERIFY_TOLERANCE
from ..evaluator import CompiledExpression
from ..evaluator import build
from ..logging_config import get_logger
from ..parser import extract_variables
from ..parser import residual_expression
from ..types import DimensionMismatchError
from ..types import DivergenceError
from ..types import DomainError
from ..types import EquationError
from ..types import SingularMatrixError

logger = get_logger("solver.system")


@dataclass
class NonlinearSystem:
    functions: list[CompiledExpression]
    variables: list[str]

    def residuals(self, x: np.ndarray) -> np.ndarray:
        bindings = dict(zip(self.variables, (float(v) for v in x)))
        return np.array([f.evaluate(bindings) for f in self.functions], dtype=float)

    def jacobian(self, x: np.ndarray, step: float = JACOBIAN_STEP) -> np.ndarray:
        """Central difference Jacobian, ``J[i][j] = d f_i / d x_j``."""
        n = len(self.variables)
        J = np.empty((len(self.functions), n))
        for j in range(n):
            forward = np.array(x, dtype=float)
            backward = np.array(x, dtype=float)
            forward[j] += step
            backward[j] -= step
            J[:, j] = (self.residuals(forward) - self.residuals(backward)) / (2 * step)
        return J


def build_nonlinear_system(equations: Sequence[str]) -> NonlinearSystem:
    variables = extract_variables(list(equations))
    if len(variables) != len(equations):
        raise DimensionMismatchError(
            f"{len(equations)} equation(s) but {len(variables)} variable(s) "
            f"({', '.join(variables) or 'none'}); a unique solution needs as many "
            "equations as unknowns."
        )
    functions = [build(residual_expression(eq), variables) for eq in equations]
    return NonlinearSystem(functions, variables)


def broadcast_guess(seed: Sequence[float], n: int) -> np.ndarray:
    """Cycle or truncate *seed* to length *n* (``(3, 4, 5)`` -> ``3, 4, 5, 3``)."""
    return np.resize(np.asarray(seed, dtype=float), n)


def damped_newton(
    system: NonlinearSystem,
    x0: np.ndarray,
    max_iterations: int = NEWTON_MAX_ITERATIONS,
    tolerance: float = NEWTON_TOLERANCE,
    step: float = JACOBIAN_STEP,
    det_tolerance: float = JACOBIAN_DET_TOLERANCE,
    halvings: int = LINE_SEARCH_HALVINGS,
    accept_ratio: float = LINE_SEARCH_ACCEPT_RATIO,
) -> np.ndarray:
    """Run damped Newton-Raphson from *x0*.

    Every iteration solves ``J delta = -F(x)`` and backtracks ``alpha`` from 1,
    halving up to *halvings* times until ``||F(x + alpha delta)||`` is finite
    and below ``accept_ratio * ||F(x)||``. The last tried point is kept even
    when no trial was accepted.

    Raises:
        DomainError: residual or Newton step not finite
        SingularMatrixError: ``|det J|`` below *det_tolerance*
        DivergenceError: no convergence within *max_iterations*
    """
    x = np.array(x0, dtype=float)
    for iteration in range(max_iterations):
        F = system.residuals(x)
        if not np.all(np.isfinite(F)):
            raise DomainError(f"Residual is not finite at {x.tolist()}")
        norm = float(np.linalg.norm(F))
        if norm < tolerance:
            logger.debug(f"Converged after {iteration} iteration(s), |F|={norm:.3e}")
            return x

        J = system.jacobian(x, step)
        det = float(np.linalg.det(J))
        if not abs(det) >= det_tolerance:
            raise SingularMatrixError(
                f"Jacobian too close to singular (det={det:.3e}) at {x.tolist()}"
            )
        try:
            delta = np.linalg.solve(J, -F)
        except np.linalg.LinAlgError as e:
            raise SingularMatrixError(f"Newton step failed: {e}") from e
        if not np.all(np.isfinite(delta)):
            raise DomainError(f"Newton step is not finite at {x.tolist()}")

        alpha = 1.0
        x_new = x + alpha * delta
        for _ in range(halvings):
            x_new = x + alpha * delta
            F_new = system.residuals(x_new)
            if np.all(np.isfinite(F_new)) and np.linalg.norm(F_new) < accept_ratio * norm:
                break
            alpha /= 2
        x = x_new

    raise DivergenceError(
        f"Newton-Raphson did not converge within {max_iterations} iterations."
    )


def verify_solution(
    system: NonlinearSystem, x: np.ndarray, tolerance: float = VERIFY_TOLERANCE
) -> bool:
    F = system.residuals(x)
    return bool(np.all(np.isfinite(F))) and float(np.linalg.norm(F)) < tolerance


def solve_nonlinear_system(
    equations: Sequence[str],
    initial_guesses: Sequence[Sequence[float]] = DEFAULT_INITIAL_GUESSES,
    max_iterations: int = NEWTON_MAX_ITERATIONS,
    verify_tolerance: float = VERIFY_TOLERANCE,
) -> dict[str, float]:
    """Solve ``n`` nonlinear equations in ``n`` unknowns.

    Args:
        equations: Preprocessed ``LHS = RHS`` strings
        initial_guesses: Seeds tried in order, each cycled to the dimension
        max_iterations: Newton budget per seed
        verify_tolerance: Residual norm the winning point must stay under

    Returns:
        Variable values keyed in order of first appearance.

    Raises:
        DimensionMismatchError: equation and variable counts differ
        DivergenceError: every seed failed; ``last_error`` holds the final cause
    """
    system = build_nonlinear_system(equations)
    n = len(system.variables)
    last_error: Exception | None = None

    for index, seed in enumerate(initial_guesses):
        x0 = broadcast_guess(seed, n)
        try:
            x = damped_newton(system, x0, max_iterations=max_iterations)
        except EquationError as e:
            logger.debug(f"Guess #{index} {x0.tolist()} failed: {e}")
            last_error = e
            continue
        if verify_solution(system, x, verify_tolerance):
            logger.debug(f"Guess #{index} {x0.tolist()} converged to {x.tolist()}")
            return {name: float(value) for name, value in zip(system.variables, x)}
        last_error = DivergenceError(
            f"Point {x.tolist()} from guess {x0.tolist()} failed the residual check."
        )
        logger.debug(str(last_error))

    detail = f" Last error: {last_error}" if last_error is not None else ""
    raise DivergenceError(
        f"No solution found from {len(initial_guesses)} initial guess(es).{detail}",
        last_error=last_error,
    )
