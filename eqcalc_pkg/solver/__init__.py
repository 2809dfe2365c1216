from .classify import classify
from .dispatch import solve_equation
from .dispatch import solve_single_equation
from .linear import build_linear_system
from .linear import gaussian_solve
from .linear import solve_linear_system
from .numeric import find_root
from .system import solve_nonlinear_system

__all__ = [
    "classify",
    "solve_equation",
    "solve_single_equation",
    "find_root",
    "build_linear_system",
    "gaussian_solve",
    "solve_linear_system",
    "solve_nonlinear_system",
]
