import math

import pytest

from eqcalc_pkg.solver import solve_equation
from eqcalc_pkg.solver import solve_single_equation
from eqcalc_pkg.types import DimensionMismatchError
from eqcalc_pkg.types import NoRootFoundError
from eqcalc_pkg.types import ParseError


def test_linear_system_result_dict():
    result = solve_equation("x + y = 3; x - y = 1")
    assert result == {
        "ok": True,
        "type": "linear",
        "solutions": {"x": 2.0, "y": 1.0},
        "formatted": "x = 2\ny = 1",
    }


def test_single_equation():
    result = solve_equation("2*x = 4")
    assert result["ok"]
    assert result["type"] == "single"
    assert result["solutions"]["x"] == pytest.approx(2.0, abs=1e-9)
    assert result["formatted"] == "x = 2"


def test_calculator_glyphs_are_normalized():
    result = solve_equation("x × 2 = 8")
    assert result["ok"]
    assert result["formatted"] == "x = 4"


def test_nonlinear_system():
    result = solve_equation("x^2 + y^2 = 25\nx*y = 12")
    assert result["ok"]
    assert result["type"] == "nonlinear"
    x, y = result["solutions"]["x"], result["solutions"]["y"]
    assert abs(x * x + y * y - 25) < 1e-6
    assert abs(x * y - 12) < 1e-6


def test_transcendental_single_equation():
    result = solve_equation("sin(x) = 0.5")
    assert result["ok"]
    assert abs(math.sin(result["solutions"]["x"]) - 0.5) < 1e-8


@pytest.mark.parametrize(
    "raw,error_code",
    [
        ("", "PARSE_ERROR"),
        ("x + 1", "PARSE_ERROR"),
        ("2 = 2", "PARSE_ERROR"),
        ("x = 1 = 2", "PARSE_ERROR"),
        ("x^2 + 1 = 0", "NO_ROOT"),
        ("x + y = 1; 2x + 2y = 3", "SINGULAR_MATRIX"),
        ("x + y = 1; x - y = 2; x = 3", "DIMENSION_MISMATCH"),
        ("x + y = 5", "DIMENSION_MISMATCH"),
        ("x^2 + y^2 = -1; x - y = 0", "DIVERGENCE"),
        ("x + y = 1/0; x - y = 0", "DOMAIN_ERROR"),
    ],
)
def test_error_codes(raw, error_code):
    result = solve_equation(raw)
    assert result["ok"] is False
    assert result["error_code"] == error_code
    assert result["error"]


def test_scan_range_is_honoured():
    assert solve_equation("x = 5000")["error_code"] == "NO_ROOT"
    result = solve_equation("x = 5000", scan_range=(0, 10000))
    assert result["solutions"]["x"] == pytest.approx(5000)


class TestSolveSingleEquation:
    def test_needs_a_variable(self):
        with pytest.raises(ParseError):
            solve_single_equation("3=3")

    def test_needs_exactly_one_variable(self):
        with pytest.raises(DimensionMismatchError):
            solve_single_equation("x+y=3")

    def test_syntax_error_is_reported_as_such(self):
        with pytest.raises(ParseError):
            solve_single_equation("x^^2=1")

    def test_no_root(self):
        with pytest.raises(NoRootFoundError):
            solve_single_equation("x^2+1=0")


def test_pi_beside_variable_and_number():
    result = solve_equation("xπ = 2π")
    assert result["ok"]
    assert list(result["solutions"]) == ["x"]
    assert result["formatted"] == "x = 2"


def test_linear_system_with_scientific_notation():
    result = solve_equation("1e-5*x + y = 1; x - y = 0")
    assert result["ok"]
    assert result["type"] == "linear"
    assert result["solutions"] == pytest.approx({"x": 1 / 1.00001, "y": 1 / 1.00001})
