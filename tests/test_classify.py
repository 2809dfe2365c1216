import pytest

from eqcalc_pkg.solver.classify import LINEAR
from eqcalc_pkg.solver.classify import NONLINEAR
from eqcalc_pkg.solver.classify import SINGLE
from eqcalc_pkg.solver.classify import classify
from eqcalc_pkg.solver.classify import is_linear_lhs
from eqcalc_pkg.solver.classify import is_system_input
from eqcalc_pkg.types import ParseError


@pytest.mark.parametrize(
    "raw,kind",
    [
        ("x + 2*y = 3", LINEAR),
        ("x^2 + y = 3", NONLINEAR),
        ("2*x = 4", SINGLE),
        ("2x + 3 = 7", SINGLE),
        ("x^2 = 9", SINGLE),
        ("x + y = 3; x - y = 1", LINEAR),
        ("x + y = 3\nx - y = 1", LINEAR),
        ("x*y = 12; x + y = 7", NONLINEAR),
        ("sin(x) + y = 1; x + y = 2", NONLINEAR),
        ("sqrt(x) + y = 4; x - y = 2", NONLINEAR),
        # Only the left-hand side decides
        ("x + y = sin(1); x - y = 0", LINEAR),
    ],
)
def test_classify(raw, kind):
    assert classify(raw).kind == kind


def test_system_keeps_equation_order():
    result = classify("x + y = 3;  x - y = 1 ;")
    assert result.equations == ("x + y = 3", "x - y = 1")
    assert result.is_system


def test_single_equation_is_not_a_system():
    result = classify("2*x = 4")
    assert result.equations == ("2*x = 4",)
    assert not result.is_system


def test_product_of_variables_is_nonlinear_with_or_without_spaces():
    assert not is_linear_lhs("a*b")
    assert not is_linear_lhs("a * b")
    assert classify("a * b = 2; a + b = 3").kind == NONLINEAR


@pytest.mark.parametrize("lhs", ["2*x", "2 * x + 3*y", "x - y", "-3x + .5y"])
def test_linear_left_hand_sides(lhs):
    assert is_linear_lhs(lhs)


@pytest.mark.parametrize("lhs", ["x^2", "x*2", "exp(x)", "log(y) + x", "x*y"])
def test_nonlinear_left_hand_sides(lhs):
    assert not is_linear_lhs(lhs)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("x = 1", False),
        ("x = 1; y = 2", True),
        ("x = 1\ny = 2", True),
        ("x = y = 2", True),
    ],
)
def test_is_system_input(raw, expected):
    assert is_system_input(raw) is expected


@pytest.mark.parametrize("raw", ["x + 1", "2 + 2"])
def test_single_input_without_equals_raises(raw):
    with pytest.raises(ParseError):
        classify(raw)
