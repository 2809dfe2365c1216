import pytest

from eqcalc_pkg import api
from eqcalc_pkg.session import CalculatorSession
from eqcalc_pkg.types import DomainError
from eqcalc_pkg.types import ParseError


@pytest.fixture
def session():
    return CalculatorSession()


def test_calculate_records_last_answer(session):
    assert session.calculate("2 × 3") == "6"
    assert session.last_answer == "6"


def test_calculate_formats_fractions(session):
    assert session.calculate("1/3") == "0.33333333"


def test_calculate_pi(session):
    assert session.calculate("π") == "3.14159265"


@pytest.mark.parametrize("expression", ["1/0", "log(-1)"])
def test_domain_errors_keep_last_answer(session, expression):
    session.calculate("5")
    with pytest.raises(DomainError):
        session.calculate(expression)
    assert session.last_answer == "5"


def test_variable_in_expression_is_parse_error(session):
    with pytest.raises(ParseError):
        session.calculate("x + 1")


def test_solve_sets_last_answer_to_first_value(session):
    result = session.solve("x + y = 3; x - y = 1")
    assert result["ok"]
    assert session.last_answer == "2"


def test_failed_solve_keeps_last_answer(session):
    session.calculate("7")
    assert not session.solve("x^2 + 1 = 0")["ok"]
    assert session.last_answer == "7"


def test_session_scan_range(session):
    session.scan_range = (1000, 3000)
    assert session.solve("x = 2500")["formatted"] == "x = 2500"


def test_memory_operations(session):
    session.memory_store(5)
    session.memory_add(2.5)
    session.memory_subtract(1)
    assert session.memory_recall() == 6.5
    session.memory_clear()
    assert session.memory_recall() == 0.0


def test_sessions_are_independent():
    first, second = CalculatorSession(), CalculatorSession()
    first.memory_store(3)
    first.calculate("10")
    assert second.memory_recall() == 0.0
    assert second.last_answer == "0"


def test_api_evaluate_result_dict():
    assert api.evaluate("2*(3+4)") == {"ok": True, "result": "14", "value": 14.0}
    failure = api.evaluate("1/0")
    assert failure["ok"] is False
    assert failure["error_code"] == "DOMAIN_ERROR"


def test_api_calculate_value():
    assert api.calculate_value("sqrt(2)^2") == pytest.approx(2.0)


def test_calculate_pi_next_to_a_number(session):
    assert session.calculate("2π") == "6.28318531"


def test_calculate_square_root_glyph(session):
    assert session.calculate("√(16) + 2√(9)") == "10"


def test_evaluate_records_last_answer(session):
    assert session.evaluate("2*(3+4)")["result"] == "14"
    assert session.last_answer == "14"
    assert session.evaluate("1/0")["ok"] is False
    assert session.last_answer == "14"
