import json

import pytest

from eqcalc_pkg import config
from eqcalc_pkg.cli import app
from eqcalc_pkg.cli import main_entry
from eqcalc_pkg.cli.repl_core import REPL
from eqcalc_pkg.session import CalculatorSession


@pytest.fixture(autouse=True)
def _no_log_handlers(monkeypatch):
    monkeypatch.setattr(app, "setup_logging", lambda **kwargs: None)
    monkeypatch.setattr(config, "OUTPUT_DECIMALS", config.OUTPUT_DECIMALS)


def test_eval_solves_system(capsys):
    assert main_entry(["-e", "x + y = 3; x - y = 1"]) == 0
    assert capsys.readouterr().out == "x = 2\ny = 1\n"


def test_eval_expression(capsys):
    assert main_entry(["-e", "2*(3+4)"]) == 0
    assert capsys.readouterr().out.strip() == "14"


def test_eval_error_exit_code(capsys):
    assert main_entry(["-e", "x^2 + 1 = 0"]) == 1
    assert capsys.readouterr().out.startswith("Error:")


def test_json_output(capsys):
    assert main_entry(["-e", "x + y = 3; x - y = 1", "--format", "json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["ok"] is True
    assert data["solutions"] == {"x": 2.0, "y": 1.0}


def test_precision_flag(capsys):
    assert main_entry(["-e", "1/3", "-p", "3"]) == 0
    assert capsys.readouterr().out.strip() == "0.333"


def test_scan_range_flag(capsys):
    assert main_entry(["-e", "x = 5000", "--scan-range", "0", "10000"]) == 0
    assert capsys.readouterr().out.strip() == "x = 5000"


def test_bad_scan_range(capsys):
    assert main_entry(["-e", "x = 1", "--scan-range", "5", "1"]) == 2
    assert "LO < HI" in capsys.readouterr().out


def test_empty_eval(capsys):
    assert main_entry(["-e", "  "]) == 1


def test_version(capsys):
    assert main_entry(["--version"]) == 0
    assert capsys.readouterr().out.strip() == config.VERSION


class TestRepl:
    def _run(self, capsys, *lines, session=None):
        repl = REPL(session or CalculatorSession())
        for line in lines:
            repl.process_input(line)
        return repl, capsys.readouterr().out.splitlines()

    def test_expression_and_ans(self, capsys):
        _, out = self._run(capsys, "2+3", "ans*2")
        assert out == ["5", "10"]

    def test_equation_sets_ans(self, capsys):
        repl, out = self._run(capsys, "x^2 = 9", "ans + 1")
        assert out == ["x = -3", "-2"]
        assert repl.session.last_answer == "-2"

    def test_memory_commands(self, capsys):
        _, out = self._run(capsys, "ms 5", "m+ 2", "m- 0.5", "mr", "mc", "mr")
        assert out == ["M = 5", "M = 7", "M = 6.5", "6.5", "M = 0", "0"]

    def test_memory_defaults_to_last_answer(self, capsys):
        _, out = self._run(capsys, "4*4", "ms")
        assert out == ["16", "M = 16"]

    def test_error_is_printed(self, capsys):
        _, out = self._run(capsys, "1/0")
        assert out == ["Error: Result is infinite."]

    def test_comments_and_blank_lines_are_ignored(self, capsys):
        _, out = self._run(capsys, "", "# note")
        assert out == []

    def test_quit(self, capsys):
        repl, _ = self._run(capsys, "quit")
        assert repl.running is False

    def test_debug_toggle(self, capsys):
        _, out = self._run(capsys, "debug on", "debug off", "debug")
        assert out == [
            "Debug logging enabled.",
            "Debug logging disabled.",
            "Usage: debug <on|off>",
        ]

    def test_start_reads_until_eof(self, capsys, monkeypatch):
        lines = iter(["1+1"])

        def fake_input(prompt):
            try:
                return next(lines)
            except StopIteration:
                raise EOFError

        monkeypatch.setattr("builtins.input", fake_input)
        REPL().start()
        out = capsys.readouterr().out.splitlines()
        assert out[-1] == "2"


def test_run_once_records_last_answer(capsys):
    session = CalculatorSession()
    assert app.run_once(session, "6*7") == 0
    assert session.last_answer == "42"
    assert app.run_once(session, "1/0") == 1
    assert session.last_answer == "42"
