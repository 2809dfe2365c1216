import logging
import re
from typing import Optional

from ..api import calculate_value
from ..config import VERSION
from ..session import CalculatorSession
from ..types import EquationError
from ..utils.formatting import format_number, print_result_pretty

logger = logging.getLogger(__name__)

ANS_RE = re.compile(r"\bans\b", re.IGNORECASE)
MEMORY_COMMAND_RE = re.compile(r"^(mc|mr|ms|m\+|m-)(?:\s+(.*))?$", re.IGNORECASE)

HELP_TEXT = """\
Enter an expression to evaluate it:      2*(3+4), sqrt(2), sin(π/2)
Enter an equation to solve it:           x^2 - 4 = 0
Separate system equations with ';':      x + y = 3; x - y = 1
  ans              last answer
  mc / mr          clear / recall memory
  ms|m+|m- [v]     store, add or subtract v (default: last answer)
  debug on|off     toggle debug logging
  help, quit"""


class REPL:
    """Read-eval-print loop over a single :class:`CalculatorSession`."""

    def __init__(self, session: Optional[CalculatorSession] = None, output_format: str = "human"):
        self.session = session if session else CalculatorSession()
        self.output_format = output_format
        self.running = True

    def start(self):
        print(f"eqcalc v{VERSION}: type 'help' for commands, 'quit' to exit.")
        while self.running:
            self.loop_once()

    def loop_once(self):
        try:
            try:
                raw = input(">>> ")
            except EOFError:
                self.running = False
                return
            self.process_input(raw)
        except KeyboardInterrupt:
            print("\n[Interrupted]")
            self.running = False

    def process_input(self, text: str):
        """Dispatch one line to a command, the solver or the evaluator."""
        text = text.strip()
        if not text or text.startswith("#"):
            return
        logger.debug(f"REPL input: {text!r}")
        lowered = text.lower()
        if lowered in ("quit", "exit"):
            self.running = False
            return
        if lowered == "help":
            print(HELP_TEXT)
            return
        if lowered.startswith("debug"):
            self.handle_debug_command(lowered)
            return
        memory_match = MEMORY_COMMAND_RE.match(text)
        if memory_match:
            self.handle_memory_command(memory_match.group(1).lower(), memory_match.group(2))
            return

        text = ANS_RE.sub(f"({self.session.last_answer})", text)
        if "=" in text:
            print_result_pretty(self.session.solve(text), self.output_format)
            return
        try:
            print(self.session.calculate(text))
        except EquationError as e:
            print(f"Error: {e}")

    def handle_memory_command(self, command: str, argument: Optional[str]):
        session = self.session
        if command == "mc":
            session.memory_clear()
        elif command == "mr":
            print(format_number(session.memory_recall()))
            return
        else:
            raw_value = argument.strip() if argument else session.last_answer
            try:
                value = calculate_value(ANS_RE.sub(f"({session.last_answer})", raw_value))
            except EquationError as e:
                print(f"Error: {e}")
                return
            if command == "ms":
                session.memory_store(value)
            elif command == "m+":
                session.memory_add(value)
            else:
                session.memory_subtract(value)
        print(f"M = {format_number(session.memory)}")

    def handle_debug_command(self, cmd: str):
        parts = cmd.split()
        package_logger = logging.getLogger("eqcalc_pkg")
        if len(parts) > 1 and parts[1] in ("on", "true", "enabled"):
            package_logger.setLevel(logging.DEBUG)
            print("Debug logging enabled.")
        elif len(parts) > 1 and parts[1] in ("off", "false", "disabled"):
            package_logger.setLevel(logging.WARNING)
            print("Debug logging disabled.")
        else:
            print("Usage: debug <on|off>")
