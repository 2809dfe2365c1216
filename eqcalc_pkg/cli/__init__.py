from ..utils.formatting import print_result_pretty
from .app import main_entry
from .app import run_once
from .repl_core import REPL

__all__ = ["main_entry", "run_once", "REPL", "print_result_pretty"]
