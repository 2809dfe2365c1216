import json
import math
from typing import Any

from .. import config
from ..config import INTEGER_SNAP_TOLERANCE


def format_number(value: float, decimals: int | None = None) -> str:
    """Render a result the way the calculator display shows it.

    Values within INTEGER_SNAP_TOLERANCE of an integer print as that integer;
    everything else gets up to *decimals* digits with trailing zeros and a
    trailing decimal point removed. *decimals* defaults to
    ``config.OUTPUT_DECIMALS`` as it is at call time.
    """
    if decimals is None:
        decimals = config.OUTPUT_DECIMALS
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    nearest = round(value)
    if abs(value - nearest) < INTEGER_SNAP_TOLERANCE:
        return str(int(nearest))
    text = f"{value:.{decimals}f}".rstrip("0").rstrip(".")
    if text in ("-0", ""):
        return "0"
    return text


def format_solution(solutions: dict[str, float], decimals: int | None = None) -> str:
    """One ``name = value`` line per variable, in the mapping's order."""
    return "\n".join(
        f"{name} = {format_number(value, decimals)}" for name, value in solutions.items()
    )


def print_result_pretty(result: dict[str, Any], output_format: str = "human") -> None:
    """Print a solve or evaluate result dict for the terminal."""
    if output_format == "json":
        print(json.dumps(result))
        return
    if not result.get("ok"):
        print(f"Error: {result.get('error')}")
        return
    if "formatted" in result:
        print(result["formatted"])
    else:
        print(result.get("result"))
