"""
Text rendering of outcome trees.

A final renders as its outcome label and the move path, e.g. ``P1 0,3,1,4,2``.
A choice renders as ``P2->(`` followed by its children two levels deeper and a
closing parenthesis at its own indentation. The rendering doubles as the
canonical ordering key for children.
"""
from typing import Tuple

from .model import FinalResult, Result, outcome_label


def result_to_string(result: Result, indent: int = 0) -> str:
    pad = "  " * indent
    if isinstance(result, FinalResult):
        return pad + outcome_label(result.result) + " " + ",".join(map(str, result.path))
    inner = "\n".join(result_to_string(c, indent + 2) for c in result.choices)
    return f"{pad}{outcome_label(result.chooser)}->(\n{inner}\n{pad})"


def sort_key(result: Result) -> Tuple[int, str]:
    # finals sort before choices
    return (0 if isinstance(result, FinalResult) else 1, result_to_string(result))
