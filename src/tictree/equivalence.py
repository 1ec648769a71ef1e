"""
Structural equivalence of outcome trees.

Two finals are equivalent when their outcomes match (move paths are ignored).
Two choices are equivalent when they share a chooser and their children can be
paired one-to-one into equivalent pairs, regardless of order.
"""
from typing import Callable, List, Sequence, TypeVar

from .model import ChoiceResult, FinalResult, Result

T = TypeVar("T")


def has_perfect_matching(xs: Sequence[T], ys: Sequence[T], eq: Callable[[T, T], bool]) -> bool:
    """True if every x can be paired with a distinct y such that eq(x, y).

    Greedy first-fit on a scratch list. This is exact when eq is an
    equivalence relation, which is the only way it is used here.
    """
    if len(xs) != len(ys):
        return False
    remaining = list(ys)
    for x in xs:
        for i, y in enumerate(remaining):
            if eq(x, y):
                del remaining[i]
                break
        else:
            return False
    return True


def equivalent(a: Result, b: Result) -> bool:
    if isinstance(a, FinalResult) and isinstance(b, FinalResult):
        return a.result == b.result
    if isinstance(a, ChoiceResult) and isinstance(b, ChoiceResult):
        return a.chooser == b.chooser and has_perfect_matching(a.choices, b.choices, equivalent)
    return False


def unique_with(results: Sequence[T], eq: Callable[[T, T], bool]) -> List[T]:
    """Drop later duplicates under eq, keeping the first representative of each class."""
    kept: List[T] = []
    for r in results:
        if not any(eq(k, r) for k in kept):
            kept.append(r)
    return kept
