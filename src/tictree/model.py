"""
Outcome trees: the two node kinds and the helpers that discriminate between them.
Teaching notes:
- A FinalResult is one completed game: its outcome and the move path that produced it.
- A ChoiceResult is a decision point for `chooser` among distinct continuations.
- Outcome is the winning player (1 or 2) or None for a draw.
- Nodes are frozen; reduction always builds new trees.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Set, Tuple, Union

Outcome = Optional[int]


@dataclass(frozen=True)
class FinalResult:
    result: Outcome
    path: Tuple[int, ...] = ()


@dataclass(frozen=True)
class ChoiceResult:
    chooser: int
    choices: Tuple["Result", ...]

    def __post_init__(self) -> None:
        if not self.choices:
            raise ValueError("A choice needs at least one continuation")


Result = Union[FinalResult, ChoiceResult]


def outcome_label(outcome: Outcome) -> str:
    return "D" if outcome is None else f"P{outcome}"


def parse_outcome(token: str) -> Outcome:
    """Inverse of outcome_label: 'P1' -> 1, 'P2' -> 2, 'D' -> None."""
    t = token.strip().upper()
    if t in ("D", "DRAW", "NONE"):
        return None
    if t in ("P1", "1"):
        return 1
    if t in ("P2", "2"):
        return 2
    raise ValueError(f"Unknown outcome: {token!r} (expected P1, P2 or D)")


def parse_player(token: str) -> int:
    player = parse_outcome(token)
    if player is None:
        raise ValueError(f"Unknown player: {token!r} (expected P1 or P2)")
    return player


def split_types(results) -> Tuple[List[FinalResult], List[ChoiceResult]]:
    finals = [r for r in results if isinstance(r, FinalResult)]
    non_finals = [r for r in results if isinstance(r, ChoiceResult)]
    return finals, non_finals


def all_final(result: ChoiceResult) -> bool:
    return all(isinstance(c, FinalResult) for c in result.choices)


def reachable_outcomes(result: Result) -> Set[Outcome]:
    if isinstance(result, FinalResult):
        return {result.result}
    out: Set[Outcome] = set()
    for c in result.choices:
        out |= reachable_outcomes(c)
    return out


def iter_nodes(result: Result, depth: int = 0) -> Iterator[Tuple[Result, int]]:
    """Pre-order walk yielding (node, depth)."""
    stack = [(result, depth)]
    while stack:
        node, d = stack.pop()
        yield node, d
        if isinstance(node, ChoiceResult):
            for c in reversed(node.choices):
                stack.append((c, d + 1))


def iter_finals(result: Result) -> Iterator[FinalResult]:
    for node, _ in iter_nodes(result):
        if isinstance(node, FinalResult):
            yield node
