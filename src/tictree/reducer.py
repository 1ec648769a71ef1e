"""
Reduction of a full outcome tree to the smallest tree a policy still cares about.

Per choice node, after reducing the non-final children:
1. flatten children that are choices of the same chooser into this level,
2. drop structurally equivalent duplicates,
3. drop branches whose reachable outcomes are all offered by a final sibling,
4. drop branches dominated by a sibling (single marking pass),
5. collapse to the lone survivor, or return a new choice with sorted children.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import FrozenSet, List, Optional, Sequence

from .dominance import Dominator
from .equivalence import equivalent, unique_with
from .model import (
    ChoiceResult,
    FinalResult,
    Outcome,
    Result,
    outcome_label,
    reachable_outcomes,
    split_types,
)
from .render import result_to_string, sort_key


@dataclass(frozen=True)
class DeclinedOutcomes:
    """Outcomes each player passed over as immediate finals on the way down.

    Threaded through reduce_tree and logged at debug level. Dominators keep the
    three-argument signature, so no policy reads it yet.
    """

    p1: FrozenSet[Outcome] = frozenset()
    p2: FrozenSet[Outcome] = frozenset()

    def declined_by(self, player: int) -> FrozenSet[Outcome]:
        return self.p1 if player == 1 else self.p2

    def add(self, player: int, finals: Sequence[FinalResult]) -> "DeclinedOutcomes":
        new = frozenset(f.result for f in finals)
        if player == 1:
            return DeclinedOutcomes(self.p1 | new, self.p2)
        return DeclinedOutcomes(self.p1, self.p2 | new)


def flatten_choices(result: ChoiceResult) -> List[Result]:
    flat: List[Result] = []
    for c in result.choices:
        if isinstance(c, ChoiceResult) and c.chooser == result.chooser:
            flat.extend(c.choices)
        else:
            flat.append(c)
    return flat


def trim_possibles(results: Sequence[Result], dominator: Dominator, player: int) -> List[Result]:
    finals, non_finals = split_types(results)
    final_outcomes = {f.result for f in finals}
    trimmed: List[Result] = list(finals)
    for nf in non_finals:
        if not reachable_outcomes(nf) <= final_outcomes:
            trimmed.append(nf)

    removed = set()
    for i, a in enumerate(trimmed):
        if i in removed:
            continue
        for j, b in enumerate(trimmed):
            if i == j or j in removed:
                continue
            if dominator(a, b, player):
                if logging.getLogger().isEnabledFor(logging.DEBUG):
                    logging.debug("%s dominates %s", result_to_string(a), result_to_string(b))
                removed.add(j)
    survivors = [r for k, r in enumerate(trimmed) if k not in removed]
    if trimmed and not survivors:
        raise RuntimeError("Dominance policy discarded every branch of a choice")
    return survivors


def trim_result(result: Result, dominator: Dominator) -> Result:
    if isinstance(result, FinalResult):
        return result
    possibles = unique_with(flatten_choices(result), equivalent)
    trimmed = trim_possibles(possibles, dominator, result.chooser)
    if len(trimmed) == 1:
        return trimmed[0]
    return ChoiceResult(result.chooser, tuple(sorted(trimmed, key=sort_key)))


def reduce_tree(
    result: Result,
    dominator: Dominator,
    declined: Optional[DeclinedOutcomes] = None,
) -> Result:
    if isinstance(result, FinalResult):
        return result
    if declined is None:
        declined = DeclinedOutcomes()
    finals, non_finals = split_types(result.choices)
    declined = declined.add(result.chooser, finals)
    if logging.getLogger().isEnabledFor(logging.DEBUG):
        logging.debug(
            "P%d to choose; declined P1=%s P2=%s",
            result.chooser,
            sorted(outcome_label(o) for o in declined.p1),
            sorted(outcome_label(o) for o in declined.p2),
        )
    reduced = [reduce_tree(c, dominator, declined) for c in non_finals]
    return trim_result(ChoiceResult(result.chooser, tuple(finals) + tuple(reduced)), dominator)
