"""
Dominance policies: when may a branch be discarded because a sibling is at least as good?

A policy is a plain function ``dominator(a, b, chooser) -> bool`` meaning "with `a`
on offer, `chooser` never needs `b`". Policies need not be total, transitive or
antisymmetric; the reducer only uses them as discard triggers.
Teaching notes:
- normal_tic_tac_toe is ordinary win > draw > loss, and only compares finals.
- player_wants_result models one player steering toward a single outcome.
"""
from typing import Callable, Dict, List, Optional, Tuple

from .model import ChoiceResult, FinalResult, Outcome, Result, all_final, outcome_label

Dominator = Callable[[Result, Result, int], bool]


def normal_tic_tac_toe(a: Result, b: Result, p: int) -> bool:
    if not isinstance(a, FinalResult) or not isinstance(b, FinalResult):
        return False
    if a.result == p:
        return True
    if a.result is None and b.result != p:
        return True
    return False


def choices_dominate(a: Result, b: Result) -> bool:
    """Settling an outcome beats a decision that could only produce it anyway.

    Both sides must be finals or all-final choices. `a` dominates `b` when every
    outcome `a` can yield is also among `b`'s outcomes.
    """
    if not isinstance(b, ChoiceResult) or not all_final(b):
        return False
    b_outcomes = {c.result for c in b.choices}
    if isinstance(a, FinalResult):
        return a.result in b_outcomes
    if not all_final(a):
        return False
    return all(c.result in b_outcomes for c in a.choices)


def _offers(result: ChoiceResult, desired: Outcome) -> bool:
    return any(isinstance(c, FinalResult) and c.result == desired for c in result.choices)


def _misses(result: Result, desired: Outcome) -> bool:
    if isinstance(result, FinalResult):
        return result.result != desired
    return all_final(result) and not any(c.result == desired for c in result.choices)


def player_wants_result(player: int, desired: Outcome) -> Dominator:
    def dominator(a: Result, b: Result, p: int) -> bool:
        if choices_dominate(a, b):
            return True
        if p != player:
            return False
        if isinstance(a, FinalResult):
            return a.result == desired
        # the opponent choosing among options that include ours beats a sure miss
        return _offers(a, desired) and _misses(b, desired)

    dominator.__name__ = f"{outcome_label(player)}_wants_{outcome_label(desired)}"
    return dominator


# Driver scenarios: (biased player, desired outcome)
SCENARIOS: List[Tuple[int, Outcome]] = [
    (1, 1),
    (1, 2),
    (1, None),
    (2, 1),
    (2, 2),
    (2, None),
]

POLICY_NAMES = ("normal", "wants")


def get_policy(name: str, player: Optional[int] = None, desired: Outcome = None) -> Dominator:
    if name == "normal":
        return normal_tic_tac_toe
    if name == "wants":
        if player not in (1, 2):
            raise ValueError("Policy 'wants' needs a biased player (P1 or P2)")
        return player_wants_result(player, desired)
    raise ValueError(f"Unknown policy: {name!r} (expected one of {', '.join(POLICY_NAMES)})")


def scenario_policies() -> Dict[str, Dominator]:
    """Name -> dominator for the baseline plus every (player, desired) scenario."""
    policies: Dict[str, Dominator] = {"normal": normal_tic_tac_toe}
    for player, desired in SCENARIOS:
        fn = player_wants_result(player, desired)
        policies[fn.__name__] = fn
    return policies
