"""tictree package.

Exhaustive outcome trees for tic-tac-toe, structural deduplication, and
dominance-driven reduction to a minimal decision tree.

Convenience imports are exposed for common workflows.
"""

from .dominance import get_policy, normal_tic_tac_toe, player_wants_result
from .equivalence import equivalent
from .model import ChoiceResult, FinalResult, reachable_outcomes
from .reducer import reduce_tree
from .render import result_to_string
from .synthesis import synthesize

__all__ = [
    "ChoiceResult",
    "FinalResult",
    "equivalent",
    "get_policy",
    "normal_tic_tac_toe",
    "player_wants_result",
    "reachable_outcomes",
    "reduce_tree",
    "result_to_string",
    "synthesize",
]
