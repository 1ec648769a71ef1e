"""
Exhaustive outcome-tree synthesis from a board position.
Teaching notes:
- build_tree keeps every continuation; pruning is the reducer's job.
- build_tree_pruned is the single-pass variant: each sub-tree is trimmed as soon as
  it is built, so the full tree never exists in memory at once.
"""
from typing import Optional, Sequence, Tuple

from .dominance import Dominator
from .game_basics import (
    EMPTY_BOARD,
    apply_move,
    get_winner,
    is_draw,
    is_terminal,
    legal_moves,
    other_player,
    validate_position,
)
from .model import ChoiceResult, FinalResult, Result
from .reducer import trim_result


def _terminal(board: Sequence[int], path: Tuple[int, ...]) -> Optional[FinalResult]:
    if not is_terminal(board):
        return None
    return FinalResult(None if is_draw(board) else get_winner(board), path)


def build_tree(board: Sequence[int], path: Tuple[int, ...], to_play: int) -> Result:
    final = _terminal(board, path)
    if final is not None:
        return final
    nxt = other_player(to_play)
    possibles = tuple(
        build_tree(apply_move(board, mv, to_play), path + (mv,), nxt)
        for mv in legal_moves(board)
    )
    return ChoiceResult(to_play, possibles)


def build_tree_pruned(
    board: Sequence[int],
    path: Tuple[int, ...],
    to_play: int,
    dominator: Dominator,
) -> Result:
    final = _terminal(board, path)
    if final is not None:
        return final
    nxt = other_player(to_play)
    possibles = tuple(
        build_tree_pruned(apply_move(board, mv, to_play), path + (mv,), nxt, dominator)
        for mv in legal_moves(board)
    )
    return trim_result(ChoiceResult(to_play, possibles), dominator)


def synthesize(
    board: Optional[Sequence[int]] = None,
    to_play: Optional[int] = None,
    dominator: Optional[Dominator] = None,
) -> Result:
    """Validated entry point: full tree, or the inline-pruned tree when a dominator is given."""
    start = tuple(EMPTY_BOARD if board is None else board)
    player = validate_position(start, to_play)
    if dominator is None:
        return build_tree(start, (), player)
    return build_tree_pruned(start, (), player, dominator)
