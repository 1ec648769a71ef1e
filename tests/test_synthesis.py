import pytest

from tictree.dominance import normal_tic_tac_toe, player_wants_result
from tictree.equivalence import equivalent, unique_with
from tictree.game_basics import deserialize_board
from tictree.model import ChoiceResult, FinalResult, iter_finals, reachable_outcomes
from tictree.stats import tree_stats
from tictree.synthesis import build_tree, synthesize


def test_full_tree_reaches_every_outcome(full_tree):
    assert reachable_outcomes(full_tree) == {1, 2, None}
    assert isinstance(full_tree, ChoiceResult)
    assert full_tree.chooser == 1
    assert len(full_tree.choices) == 9


def test_full_tree_leaf_paths(full_tree):
    lengths = {len(f.path) for f in iter_finals(full_tree)}
    assert min(lengths) == 5
    assert max(lengths) == 9


def test_full_tree_game_counts(full_tree):
    stats = tree_stats(full_tree)
    assert stats["finals"] == 255168
    assert stats["outcomes"] == {"P1": 131184, "P2": 77904, "D": 46080}
    assert stats["depth"] == 9


def test_choosers_alternate(full_tree):
    stack = [full_tree]
    while stack:
        node = stack.pop()
        for c in node.choices:
            if isinstance(c, ChoiceResult):
                assert c.chooser != node.chooser
                stack.append(c)


def test_terminal_position_is_final_and_unreachable_rejected():
    board = deserialize_board("111220200")
    with pytest.raises(ValueError):
        synthesize(board)
    won = deserialize_board("111220000")
    res = synthesize(won)
    assert res == FinalResult(1, ())


def test_build_tree_records_paths():
    res = build_tree(deserialize_board("121212000"), (), 1)
    assert isinstance(res, ChoiceResult)
    assert [c.path for c in res.choices if isinstance(c, FinalResult)] == [(6,), (8,)]
    assert all(len(f.path) <= 3 for f in iter_finals(res))


def test_synthesize_rejects_wrong_turn():
    with pytest.raises(ValueError):
        synthesize(deserialize_board("100000000"), to_play=1)


def test_mirror_continuations_deduplicate():
    # P2 in a corner, P1 in the center: the position is symmetric about the main diagonal
    res = synthesize(deserialize_board("200010000"))
    kids = {next(iter_finals(c)).path[0]: c for c in res.choices}
    assert equivalent(kids[1], kids[3])
    assert equivalent(kids[2], kids[6])
    assert equivalent(kids[5], kids[7])
    assert not equivalent(kids[1], kids[8])
    assert len(unique_with(list(res.choices), equivalent)) == 4


def test_inline_pruning_matches_reduction_outcome():
    board = deserialize_board("100020000")
    inline = synthesize(board, dominator=normal_tic_tac_toe)
    assert isinstance(inline, FinalResult)
    assert inline.result is None


def test_strict_preference_forces_a_draw(full_tree):
    from tictree.reducer import reduce_tree

    reduced = reduce_tree(full_tree, normal_tic_tac_toe)
    assert isinstance(reduced, FinalResult)
    assert reduced.result is None
    assert len(reduced.path) == 9


def test_p1_wanting_a_win_keeps_the_draw_alive(full_tree):
    from tictree.reducer import reduce_tree

    reduced = reduce_tree(full_tree, player_wants_result(1, 1))
    outcomes = reachable_outcomes(reduced)
    assert None in outcomes
    assert outcomes <= reachable_outcomes(full_tree)
    stack = [reduced]
    while stack:
        node = stack.pop()
        if isinstance(node, ChoiceResult):
            assert len(node.choices) >= 2
            stack.extend(node.choices)


def test_opening_moves_fold_into_three_classes(full_tree):
    # corners, edges and centre
    classes = unique_with(list(full_tree.choices), equivalent)
    assert len(classes) == 3
    assert sorted(next(iter_finals(c)).path[0] for c in classes) == [0, 1, 4]


def test_full_board_without_line_is_draw():
    assert synthesize(deserialize_board("112221112")) == FinalResult(None, ())
