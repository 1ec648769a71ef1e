import pytest

from tictree.model import (
    ChoiceResult,
    FinalResult,
    all_final,
    iter_finals,
    outcome_label,
    parse_outcome,
    parse_player,
    reachable_outcomes,
    split_types,
)


def test_choice_requires_children():
    with pytest.raises(ValueError):
        ChoiceResult(1, ())


def test_reachable_outcomes_unions_children():
    tree = ChoiceResult(1, (
        FinalResult(None, (0,)),
        ChoiceResult(2, (FinalResult(2, (1, 2)), FinalResult(None, (1, 3)))),
    ))
    assert reachable_outcomes(tree) == {None, 2}
    assert reachable_outcomes(FinalResult(1)) == {1}


def test_split_types_and_all_final():
    f1, f2 = FinalResult(1), FinalResult(None)
    c = ChoiceResult(2, (f1, f2))
    finals, non_finals = split_types([f1, c, f2])
    assert finals == [f1, f2]
    assert non_finals == [c]
    assert all_final(c)
    assert not all_final(ChoiceResult(1, (f1, c)))


def test_iter_finals_preorder():
    tree = ChoiceResult(1, (
        FinalResult(1, (0,)),
        ChoiceResult(2, (FinalResult(2, (1,)),)),
        FinalResult(None, (2,)),
    ))
    assert [f.path for f in iter_finals(tree)] == [(0,), (1,), (2,)]


@pytest.mark.parametrize("token,expected", [("P1", 1), ("p2", 2), ("D", None), ("draw", None)])
def test_parse_outcome(token, expected):
    assert parse_outcome(token) == expected


def test_parse_player_rejects_draw_and_junk():
    with pytest.raises(ValueError):
        parse_player("D")
    with pytest.raises(ValueError):
        parse_outcome("P3")


def test_outcome_label():
    assert [outcome_label(o) for o in (1, 2, None)] == ["P1", "P2", "D"]
