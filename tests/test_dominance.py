import pytest

from tictree.dominance import (
    SCENARIOS,
    choices_dominate,
    get_policy,
    normal_tic_tac_toe,
    player_wants_result,
    scenario_policies,
)
from tictree.model import ChoiceResult, FinalResult

W1 = FinalResult(1)
W2 = FinalResult(2)
D = FinalResult(None)


def test_normal_prefers_win_then_draw():
    assert normal_tic_tac_toe(W1, D, 1)
    assert normal_tic_tac_toe(W1, W2, 1)
    assert normal_tic_tac_toe(D, W2, 1)
    assert not normal_tic_tac_toe(D, W1, 1)
    assert not normal_tic_tac_toe(W2, D, 1)
    assert normal_tic_tac_toe(W2, D, 2)


def test_normal_ignores_choices():
    c = ChoiceResult(2, (W1, D))
    assert not normal_tic_tac_toe(W1, c, 1)
    assert not normal_tic_tac_toe(c, W2, 1)


def test_final_dominates_choice_that_could_produce_it():
    assert choices_dominate(D, ChoiceResult(2, (W1, D)))
    assert not choices_dominate(W2, ChoiceResult(2, (W1, D)))
    # only all-final choices are compared
    assert not choices_dominate(D, ChoiceResult(2, (D, ChoiceResult(1, (W1, D)))))
    assert not choices_dominate(D, W2)


def test_narrower_choice_dominates_wider():
    narrow = ChoiceResult(2, (W1, D))
    wide = ChoiceResult(1, (W1, W2, D))
    assert choices_dominate(narrow, wide)
    assert not choices_dominate(wide, narrow)


def test_desired_final_dominates_anything_for_biased_player():
    dom = player_wants_result(1, None)
    assert dom(D, W1, 1)
    assert dom(D, ChoiceResult(2, (W2, ChoiceResult(1, (W1, W2)))), 1)
    assert not dom(D, W1, 2)
    assert not dom(W1, D, 1)


def test_live_chance_beats_guaranteed_miss():
    dom = player_wants_result(2, 2)
    chance = ChoiceResult(1, (W2, D))
    assert dom(chance, W1, 2)
    assert dom(chance, ChoiceResult(1, (W1, D)), 2)
    assert not dom(chance, W1, 1)
    assert not dom(chance, ChoiceResult(1, (W1, ChoiceResult(2, (W2, D)))), 2)
    assert not dom(ChoiceResult(1, (W1, D)), W1, 2)


def test_choice_subsumption_applies_to_either_player():
    dom = player_wants_result(1, 1)
    c = ChoiceResult(1, (W2, D))
    assert dom(D, c, 2)
    assert dom(D, c, 1)


def test_no_rule_means_no_dominance():
    dom = player_wants_result(1, 1)
    assert not dom(W2, D, 1)
    assert not dom(D, W2, 1)


def test_get_policy():
    assert get_policy("normal") is normal_tic_tac_toe
    dom = get_policy("wants", 2, None)
    assert dom.__name__ == "P2_wants_D"
    with pytest.raises(ValueError):
        get_policy("wants")
    with pytest.raises(ValueError):
        get_policy("greedy")


def test_scenario_policies_cover_driver():
    names = list(scenario_policies())
    assert names[0] == "normal"
    assert len(names) == len(SCENARIOS) + 1
    assert "P1_wants_P1" in names and "P2_wants_D" in names
