import pytest

from whackers.evaluation import assignment_score, hand_cost, merged_hits, player_cost, swap_events
from whackers.models import Note

X = Note(48)
Y = Note(50)
Z = Note(52)


def test_empty_and_single_hand_cost_nothing() -> None:
    schedule = {X: [0.0, 0.005], Y: [1.0]}
    assert hand_cost([], schedule) == 0.0
    assert hand_cost([X], schedule) == 0.0
    assert hand_cost([Y], schedule) == 0.0


def test_single_switch_after_repeat() -> None:
    # X, X, then Y: only X -> Y costs, timed from the second X
    schedule = {X: [0.0, 0.02], Y: [1.0]}
    assert hand_cost([X, Y], schedule) == pytest.approx(-1 / 0.98)


def test_near_simultaneous_switch_is_clamped() -> None:
    schedule = {X: [0.0], Y: [0.001]}
    assert hand_cost([X, Y], schedule) == pytest.approx(-100.0)


def test_cost_counts_every_switch() -> None:
    schedule = {X: [0.0, 2.0], Y: [1.0, 2.5]}
    # X@0 -> Y@1 (1s), Y@1 -> X@2 (1s), X@2 -> Y@2.5 (0.5s)
    assert hand_cost([X, Y], schedule) == pytest.approx(-1.0 - 1.0 - 2.0)


def test_hand_cost_independent_of_note_order() -> None:
    schedule = {X: [0.0, 3.0], Y: [1.0], Z: [2.0, 2.2]}
    costs = {hand_cost(order, schedule) for order in ([X, Y, Z], [Z, Y, X], [Y, X, Z])}
    assert len(costs) == 1


def test_equal_times_lowest_note_first() -> None:
    schedule = {X: [0.0, 1.0], Y: [0.0]}
    # Lowest whacker is held first: X@0 -> Y@0 (clamped) -> X@1
    assert list(merged_hits([Y, X], schedule)) == [(0.0, X), (0.0, Y), (1.0, X)]
    assert hand_cost([Y, X], schedule) == pytest.approx(-100.0 - 1.0)


def test_swap_events_time_and_gap() -> None:
    schedule = {X: [0.0, 2.0], Y: [1.0, 2.001]}
    events = list(swap_events([X, Y], schedule))
    assert [t for t, _ in events] == [1.0, 2.0, 2.001]
    assert [g for _, g in events] == pytest.approx([1.0, 1.0, 0.01])
    assert list(swap_events([X], schedule)) == []


def test_player_and_assignment_score_sum_hands() -> None:
    schedule = {X: [0.0], Y: [0.5], Z: [0.75]}
    left, right = [X, Y], [Z]
    assert player_cost(left, right, schedule) == pytest.approx(-2.0)
    players = [([X, Y], []), ([Z], [])]
    assert assignment_score(players, schedule) == pytest.approx(-2.0)
    assert assignment_score([], schedule) == 0.0
