import random

import pytest

from whackers.assignment import HandAssignment, hand_ranges, validate_assignment
from whackers.evaluation import assignment_score
from whackers.models import Note


def test_hand_ranges_spread_extra_notes_over_first_hands() -> None:
    ranges = hand_ranges(10, 4)
    assert [len(r) for r in ranges] == [3, 3, 2, 2]
    assert ranges[0].start == 0 and ranges[-1].stop == 10
    for prev, nxt in zip(ranges, ranges[1:]):
        assert prev.stop == nxt.start


def test_hand_ranges_rejects_zero_hands() -> None:
    with pytest.raises(ValueError):
        hand_ranges(5, 0)


def test_random_assignment_is_partition(spread_schedule) -> None:
    a = HandAssignment.random(spread_schedule, 3, random.Random(0))
    assert validate_assignment(a, spread_schedule)
    assert len(a.ranges) == 6
    assert sorted(n for hand in a.hands() for n in hand) == sorted(spread_schedule)
    assert [len(h) for h in a.hands()] == [2, 2, 1, 1, 1, 1]


def test_zero_players_rejected(spread_schedule) -> None:
    with pytest.raises(ValueError):
        HandAssignment.random(spread_schedule, 0, random.Random(0))


def test_fewer_notes_than_hands() -> None:
    schedule = {Note(48): [0.0], Note(50): [1.0], Note(52): [2.0]}
    a = HandAssignment.random(schedule, 2, random.Random(5))
    assert [len(h) for h in a.hands()] == [1, 1, 1, 0]
    assert a.score == 0.0
    validate_assignment(a, schedule)


def test_empty_schedule_is_representable() -> None:
    a = HandAssignment.random({}, 2, random.Random(1))
    assert a.hands() == [[], [], [], []]
    assert a.score == 0.0
    assert a.propose_swap(random.Random(1)) == (0, 0)
    assert a.score == 0.0


def test_swap_is_self_inverse(spread_schedule) -> None:
    a = HandAssignment.random(spread_schedule, 2, random.Random(3))
    before_notes = list(a.notes)
    before_score = a.score
    rng = random.Random(9)
    for _ in range(20):
        i, j = rng.randrange(len(a.notes)), rng.randrange(len(a.notes))
        a.apply_swap(i, j)
        a.apply_swap(i, j)
        assert a.notes == before_notes
        assert a.score == before_score


def test_cached_score_matches_full_recompute(spread_schedule) -> None:
    a = HandAssignment.random(spread_schedule, 2, random.Random(11))
    rng = random.Random(12)
    for _ in range(200):
        a.propose_swap(rng)
        validate_assignment(a, spread_schedule)
        assert a.score == assignment_score(a.players(), spread_schedule)


def test_copy_is_independent(spread_schedule) -> None:
    a = HandAssignment.random(spread_schedule, 2, random.Random(4))
    b = a.copy()
    b.apply_swap(0, len(b.notes) - 1)
    assert a.notes != b.notes
    assert a.score == assignment_score(a.players(), spread_schedule)


def test_validate_detects_duplicates_and_missing(spread_schedule) -> None:
    a = HandAssignment.random(spread_schedule, 2, random.Random(2))
    a.notes[0] = a.notes[1]
    with pytest.raises(ValueError):
        validate_assignment(a, spread_schedule)

    b = HandAssignment.random(spread_schedule, 2, random.Random(2))
    smaller = dict(spread_schedule)
    smaller.pop(Note(48))
    with pytest.raises(ValueError):
        validate_assignment(b, smaller)
