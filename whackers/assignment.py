"""Hand assignments optimised for the operations used by the search.

Representation
--------------
All whackers live in one flat list (``notes``); every hand owns a contiguous
``range`` of it. Hands ``2k`` and ``2k + 1`` are the left and right hand of
player ``k``. Swapping two positions of the flat list moves whackers between
any two hands without touching the ranges, so a random neighbour is just two
uniformly drawn positions.
"""

from __future__ import annotations

import random

from .evaluation import hand_cost
from .models import Note, Schedule


def hand_ranges(num_notes: int, num_hands: int) -> list[range]:
    """Split ``num_notes`` positions into ``num_hands`` consecutive ranges.

    Every hand gets ``num_notes // num_hands`` positions and the first
    ``num_notes % num_hands`` hands get one extra.

    Raises:
        ValueError: If ``num_hands`` is not positive.
    """
    if num_hands < 1:
        raise ValueError(f"Number of hands must be positive, got {num_hands}")
    base, extra = divmod(num_notes, num_hands)
    ranges: list[range] = []
    start = 0
    for i in range(num_hands):
        size = base + (1 if i < extra else 0)
        ranges.append(range(start, start + size))
        start += size
    return ranges


class HandAssignment:
    """Partition of all whackers into ``2 * num_players`` hands.

    Hand costs are cached; a swap only rescores the hands owning the two
    swapped positions. ``score`` is always re-summed player by player from the
    cached costs so it equals a full recomputation exactly.
    """

    def __init__(self, notes: list[Note], num_players: int, schedule: Schedule):
        if num_players < 1:
            raise ValueError(f"Number of players must be at least 1, got {num_players}")
        self.notes = notes
        self.ranges = hand_ranges(len(notes), 2 * num_players)
        self._schedule = schedule
        # position -> index of the hand owning it
        self._hand_of = [h for h, r in enumerate(self.ranges) for _ in r]
        self._hand_costs = [hand_cost(notes[r.start : r.stop], schedule) for r in self.ranges]
        self.score = self._sum_costs()

    @classmethod
    def random(cls, schedule: Schedule, num_players: int, rng: random.Random) -> HandAssignment:
        """Create an assignment with all whackers shuffled into evenly sized hands."""
        if num_players < 1:
            raise ValueError(f"Number of players must be at least 1, got {num_players}")
        notes = sorted(schedule)  # fixed order before shuffling keeps runs reproducible
        rng.shuffle(notes)
        return cls(notes, num_players, schedule)

    @property
    def num_players(self) -> int:
        return len(self.ranges) // 2

    def copy(self) -> HandAssignment:
        clone = object.__new__(HandAssignment)
        clone.notes = list(self.notes)
        clone.ranges = self.ranges
        clone._schedule = self._schedule
        clone._hand_of = self._hand_of
        clone._hand_costs = list(self._hand_costs)
        clone.score = self.score
        return clone

    def propose_swap(self, rng: random.Random) -> tuple[int, int]:
        """Swap two uniformly drawn positions (drawn with replacement).

        Returns:
            The swapped positions ``(i, j)``; ``(i, i)`` is a no-op move.
        """
        n = len(self.notes)
        if n == 0:
            return 0, 0
        i = rng.randrange(n)
        j = rng.randrange(n)
        self.apply_swap(i, j)
        return i, j

    def apply_swap(self, i: int, j: int) -> None:
        """Exchange the whackers at positions ``i`` and ``j`` and rescore."""
        if i == j:
            return
        notes = self.notes
        notes[i], notes[j] = notes[j], notes[i]
        hand_i = self._hand_of[i]
        hand_j = self._hand_of[j]
        if hand_i == hand_j:
            return  # same set of whackers in the hand, cost unchanged
        for h in (hand_i, hand_j):
            r = self.ranges[h]
            self._hand_costs[h] = hand_cost(notes[r.start : r.stop], self._schedule)
        self.score = self._sum_costs()

    def hands(self) -> list[list[Note]]:
        return [self.notes[r.start : r.stop] for r in self.ranges]

    def players(self) -> list[tuple[list[Note], list[Note]]]:
        hands = self.hands()
        return [(hands[k], hands[k + 1]) for k in range(0, len(hands), 2)]

    def _sum_costs(self) -> float:
        costs = self._hand_costs
        score = 0.0
        for k in range(0, len(costs), 2):
            score += costs[k] + costs[k + 1]
        return score


def validate_assignment(assignment: HandAssignment, schedule: Schedule) -> bool:
    """Validate that the hands partition exactly the whackers of ``schedule``.

    Returns:
        True if the assignment is valid.

    Raises:
        ValueError: If the ranges do not tile the flat list, a whacker is
            duplicated, or a whacker is missing or unknown.
    """
    expected_start = 0
    for r in assignment.ranges:
        if r.start != expected_start or r.step != 1:
            raise ValueError(f"Hand range {r} does not continue at position {expected_start}")
        expected_start = r.stop
    if expected_start != len(assignment.notes):
        raise ValueError(
            f"Hands cover {expected_start} positions but there are {len(assignment.notes)} whackers"
        )
    if len(assignment.ranges) % 2:
        raise ValueError("Odd number of hands")
    seen: set[Note] = set()
    for note in assignment.notes:
        if note in seen:
            raise ValueError(f"Whacker {note} assigned to more than one hand")
        seen.add(note)
    if seen != set(schedule):
        missing = sorted(set(schedule) - seen)
        unknown = sorted(seen - set(schedule))
        raise ValueError(f"Assignment mismatch: missing={missing} unknown={unknown}")
    return True
