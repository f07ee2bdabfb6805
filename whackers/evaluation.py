"""Scoring of hand assignments.

A hand holding several boomwhackers has to swap between them whenever the next
hit belongs to a different whacker than the one currently held. Each swap costs
``1 / time_available``, so rushed swaps dominate the score while swaps with a
few seconds of lead time are nearly free.
"""

from __future__ import annotations

import heapq
from typing import Iterable, Iterator, Sequence

from .models import Note, Schedule

MIN_SWAP_TIME = 0.01  # seconds


def merged_hits(notes: Iterable[Note], schedule: Schedule) -> Iterable[tuple[float, Note]]:
    """Merge the play times of ``notes`` into one ascending ``(time, note)`` stream.

    Hits at the same time are ordered by ascending note.
    """
    return heapq.merge(*([(t, note) for t in schedule[note]] for note in notes))


def swap_events(notes: Iterable[Note], schedule: Schedule) -> Iterator[tuple[float, float]]:
    """Yield ``(time, gap)`` for every swap a hand holding ``notes`` makes.

    ``gap`` is the time since the hand's previous hit, floored at
    ``MIN_SWAP_TIME``.
    """
    held = None
    last_time = 0.0
    for time, note in merged_hits(notes, schedule):
        if held is None:
            held = note  # start out holding whichever whacker is played first
        if note != held:
            yield time, max(time - last_time, MIN_SWAP_TIME)
            held = note
        last_time = time


def hand_cost(notes: Sequence[Note], schedule: Schedule) -> float:
    """Cost of a single hand playing all of ``notes`` for the whole piece.

    Args:
        notes: Whackers held by the hand (any order).
        schedule: Play times of every whacker.

    Returns:
        Sum of ``-1 / max(gap, MIN_SWAP_TIME)`` over every swap, where ``gap`` is
        the time since the previous hit of this hand. 0 for hands holding at
        most one whacker.
    """
    if len(notes) <= 1:
        return 0.0

    cost = 0.0
    for _, gap in swap_events(notes, schedule):
        cost -= 1.0 / gap
    return cost


def player_cost(left: Sequence[Note], right: Sequence[Note], schedule: Schedule) -> float:
    return hand_cost(left, schedule) + hand_cost(right, schedule)


def assignment_score(players: Iterable[tuple[Sequence[Note], Sequence[Note]]], schedule: Schedule) -> float:
    """Total score of an assignment given as ``(left, right)`` pairs."""
    score = 0.0
    for left, right in players:
        score += player_cost(left, right, schedule)
    return score
