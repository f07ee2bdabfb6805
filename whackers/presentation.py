"""Canonical ordering of search results for output.

The search produces hands in an arbitrary internal order. Here each hand is
sorted, hands are re-paired by their lowest whacker and players are ordered by
pitch, so equal optima found along different random trajectories print the
same way.
"""

from __future__ import annotations

from typing import Sequence

from .models import Note, Player


def _lowest_key(hand: Sequence[Note]) -> tuple[bool, Note | None]:
    # Empty hands sort first
    return (bool(hand), hand[0] if hand else None)


def pair_hands(hands: Sequence[Sequence[Note]]) -> list[Player]:
    """Turn the hands of an assignment into ordered ``(left, right)`` players.

    Args:
        hands: Hands in search order (left, right, left, right, ...).

    Returns:
        Players ordered by their lowest whacker, each with ascending hands and
        the hand holding the lower whacker first.

    Raises:
        ValueError: If the number of hands is odd.
    """
    if len(hands) % 2:
        raise ValueError(f"Expected an even number of hands, got {len(hands)}")
    sorted_hands = [sorted(hand) for hand in hands]
    sorted_hands.sort(key=_lowest_key)
    players: list[Player] = []
    for k in range(0, len(sorted_hands), 2):
        left, right = sorted_hands[k], sorted_hands[k + 1]
        if _lowest_key(left) > _lowest_key(right):
            left, right = right, left
        players.append((left, right))
    return players


def format_table(players: Sequence[Player]) -> str:
    """Render players as a text table, left hands right-aligned against ``|``."""
    widest_left = max((len(left) for left, _ in players), default=0)
    lines = []
    for left, right in players:
        line = "     " * (widest_left - len(left))
        line += "".join(f"{note.name():>3}  " for note in left)
        line += "|"
        line += "".join(f"  {note.name():>3}" for note in right)
        lines.append(line)
    return "\n".join(lines)
