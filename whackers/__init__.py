"""Boomwhacker hand assignment.

Exports base data structures, scoring and the search entry point.
"""

from whackers.assignment import HandAssignment, validate_assignment  # noqa: F401
from whackers.evaluation import assignment_score, hand_cost, player_cost  # noqa: F401
from whackers.models import Note, Schedule, SearchResult, Whack  # noqa: F401
from whackers.parser import MusicXmlScore, load_score  # noqa: F401
from whackers.presentation import pair_hands  # noqa: F401
from whackers.search import hill_climb, search  # noqa: F401

__all__ = [
    "HandAssignment",
    "MusicXmlScore",
    "Note",
    "Schedule",
    "SearchResult",
    "Whack",
    "assignment_score",
    "hand_cost",
    "hill_climb",
    "load_score",
    "pair_hands",
    "player_cost",
    "search",
    "validate_assignment",
]
