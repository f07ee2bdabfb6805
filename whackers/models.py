"""Core data structures for boomwhacker assignment.

This module defines:
    Note         -- one boomwhacker, identified by its pitch.
    Schedule     -- alias mapping each Note to its ascending play times (seconds).
    Whack        -- a single played note as found in the source score.
    SearchResult -- best assignment found by the search, ready for output.
"""

from __future__ import annotations

from dataclasses import dataclass, field

NOTE_NAMES_SHARPS = ("C", "C♯", "D", "D♯", "E", "F", "F♯", "G", "G♯", "A", "A♯", "B")
NOTE_NAMES_FLATS = ("C", "D♭", "D", "E♭", "E", "F", "G♭", "G", "A♭", "A", "B♭", "B")
STEP_SEMITONES = {"C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11}


@dataclass(frozen=True, order=True)
class Note:
    """Pitch of a single boomwhacker.

    Attributes:
        semis_above_c0: Semitones above C0 (so C4 is 48).
    """

    semis_above_c0: int

    @classmethod
    def from_pitch(cls, step: str, octave: int, alter: int = 0) -> Note:
        """Build a Note from MusicXML-style pitch components.

        Raises:
            ValueError: If ``step`` is not one of ``C D E F G A B``.
        """
        try:
            semis_from_c = STEP_SEMITONES[step]
        except KeyError:
            raise ValueError(f"Invalid note name: {step!r}") from None
        return cls(octave * 12 + semis_from_c + alter)

    def name(self) -> str:
        octave, semis = divmod(self.semis_above_c0, 12)
        return f"{NOTE_NAMES_SHARPS[semis]}{octave}"

    def name_flats(self) -> str:
        octave, semis = divmod(self.semis_above_c0, 12)
        return f"{NOTE_NAMES_FLATS[semis]}{octave}"

    def __str__(self) -> str:
        return self.name()


Schedule = dict[Note, list[float]]  # note -> ascending play times in seconds
Player = tuple[list[Note], list[Note]]  # (left hand, right hand)


@dataclass(frozen=True)
class Whack:
    """One played note of the source score.

    Fields:
        timestamp: Start of the note in seconds.
        note_idx: 0-based index of the ``<note>`` element in document order.
        chord_note_idx: ``note_idx`` of the first ``<note>`` of the chord
            containing this whack.
    """

    timestamp: float
    note_idx: int
    chord_note_idx: int


@dataclass
class SearchResult:
    """Best assignment found by the search.

    Fields:
        players: Ordered players, each ``(left, right)`` with ascending notes.
        score: Score of the assignment (<= 0, higher is better).
        seed: Seed the search was started from.
        elapsed_s: Wall time spent searching.
        histories: Current score after every iteration, one list per restart.
    """

    players: list[Player]
    score: float
    seed: int
    elapsed_s: float = 0.0
    histories: list[list[float]] = field(default_factory=list)
