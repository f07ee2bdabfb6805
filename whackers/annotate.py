"""Per-player annotated copies of the source score.

Each player gets the full score with the notes they play coloured by hand and
named with lyric marks, so they can read their part off the original music.
"""

from __future__ import annotations

import copy
import xml.etree.ElementTree as ET
from typing import Sequence

from .models import Note
from .parser import MusicXmlScore

HAND_COLOURS = {"left": "#ff0000", "right": "#00aa00"}
DEFAULT_COLOUR = "#000000"


def annotated_xml(
    score: MusicXmlScore,
    left_hand: Sequence[Note],
    right_hand: Sequence[Note],
) -> str:
    """Return MusicXML of ``score`` annotated for one player.

    Notes played by the player are coloured by hand; every chord containing
    them gets one lyric per played whacker, highest whacker on top (MusicXML
    stacks lyrics from top to bottom). All other lyrics are removed.
    """
    notes = [(note, "left") for note in left_hand] + [(note, "right") for note in right_hand]
    notes.sort(key=lambda pair: pair[0], reverse=True)

    colour_of: dict[int, str] = {}
    lyrics_at: dict[int, list[tuple[Note, str]]] = {}
    for note, hand in notes:
        for whack in score.whacks.get(note, []):
            colour_of[whack.note_idx] = HAND_COLOURS[hand]
            lyrics_at.setdefault(whack.chord_note_idx, []).append((note, hand))

    tree = copy.deepcopy(score.tree)
    note_idx = 0
    for part in tree.iter("part"):
        for measure in part.findall("measure"):
            for note_elem in measure.findall("note"):
                if note_elem.find("pitch") is None:
                    continue  # rests are not counted
                note_elem.set("color", colour_of.get(note_idx, DEFAULT_COLOUR))
                for lyric in note_elem.findall("lyric"):
                    note_elem.remove(lyric)
                for note, hand in lyrics_at.get(note_idx, []):
                    lyric = ET.SubElement(
                        note_elem, "lyric", {"color": HAND_COLOURS[hand], "number": "1"}
                    )
                    ET.SubElement(lyric, "syllabic").text = "single"
                    ET.SubElement(lyric, "text").text = note.name()
                note_idx += 1

    return ET.tostring(tree, encoding="unicode", xml_declaration=True)
