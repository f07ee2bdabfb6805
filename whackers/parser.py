"""MusicXML loading.

Walks every ``<part>`` of a score and records when each pitch is struck. Only
single-voice parts are supported; chords share the start time of their first
note and tempo marks (``<sound tempo="..">``) change the length of all
following notes. Without any tempo mark the score plays at 120 bpm.
"""

from __future__ import annotations

import bisect
import io
import logging
import os
import zipfile
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field

from .models import Note, Schedule, Whack

logger = logging.getLogger("whackers.parser")

DEFAULT_BPM = 120.0


@dataclass
class MusicXmlScore:
    """A loaded MusicXML score.

    Attributes:
        tree: Root element of the parsed document.
        whacks: Every struck pitch with its hits, sorted by time.
    """

    tree: ET.Element
    whacks: dict[Note, list[Whack]] = field(default_factory=dict)

    def schedule(self) -> Schedule:
        """Play times of every whacker, as consumed by the search."""
        return {note: [w.timestamp for w in hits] for note, hits in self.whacks.items()}


def load_score(path: str) -> MusicXmlScore:
    """Load a ``.xml``/``.musicxml`` file or a compressed ``.mxl`` archive.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: On an unknown extension, invalid XML or unsupported content.
    """
    extension = os.path.splitext(path)[1].lower()
    with open(path, "rb") as f:
        raw = f.read()
    if extension in (".xml", ".musicxml"):
        xml_bytes = raw
    elif extension == ".mxl":
        xml_bytes = _extract_mxl(raw)
    else:
        raise ValueError(f"Unknown file extension {extension!r} for MusicXML: {path}")
    score = parse_musicxml(xml_bytes)
    logger.info(
        "Loaded %s: %d whackers, %d hits",
        path,
        len(score.whacks),
        sum(len(hits) for hits in score.whacks.values()),
    )
    return score


def _extract_mxl(raw: bytes) -> bytes:
    try:
        archive = zipfile.ZipFile(io.BytesIO(raw))
    except zipfile.BadZipFile as e:
        raise ValueError("Error extracting the MusicXML archive") from e
    with archive:
        # The score is the first file in the root directory of the archive
        names = [n for n in archive.namelist() if "/" not in n and n != "mimetype"]
        if not names:
            raise ValueError("MusicXML archive should have at least one file in its root")
        return archive.read(names[0])


def parse_musicxml(xml_bytes: bytes) -> MusicXmlScore:
    try:
        tree = ET.fromstring(xml_bytes)
    except ET.ParseError as e:
        raise ValueError(f"File contains invalid XML: {e}") from e
    return MusicXmlScore(tree=tree, whacks=load_whacks(tree))


class _TempoMap:
    """Tempo changes as sorted ``(start_time, bpm)`` pairs."""

    def __init__(self):
        self.times: list[float] = []
        self.bpms: list[float] = []

    def add(self, start: float, bpm: float) -> None:
        idx = bisect.bisect_right(self.times, start)
        self.times.insert(idx, start)
        self.bpms.insert(idx, bpm)

    def bpm_at(self, time: float) -> float:
        idx = bisect.bisect_right(self.times, time) - 1
        return self.bpms[idx] if idx >= 0 else DEFAULT_BPM


@dataclass
class _PartCursor:
    """Position inside one part while walking its notes."""

    divisions: int
    next_chord_start: float = 0.0
    chord_start: float = 0.0
    chord_note_idx: int = 0


def load_whacks(tree: ET.Element) -> dict[Note, list[Whack]]:
    """Determine at what times each pitch is played.

    Raises:
        ValueError: If a part has no divisions, a note is malformed or uses a
            voice other than the first.
    """
    whacks: dict[Note, list[Whack]] = {}
    tempo = _TempoMap()
    note_idx = 0
    for part_no, part in enumerate(tree.iter("part"), start=1):
        divisions = divisions_per_beat(part)
        if divisions is None:
            raise ValueError(f"Couldn't load 'divisions' for part {part_no}")
        cursor = _PartCursor(divisions=divisions, chord_note_idx=note_idx)
        for measure_no, measure in enumerate(part.findall("measure"), start=1):
            location = f"measure {measure_no} of part {part_no}"
            for elem in measure:
                if elem.tag == "direction":
                    sound = elem.find("sound")
                    if sound is not None and sound.get("tempo") is not None:
                        try:
                            bpm = float(sound.get("tempo"))
                        except ValueError as e:
                            raise ValueError(f"Error loading tempo mark in {location}") from e
                        tempo.add(cursor.next_chord_start, bpm)
                elif elem.tag == "note":
                    try:
                        whack = _read_note(elem, cursor, tempo, note_idx)
                    except ValueError as e:
                        raise ValueError(f"Error loading note in {location}: {e}") from e
                    if whack is not None:
                        note, hit = whack
                        whacks.setdefault(note, []).append(hit)
                        note_idx += 1

    for hits in whacks.values():
        hits.sort(key=lambda w: (w.timestamp, w.note_idx))
    return whacks


def _read_note(
    elem: ET.Element, cursor: _PartCursor, tempo: _TempoMap, note_idx: int
) -> tuple[Note, Whack] | None:
    """Advance ``cursor`` past one ``<note>`` element; return its whack if pitched."""
    voice = elem.findtext("voice")
    if voice is not None and int(voice) != 1:
        raise ValueError("Multiple voices aren't supported")

    if elem.find("chord") is None:
        # First note (or rest) of a new chord: the next chord starts after it
        duration = note_duration(elem, cursor.divisions, tempo.bpm_at(cursor.next_chord_start))
        cursor.chord_start = cursor.next_chord_start
        cursor.chord_note_idx = note_idx
        cursor.next_chord_start += duration

    pitch = elem.find("pitch")
    if pitch is None:
        if elem.find("rest") is None:
            raise ValueError("note has neither pitch nor rest")
        return None
    step = pitch.findtext("step")
    octave = pitch.findtext("octave")
    if step is None or octave is None:
        raise ValueError("pitch without step or octave")
    alter = pitch.findtext("alter")
    note = Note.from_pitch(step.strip(), int(octave), int(alter) if alter else 0)
    return note, Whack(
        timestamp=cursor.chord_start,
        note_idx=note_idx,
        chord_note_idx=cursor.chord_note_idx,
    )


def divisions_per_beat(part: ET.Element) -> int | None:
    """Divisions per quarter note, read from the first measure of ``part``."""
    first_measure = part.find("measure")
    if first_measure is None:
        return None
    text = first_measure.findtext("attributes/divisions")
    if text is None:
        return None
    try:
        return int(text)
    except ValueError:
        return None


def note_duration(elem: ET.Element, divisions: int, bpm: float) -> float:
    """Length of a note in seconds at the given tempo."""
    text = elem.findtext("duration")
    if text is None:
        raise ValueError("note without duration")
    return 60.0 / bpm / divisions * int(text)
