import json
import xml.etree.ElementTree as ET
from pathlib import Path

from musicxml_helpers import simple_score

from whackers.annotate import annotated_xml
from whackers.export import result_payload, write_player_scores, write_results_json
from whackers.models import Note, SearchResult
from whackers.parser import parse_musicxml

C4, E4, G4, A4, BB4 = Note(48), Note(52), Note(55), Note(57), Note(58)


def pitched_notes(xml: str) -> list[ET.Element]:
    root = ET.fromstring(xml.encode())
    return [n for n in root.iter("note") if n.find("pitch") is not None]


def lyric_texts(note: ET.Element) -> list[tuple[str, str]]:
    return [(lyric.get("color"), lyric.findtext("text")) for lyric in note.findall("lyric")]


def test_annotated_xml_colours_and_lyrics() -> None:
    score = parse_musicxml(simple_score().encode())
    notes = pitched_notes(annotated_xml(score, [C4], [E4, A4]))
    assert [n.get("color") for n in notes] == [
        "#ff0000",  # C4
        "#ff0000",  # C4 (chord)
        "#00aa00",  # E4 (chord)
        "#000000",  # G4
        "#00aa00",  # A4
        "#000000",  # Bb4
    ]
    assert lyric_texts(notes[0]) == [("#ff0000", "C4")]
    # Chord lyrics sit on its first note, highest whacker first; old lyric removed
    assert lyric_texts(notes[1]) == [("#00aa00", "E4"), ("#ff0000", "C4")]
    assert lyric_texts(notes[2]) == []
    assert lyric_texts(notes[3]) == []
    assert lyric_texts(notes[4]) == [("#00aa00", "A4")]


def test_annotation_leaves_source_tree_untouched() -> None:
    score = parse_musicxml(simple_score().encode())
    annotated_xml(score, [C4], [E4])
    assert all(n.get("color") is None for n in score.tree.iter("note"))


def test_write_player_scores_and_jobs(tmp_path: Path) -> None:
    score = parse_musicxml(simple_score().encode())
    result = SearchResult(players=[([C4], [E4]), ([G4, A4], [BB4])], score=-1.5, seed=0)
    paths = write_player_scores(score, result, str(tmp_path), "simple")
    assert [Path(p).name for p in paths] == ["simple_player1.musicxml", "simple_player2.musicxml"]
    jobs = json.loads((tmp_path / "jobs.json").read_text())
    assert len(jobs) == 2
    assert jobs[1]["out"].endswith("simple_player2.pdf")
    assert Path(jobs[0]["in"]).exists()


def test_results_json(tmp_path: Path) -> None:
    result = SearchResult(players=[([C4, E4], [G4])], score=-0.25, seed=3, elapsed_s=0.1)
    payload = result_payload(result, "piece.mxl", restarts=5)
    assert payload["players"][0]["left"] == ["C4", "E4"]
    assert payload["players"][0]["right_semitones"] == [55]
    assert payload["params"] == {"restarts": 5}

    path = write_results_json(result, str(tmp_path / "out" / "r.json"), "piece.mxl", restarts=5)
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    for key in ["score_file", "timestamp", "seed", "params", "best_score", "players"]:
        assert key in data
    assert data["best_score"] == -0.25
