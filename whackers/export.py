"""Writing search results to disk.

Produces:
    - a results JSON with the players, whacker names and score,
    - one annotated MusicXML score per player,
    - a MuseScore batch job file (``mscore -j jobs.json``) converting those
      scores to PDF.
"""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime
from typing import Any

from .annotate import annotated_xml
from .models import SearchResult
from .parser import MusicXmlScore

logger = logging.getLogger("whackers.export")


def result_payload(result: SearchResult, score_path: str | None = None, **params: Any) -> dict:
    """JSON-ready description of ``result``.

    Extra keyword arguments (restarts, iterations, ...) are stored under
    ``"params"``.
    """
    players = []
    for number, (left, right) in enumerate(result.players, start=1):
        players.append(
            {
                "player": number,
                "left": [note.name() for note in left],
                "right": [note.name() for note in right],
                "left_semitones": [note.semis_above_c0 for note in left],
                "right_semitones": [note.semis_above_c0 for note in right],
            }
        )
    return {
        "score_file": score_path,
        "timestamp": datetime.now().strftime("%Y%m%d_%H%M%S"),
        "seed": result.seed,
        "params": params,
        "best_score": result.score,
        "elapsed_s": result.elapsed_s,
        "players": players,
    }


def write_results_json(
    result: SearchResult,
    path: str,
    score_path: str | None = None,
    **params: Any,
) -> str:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(result_payload(result, score_path, **params), f, ensure_ascii=False, indent=2)
    logger.info("Saved results JSON to %s", path)
    return path


def write_player_scores(
    score: MusicXmlScore,
    result: SearchResult,
    out_dir: str,
    stem: str,
) -> list[str]:
    """Write one annotated score per player plus the MuseScore ``jobs.json``.

    Returns:
        Paths of the written MusicXML files, in player order.
    """
    os.makedirs(out_dir, exist_ok=True)
    paths: list[str] = []
    jobs = []
    for number, (left, right) in enumerate(result.players, start=1):
        xml_path = os.path.join(out_dir, f"{stem}_player{number}.musicxml")
        with open(xml_path, "w", encoding="utf-8") as f:
            f.write(annotated_xml(score, left, right))
        paths.append(xml_path)
        jobs.append(
            {
                "in": os.path.abspath(xml_path),
                "out": os.path.abspath(os.path.splitext(xml_path)[0] + ".pdf"),
            }
        )
    jobs_path = os.path.join(out_dir, "jobs.json")
    with open(jobs_path, "w", encoding="utf-8") as f:
        json.dump(jobs, f, indent=2)
    logger.info("Saved %d annotated scores and %s", len(paths), jobs_path)
    return paths
