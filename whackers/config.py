"""Run configuration.

Configuration lives in a YAML (or JSON) file; every key except ``score`` has a
default. Values are validated here so that invalid settings (e.g. zero
players) are rejected before any search starts.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional

import yaml

from .search import DEFAULT_ITERATIONS, DEFAULT_RESTARTS


@dataclass(frozen=True)
class SearchParams:
    """Parameters of the assignment search."""

    players: int = 7
    seed: int = 0
    restarts: int = DEFAULT_RESTARTS
    iterations: int = DEFAULT_ITERATIONS
    workers: int = 1


@dataclass(frozen=True)
class OutputConfig:
    dir: str = "boomwhackers"
    annotate: bool = True
    results_json: bool = True


@dataclass(frozen=True)
class ChartsConfig:
    enabled: bool = False
    dir: str = "charts"


@dataclass(frozen=True)
class AppConfig:
    score: str
    search: SearchParams = field(default_factory=SearchParams)
    output: OutputConfig = field(default_factory=OutputConfig)
    charts: ChartsConfig = field(default_factory=ChartsConfig)
    log_level: str = "INFO"

    def with_overrides(self, players: Optional[int] = None, seed: Optional[int] = None) -> AppConfig:
        search = self.search
        if players is not None:
            search = replace(search, players=players)
        if seed is not None:
            search = replace(search, seed=seed)
        validate_search_params(search)
        return replace(self, search=search)


def validate_search_params(params: SearchParams) -> None:
    """Raise ValueError for settings the search cannot run with."""
    if params.players < 1:
        raise ValueError(f"'players' must be at least 1, got {params.players}")
    if params.restarts < 1:
        raise ValueError(f"'restarts' must be at least 1, got {params.restarts}")
    if params.iterations < 0:
        raise ValueError(f"'iterations' must not be negative, got {params.iterations}")
    if params.workers < 1:
        raise ValueError(f"'workers' must be at least 1, got {params.workers}")


def _section(cfg: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = cfg.get(name, {})
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"Config section '{name}' must be a mapping")
    return value


def _as_int(cfg: Dict[str, Any], key: str, default: int) -> int:
    value = cfg.get(key, default)
    if isinstance(value, bool):
        raise ValueError(f"'{key}' must be an integer, got {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"'{key}' must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"'{key}' must be an integer, got {value!r}") from e


def _as_bool(cfg: Dict[str, Any], key: str, default: bool) -> bool:
    value = cfg.get(key, default)
    if not isinstance(value, bool):
        raise ValueError(f"'{key}' must be true or false, got {value!r}")
    return value


def parse_config(cfg: Dict[str, Any]) -> AppConfig:
    score = cfg.get("score")
    if not score:
        raise ValueError("Missing 'score' key in config")
    search = SearchParams(
        players=_as_int(cfg, "players", SearchParams.players),
        seed=_as_int(cfg, "seed", SearchParams.seed),
        restarts=_as_int(cfg, "restarts", SearchParams.restarts),
        iterations=_as_int(cfg, "iterations", SearchParams.iterations),
        workers=_as_int(cfg, "workers", SearchParams.workers),
    )
    validate_search_params(search)
    output_cfg = _section(cfg, "output")
    charts_cfg = _section(cfg, "charts")
    return AppConfig(
        score=str(score),
        search=search,
        output=OutputConfig(
            dir=str(output_cfg.get("dir", OutputConfig.dir)),
            annotate=_as_bool(output_cfg, "annotate", OutputConfig.annotate),
            results_json=_as_bool(output_cfg, "results_json", OutputConfig.results_json),
        ),
        charts=ChartsConfig(
            enabled=_as_bool(charts_cfg, "enabled", ChartsConfig.enabled),
            dir=str(charts_cfg.get("dir", ChartsConfig.dir)),
        ),
        log_level=str(cfg.get("log_level", "INFO")),
    )


def load_config(path: str) -> AppConfig:
    """Load and validate a YAML/JSON configuration file.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: On missing or invalid settings.
    """
    if not os.path.isfile(path):
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        text = f.read()
    if path.endswith((".yml", ".yaml")):
        cfg = yaml.safe_load(text) or {}
    else:
        cfg = json.loads(text)
    if not isinstance(cfg, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    return parse_config(cfg)
