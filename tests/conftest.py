"""Pytest configuration & custom summary hook.

Also ensures the project root is on sys.path so 'import whackers' works without
installing the package.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

_root = Path(__file__).resolve().parents[1]
if str(_root) not in sys.path:
    sys.path.insert(0, str(_root))

from whackers.models import Note  # noqa: E402


@pytest.fixture
def spread_schedule() -> dict[Note, list[float]]:
    """Eight whackers with a mix of close and distant hits."""
    return {
        Note(48): [0.0, 2.0, 4.0, 6.0],
        Note(50): [0.5, 2.5, 4.5],
        Note(52): [1.0, 3.0, 5.0],
        Note(53): [1.5, 3.5],
        Note(55): [0.25, 8.0],
        Note(57): [7.0, 7.1, 7.2],
        Note(59): [9.0],
        Note(60): [9.05, 10.0],
    }


def pytest_terminal_summary(
    terminalreporter: pytest.TerminalReporter,
    exitstatus: int,
    config: pytest.Config,
) -> None:  # noqa: D401
    """Append a compact custom summary at the end of test session."""
    stats = terminalreporter.stats
    collected = terminalreporter._numcollected  # type: ignore[attr-defined]
    passed = len(stats.get("passed", []))
    failed = len(stats.get("failed", []))
    errors = len(stats.get("error", []))
    skipped = len(stats.get("skipped", []))

    terminalreporter.section("Custom summary", sep="=")
    terminalreporter.write_line(
        "Collected: "
        f"{collected} | Passed: {passed} | Failed: {failed} | "
        f"Errors: {errors} | Skipped: {skipped}"
    )
    if failed:
        terminalreporter.write_line("Failed tests:")
        for rep in stats["failed"]:
            terminalreporter.write_line(f"  - {rep.nodeid}")
