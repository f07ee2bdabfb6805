import logging
import random
import time
from concurrent.futures import ProcessPoolExecutor
from typing import Optional

from .assignment import HandAssignment
from .models import Schedule, SearchResult
from .presentation import pair_hands

logger = logging.getLogger("whackers.search")

DEFAULT_RESTARTS = 100
DEFAULT_ITERATIONS = 1000


def hill_climb(
    schedule: Schedule,
    num_players: int,
    rng: random.Random,
    iterations: int = DEFAULT_ITERATIONS,
    history: Optional[list[float]] = None,
) -> HandAssignment:
    """One restart: greedy single-swap hill climbing from a random assignment.

    A proposed neighbour replaces the current assignment only if its score is
    strictly higher, so the current score never decreases.

    Args:
        schedule: Play times of every whacker.
        num_players: Number of two-handed players.
        rng: Generator for the initial shuffle and every swap draw.
        iterations: Number of propose/accept steps (no early stop).
        history: Optional list extended with the current score after each step.

    Returns:
        The final (locally optimal) assignment of this restart.
    """
    current = HandAssignment.random(schedule, num_players, rng)
    for _ in range(iterations):
        candidate = current.copy()
        candidate.propose_swap(rng)
        if candidate.score > current.score:
            current = candidate
        if history is not None:
            history.append(current.score)
    return current


def _run_restart(
    args: tuple[Schedule, int, int, int],
) -> tuple[HandAssignment, list[float]]:
    schedule, num_players, restart_seed, iterations = args
    history: list[float] = []
    assignment = hill_climb(
        schedule,
        num_players,
        random.Random(restart_seed),
        iterations=iterations,
        history=history,
    )
    return assignment, history


def restart_seeds(seed: int, restarts: int) -> list[int]:
    """Derive one 64-bit seed per restart from the top-level ``seed``."""
    rng = random.Random(seed)
    return [rng.getrandbits(64) for _ in range(restarts)]


def search(
    schedule: Schedule,
    num_players: int,
    seed: int = 0,
    restarts: int = DEFAULT_RESTARTS,
    iterations: int = DEFAULT_ITERATIONS,
    workers: int = 1,
) -> SearchResult:
    """Find a good assignment of whackers to players.

    Runs ``restarts`` independent hill climbs, each with its own generator
    seeded from ``seed``, and keeps the highest scoring one (the earliest
    restart wins ties). The result depends only on ``schedule``,
    ``num_players``, ``seed``, ``restarts`` and ``iterations``; ``workers``
    only changes how many processes share the restarts.

    Raises:
        ValueError: On non-positive players/restarts/workers or negative iterations.
    """
    if num_players < 1:
        raise ValueError(f"Number of players must be at least 1, got {num_players}")
    if restarts < 1:
        raise ValueError(f"Number of restarts must be at least 1, got {restarts}")
    if iterations < 0:
        raise ValueError(f"Number of iterations must not be negative, got {iterations}")
    if workers < 1:
        raise ValueError(f"Number of workers must be at least 1, got {workers}")

    t0 = time.perf_counter()
    jobs = [(schedule, num_players, s, iterations) for s in restart_seeds(seed, restarts)]
    if workers > 1:
        with ProcessPoolExecutor(max_workers=workers) as executor:
            outcomes = list(executor.map(_run_restart, jobs))
    else:
        outcomes = [_run_restart(job) for job in jobs]

    best = outcomes[0][0]
    histories: list[list[float]] = []
    for idx, (assignment, history) in enumerate(outcomes):
        logger.debug("[restart %d/%d] score=%.4f", idx + 1, restarts, assignment.score)
        histories.append(history)
        if assignment.score > best.score:
            best = assignment

    elapsed = time.perf_counter() - t0
    logger.info(
        "Best score %.3f over %d restarts x %d iterations (%d whackers, %d players) in %.2fs",
        best.score,
        restarts,
        iterations,
        len(schedule),
        num_players,
        elapsed,
    )
    return SearchResult(
        players=pair_hands(best.hands()),
        score=best.score,
        seed=seed,
        elapsed_s=elapsed,
        histories=histories,
    )
