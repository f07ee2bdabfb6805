import argparse
import logging
import os
from typing import Optional, Sequence

from .config import AppConfig, load_config
from .export import write_player_scores, write_results_json
from .models import SearchResult
from .parser import load_score
from .presentation import format_table
from .search import search
from .visualization import plot_hand_timeline, plot_restart_progress

logger = logging.getLogger("whackers")


def run(config: AppConfig) -> SearchResult:
    """Load the score, search for an assignment and write all requested outputs."""
    score = load_score(config.score)
    schedule = score.schedule()
    for note in sorted(schedule):
        times = ", ".join(f"{t:.2f}s" for t in schedule[note])
        logger.debug("%4s: [%s]", note.name(), times)
    logger.info("%d boomwhackers required", len(schedule))

    params = config.search
    result = search(
        schedule,
        params.players,
        seed=params.seed,
        restarts=params.restarts,
        iterations=params.iterations,
        workers=params.workers,
    )
    print(format_table(result.players))
    print(f"\nFound best score of {result.score:.3f} in {result.elapsed_s:.2f}s")

    stem = os.path.splitext(os.path.basename(config.score))[0]
    if config.output.results_json:
        write_results_json(
            result,
            os.path.join(config.output.dir, f"{stem}_assignment.json"),
            score_path=config.score,
            players=params.players,
            restarts=params.restarts,
            iterations=params.iterations,
        )
    if config.output.annotate:
        write_player_scores(score, result, config.output.dir, stem)
    if config.charts.enabled:
        try:
            path = plot_hand_timeline(
                result.players,
                schedule,
                os.path.join(config.charts.dir, f"{stem}_timeline.png"),
                title=f"{stem}: score {result.score:.3f}",
            )
            logger.info("Saved hand timeline to %s", path)
            path = plot_restart_progress(
                result.histories, os.path.join(config.charts.dir, f"{stem}_progress.png")
            )
            logger.info("Saved restart progress to %s", path)
        except (OSError, ValueError) as e:
            logger.warning("Failed to create charts: %s", e)
    return result


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        description="Assign boomwhackers to players, minimising fast swaps"
    )
    parser.add_argument("--config", required=True, help="Path to the YAML/JSON config file")
    parser.add_argument("--players", type=int, help="Override the number of players")
    parser.add_argument("--seed", type=int, help="Override the random seed")
    args = parser.parse_args(argv)

    config = load_config(args.config).with_overrides(players=args.players, seed=args.seed)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    run(config)


if __name__ == "__main__":
    main()
