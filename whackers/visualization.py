import os
from typing import List, Optional

import matplotlib

matplotlib.use("Agg")  # Must be set before importing pyplot
import matplotlib.pyplot as plt  # noqa: E402

from .evaluation import swap_events  # noqa: E402
from .models import Player, Schedule  # noqa: E402


def _ensure_dir(path: str):
    if path:
        os.makedirs(path, exist_ok=True)


def plot_hand_timeline(
    players: List[Player],
    schedule: Schedule,
    save_path: str,
    title: Optional[str] = None,
):
    """Timeline of every hand: one row per hand, one dot per hit.

    Dots are coloured by whacker; swaps are marked with a red tick whose
    height grows with the swap cost, so rushed swaps stand out.
    """
    rows = []
    for number, (left, right) in enumerate(players, start=1):
        rows.append((f"P{number} L", left))
        rows.append((f"P{number} R", right))

    end_time = max((times[-1] for times in schedule.values() if times), default=1.0)
    fig, ax = plt.subplots(
        figsize=(min(8 + end_time * 0.1, 24), min(0.45 * len(rows) + 2, 16)),
        constrained_layout=True,
    )
    cmap = matplotlib.colormaps["tab20"]
    for y, (label, notes) in enumerate(rows):
        for note in notes:
            times = schedule[note]
            ax.scatter(
                times,
                [y] * len(times),
                s=14,
                color=cmap(note.semis_above_c0 % 20),
                edgecolors="black",
                linewidths=0.3,
                zorder=3,
            )
        for time, gap in swap_events(notes, schedule):
            height = min(0.45, 0.1 + 0.35 / gap)
            ax.vlines(time, y - height, y + height, color="red", linewidth=1.0, zorder=2)

    ax.set_yticks(range(len(rows)))
    ax.set_yticklabels([label for label, _ in rows])
    ax.set_ylim(-0.5, len(rows) - 0.5)
    ax.invert_yaxis()
    ax.set_xlabel("Time [s]", fontsize=12)
    ax.set_title(title or "Hand timeline", fontsize=14, fontweight="bold")
    ax.grid(True, alpha=0.25, axis="x", linestyle="--", linewidth=0.7)

    _ensure_dir(os.path.dirname(save_path))
    fig.savefig(save_path, dpi=180)
    plt.close(fig)
    return save_path


def plot_restart_progress(histories: List[List[float]], save_path: str, highlight_best: bool = True):
    """Current score per iteration for every restart on one plot."""
    fig, ax = plt.subplots(figsize=(10, 6), constrained_layout=True)
    best_idx = None
    if highlight_best and histories:
        finals = [h[-1] if h else float("-inf") for h in histories]
        best_idx = finals.index(max(finals))
    for idx, history in enumerate(histories):
        if not history:
            continue
        if idx == best_idx:
            continue
        ax.plot(range(1, len(history) + 1), history, color="grey", alpha=0.3, linewidth=0.8)
    if best_idx is not None and histories[best_idx]:
        best = histories[best_idx]
        ax.plot(
            range(1, len(best) + 1),
            best,
            color="tab:blue",
            linewidth=2,
            label=f"best restart ({best_idx + 1})",
        )
        ax.annotate(
            f"{best[-1]:.3f}",
            xy=(len(best), best[-1]),
            xytext=(6, -10),
            textcoords="offset points",
            fontsize=9,
            bbox=dict(boxstyle="round,pad=0.2", facecolor="white", alpha=0.55),
        )
        ax.legend(loc="lower right", frameon=False, fontsize=9)
    ax.set_xlabel("Iteration", fontsize=12)
    ax.set_ylabel("Score", fontsize=12)
    ax.set_title("Restart convergence", fontsize=14, fontweight="bold")
    ax.grid(True, alpha=0.25, linestyle="--", linewidth=0.7)

    _ensure_dir(os.path.dirname(save_path))
    fig.savefig(save_path, dpi=180)
    plt.close(fig)
    return save_path
