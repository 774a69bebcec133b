from __future__ import annotations

from typing import Iterable, List, Mapping, Optional, Sequence

from models.round import Round

from .stats import (
    gir_per_round,
    putts_per_round,
    score_trend,
    scoring_by_par,
)

MAX_TICK_LABELS = 12
OVER_PAR_COLOR = "tab:red"
UNDER_PAR_COLOR = "tab:green"


def _load_plt():
    try:
        import matplotlib.pyplot as plt  # type: ignore
    except ImportError as exc:
        raise RuntimeError(
            "matplotlib is required for visualizations. Install it with: pip install matplotlib"
        ) from exc
    return plt


def _round_labels(rounds: Sequence[Round], labels: Optional[Sequence[str]]) -> List[str]:
    if labels is not None:
        return list(labels)
    return [round_obj.date_played.isoformat() for round_obj in rounds]


def _tick_positions(count: int, max_labels: int = MAX_TICK_LABELS) -> List[int]:
    """Evenly spaced tick indexes, always including the most recent round."""
    if count <= max_labels:
        return list(range(count))
    step = -(-count // max_labels)
    positions = list(range(0, count, step))
    if positions[-1] != count - 1:
        positions.append(count - 1)
    return positions


def _per_round_axes(plt, title: str, ylabel: str, labels: Sequence[str], width: float = 10):
    """Figure with one x position per round and date tick labels."""
    fig, ax = plt.subplots(figsize=(width, 5))
    ax.set_title(title)
    ax.set_xlabel("Round")
    ax.set_ylabel(ylabel)
    positions = _tick_positions(len(labels))
    ax.set_xticks(positions)
    ax.set_xticklabels([labels[i] for i in positions], rotation=45, ha="right")
    ax.grid(axis="y", alpha=0.2)
    return fig, ax


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def plot_score_trend(rounds: Sequence[Round], labels: Optional[Sequence[str]] = None):
    """Line chart: total score per round, with the front and back nine underneath."""
    plt = _load_plt()
    rows = score_trend(rounds)
    x_labels = _round_labels(rounds, labels)
    fig, ax = _per_round_axes(plt, "Score Trend", "Score", x_labels)

    x = range(len(rows))
    ax.plot(x, [row["total_score"] for row in rows], marker="o", label="Total")
    for key, name in (("front_nine_score", "Front 9"), ("back_nine_score", "Back 9")):
        ax.plot(x, [row[key] for row in rows], linestyle="--", alpha=0.6, label=name)
    ax.legend(loc="upper left")
    fig.tight_layout()
    return fig, ax


def plot_putts_per_round(rounds: Sequence[Round], labels: Optional[Sequence[str]] = None):
    """Bar chart of putts per round with the average drawn across it.

    Rounds saved without putts are drawn as empty bars and left out of the average.
    """
    plt = _load_plt()
    totals = [row["total_putts"] for row in putts_per_round(rounds)]
    x_labels = _round_labels(rounds, labels)
    fig, ax = _per_round_axes(plt, "Putts Per Round", "Total Putts", x_labels)

    ax.bar(range(len(totals)), totals, label="Putts")
    recorded = [t for t in totals if t]
    if recorded:
        average = _mean(recorded)
        ax.axhline(average, color="black", linestyle=":", linewidth=1, label=f"Average {average:.1f}")
    ax.legend(loc="upper left")
    fig.tight_layout()
    return fig, ax


def plot_gir_per_round(rounds: Sequence[Round], labels: Optional[Sequence[str]] = None):
    """GIR count per round as bars (left axis) and GIR % of 18 holes as a line (right axis)."""
    plt = _load_plt()
    rows = gir_per_round(rounds)
    x_labels = _round_labels(rounds, labels)
    fig, ax1 = _per_round_axes(plt, "Greens In Regulation", "Greens Hit", x_labels, width=11)

    x = range(len(rows))
    ax1.bar(x, [row["total_gir"] for row in rows], alpha=0.8, label="Greens Hit")
    ax1.set_ylim(0, 18)

    ax2 = ax1.twinx()
    ax2.plot(x, [row["gir_percentage"] for row in rows], color="black", marker="o", linewidth=1.5, label="GIR %")
    ax2.set_ylabel("GIR %")
    ax2.set_ylim(0, 100)

    handles, names = [], []
    for axis in (ax1, ax2):
        h, n = axis.get_legend_handles_labels()
        handles += h
        names += n
    ax1.legend(handles, names, loc="upper left")

    fig.tight_layout()
    return fig, ax1, ax2


def plot_scoring_by_par(
    rounds: Iterable[Round],
    pars_by_tee_box: Optional[Mapping[str, Sequence[int]]] = None,
):
    """Average strokes over par on par 3s, 4s and 5s, labelled with the hole count."""
    plt = _load_plt()
    rows = scoring_by_par(rounds, pars_by_tee_box)
    names = [f"Par {row['par']}" for row in rows]
    over = [row["average_to_par"] for row in rows]
    colors = [OVER_PAR_COLOR if value > 0 else UNDER_PAR_COLOR for value in over]

    fig, ax = plt.subplots(figsize=(8, 5))
    bars = ax.bar(names, over, color=colors)
    ax.bar_label(bars, labels=[f"{row['sample_size']} holes" for row in rows], padding=3, fontsize=8)
    ax.axhline(0, color="black", linewidth=1, alpha=0.6)
    ax.set_title("Scoring By Hole Par")
    ax.set_xlabel("Hole Type")
    ax.set_ylabel("Average Strokes Over Par")
    ax.grid(axis="y", alpha=0.2)
    fig.tight_layout()
    return fig, ax
