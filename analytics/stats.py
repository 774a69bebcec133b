from __future__ import annotations

import calendar
import math
from datetime import date
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from pydantic import BaseModel

from models import HOLES
from models.round import Round

# Layout assumed when a round's tee-box pars are not known.
ASSUMED_PAR_3_HOLES = (3, 6, 12, 15)
ASSUMED_PAR_5_HOLES = (5, 9, 14, 18)

COMPARISON_WINDOW = 5

YEAR_FILTERS = ("", "current", "last")
SORT_FIELDS = ("date", "score")


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def assumed_pars() -> List[int]:
    pars = []
    for hole_number in range(1, HOLES + 1):
        if hole_number in ASSUMED_PAR_3_HOLES:
            pars.append(3)
        elif hole_number in ASSUMED_PAR_5_HOLES:
            pars.append(5)
        else:
            pars.append(4)
    return pars


def round_summary(round_obj: Round) -> Dict[str, Optional[float]]:
    """Compute summary metrics for a single round (percentages over 18 holes)."""
    return {
        "total_score": float(round_obj.total_score),
        "total_putts": float(round_obj.total_putts),
        "total_gir": float(round_obj.total_gir),
        "fairways_hit": float(round_obj.total_fairways_hit),
        "gir_percentage": round_obj.gir_percentage,
        "putts_per_hole": round_obj.total_putts / HOLES,
    }


def round_averages(rounds: Sequence[Round]) -> Dict[str, int]:
    """Whole-number averages for the history header: score, putts and GIR %.

    GIR % is total greens over (rounds x 18). Rounds with no putts recorded
    are left out of the putts average.
    """
    if not rounds:
        return {"avg_score": 0, "avg_putts": 0, "avg_gir_percentage": 0, "rounds": 0}

    avg_score = _round_half_up(sum(r.total_score for r in rounds) / len(rounds))
    with_putts = [r for r in rounds if r.total_putts]
    avg_putts = _round_half_up(sum(r.total_putts for r in with_putts) / len(with_putts)) if with_putts else 0
    avg_gir = _round_half_up(sum(r.total_gir for r in rounds) / (len(rounds) * HOLES) * 100)
    return {
        "avg_score": avg_score,
        "avg_putts": avg_putts,
        "avg_gir_percentage": avg_gir,
        "rounds": len(rounds),
    }


def filter_by_year(rounds: Iterable[Round], year_filter: Optional[str] = "", today: Optional[date] = None) -> List[Round]:
    """Keep rounds from the current or last calendar year; "" keeps everything."""
    year_filter = year_filter or ""
    if year_filter not in YEAR_FILTERS:
        raise ValueError(f"Unknown year filter {year_filter!r}; expected one of {YEAR_FILTERS}")
    rounds = list(rounds)
    if not year_filter:
        return rounds
    today = today or date.today()
    year = today.year if year_filter == "current" else today.year - 1
    return [r for r in rounds if r.date_played.year == year]


def sort_rounds(rounds: Iterable[Round], by: str = "date", order: str = "desc") -> List[Round]:
    if by not in SORT_FIELDS:
        raise ValueError(f"Unknown sort field {by!r}; expected one of {SORT_FIELDS}")
    if order not in ("asc", "desc"):
        raise ValueError(f"Unknown sort order {order!r}")
    if by == "date":
        key = lambda r: r.date_played
    else:
        key = lambda r: r.total_score
    return sorted(rounds, key=key, reverse=(order == "desc"))


def group_by_month(rounds: Iterable[Round], order: str = "desc") -> Dict[int, Dict[str, List[Round]]]:
    """Group rounds as {year: {month name: [rounds]}}, each level ordered by date."""
    reverse = order == "desc"
    grouped: Dict[int, Dict[int, List[Round]]] = {}
    for round_obj in sorted(rounds, key=lambda r: r.date_played, reverse=reverse):
        played = round_obj.date_played
        grouped.setdefault(played.year, {}).setdefault(played.month, []).append(round_obj)

    results: Dict[int, Dict[str, List[Round]]] = {}
    for year in sorted(grouped, reverse=reverse):
        months = grouped[year]
        results[year] = {
            calendar.month_name[month]: months[month]
            for month in sorted(months, reverse=reverse)
        }
    return results


def putts_per_round(rounds: Iterable[Round]) -> List[Dict[str, Any]]:
    """Return putt totals by round for plotting/reporting."""
    results: List[Dict[str, Any]] = []
    for index, round_obj in enumerate(rounds, start=1):
        results.append(
            {
                "round_index": index,
                "round_id": round_obj.id,
                "total_putts": round_obj.total_putts,
            }
        )
    return results


def score_trend(rounds: Iterable[Round]) -> List[Dict[str, Any]]:
    """Return total score trend data by round."""
    results: List[Dict[str, Any]] = []
    for index, round_obj in enumerate(rounds, start=1):
        results.append(
            {
                "round_index": index,
                "round_id": round_obj.id,
                "date_played": round_obj.date_played,
                "total_score": round_obj.total_score,
                "front_nine_score": round_obj.front_nine_score,
                "back_nine_score": round_obj.back_nine_score,
            }
        )
    return results


def gir_per_round(rounds: Iterable[Round]) -> List[Dict[str, Any]]:
    """Return GIR totals and percentage (of 18) by round."""
    results: List[Dict[str, Any]] = []
    for index, round_obj in enumerate(rounds, start=1):
        results.append(
            {
                "round_index": index,
                "round_id": round_obj.id,
                "total_gir": round_obj.total_gir,
                "gir_percentage": round_obj.gir_percentage,
            }
        )
    return results


def scoring_by_par(
    rounds: Iterable[Round],
    pars_by_tee_box: Optional[Mapping[str, Sequence[int]]] = None,
) -> List[Dict[str, Any]]:
    """
    Aggregate scoring performance by hole par (3, 4, 5).

    Pars come from ``pars_by_tee_box`` (tee_box_id -> 18 pars) when the
    round's tee box is there, otherwise from the assumed layout. Holes with
    no score entered are skipped.

    Output rows:
    - par: 3, 4, or 5
    - average_to_par: mean(strokes - par)
    - average_strokes: mean(strokes)
    - sample_size: number of holes included
    """
    pars_by_tee_box = pars_by_tee_box or {}
    fallback = assumed_pars()
    by_par: Dict[int, List[int]] = {}

    for round_obj in rounds:
        pars = pars_by_tee_box.get(round_obj.tee_box_id) or fallback
        for strokes, par in zip(round_obj.scores, pars):
            if not strokes or par not in (3, 4, 5):
                continue
            by_par.setdefault(par, []).append(strokes)

    results: List[Dict[str, Any]] = []
    for par in sorted(by_par):
        strokes = by_par[par]
        avg_strokes = sum(strokes) / len(strokes)
        results.append(
            {
                "par": par,
                "average_to_par": avg_strokes - par,
                "average_strokes": avg_strokes,
                "sample_size": len(strokes),
            }
        )
    return results


# ================================================================
# Recent vs previous form
# ================================================================

class PerformanceComparison(BaseModel):
    """Recent rounds against the ones before them, fed to the insight prompt."""
    recent_rounds: int
    previous_rounds: int
    recent_avg_score: float
    previous_avg_score: float
    recent_avg_putts: float
    previous_avg_putts: float
    recent_gir_percentage: float
    previous_gir_percentage: float
    par_averages: Dict[int, float] = {}
    score_trend: str


def _averages(rounds: Sequence[Round]):
    if not rounds:
        return 0.0, 0.0, 0.0
    count = len(rounds)
    return (
        sum(r.total_score for r in rounds) / count,
        sum(r.total_putts for r in rounds) / count,
        sum(r.total_gir for r in rounds) / (count * HOLES) * 100,
    )


def describe_trend(recent_avg: float, previous_avg: float, has_previous: bool = True) -> str:
    """Lower is better: a falling average is an improvement."""
    if not has_previous:
        return f"Not enough earlier rounds to compare (recent average {recent_avg:.1f})"
    if recent_avg < previous_avg:
        return f"Improvement: average score decreased from {previous_avg:.1f} to {recent_avg:.1f}"
    if recent_avg > previous_avg:
        return f"Decline: average score increased from {previous_avg:.1f} to {recent_avg:.1f}"
    return f"No change in average score ({recent_avg:.1f})"


def compare_performance(
    rounds: Iterable[Round],
    pars_by_tee_box: Optional[Mapping[str, Sequence[int]]] = None,
    window: int = COMPARISON_WINDOW,
) -> PerformanceComparison:
    """Compare the most recent ``window`` rounds with the ``window`` before them."""
    ordered = sort_rounds(rounds, by="date", order="desc")
    if not ordered:
        raise ValueError("No rounds to analyze")

    recent = ordered[:window]
    previous = ordered[window:2 * window]
    recent_score, recent_putts, recent_gir = _averages(recent)
    previous_score, previous_putts, previous_gir = _averages(previous)

    par_rows = scoring_by_par(recent, pars_by_tee_box)
    return PerformanceComparison(
        recent_rounds=len(recent),
        previous_rounds=len(previous),
        recent_avg_score=recent_score,
        previous_avg_score=previous_score,
        recent_avg_putts=recent_putts,
        previous_avg_putts=previous_putts,
        recent_gir_percentage=recent_gir,
        previous_gir_percentage=previous_gir,
        par_averages={row["par"]: row["average_strokes"] for row in par_rows},
        score_trend=describe_trend(recent_score, previous_score, has_previous=bool(previous)),
    )
