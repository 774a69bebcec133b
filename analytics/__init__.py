from .stats import (
    PerformanceComparison,
    compare_performance,
    filter_by_year,
    gir_per_round,
    group_by_month,
    putts_per_round,
    round_averages,
    round_summary,
    score_trend,
    scoring_by_par,
    sort_rounds,
)
from .visualizations import (
    plot_gir_per_round,
    plot_putts_per_round,
    plot_score_trend,
    plot_scoring_by_par,
)

__all__ = [
    "PerformanceComparison",
    "compare_performance",
    "filter_by_year",
    "gir_per_round",
    "group_by_month",
    "putts_per_round",
    "round_averages",
    "round_summary",
    "score_trend",
    "scoring_by_par",
    "sort_rounds",
    "plot_gir_per_round",
    "plot_putts_per_round",
    "plot_score_trend",
    "plot_scoring_by_par",
]
