from .aggregator import RoundSummary, gir_flags, summarize
from .exceptions import (
    InsightResponseError,
    InvalidImageError,
    InvalidShapeError,
    MalformedResponseError,
    ScorecardError,
    ServiceTimeoutError,
    ServiceUnavailableError,
    UnresolvedCourseError,
)
from .gir import calculate_gir
from .par_resolver import apply_pars, resolve_pars
from .reconciler import QUICK_FILL_PUTTS, QUICK_FILL_SCORE, ExtractionSnapshot, Scorecard
from .resolution import CourseResolution, filter_courses, filter_tee_boxes
from .review import FlagKind, ReviewFlag, review

__all__ = [
    "CourseResolution",
    "ExtractionSnapshot",
    "FlagKind",
    "InsightResponseError",
    "InvalidImageError",
    "InvalidShapeError",
    "MalformedResponseError",
    "QUICK_FILL_PUTTS",
    "QUICK_FILL_SCORE",
    "ReviewFlag",
    "RoundSummary",
    "Scorecard",
    "ScorecardError",
    "ServiceTimeoutError",
    "ServiceUnavailableError",
    "UnresolvedCourseError",
    "apply_pars",
    "calculate_gir",
    "filter_courses",
    "filter_tee_boxes",
    "gir_flags",
    "resolve_pars",
    "review",
    "summarize",
]
