"""API request and response models."""

from datetime import date
from pydantic import BaseModel, Field, field_validator
from typing import Dict, List, Optional

from models import FairwayOutcome, HoleRecord, Round, SubmissionType
from scorecard import ExtractionSnapshot, ReviewFlag, RoundSummary, Scorecard


# ================================================================
# Scorecard views
# ================================================================

class HoleView(BaseModel):
    hole_number: int
    par: int
    score: Optional[int] = None
    putts: Optional[int] = None
    fairway_outcome: FairwayOutcome = FairwayOutcome.UNSET
    gir: Optional[bool] = None
    to_par: Optional[int] = None
    score_label: Optional[str] = None


class SummaryView(BaseModel):
    total_score: int
    total_putts: int
    fairways_hit: int
    gir_count: int
    front_nine_score: int
    back_nine_score: int
    fairways_percentage: float
    gir_percentage: float
    putts_per_hole: float


class ScorecardView(BaseModel):
    holes: List[HoleView]
    summary: SummaryView


def summary_view(summary: RoundSummary) -> SummaryView:
    return SummaryView(
        **summary.model_dump(),
        fairways_percentage=summary.fairways_percentage,
        gir_percentage=summary.gir_percentage,
        putts_per_hole=summary.putts_per_hole,
    )


def scorecard_view(scorecard: Scorecard) -> ScorecardView:
    holes = []
    for i, hole in enumerate(scorecard.holes):
        holes.append(HoleView(
            hole_number=hole.hole_number,
            par=hole.par,
            score=hole.score,
            putts=hole.putts,
            fairway_outcome=hole.fairway_outcome,
            gir=scorecard.gir(i),
            to_par=hole.to_par(),
            score_label=hole.score_label(),
        ))
    return ScorecardView(holes=holes, summary=summary_view(scorecard.summary()))


# ================================================================
# Scan
# ================================================================

class ResolutionView(BaseModel):
    course_id: str = ""
    tee_box_id: str = ""
    course_name: str = ""
    tee_box_name: str = ""
    date_played: str = ""
    missing: List[str] = []


class ExtractResponse(BaseModel):
    """Reconciled extraction, ready for the player to review."""
    scorecard: ScorecardView
    resolution: ResolutionView
    review_flags: List[ReviewFlag]
    extraction: Optional[ExtractionSnapshot] = None


class SummaryRequest(BaseModel):
    holes: List[HoleRecord]
    tee_box_id: Optional[str] = None


class SummaryResponse(BaseModel):
    scorecard: ScorecardView
    review_flags: List[ReviewFlag]


# ================================================================
# Rounds
# ================================================================

class SaveRoundRequest(BaseModel):
    """A reviewed round from any entry path."""
    user_id: str
    course_id: str = ""
    tee_box_id: str = ""
    date_played: Optional[date] = None
    submission_type: SubmissionType = SubmissionType.MANUAL
    holes: List[HoleRecord]

    @field_validator("date_played", mode="before")
    @classmethod
    def blank_date_is_today(cls, v):
        # Left blank means played today; anything else must be a real date.
        if isinstance(v, str) and not v.strip():
            return None
        return v


class RoundSummaryResponse(BaseModel):
    """Lightweight round for list views."""
    id: Optional[str] = None
    date_played: date
    course_id: str
    tee_box_id: str
    submission_type: SubmissionType
    total_score: int
    front_nine: int
    back_nine: int
    total_putts: int
    total_gir: int
    fairways_hit: int
    gir_percentage: float


def summarize_round(r: Round) -> RoundSummaryResponse:
    """Project a full Round model into a lightweight summary."""
    return RoundSummaryResponse(
        id=r.id,
        date_played=r.date_played,
        course_id=r.course_id,
        tee_box_id=r.tee_box_id,
        submission_type=r.submission_type,
        total_score=r.total_score,
        front_nine=r.front_nine_score,
        back_nine=r.back_nine_score,
        total_putts=r.total_putts,
        total_gir=r.total_gir,
        fairways_hit=r.total_fairways_hit,
        gir_percentage=r.gir_percentage,
    )


class RoundAverages(BaseModel):
    rounds: int = 0
    avg_score: int = 0
    avg_putts: int = 0
    avg_gir_percentage: int = 0


class RoundHistoryResponse(BaseModel):
    averages: RoundAverages
    rounds: List[RoundSummaryResponse]
    # {year: {month name: [round ids]}}
    groups: Dict[str, Dict[str, List[Optional[str]]]]


# ================================================================
# Stats and insights
# ================================================================

class ParScoring(BaseModel):
    par: int
    average_to_par: float
    average_strokes: float
    sample_size: int


class StatsResponse(BaseModel):
    averages: RoundAverages
    scoring_by_par: List[ParScoring]
    score_trend: Optional[str] = None


class AnalyzeRequest(BaseModel):
    user_id: str


class ChatRequest(BaseModel):
    user_id: str
    question: str = Field(..., min_length=1)


class AnalysisResponse(BaseModel):
    analysis: str


class ChatResponse(BaseModel):
    answer: str


# ================================================================
# Courses and users
# ================================================================

class TeeBoxParsResponse(BaseModel):
    tee_box_id: str
    pars: List[int]
    total_par: int


class CreateUserRequest(BaseModel):
    auth_uid: str = Field(..., min_length=1)
    email: Optional[str] = None
