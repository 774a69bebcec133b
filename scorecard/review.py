"""Soft warnings shown on the review screen.

Nothing here blocks saving a round. Flags point the player at values that
look like misreads (an 11-putt hole, more putts than strokes) or at places
where the scorecard reader's own arithmetic disagrees with the holes.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel

from models import HOLES
from scorecard.aggregator import gir_flags
from scorecard.gir import calculate_gir

MAX_PLAUSIBLE_SCORE = 15
MAX_PLAUSIBLE_PUTTS = 6


class FlagKind(str, Enum):
    HIGH_SCORE = "high_score"
    HIGH_PUTTS = "high_putts"
    PUTTS_EXCEED_SCORE = "putts_exceed_score"
    GIR_MISMATCH = "gir_mismatch"
    TOTAL_MISMATCH = "total_mismatch"


class ReviewFlag(BaseModel):
    kind: FlagKind
    message: str
    hole_number: Optional[int] = None
    field: Optional[str] = None


def review_holes(scorecard) -> List[ReviewFlag]:
    """Per-hole plausibility warnings."""
    flags = []
    for hole in scorecard.holes:
        n = hole.hole_number
        if hole.score is not None and hole.score > MAX_PLAUSIBLE_SCORE:
            flags.append(ReviewFlag(
                kind=FlagKind.HIGH_SCORE, hole_number=n, field="score",
                message=f"Hole {n}: score of {hole.score} looks unusually high",
            ))
        if hole.putts is not None and hole.putts > MAX_PLAUSIBLE_PUTTS:
            flags.append(ReviewFlag(
                kind=FlagKind.HIGH_PUTTS, hole_number=n, field="putts",
                message=f"Hole {n}: {hole.putts} putts looks unusually high",
            ))
        if hole.score is not None and hole.putts is not None and hole.putts > hole.score:
            flags.append(ReviewFlag(
                kind=FlagKind.PUTTS_EXCEED_SCORE, hole_number=n, field="putts",
                message=f"Hole {n}: {hole.putts} putts is more than the score of {hole.score}",
            ))
    return flags


def review_extraction(scorecard) -> List[ReviewFlag]:
    """Places where the reader's GIR marks or totals disagree with the holes."""
    snapshot = scorecard.extraction
    if snapshot is None:
        return []

    flags = []
    holes = scorecard.holes
    for i, claimed in enumerate(snapshot.gir[:HOLES]):
        derived = calculate_gir(holes[i].score, holes[i].putts)
        if claimed is None or derived is None or claimed == derived:
            continue
        flags.append(ReviewFlag(
            kind=FlagKind.GIR_MISMATCH, hole_number=i + 1, field="gir",
            message=(
                f"Hole {i + 1}: card marks GIR as {'hit' if claimed else 'missed'}, "
                f"but score and putts say {'hit' if derived else 'missed'}"
            ),
        ))

    summary = scorecard.summary()
    derived_totals = {
        "total_score": summary.total_score,
        "total_putts": summary.total_putts,
        "total_fairways_hit": summary.fairways_hit,
        "total_gir": sum(gir_flags(holes)),
    }
    for name, derived in derived_totals.items():
        claimed = getattr(snapshot, name)
        if claimed is not None and claimed != derived:
            label = name.replace("total_", "").replace("_", " ")
            flags.append(ReviewFlag(
                kind=FlagKind.TOTAL_MISMATCH, field=name,
                message=f"Card total {label} is {claimed}, holes add up to {derived}",
            ))
    return flags


def review(scorecard) -> List[ReviewFlag]:
    return review_holes(scorecard) + review_extraction(scorecard)
