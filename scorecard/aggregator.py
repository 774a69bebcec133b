from pydantic import BaseModel
from typing import List, Sequence

from models import HOLES, NINE, FairwayOutcome, HoleRecord
from scorecard.gir import calculate_gir


class RoundSummary(BaseModel):
    """Round totals derived from the 18 HoleRecords. Never stored."""
    total_score: int = 0
    total_putts: int = 0
    fairways_hit: int = 0
    gir_count: int = 0
    front_nine_score: int = 0
    back_nine_score: int = 0

    # Display percentages always divide by 18, not by holes completed.

    @property
    def fairways_percentage(self) -> float:
        return self.fairways_hit / HOLES * 100

    @property
    def gir_percentage(self) -> float:
        return self.gir_count / HOLES * 100

    @property
    def putts_per_hole(self) -> float:
        return self.total_putts / HOLES


def _check_holes(holes: Sequence[HoleRecord]) -> None:
    if len(holes) != HOLES:
        raise ValueError(f"Expected {HOLES} holes, got {len(holes)}")


def gir_flags(holes: Sequence[HoleRecord]) -> List[bool]:
    """GIR per hole with unknown collapsed to False (the stored representation)."""
    return [calculate_gir(h.score, h.putts) is True for h in holes]


def summarize(holes: Sequence[HoleRecord]) -> RoundSummary:
    """Recompute every round total from the 18 holes.

    Unset scores and putts count as 0 so a partly entered round still shows
    a running total. Holes whose GIR is unknown are not counted.
    """
    _check_holes(holes)
    scores = [h.score or 0 for h in holes]
    return RoundSummary(
        total_score=sum(scores),
        total_putts=sum(h.putts or 0 for h in holes),
        fairways_hit=sum(1 for h in holes if h.fairway_outcome == FairwayOutcome.HIT),
        gir_count=sum(gir_flags(holes)),
        front_nine_score=sum(scores[:NINE]),
        back_nine_score=sum(scores[NINE:]),
    )
