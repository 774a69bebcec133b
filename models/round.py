from datetime import date, datetime
from enum import Enum
from pydantic import Field, field_validator, model_validator
from typing import List, Optional, Sequence

from .base import BaseGolfModel
from .hole_record import DEFAULT_PAR, HOLES, NINE, FairwayOutcome, HoleRecord


class SubmissionType(str, Enum):
    """How the round was entered."""
    MANUAL = "manual"
    SCANNED = "scanned"


class Round(BaseGolfModel):
    """A saved round, stored as front/back-nine arrays plus round totals.

    Unset hole values are persisted as 0, so a stored 0 score or 0 putts
    means "not entered" when the round is read back into HoleRecords.
    """
    id: Optional[str] = None
    user_id: Optional[str] = None
    date_played: date
    submission_type: SubmissionType = SubmissionType.MANUAL
    course_id: str = Field(..., min_length=1)
    tee_box_id: str = Field(..., min_length=1)

    front_nine_scores: List[int]
    back_nine_scores: List[int]
    front_nine_putts: List[int]
    back_nine_putts: List[int]
    front_nine_fairways: List[FairwayOutcome]
    back_nine_fairways: List[FairwayOutcome]
    front_nine_gir: List[bool]
    back_nine_gir: List[bool]

    total_score: int = Field(0, ge=0)
    total_putts: int = Field(0, ge=0)
    total_fairways_hit: int = Field(0, ge=0, le=HOLES)
    total_gir: int = Field(0, ge=0, le=HOLES)
    created_at: Optional[datetime] = None

    @field_validator(
        'front_nine_scores', 'back_nine_scores',
        'front_nine_putts', 'back_nine_putts',
        'front_nine_fairways', 'back_nine_fairways',
        'front_nine_gir', 'back_nine_gir',
    )
    @classmethod
    def validate_nine(cls, v, info):
        if len(v) != NINE:
            raise ValueError(f"{info.field_name} must have {NINE} entries, got {len(v)}")
        return v

    @field_validator('front_nine_scores', 'back_nine_scores', 'front_nine_putts', 'back_nine_putts')
    @classmethod
    def validate_non_negative(cls, v, info):
        if any(x < 0 for x in v):
            raise ValueError(f"{info.field_name} cannot contain negative values")
        return v

    @model_validator(mode='after')
    def validate_totals(self):
        """Stored totals must agree with the per-hole arrays."""
        if self.total_score != sum(self.scores):
            raise ValueError(f"total_score {self.total_score} != sum of hole scores {sum(self.scores)}")
        if self.total_putts != sum(self.putts):
            raise ValueError(f"total_putts {self.total_putts} != sum of hole putts {sum(self.putts)}")
        hits = sum(1 for f in self.fairways if f == FairwayOutcome.HIT)
        if self.total_fairways_hit != hits:
            raise ValueError(f"total_fairways_hit {self.total_fairways_hit} != fairways marked hit {hits}")
        if self.total_gir != sum(self.gir):
            raise ValueError(f"total_gir {self.total_gir} != GIR flags set {sum(self.gir)}")
        return self

    @property
    def scores(self) -> List[int]:
        return list(self.front_nine_scores) + list(self.back_nine_scores)

    @property
    def putts(self) -> List[int]:
        return list(self.front_nine_putts) + list(self.back_nine_putts)

    @property
    def fairways(self) -> List[FairwayOutcome]:
        return list(self.front_nine_fairways) + list(self.back_nine_fairways)

    @property
    def gir(self) -> List[bool]:
        return list(self.front_nine_gir) + list(self.back_nine_gir)

    @property
    def front_nine_score(self) -> int:
        return sum(self.front_nine_scores)

    @property
    def back_nine_score(self) -> int:
        return sum(self.back_nine_scores)

    @property
    def gir_percentage(self) -> float:
        """GIR as a percentage of 18 holes."""
        return self.total_gir / HOLES * 100

    def hole_records(self, pars: Optional[Sequence[int]] = None) -> List[HoleRecord]:
        """Rebuild the 18 HoleRecords for this round (stored 0 -> unset)."""
        pars = list(pars) if pars is not None else [DEFAULT_PAR] * HOLES
        if len(pars) != HOLES:
            raise ValueError(f"Expected {HOLES} pars, got {len(pars)}")
        records = []
        for i in range(HOLES):
            score = self.scores[i]
            putts = self.putts[i]
            records.append(HoleRecord(
                hole_number=i + 1,
                score=score or None,
                # 0 putts cannot be told apart from "not entered" once stored; only
                # keep it when the hole has a score.
                putts=putts if (putts or score) else None,
                fairway_outcome=self.fairways[i],
                par=pars[i],
            ))
        return records

    def to_par(self, pars: Sequence[int]) -> Optional[int]:
        """Total score relative to the given 18 pars; None when nothing was scored."""
        played = [(s, p) for s, p in zip(self.scores, pars) if s]
        if not played:
            return None
        return sum(s - p for s, p in played)
