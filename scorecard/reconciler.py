"""The single 18-hole store behind every way of entering a round.

Manual entry, tap entry and photo extraction all end up as a ``Scorecard``:
setters change one field on one hole, ``from_extraction`` imports a validated
reader payload, and ``summary()`` hands the holes to the aggregator.
"""

import logging
from typing import TYPE_CHECKING, Any, List, Optional, Sequence

from pydantic import BaseModel

from models import (
    FAIRWAY_CYCLE,
    HOLES,
    NINE,
    FairwayOutcome,
    HoleRecord,
    Round,
    SubmissionType,
    TeeBox,
)
from scorecard.aggregator import RoundSummary, gir_flags, summarize
from scorecard.exceptions import UnresolvedCourseError
from scorecard.gir import calculate_gir
from scorecard.par_resolver import apply_pars, resolve_pars

if TYPE_CHECKING:
    from llm.validation import ScorecardPayload
    from scorecard.resolution import CourseResolution

logger = logging.getLogger(__name__)

# Bulk-entry conveniences; flat values, par is not consulted.
QUICK_FILL_PUTTS = 2
QUICK_FILL_SCORE = 5

EDITABLE_FIELDS = ("score", "putts", "fairway_outcome")

_FAIRWAY_WORDS = {
    "hit": FairwayOutcome.HIT,
    "middle": FairwayOutcome.HIT,
    "center": FairwayOutcome.HIT,
    "left": FairwayOutcome.LEFT,
    "right": FairwayOutcome.RIGHT,
}


class ExtractionSnapshot(BaseModel):
    """What the scorecard reader claimed, kept only for review.

    None of these values feed the round; totals and GIR shown to the player
    are always recomputed from the holes.
    """
    gir: List[Optional[bool]] = []
    total_score: Optional[int] = None
    total_putts: Optional[int] = None
    total_fairways_hit: Optional[int] = None
    total_gir: Optional[int] = None


def _usable_int(value: Any, minimum: int) -> Optional[int]:
    """An extracted number if it is a whole number >= minimum, else None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float):
        if not value.is_integer():
            return None
        value = int(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text.lstrip("-").isdigit():
            return None
        value = int(text)
    elif not isinstance(value, int):
        return None
    return value if value >= minimum else None


def _usable_fairway(value: Any) -> FairwayOutcome:
    if isinstance(value, bool):
        return FairwayOutcome.HIT if value else FairwayOutcome.UNSET
    if isinstance(value, str):
        return _FAIRWAY_WORDS.get(value.strip().lower(), FairwayOutcome.UNSET)
    return FairwayOutcome.UNSET


def _usable_flag(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    return None


def _hole_index(index: int) -> int:
    if not 0 <= index < HOLES:
        raise IndexError(f"Hole index must be 0-{HOLES - 1}, got {index}")
    return index


class Scorecard:
    """Canonical array of 18 HoleRecords for one round in progress."""

    def __init__(self, holes: List[HoleRecord], extraction: Optional[ExtractionSnapshot] = None):
        if len(holes) != HOLES:
            raise ValueError(f"A scorecard needs {HOLES} holes, got {len(holes)}")
        for i, hole in enumerate(holes):
            if hole.hole_number != i + 1:
                raise ValueError(f"Hole at position {i} is numbered {hole.hole_number}, expected {i + 1}")
        self._holes = holes
        self.extraction = extraction

    # ================================================================
    # Construction
    # ================================================================

    @classmethod
    def empty(cls, tee_box: Optional[TeeBox] = None) -> "Scorecard":
        pars = resolve_pars(tee_box)
        return cls([HoleRecord(hole_number=i + 1, par=pars[i]) for i in range(HOLES)])

    @classmethod
    def from_hole_records(cls, records: Sequence[HoleRecord]) -> "Scorecard":
        """Reconcile an already canonical hole array; values pass through unchanged."""
        return cls([record.model_copy() for record in records])

    @classmethod
    def from_extraction(cls, payload: "ScorecardPayload", tee_box: Optional[TeeBox] = None) -> "Scorecard":
        """Build a fresh scorecard from a validated reader payload.

        Front-nine position i is hole i+1, back-nine position i is hole i+10.
        Values that cannot be a real entry are left unset for the player.
        """
        pars = resolve_pars(tee_box)
        scores = list(payload.front_nine_scores) + list(payload.back_nine_scores)
        putts = list(payload.front_nine_putts) + list(payload.back_nine_putts)
        fairways = list(payload.front_nine_fairways) + list(payload.back_nine_fairways)
        girs = list(payload.front_nine_gir) + list(payload.back_nine_gir)

        holes = []
        for i in range(HOLES):
            score = _usable_int(scores[i], minimum=1)
            hole_putts = _usable_int(putts[i], minimum=0)
            if score is None and scores[i] is not None:
                logger.debug("Discarded extracted score %r on hole %d", scores[i], i + 1)
            if hole_putts is None and putts[i] is not None:
                logger.debug("Discarded extracted putts %r on hole %d", putts[i], i + 1)
            holes.append(HoleRecord(
                hole_number=i + 1,
                score=score,
                putts=hole_putts,
                fairway_outcome=_usable_fairway(fairways[i]),
                par=pars[i],
            ))

        snapshot = ExtractionSnapshot(
            gir=[_usable_flag(g) for g in girs],
            total_score=_usable_int(payload.total_score, minimum=0),
            total_putts=_usable_int(payload.total_putts, minimum=0),
            total_fairways_hit=_usable_int(payload.total_fairways_hit, minimum=0),
            total_gir=_usable_int(payload.total_gir, minimum=0),
        )
        return cls(holes, extraction=snapshot)

    # ================================================================
    # Single-field setters
    # ================================================================

    def set_score(self, index: int, value: Optional[int]) -> None:
        self._holes[_hole_index(index)].score = value

    def set_putts(self, index: int, value: Optional[int]) -> None:
        self._holes[_hole_index(index)].putts = value

    def set_fairway(self, index: int, value) -> None:
        self._holes[_hole_index(index)].fairway_outcome = FairwayOutcome(value or "")

    def set_field(self, index: int, field_name: str, value: Any) -> Optional[str]:
        """Apply a user correction to one field. Returns an error message if rejected."""
        if field_name == "fairway":
            field_name = "fairway_outcome"
        if field_name not in EDITABLE_FIELDS:
            return f"{field_name} is not editable"
        return self._holes[_hole_index(index)].update_field(field_name, value)

    def clear_field(self, index: int, field_name: str) -> None:
        empty = FairwayOutcome.UNSET if field_name in ("fairway", "fairway_outcome") else None
        error = self.set_field(index, field_name, empty)
        if error:
            raise ValueError(error)

    def cycle_fairway(self, index: int) -> FairwayOutcome:
        """Advance one tap: unset -> hit -> left -> right -> unset."""
        hole = self._holes[_hole_index(index)]
        position = FAIRWAY_CYCLE.index(hole.fairway_outcome)
        hole.fairway_outcome = FAIRWAY_CYCLE[(position + 1) % len(FAIRWAY_CYCLE)]
        return hole.fairway_outcome

    # --- Quick fill ---

    def set_all_putts(self, value: int = QUICK_FILL_PUTTS) -> None:
        for hole in self._holes:
            hole.putts = value

    def set_all_scores(self, value: int = QUICK_FILL_SCORE) -> None:
        for hole in self._holes:
            hole.score = value

    # ================================================================
    # Context and derived values
    # ================================================================

    def apply_tee_box(self, tee_box: Optional[TeeBox]) -> None:
        apply_pars(self._holes, tee_box)

    @property
    def holes(self) -> List[HoleRecord]:
        return [hole.model_copy() for hole in self._holes]

    def hole(self, index: int) -> HoleRecord:
        return self._holes[_hole_index(index)].model_copy()

    @property
    def pars(self) -> List[int]:
        return [hole.par for hole in self._holes]

    def gir(self, index: int) -> Optional[bool]:
        hole = self._holes[_hole_index(index)]
        return calculate_gir(hole.score, hole.putts)

    def summary(self) -> RoundSummary:
        return summarize(self._holes)

    def to_round(
        self,
        user_id: str,
        resolution: "CourseResolution",
        submission_type: SubmissionType = SubmissionType.MANUAL,
    ) -> Round:
        """Build the Round to persist; unset values are stored as 0."""
        if not resolution.is_resolved:
            raise UnresolvedCourseError(
                "Missing " + ", ".join(resolution.missing_fields()) + " for round"
            )
        summary = self.summary()
        scores = [hole.score or 0 for hole in self._holes]
        putts = [hole.putts or 0 for hole in self._holes]
        fairways = [hole.fairway_outcome for hole in self._holes]
        gir = gir_flags(self._holes)
        return Round(
            user_id=user_id,
            date_played=resolution.date_played,
            submission_type=submission_type,
            course_id=resolution.course_id,
            tee_box_id=resolution.tee_box_id,
            front_nine_scores=scores[:NINE],
            back_nine_scores=scores[NINE:],
            front_nine_putts=putts[:NINE],
            back_nine_putts=putts[NINE:],
            front_nine_fairways=fairways[:NINE],
            back_nine_fairways=fairways[NINE:],
            front_nine_gir=gir[:NINE],
            back_nine_gir=gir[NINE:],
            total_score=summary.total_score,
            total_putts=summary.total_putts,
            total_fairways_hit=summary.fairways_hit,
            total_gir=summary.gir_count,
        )
