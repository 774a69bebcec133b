from enum import Enum
from pydantic import Field
from typing import Optional

from .base import BaseGolfModel

HOLES = 18
NINE = 9
DEFAULT_PAR = 4


class FairwayOutcome(str, Enum):
    """Where the tee shot finished relative to the fairway."""
    UNSET = ""
    HIT = "hit"
    LEFT = "left"
    RIGHT = "right"


# Tap order used by the scorecard grid: each tap advances one state.
FAIRWAY_CYCLE = [
    FairwayOutcome.UNSET,
    FairwayOutcome.HIT,
    FairwayOutcome.LEFT,
    FairwayOutcome.RIGHT,
]

_SCORE_LABELS = {
    -4: "Condor",
    -3: "Albatross",
    -2: "Eagle",
    -1: "Birdie",
    0: "Par",
    1: "Bogey",
    2: "Double",
    3: "Triple",
    4: "Quad",
}


class HoleRecord(BaseGolfModel):
    """One hole of an in-progress scorecard.

    ``score`` and ``putts`` stay ``None`` until the player enters them. ``par``
    is context supplied by the selected tee box and never triggers validation
    of the other fields.
    """
    hole_number: int = Field(..., ge=1, le=HOLES, frozen=True)
    score: Optional[int] = Field(None, ge=1)
    putts: Optional[int] = Field(None, ge=0)
    fairway_outcome: FairwayOutcome = FairwayOutcome.UNSET
    par: int = Field(DEFAULT_PAR, ge=1)

    @property
    def index(self) -> int:
        """Zero-based position in the 18-hole array."""
        return self.hole_number - 1

    @property
    def is_front_nine(self) -> bool:
        return self.hole_number <= NINE

    def to_par(self) -> Optional[int]:
        """Score relative to par (+2, -1, etc.), or None with no score."""
        if self.score is None:
            return None
        return self.score - self.par

    def is_par_number(self, number: int) -> bool:
        """True when ``number`` would be a par on this hole (grid highlighting)."""
        return number == self.par

    def score_label(self, number: Optional[int] = None) -> Optional[str]:
        """Name a score relative to par: Birdie, Bogey, Double, ... or "+6".

        Labels the entered score by default; pass ``number`` to label a
        candidate value from the number grid.
        """
        value = self.score if number is None else number
        if value is None:
            return None
        relative = value - self.par
        if relative in _SCORE_LABELS:
            return _SCORE_LABELS[relative]
        return f"+{relative}" if relative > 0 else str(relative)
