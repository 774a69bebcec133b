from pydantic import Field, field_validator
from typing import List, Optional

from .base import BaseGolfModel
from .hole_record import NINE


class TeeBox(BaseGolfModel):
    """A set of tee markers on a course, with per-nine par and distance arrays."""
    id: Optional[str] = None
    course_id: Optional[str] = None
    name: str = Field(..., min_length=1)
    front_nine_par: List[int]
    back_nine_par: List[int]
    front_nine_distance: List[int] = Field(default_factory=list)
    back_nine_distance: List[int] = Field(default_factory=list)
    slope: Optional[float] = Field(None, ge=55, le=155)
    rating: Optional[float] = Field(None, ge=55.0, le=85.0)

    @field_validator('front_nine_par', 'back_nine_par')
    @classmethod
    def validate_par_array(cls, v, info):
        if len(v) != NINE:
            raise ValueError(f"{info.field_name} must have {NINE} entries, got {len(v)}")
        for par in v:
            if par < 1:
                raise ValueError(f"{info.field_name} contains non-positive par {par}")
        return v

    @field_validator('front_nine_distance', 'back_nine_distance')
    @classmethod
    def validate_distance_array(cls, v, info):
        # Distances are optional on some cards; when printed they cover the whole nine.
        if v and len(v) != NINE:
            raise ValueError(f"{info.field_name} must have {NINE} entries, got {len(v)}")
        for yardage in v:
            if yardage < 0:
                raise ValueError(f"{info.field_name} contains negative distance {yardage}")
        return v

    @property
    def pars(self) -> List[int]:
        """Par for holes 1-18."""
        return list(self.front_nine_par) + list(self.back_nine_par)

    @property
    def distances(self) -> List[int]:
        """Distance for holes 1-18, empty when the tee box has none recorded."""
        if not self.front_nine_distance or not self.back_nine_distance:
            return []
        return list(self.front_nine_distance) + list(self.back_nine_distance)

    @property
    def total_par(self) -> int:
        return sum(self.pars)

    @property
    def front_nine_total_par(self) -> int:
        return sum(self.front_nine_par)

    @property
    def back_nine_total_par(self) -> int:
        return sum(self.back_nine_par)

    @property
    def total_distance(self) -> Optional[int]:
        distances = self.distances
        return sum(distances) if distances else None

    def get_hole_par(self, hole_number: int) -> Optional[int]:
        """Par for a hole number 1-18."""
        if 1 <= hole_number <= 2 * NINE:
            return self.pars[hole_number - 1]
        return None
