from .base import BaseGolfModel
from .course import Course
from .hole_record import (
    DEFAULT_PAR,
    FAIRWAY_CYCLE,
    HOLES,
    NINE,
    FairwayOutcome,
    HoleRecord,
)
from .round import Round, SubmissionType
from .tee_box import TeeBox
from .user import User

__all__ = [
    "BaseGolfModel",
    "Course",
    "DEFAULT_PAR",
    "FAIRWAY_CYCLE",
    "HOLES",
    "NINE",
    "FairwayOutcome",
    "HoleRecord",
    "Round",
    "SubmissionType",
    "TeeBox",
    "User",
]
