"""Conversion between asyncpg database rows and Pydantic domain models.

Rows that do not satisfy the model (a tee box whose par array is not nine
long, say) raise MalformedRowError rather than being padded or trimmed.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import ValidationError

from models import Course, FairwayOutcome, Round, TeeBox, User
from models.base import first_error_message
from database.exceptions import MalformedRowError


def as_uuid(value: Optional[str]) -> Optional[UUID]:
    """Parse an id string; None when it is not a UUID (so lookups find nothing)."""
    if not value:
        return None
    try:
        return UUID(str(value))
    except ValueError:
        return None


def _str_id(value) -> Optional[str]:
    return str(value) if value is not None else None


def _float(value) -> Optional[float]:
    return float(value) if value is not None else None


def _fairway(value) -> FairwayOutcome:
    # Older rows stored fairways as booleans.
    if isinstance(value, bool):
        return FairwayOutcome.HIT if value else FairwayOutcome.UNSET
    try:
        return FairwayOutcome(value or "")
    except ValueError:
        return FairwayOutcome.UNSET


# ================================================================
# Row -> Model (reads)
# ================================================================

def course_from_row(row) -> Course:
    """golf_courses row -> Course model."""
    try:
        return Course(
            id=_str_id(row["id"]),
            name=row["name"],
            city=row["city"],
            state=row["state"],
        )
    except ValidationError as e:
        raise MalformedRowError(f"Course {row['id']}: {first_error_message(e)}") from e


def tee_box_from_row(row) -> TeeBox:
    """tee_boxes row -> TeeBox model."""
    try:
        return TeeBox(
            id=_str_id(row["id"]),
            course_id=_str_id(row["course_id"]),
            name=row["tee_name"],
            front_nine_par=list(row["front_nine_par"] or []),
            back_nine_par=list(row["back_nine_par"] or []),
            front_nine_distance=list(row["front_nine_distance"] or []),
            back_nine_distance=list(row["back_nine_distance"] or []),
            slope=_float(row["slope"]),
            rating=_float(row["rating"]),
        )
    except ValidationError as e:
        raise MalformedRowError(f"Tee box {row['id']}: {first_error_message(e)}") from e


def round_from_row(row) -> Round:
    """golf_rounds row -> Round model."""
    try:
        return Round(
            id=_str_id(row["id"]),
            user_id=_str_id(row["user_id"]),
            date_played=row["date_played"],
            submission_type=row["submission_type"],
            course_id=_str_id(row["course_id"]),
            tee_box_id=_str_id(row["tee_box_id"]),
            front_nine_scores=list(row["front_nine_scores"]),
            back_nine_scores=list(row["back_nine_scores"]),
            front_nine_putts=list(row["front_nine_putts"]),
            back_nine_putts=list(row["back_nine_putts"]),
            front_nine_fairways=[_fairway(f) for f in row["front_nine_fairways"]],
            back_nine_fairways=[_fairway(f) for f in row["back_nine_fairways"]],
            front_nine_gir=[bool(g) for g in row["front_nine_gir"]],
            back_nine_gir=[bool(g) for g in row["back_nine_gir"]],
            total_score=row["total_score"],
            total_putts=row["total_putts"],
            total_fairways_hit=row["total_fairways_hit"],
            total_gir=row["total_gir"],
            created_at=row["created_at"],
        )
    except ValidationError as e:
        raise MalformedRowError(f"Round {row['id']}: {first_error_message(e)}") from e


def user_from_row(row) -> User:
    """users row -> User model."""
    return User(
        id=_str_id(row["id"]),
        auth_uid=row["auth_uid"],
        email=row["email"],
        created_at=row["created_at"],
    )


# ================================================================
# Model -> Row (writes)
# ================================================================

def round_to_row(round_: Round) -> Dict[str, Any]:
    """Round model -> dict for golf_rounds INSERT."""
    return {
        "user_id": as_uuid(round_.user_id),
        "course_id": as_uuid(round_.course_id),
        "tee_box_id": as_uuid(round_.tee_box_id),
        "date_played": round_.date_played,
        "submission_type": round_.submission_type.value,
        "front_nine_scores": list(round_.front_nine_scores),
        "back_nine_scores": list(round_.back_nine_scores),
        "front_nine_putts": list(round_.front_nine_putts),
        "back_nine_putts": list(round_.back_nine_putts),
        "front_nine_fairways": [f.value for f in round_.front_nine_fairways],
        "back_nine_fairways": [f.value for f in round_.back_nine_fairways],
        "front_nine_gir": list(round_.front_nine_gir),
        "back_nine_gir": list(round_.back_nine_gir),
        "total_score": round_.total_score,
        "total_putts": round_.total_putts,
        "total_fairways_hit": round_.total_fairways_hit,
        "total_gir": round_.total_gir,
    }


def user_to_row(user: User) -> Dict[str, Any]:
    """User model -> dict for users INSERT."""
    return {
        "auth_uid": user.auth_uid,
        "email": user.email,
    }
