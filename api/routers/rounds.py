"""Round API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query
from typing import Optional

from database.db_manager import DatabaseManager
from database.exceptions import DatabaseError
from api.dependencies import get_db
from api.errors import database_http_error, scorecard_http_error
from api.schemas import (
    RoundAverages,
    RoundHistoryResponse,
    SaveRoundRequest,
    summarize_round,
)
from analytics.stats import filter_by_year, group_by_month, round_averages, sort_rounds
from models import Round
from scorecard import CourseResolution, Scorecard, ScorecardError

router = APIRouter()


@router.post("", response_model=Round, status_code=201)
async def save_round(req: SaveRoundRequest, db: DatabaseManager = Depends(get_db)):
    """Save a reviewed round. Totals and GIR are always recomputed from the holes."""
    try:
        scorecard = Scorecard.from_hole_records(req.holes)
    except ValueError as e:
        raise HTTPException(422, str(e))

    resolution = CourseResolution(
        course_id=req.course_id,
        tee_box_id=req.tee_box_id,
        date_played=req.date_played,
    )
    try:
        round_ = scorecard.to_round(req.user_id, resolution, req.submission_type)
        return await db.rounds.create_round(round_)
    except ScorecardError as e:
        raise scorecard_http_error(e)
    except DatabaseError as e:
        raise database_http_error(e)


@router.get("/user/{user_id}", response_model=RoundHistoryResponse)
async def get_rounds_for_user(
    user_id: str,
    year: Optional[str] = Query(None, pattern="^(current|last)?$"),
    sort: str = Query("date", pattern="^(date|score)$"),
    order: str = Query("desc", pattern="^(asc|desc)$"),
    db: DatabaseManager = Depends(get_db),
):
    try:
        rounds = await db.rounds.get_rounds_for_user(user_id)
    except DatabaseError as e:
        raise database_http_error(e)

    rounds = sort_rounds(filter_by_year(rounds, year), by=sort, order=order)
    groups = {
        str(year_): {month: [r.id for r in month_rounds] for month, month_rounds in months.items()}
        for year_, months in group_by_month(rounds, order=order).items()
    }
    return RoundHistoryResponse(
        averages=RoundAverages(**round_averages(rounds)),
        rounds=[summarize_round(r) for r in rounds],
        groups=groups,
    )


@router.get("/{round_id}", response_model=Round)
async def get_round(round_id: str, db: DatabaseManager = Depends(get_db)):
    try:
        round_ = await db.rounds.get_round(round_id)
    except DatabaseError as e:
        raise database_http_error(e)
    if not round_:
        raise HTTPException(404, "Round not found")
    return round_


@router.delete("/{round_id}")
async def delete_round(
    round_id: str,
    user_id: str = Query(...),
    db: DatabaseManager = Depends(get_db),
):
    try:
        deleted = await db.rounds.delete_round(round_id, user_id)
    except DatabaseError as e:
        raise database_http_error(e)
    if not deleted:
        raise HTTPException(404, "Round not found")
    return {"deleted": True}
