"""Aggregated stats endpoints."""

from fastapi import APIRouter, Depends, Query
from typing import Dict, List, Optional, Sequence

from database.db_manager import DatabaseManager
from database.exceptions import DatabaseError
from api.dependencies import get_db
from api.errors import database_http_error
from api.schemas import ParScoring, RoundAverages, StatsResponse
from analytics.stats import compare_performance, filter_by_year, round_averages, scoring_by_par
from models import Round

router = APIRouter()


async def load_tee_box_pars(db: DatabaseManager, rounds: Sequence[Round]) -> Dict[str, List[int]]:
    """tee_box_id -> 18 pars for every tee box the rounds were played from."""
    pars: Dict[str, List[int]] = {}
    for tee_box_id in {r.tee_box_id for r in rounds}:
        tee_box = await db.courses.get_tee_box(tee_box_id)
        if tee_box:
            pars[tee_box_id] = tee_box.pars
    return pars


@router.get("/{user_id}", response_model=StatsResponse)
async def get_stats(
    user_id: str,
    year: Optional[str] = Query(None, pattern="^(current|last)?$"),
    db: DatabaseManager = Depends(get_db),
):
    try:
        rounds = filter_by_year(await db.rounds.get_rounds_for_user(user_id), year)
        pars = await load_tee_box_pars(db, rounds)
    except DatabaseError as e:
        raise database_http_error(e)

    return StatsResponse(
        averages=RoundAverages(**round_averages(rounds)),
        scoring_by_par=[ParScoring(**row) for row in scoring_by_par(rounds, pars)],
        score_trend=compare_performance(rounds, pars).score_trend if rounds else None,
    )
