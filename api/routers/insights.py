"""AI performance analysis and chat over a user's rounds."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from database.db_manager import DatabaseManager
from database.exceptions import DatabaseError
from api.dependencies import get_db, get_insights
from api.errors import database_http_error, scorecard_http_error
from api.routers.stats import load_tee_box_pars
from api.schemas import AnalysisResponse, AnalyzeRequest, ChatRequest, ChatResponse
from llm.insights import GeminiInsightService
from scorecard import ScorecardError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/analyze", response_model=AnalysisResponse)
async def analyze_performance(
    req: AnalyzeRequest,
    db: DatabaseManager = Depends(get_db),
    insights: GeminiInsightService = Depends(get_insights),
):
    try:
        rounds = await db.rounds.get_rounds_for_user(req.user_id)
        pars = await load_tee_box_pars(db, rounds)
    except DatabaseError as e:
        raise database_http_error(e)
    if not rounds:
        raise HTTPException(400, "No rounds provided")

    try:
        return AnalysisResponse(analysis=await insights.analyze(rounds, pars))
    except ScorecardError as e:
        raise scorecard_http_error(e)
    except EnvironmentError as e:
        logger.error("Insight service not configured: %s", e)
        raise HTTPException(500, "Failed to generate performance analysis")


@router.post("/chat", response_model=ChatResponse)
async def chat(
    req: ChatRequest,
    db: DatabaseManager = Depends(get_db),
    insights: GeminiInsightService = Depends(get_insights),
):
    try:
        rounds = await db.rounds.get_rounds_for_user(req.user_id)
    except DatabaseError as e:
        raise database_http_error(e)

    try:
        return ChatResponse(answer=await insights.answer(req.question, rounds))
    except ValueError as e:
        raise HTTPException(422, str(e))
    except ScorecardError as e:
        raise scorecard_http_error(e)
    except EnvironmentError as e:
        logger.error("Insight service not configured: %s", e)
        raise HTTPException(500, "Error contacting the insight service")
