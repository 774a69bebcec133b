"""Scorecard photo extraction and live scorecard summaries."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from database.db_manager import DatabaseManager
from database.exceptions import DatabaseError
from api.dependencies import get_db, get_extractor
from api.errors import database_http_error, scorecard_http_error
from api.schemas import (
    ExtractResponse,
    ResolutionView,
    SummaryRequest,
    SummaryResponse,
    scorecard_view,
)
from llm.scorecard_extractor import GeminiScorecardExtractor
from scorecard import CourseResolution, Scorecard, ScorecardError, review
from scorecard.review import review_holes

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/extract", response_model=ExtractResponse)
async def extract_scan(
    file: UploadFile = File(...),
    user_context: Optional[str] = Form(None),
    db: DatabaseManager = Depends(get_db),
    extractor: GeminiScorecardExtractor = Depends(get_extractor),
):
    """Upload a scorecard photo and get back a reconciled scorecard to review.

    Nothing is saved here; the reviewed holes come back through POST /api/rounds.
    """
    data = await file.read()
    try:
        payload = await extractor.extract(data, file.content_type, user_context=user_context)
    except ScorecardError as e:
        raise scorecard_http_error(e)
    except EnvironmentError as e:
        logger.error("Scorecard reader not configured: %s", e)
        raise HTTPException(500, "Scorecard reading is not configured on this server")

    resolution = CourseResolution.from_payload(payload)
    try:
        await resolution.verify(db.courses)
    except DatabaseError as e:
        raise database_http_error(e)

    scorecard = Scorecard.from_extraction(payload, resolution.tee_box)
    return ExtractResponse(
        scorecard=scorecard_view(scorecard),
        resolution=ResolutionView(**resolution.to_dict()),
        review_flags=review(scorecard),
        extraction=scorecard.extraction,
    )


@router.post("/summary", response_model=SummaryResponse)
async def summarize_scorecard(req: SummaryRequest, db: DatabaseManager = Depends(get_db)):
    """Recompute GIR and totals for a scorecard being edited."""
    try:
        scorecard = Scorecard.from_hole_records(req.holes)
    except ValueError as e:
        raise HTTPException(422, str(e))

    if req.tee_box_id:
        try:
            tee_box = await db.courses.get_tee_box(req.tee_box_id)
        except DatabaseError as e:
            raise database_http_error(e)
        if not tee_box:
            raise HTTPException(404, "Tee box not found")
        scorecard.apply_tee_box(tee_box)

    return SummaryResponse(scorecard=scorecard_view(scorecard), review_flags=review_holes(scorecard))
