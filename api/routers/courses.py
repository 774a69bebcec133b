"""Course and tee-box lookup endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query
from typing import List, Optional

from database.db_manager import DatabaseManager
from database.exceptions import DatabaseError
from api.dependencies import get_db
from api.errors import database_http_error
from api.schemas import TeeBoxParsResponse
from models import Course, TeeBox

router = APIRouter()


@router.get("", response_model=List[Course])
async def list_courses(
    q: Optional[str] = Query(None, description="Case-insensitive substring of the course name"),
    db: DatabaseManager = Depends(get_db),
):
    try:
        if q:
            return await db.courses.search_courses(q)
        return await db.courses.list_courses()
    except DatabaseError as e:
        raise database_http_error(e)


@router.get("/tee-boxes/{tee_box_id}/pars", response_model=TeeBoxParsResponse)
async def get_tee_box_pars(tee_box_id: str, db: DatabaseManager = Depends(get_db)):
    """Per-hole par for holes 1-18 of a tee box."""
    try:
        tee_box = await db.courses.get_tee_box(tee_box_id)
    except DatabaseError as e:
        raise database_http_error(e)
    if not tee_box:
        raise HTTPException(404, "Tee box not found")
    return TeeBoxParsResponse(tee_box_id=tee_box_id, pars=tee_box.pars, total_par=tee_box.total_par)


@router.get("/{course_id}", response_model=Course)
async def get_course(course_id: str, db: DatabaseManager = Depends(get_db)):
    try:
        course = await db.courses.get_course(course_id)
    except DatabaseError as e:
        raise database_http_error(e)
    if not course:
        raise HTTPException(404, "Course not found")
    return course


@router.get("/{course_id}/tee-boxes", response_model=List[TeeBox])
async def list_tee_boxes(course_id: str, db: DatabaseManager = Depends(get_db)):
    try:
        course = await db.courses.get_course(course_id)
        if not course:
            raise HTTPException(404, "Course not found")
        return await db.courses.list_tee_boxes(course_id)
    except DatabaseError as e:
        raise database_http_error(e)
