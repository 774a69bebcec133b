"""Read-only queries for golf_courses and tee_boxes."""

import asyncpg
from typing import List, Optional

from models import Course, TeeBox
from database.converters import as_uuid, course_from_row, tee_box_from_row


def _like_pattern(query: str) -> str:
    escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class CourseRepositoryDB:
    """Async lookups for courses and their tee boxes."""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    # ================================================================
    # Courses
    # ================================================================

    async def list_courses(self) -> List[Course]:
        async with self._pool.acquire() as conn:
            rows = await conn.fetch("SELECT * FROM golf_courses ORDER BY name")
            return [course_from_row(r) for r in rows]

    async def search_courses(self, query: str, *, limit: int = 50) -> List[Course]:
        """Case-insensitive substring match on course name."""
        if not query or not query.strip():
            return await self.list_courses()
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                """SELECT * FROM golf_courses
                   WHERE name ILIKE $1 ESCAPE '\\'
                   ORDER BY name
                   LIMIT $2""",
                _like_pattern(query.strip()), limit,
            )
            return [course_from_row(r) for r in rows]

    async def get_course(self, course_id: str) -> Optional[Course]:
        course_uuid = as_uuid(course_id)
        if course_uuid is None:
            return None
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT * FROM golf_courses WHERE id = $1", course_uuid
            )
            return course_from_row(row) if row else None

    # ================================================================
    # Tee boxes
    # ================================================================

    async def list_tee_boxes(self, course_id: str) -> List[TeeBox]:
        course_uuid = as_uuid(course_id)
        if course_uuid is None:
            return []
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                "SELECT * FROM tee_boxes WHERE course_id = $1 ORDER BY tee_name",
                course_uuid,
            )
            return [tee_box_from_row(r) for r in rows]

    async def get_tee_box(self, tee_box_id: str) -> Optional[TeeBox]:
        tee_uuid = as_uuid(tee_box_id)
        if tee_uuid is None:
            return None
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT * FROM tee_boxes WHERE id = $1", tee_uuid
            )
            return tee_box_from_row(row) if row else None
