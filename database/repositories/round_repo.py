"""Create, read and delete rows in golf_rounds."""

import asyncpg
from typing import List, Optional

from models import Round
from database.converters import as_uuid, round_from_row, round_to_row
from database.exceptions import DuplicateError, IntegrityError, NotFoundError

_ROUND_COLUMNS = (
    "user_id", "course_id", "tee_box_id", "date_played", "submission_type",
    "front_nine_scores", "back_nine_scores",
    "front_nine_putts", "back_nine_putts",
    "front_nine_fairways", "back_nine_fairways",
    "front_nine_gir", "back_nine_gir",
    "total_score", "total_putts", "total_fairways_hit", "total_gir",
)


class RoundRepositoryDB:
    """Async CRUD for rounds. Rounds are never edited in place."""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    # ================================================================
    # Private helpers
    # ================================================================

    async def _check_references(self, conn, row_data: dict) -> None:
        """Raise NotFoundError naming the first missing user/course/tee box."""
        if row_data["user_id"] is None or not await conn.fetchval(
            "SELECT 1 FROM users WHERE id = $1", row_data["user_id"]
        ):
            raise NotFoundError("User not found")
        if row_data["course_id"] is None or not await conn.fetchval(
            "SELECT 1 FROM golf_courses WHERE id = $1", row_data["course_id"]
        ):
            raise NotFoundError("Course not found")
        tee_course = None
        if row_data["tee_box_id"] is not None:
            tee_course = await conn.fetchval(
                "SELECT course_id FROM tee_boxes WHERE id = $1", row_data["tee_box_id"]
            )
        if tee_course is None:
            raise NotFoundError("Tee box not found")
        if tee_course != row_data["course_id"]:
            raise NotFoundError("Tee box not found for the selected course")

    # ================================================================
    # Read
    # ================================================================

    async def get_round(self, round_id: str) -> Optional[Round]:
        round_uuid = as_uuid(round_id)
        if round_uuid is None:
            return None
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT * FROM golf_rounds WHERE id = $1", round_uuid
            )
            return round_from_row(row) if row else None

    async def get_rounds_for_user(self, user_id: str) -> List[Round]:
        """All of a user's rounds, most recent first."""
        user_uuid = as_uuid(user_id)
        if user_uuid is None:
            return []
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                """SELECT * FROM golf_rounds
                   WHERE user_id = $1
                   ORDER BY date_played DESC, created_at DESC""",
                user_uuid,
            )
            return [round_from_row(r) for r in rows]

    # ================================================================
    # Create
    # ================================================================

    async def create_round(self, round_: Round) -> Round:
        """Insert a round in a single statement and return it with its id.

        The user, course and tee box must exist, and the tee box must belong
        to the course; otherwise NotFoundError and nothing is written.
        """
        row_data = round_to_row(round_)
        placeholders = ", ".join(f"${i + 1}" for i in range(len(_ROUND_COLUMNS)))
        try:
            async with self._pool.acquire() as conn:
                await self._check_references(conn, row_data)
                row = await conn.fetchrow(
                    f"""INSERT INTO golf_rounds ({", ".join(_ROUND_COLUMNS)})
                        VALUES ({placeholders})
                        RETURNING *""",
                    *(row_data[c] for c in _ROUND_COLUMNS),
                )
                return round_from_row(row)
        except asyncpg.UniqueViolationError as e:
            raise DuplicateError(str(e)) from e
        except (asyncpg.ForeignKeyViolationError, asyncpg.CheckViolationError) as e:
            raise IntegrityError(str(e)) from e

    # ================================================================
    # Delete
    # ================================================================

    async def delete_round(self, round_id: str, user_id: str) -> bool:
        """Delete a round owned by ``user_id``. Returns True if deleted."""
        round_uuid = as_uuid(round_id)
        user_uuid = as_uuid(user_id)
        if round_uuid is None or user_uuid is None:
            return False
        async with self._pool.acquire() as conn:
            result = await conn.execute(
                "DELETE FROM golf_rounds WHERE id = $1 AND user_id = $2",
                round_uuid, user_uuid,
            )
            return result == "DELETE 1"
