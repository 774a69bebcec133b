from pathlib import Path
from typing import Optional

import asyncpg

from database.repositories import CourseRepositoryDB, RoundRepositoryDB, UserRepositoryDB

SCHEMA_PATH = Path(__file__).with_name("schema.sql")


class DatabaseManager:
    """Groups the repositories that share one asyncpg pool."""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool
        self.courses = CourseRepositoryDB(pool)
        self.rounds = RoundRepositoryDB(pool)
        self.users = UserRepositoryDB(pool)

    async def apply_schema(self, schema_path: Optional[Path] = None) -> None:
        """Create any missing tables and indexes (idempotent)."""
        sql = Path(schema_path or SCHEMA_PATH).read_text(encoding="utf-8")
        async with self._pool.acquire() as conn:
            await conn.execute(sql)
