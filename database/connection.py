import logging
import os
from typing import Optional

import asyncpg

logger = logging.getLogger(__name__)


class DatabasePool:
    """Manages the asyncpg connection pool lifecycle."""

    def __init__(self):
        self._pool: Optional[asyncpg.Pool] = None

    async def initialize(
        self,
        dsn: Optional[str] = None,
        *,
        min_size: int = 2,
        max_size: int = 10,
    ) -> None:
        """Create the connection pool. Call once at app startup.

        Without a DSN, connection settings come from PGHOST, PGPORT,
        PGDATABASE, PGUSER and PGPASSWORD.
        """
        if self._pool is not None:
            return
        dsn = dsn or os.environ.get("DATABASE_URL")
        self._pool = await asyncpg.create_pool(
            dsn=dsn,
            host=None if dsn else os.environ.get("PGHOST", "localhost"),
            port=None if dsn else int(os.environ.get("PGPORT", "5432")),
            database=None if dsn else os.environ.get("PGDATABASE", "golf_scorecard"),
            user=None if dsn else os.environ.get("PGUSER", "postgres"),
            password=None if dsn else os.environ.get("PGPASSWORD", ""),
            min_size=min_size,
            max_size=max_size,
        )

    async def close(self) -> None:
        """Close all connections. Call at app shutdown."""
        if self._pool:
            await self._pool.close()
            self._pool = None

    @property
    def pool(self) -> asyncpg.Pool:
        """Get the pool, raising if not initialized."""
        if self._pool is None:
            raise RuntimeError(
                "Database pool not initialized. Call await db.initialize() first."
            )
        return self._pool

    async def health_check(self) -> bool:
        """Test connectivity with SELECT 1."""
        try:
            async with self.pool.acquire() as conn:
                await conn.fetchval("SELECT 1")
            return True
        except (asyncpg.PostgresError, OSError, RuntimeError) as e:
            logger.warning("Database health check failed: %s", e)
            return False


# Module-level singleton for convenience
db = DatabasePool()
