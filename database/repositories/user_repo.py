"""CRUD operations for the users table."""

import asyncpg
from typing import Optional

from models import User
from database.converters import as_uuid, user_from_row, user_to_row
from database.exceptions import DuplicateError


class UserRepositoryDB:
    """Async CRUD for users."""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    # ================================================================
    # Read
    # ================================================================

    async def get_user(self, user_id: str) -> Optional[User]:
        user_uuid = as_uuid(user_id)
        if user_uuid is None:
            return None
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT * FROM users WHERE id = $1", user_uuid
            )
            return user_from_row(row) if row else None

    async def get_user_by_auth_uid(self, auth_uid: str) -> Optional[User]:
        """Get user by the identity issued by the auth provider."""
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT * FROM users WHERE auth_uid = $1", auth_uid
            )
            return user_from_row(row) if row else None

    # ================================================================
    # Create
    # ================================================================

    async def create_user(self, user: User) -> User:
        """Create a new user. Returns User with DB-generated id."""
        data = user_to_row(user)
        try:
            async with self._pool.acquire() as conn:
                row = await conn.fetchrow(
                    """INSERT INTO users (auth_uid, email)
                       VALUES ($1, $2) RETURNING *""",
                    data["auth_uid"], data["email"],
                )
                return user_from_row(row)
        except asyncpg.UniqueViolationError as e:
            raise DuplicateError(f"User already exists: {e}") from e
