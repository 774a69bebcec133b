from database.connection import DatabasePool, db
from database.db_manager import DatabaseManager
from database.repositories import CourseRepositoryDB, UserRepositoryDB, RoundRepositoryDB
from database.exceptions import (
    DatabaseError,
    DuplicateError,
    IntegrityError,
    MalformedRowError,
    NotFoundError,
)

__all__ = [
    "DatabasePool",
    "db",
    "DatabaseManager",
    "CourseRepositoryDB",
    "UserRepositoryDB",
    "RoundRepositoryDB",
    "DatabaseError",
    "DuplicateError",
    "IntegrityError",
    "MalformedRowError",
    "NotFoundError",
]
