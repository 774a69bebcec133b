from .course_repo import CourseRepositoryDB
from .user_repo import UserRepositoryDB
from .round_repo import RoundRepositoryDB

__all__ = ["CourseRepositoryDB", "UserRepositoryDB", "RoundRepositoryDB"]
