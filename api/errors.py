"""Map domain and store errors onto HTTP responses."""

import logging

from fastapi import HTTPException

from database.exceptions import (
    DatabaseError,
    DuplicateError,
    IntegrityError,
    MalformedRowError,
    NotFoundError,
)
from scorecard.exceptions import (
    InsightResponseError,
    InvalidImageError,
    InvalidShapeError,
    MalformedResponseError,
    ScorecardError,
    ServiceTimeoutError,
    ServiceUnavailableError,
    UnresolvedCourseError,
)

logger = logging.getLogger(__name__)

_SCORECARD_STATUS = (
    (InsightResponseError, 502),
    (InvalidImageError, 422),
    (InvalidShapeError, 422),
    (MalformedResponseError, 422),
    (UnresolvedCourseError, 422),
    (ServiceTimeoutError, 504),
    (ServiceUnavailableError, 502),
)


def scorecard_http_error(exc: ScorecardError) -> HTTPException:
    for error_type, status in _SCORECARD_STATUS:
        if isinstance(exc, error_type):
            return HTTPException(status, exc.user_message)
    return HTTPException(500, exc.user_message)


def database_http_error(exc: DatabaseError) -> HTTPException:
    if isinstance(exc, NotFoundError):
        return HTTPException(404, str(exc))
    if isinstance(exc, (DuplicateError, IntegrityError)):
        return HTTPException(409, str(exc))
    if isinstance(exc, MalformedRowError):
        logger.error("Malformed stored data: %s", exc)
        return HTTPException(500, "Stored course or round data is malformed")
    logger.exception("Database error: %s", exc)
    return HTTPException(500, "Something went wrong. Please try again.")
