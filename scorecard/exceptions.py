"""Error taxonomy for round entry, extraction and the external services.

Every error carries a ``user_message`` so callers can show something
specific: a bad photo, a service problem and a missing course selection
all read differently.
"""

from typing import Optional


class ScorecardError(Exception):
    """Base for all round-entry errors."""

    user_message = "Something went wrong. Please try again."

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail or self.user_message)
        self.detail = detail


class InvalidImageError(ScorecardError):
    """Upload is not a supported image, or is too large."""

    user_message = "Please upload a valid image file (JPEG, PNG, or GIF) under 10MB."


class InvalidShapeError(ScorecardError):
    """Extraction payload is missing required fields or has wrong-length arrays."""

    user_message = (
        "We couldn't read a complete scorecard from that photo. "
        "Try again with a clearer picture of the whole card."
    )


class MalformedResponseError(ScorecardError):
    """Service response could not be parsed as the expected text/JSON."""

    user_message = "The scorecard reader returned something we couldn't understand. Please try again."


class InsightResponseError(MalformedResponseError):
    """The insight model answered with nothing usable."""

    user_message = "We couldn't get an answer about your rounds just now. Please ask again."


class ServiceUnavailableError(ScorecardError):
    """An external service call failed."""

    user_message = "The service is unavailable right now. Check your connection and try again."


class ServiceTimeoutError(ServiceUnavailableError):
    """An external service call exceeded its time budget."""

    user_message = "The request took too long and was cancelled. Please try again."


class UnresolvedCourseError(ScorecardError):
    """The round cannot be saved until a course, tee box and date are chosen."""

    user_message = "Select a course and tee box before saving the round."
