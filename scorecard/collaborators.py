from typing import List, Mapping, Optional, Protocol, Sequence

from models import Course, Round, TeeBox


class CourseStore(Protocol):
    """Read-only course and tee-box lookups used while resolving a round.

    Missing ids come back as None rather than raising.
    """

    async def list_courses(self) -> List[Course]:
        ...

    async def get_course(self, course_id: str) -> Optional[Course]:
        """The course with this id, or None."""
        ...

    async def list_tee_boxes(self, course_id: str) -> List[TeeBox]:
        """All tee boxes for a course."""
        ...

    async def get_tee_box(self, tee_box_id: str) -> Optional[TeeBox]:
        ...


class RoundStore(Protocol):
    """Interface for saving and reading a user's rounds."""

    async def create_round(self, round_: Round) -> Round:
        """Insert a round and return it with its store-assigned id."""
        ...

    async def get_rounds_for_user(self, user_id: str) -> List[Round]:
        ...

    async def delete_round(self, round_id: str, user_id: str) -> bool:
        """Delete a round only if it belongs to ``user_id``. True when removed."""
        ...


class ScorecardExtractor(Protocol):
    """Reads a scorecard photo and returns the validated payload."""

    async def extract(self, image, mime_type: Optional[str] = None, user_context: Optional[str] = None):
        ...


class InsightService(Protocol):
    """Natural-language analysis of a user's rounds."""

    async def analyze(
        self,
        rounds: Sequence[Round],
        pars_by_tee_box: Optional[Mapping[str, Sequence[int]]] = None,
    ) -> str:
        ...

    async def answer(self, question: str, rounds: Sequence[Round]) -> str:
        ...


class NullCourseStore:
    """Course store with no courses; every lookup misses."""

    async def list_courses(self) -> List[Course]:
        return []

    async def get_course(self, course_id: str) -> Optional[Course]:
        return None

    async def list_tee_boxes(self, course_id: str) -> List[TeeBox]:
        return []

    async def get_tee_box(self, tee_box_id: str) -> Optional[TeeBox]:
        return None


class NullRoundStore:
    """Round store that saves nothing and lists no rounds."""

    async def create_round(self, round_: Round) -> Round:
        return round_

    async def get_rounds_for_user(self, user_id: str) -> List[Round]:
        return []

    async def delete_round(self, round_id: str, user_id: str) -> bool:
        return False


class NullInsightService:
    """Insight service that answers every request with an empty string."""

    async def analyze(
        self,
        rounds: Sequence[Round],
        pars_by_tee_box: Optional[Mapping[str, Sequence[int]]] = None,
    ) -> str:
        return ""

    async def answer(self, question: str, rounds: Sequence[Round]) -> str:
        return ""
