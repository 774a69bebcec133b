"""Course, tee box and date for a round still being entered.

An extracted scorecard arrives with whatever course/tee/date the reader
found (often nothing), and the player fills the rest in from a searchable
list before the round can be saved.
"""

import logging
from datetime import date
from typing import List, Optional, Sequence

from models import Course, TeeBox
from scorecard.collaborators import CourseStore

logger = logging.getLogger(__name__)


def filter_courses(courses: Sequence[Course], query: str) -> List[Course]:
    """Courses whose name contains ``query``, ignoring case. Blank query keeps all."""
    if not query or not query.strip():
        return list(courses)
    return [c for c in courses if c.matches(query)]


def filter_tee_boxes(tee_boxes: Sequence[TeeBox], query: str) -> List[TeeBox]:
    if not query or not query.strip():
        return list(tee_boxes)
    needle = query.strip().lower()
    return [t for t in tee_boxes if needle in t.name.lower()]


def _parse_date(value) -> Optional[date]:
    if isinstance(value, date):
        return value
    if not value:
        return None
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        logger.info("Ignoring unreadable date %r", value)
        return None


class CourseResolution:
    """Selection state for course, tee box and date."""

    def __init__(
        self,
        course_id: str = "",
        tee_box_id: str = "",
        date_played=None,
        course_name: str = "",
        tee_box_name: str = "",
        today: Optional[date] = None,
    ):
        self.course_id = course_id or ""
        self.tee_box_id = tee_box_id or ""
        self.course_name = course_name or ""
        self.tee_box_name = tee_box_name or ""
        # An empty date means the round was played today.
        self.date_played = _parse_date(date_played) or today or date.today()
        self.tee_box: Optional[TeeBox] = None

    @classmethod
    def from_payload(cls, payload, today: Optional[date] = None) -> "CourseResolution":
        return cls(
            course_id=payload.course_id,
            tee_box_id=payload.tee_box_id,
            date_played=payload.date_played,
            course_name=payload.course_name,
            tee_box_name=payload.tee_box_name,
            today=today,
        )

    @property
    def is_resolved(self) -> bool:
        return not self.missing_fields()

    def missing_fields(self) -> List[str]:
        missing = []
        if not self.course_id:
            missing.append("course")
        if not self.tee_box_id:
            missing.append("tee box")
        if self.date_played is None:
            missing.append("date")
        return missing

    def set_date(self, value) -> None:
        self.date_played = _parse_date(value) or date.today()

    def select_course(self, course: Course) -> None:
        """Choose a course; any tee box picked for a previous course is dropped."""
        self.clear_tee_box()
        self.course_id = course.id or ""
        self.course_name = course.name

    def select_tee_box(self, tee_box: TeeBox) -> None:
        if self.course_id and tee_box.course_id and tee_box.course_id != self.course_id:
            raise ValueError(
                f"Tee box {tee_box.name!r} belongs to a different course than the one selected"
            )
        if not self.course_id and tee_box.course_id:
            self.course_id = tee_box.course_id
        self.tee_box_id = tee_box.id or ""
        self.tee_box_name = tee_box.name
        self.tee_box = tee_box

    def clear_tee_box(self) -> None:
        self.tee_box_id = ""
        self.tee_box_name = ""
        self.tee_box = None

    def clear_course(self) -> None:
        self.course_id = ""
        self.course_name = ""
        self.clear_tee_box()

    def match_course_by_name(self, courses: Sequence[Course]) -> Optional[Course]:
        """Auto-select the course when the extracted name matches exactly one."""
        if self.course_id or not self.course_name:
            return None
        matches = filter_courses(courses, self.course_name)
        if len(matches) != 1:
            return None
        self.select_course(matches[0])
        return matches[0]

    def match_tee_box_by_name(self, tee_boxes: Sequence[TeeBox]) -> Optional[TeeBox]:
        if self.tee_box_id or not self.tee_box_name:
            return None
        matches = filter_tee_boxes(tee_boxes, self.tee_box_name)
        if len(matches) != 1:
            return None
        self.select_tee_box(matches[0])
        return matches[0]

    async def verify(self, store: CourseStore) -> None:
        """Check extracted ids against the store and fill in what can be matched.

        Ids the store does not know are cleared so the player is asked to pick.
        A known tee box read without its course brings its course along.
        """
        if not self.course_id and self.tee_box_id:
            if await self._adopt_tee_box_course(store):
                return

        if self.course_id:
            course = await store.get_course(self.course_id)
            if course is None:
                logger.info("Extracted course id %s not found; clearing", self.course_id)
                self.clear_course()
            else:
                self.course_name = course.name
        else:
            self.match_course_by_name(await store.list_courses())

        if self.tee_box_id:
            tee_box = await store.get_tee_box(self.tee_box_id)
            if tee_box is None or (tee_box.course_id and tee_box.course_id != self.course_id):
                logger.info("Extracted tee box id %s not usable; clearing", self.tee_box_id)
                self.clear_tee_box()
            else:
                self.select_tee_box(tee_box)
        elif self.course_id:
            self.match_tee_box_by_name(await store.list_tee_boxes(self.course_id))

    async def _adopt_tee_box_course(self, store: CourseStore) -> bool:
        tee_box = await store.get_tee_box(self.tee_box_id)
        if tee_box is None or not tee_box.course_id:
            return False
        course = await store.get_course(tee_box.course_id)
        if course is None:
            return False
        self.select_course(course)
        self.select_tee_box(tee_box)
        return True

    def to_dict(self) -> dict:
        return {
            "course_id": self.course_id,
            "tee_box_id": self.tee_box_id,
            "course_name": self.course_name,
            "tee_box_name": self.tee_box_name,
            "date_played": self.date_played.isoformat() if self.date_played else "",
            "missing": self.missing_fields(),
        }
