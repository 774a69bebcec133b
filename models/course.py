from pydantic import Field
from typing import Optional

from .base import BaseGolfModel


class Course(BaseGolfModel):
    """Golf course reference data (read-only to the round-entry flow)."""
    id: Optional[str] = None
    name: str = Field(..., min_length=1)
    city: Optional[str] = None
    state: Optional[str] = None

    @property
    def location(self) -> Optional[str]:
        """"City, ST" when both parts are known, else whichever part exists."""
        parts = [p for p in (self.city, self.state) if p]
        return ", ".join(parts) if parts else None

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match on the course name."""
        return query.strip().lower() in self.name.lower()
