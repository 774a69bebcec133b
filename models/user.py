from datetime import datetime
from pydantic import Field
from typing import Optional

from .base import BaseGolfModel


class User(BaseGolfModel):
    """A golfer, keyed by the opaque identity issued by the auth provider."""
    id: Optional[str] = None
    auth_uid: str = Field(..., min_length=1)
    email: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def display_name(self) -> str:
        """Greeting name: the local part of the email, or the auth uid."""
        if self.email and "@" in self.email:
            return self.email.split("@")[0]
        return self.email or self.auth_uid
