from pydantic import BaseModel, ConfigDict, ValidationError
from typing import Any, Optional


def first_error_message(exc: ValidationError) -> str:
    """Pull the first human-readable message out of a pydantic ValidationError."""
    return exc.errors()[0]['msg']


class BaseGolfModel(BaseModel):
    """Shared configuration and the user-correction helper."""
    model_config = ConfigDict(validate_assignment=True, populate_by_name=True)

    def update_field(self, field_name: str, value: Any) -> Optional[str]:
        """Update a field with user correction. Returns error message if validation fails."""
        try:
            setattr(self, field_name, value)
            return None
        except ValidationError as e:
            return first_error_message(e)
