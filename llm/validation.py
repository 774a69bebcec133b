"""Shape checks for the scorecard reader's JSON before anything trusts it.

The service answers with free text that should contain one JSON object.
``isolate_json_object`` pulls that object out, ``parse_extraction_text``
decodes it and ``validate_extraction`` turns it into a ``ScorecardPayload``.
Only array lengths and key presence are checked: implausible values are left
for the player to correct on the review screen.
"""

import json
import logging
from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from models import NINE
from scorecard.exceptions import InvalidShapeError, MalformedResponseError, ScorecardError

logger = logging.getLogger(__name__)

REQUIRED_ARRAYS = (
    "front_nine_scores",
    "back_nine_scores",
    "front_nine_putts",
    "back_nine_putts",
    "front_nine_fairways",
    "back_nine_fairways",
    "front_nine_gir",
    "back_nine_gir",
)

REQUIRED_FIELDS = (
    "total_score",
    "total_putts",
    "total_fairways_hit",
    "total_gir",
    "course_id",
    "tee_box_id",
    "date_played",
    "submission_type",
)


class ScorecardPayload(BaseModel):
    """A scorecard reader response that passed the shape checks.

    Per-hole values are kept as the service sent them; the reconciler decides
    which of them are usable.
    """
    model_config = ConfigDict(extra="ignore")

    front_nine_scores: List[Any] = Field(..., min_length=NINE, max_length=NINE)
    back_nine_scores: List[Any] = Field(..., min_length=NINE, max_length=NINE)
    front_nine_putts: List[Any] = Field(..., min_length=NINE, max_length=NINE)
    back_nine_putts: List[Any] = Field(..., min_length=NINE, max_length=NINE)
    front_nine_fairways: List[Any] = Field(..., min_length=NINE, max_length=NINE)
    back_nine_fairways: List[Any] = Field(..., min_length=NINE, max_length=NINE)
    front_nine_gir: List[Any] = Field(..., min_length=NINE, max_length=NINE)
    back_nine_gir: List[Any] = Field(..., min_length=NINE, max_length=NINE)

    total_score: Any = None
    total_putts: Any = None
    total_fairways_hit: Any = None
    total_gir: Any = None
    course_id: str = ""
    tee_box_id: str = ""
    date_played: str = ""
    submission_type: str = "scanned"

    # Later versions of the reader also name what they saw on the card.
    course_name: str = ""
    tee_box_name: str = ""

    @field_validator(
        "course_id", "tee_box_id", "date_played", "submission_type",
        "course_name", "tee_box_name",
        mode="before",
    )
    @classmethod
    def coerce_text(cls, v):
        if v is None:
            return ""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


def isolate_json_object(text: str) -> str:
    """Return the first top-level ``{...}`` object found in ``text``.

    Braces inside JSON strings (and escaped quotes) are skipped, so prose or
    markdown fences around the object do not confuse the match.
    """
    if not text:
        raise MalformedResponseError("Empty response from scorecard reader")

    start = text.find("{")
    while start != -1:
        depth = 0
        in_string = False
        escaped = False
        for pos in range(start, len(text)):
            ch = text[pos]
            if in_string:
                if escaped:
                    escaped = False
                elif ch == "\\":
                    escaped = True
                elif ch == '"':
                    in_string = False
                continue
            if ch == '"':
                in_string = True
            elif ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    return text[start:pos + 1]
        # Unbalanced from this brace; there is no complete object after it either.
        break

    raise MalformedResponseError("No JSON object found in scorecard reader response")


def parse_extraction_text(text: str) -> Any:
    """Isolate and decode the JSON object in a raw service response."""
    json_text = isolate_json_object(text)
    try:
        return json.loads(json_text)
    except json.JSONDecodeError as e:
        logger.warning("Scorecard reader JSON failed to parse: %s", e)
        raise MalformedResponseError(f"Failed to parse scorecard data: {e}") from e


def _shape_problems(data: Any) -> List[str]:
    if not isinstance(data, dict):
        return [f"expected a JSON object, got {type(data).__name__}"]

    problems: List[str] = []
    for key in REQUIRED_ARRAYS:
        if key not in data:
            problems.append(f"missing array '{key}'")
        elif not isinstance(data[key], list):
            problems.append(f"'{key}' is not an array")
        elif len(data[key]) != NINE:
            problems.append(f"'{key}' has {len(data[key])} entries, expected {NINE}")

    for key in REQUIRED_FIELDS:
        if key not in data:
            problems.append(f"missing field '{key}'")
    return problems


def validate_extraction(data: Any) -> ScorecardPayload:
    """Accept a decoded reader response or raise InvalidShapeError.

    Empty strings are fine for ``course_id``, ``tee_box_id`` and
    ``date_played``; those send the player to the course/date picker.
    """
    problems = _shape_problems(data)
    if problems:
        logger.info("Rejected scorecard extraction: %s", "; ".join(problems))
        raise InvalidShapeError("Invalid scorecard data structure: " + "; ".join(problems))
    try:
        return ScorecardPayload.model_validate(data)
    except ValidationError as e:
        raise InvalidShapeError(f"Invalid scorecard data structure: {e.errors()[0]['msg']}") from e


def check_extraction(data: Any) -> Tuple[Optional[ScorecardPayload], Optional[ScorecardError]]:
    """Non-raising form of ``validate_extraction``: ``(payload, None)`` or ``(None, error)``."""
    try:
        return validate_extraction(data), None
    except InvalidShapeError as e:
        return None, e
