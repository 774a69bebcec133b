from .insights import GeminiInsightService
from .scorecard_extractor import GeminiScorecardExtractor, decode_image, extract_scorecard
from .validation import (
    ScorecardPayload,
    check_extraction,
    isolate_json_object,
    parse_extraction_text,
    validate_extraction,
)

__all__ = [
    "GeminiInsightService",
    "GeminiScorecardExtractor",
    "ScorecardPayload",
    "check_extraction",
    "decode_image",
    "extract_scorecard",
    "isolate_json_object",
    "parse_extraction_text",
    "validate_extraction",
]
