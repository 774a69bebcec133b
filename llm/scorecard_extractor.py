import asyncio
import base64
import binascii
import logging
import os
from pathlib import Path
from typing import Optional, Tuple, Union

from dotenv import load_dotenv
load_dotenv()

import httpx
from google import genai
from google.genai import errors, types

from llm.prompts import build_extraction_prompt
from llm.validation import ScorecardPayload, parse_extraction_text, validate_extraction
from scorecard.exceptions import (
    InvalidImageError,
    MalformedResponseError,
    ServiceTimeoutError,
    ServiceUnavailableError,
)

logger = logging.getLogger(__name__)


# --- Configuration ---

GEMINI_MODEL = os.environ.get("GEMINI_MODEL", "gemini-2.0-flash")
OCR_TIMEOUT_SECONDS = 30
MAX_IMAGE_BYTES = 10 * 1024 * 1024
ALLOWED_MIME_TYPES = ("image/jpeg", "image/png", "image/gif")
MIME_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
}

ImageInput = Union[bytes, str]


# --- Image Loading ---

def _sniff_mime_type(data: bytes) -> Optional[str]:
    if data.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if data.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if data[:6] in (b"GIF87a", b"GIF89a"):
        return "image/gif"
    return None


def _decode_data_url(url: str) -> Tuple[bytes, str]:
    """Split a ``data:image/png;base64,...`` URL into bytes and MIME type."""
    header, sep, encoded = url.partition(",")
    if not sep or not header.startswith("data:image/") or ";base64" not in header:
        raise InvalidImageError("Invalid image data: expected a base64 data:image/ URL")
    mime_type = header[len("data:"):].split(";")[0].lower()
    try:
        data = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidImageError(f"Invalid image data: {e}") from e
    return data, mime_type


def decode_image(image: ImageInput, mime_type: Optional[str] = None) -> Tuple[bytes, str]:
    """Normalize an upload to (bytes, MIME type), enforcing type and size limits."""
    if isinstance(image, str):
        data, mime_type = _decode_data_url(image.strip())
    else:
        data = bytes(image)
        mime_type = (mime_type or _sniff_mime_type(data) or "").lower()

    if not data:
        raise InvalidImageError("Image is empty")
    if mime_type == "image/jpg":
        mime_type = "image/jpeg"
    if mime_type not in ALLOWED_MIME_TYPES:
        raise InvalidImageError(
            f"Unsupported image type: {mime_type or 'unknown'}. "
            f"Supported: {', '.join(ALLOWED_MIME_TYPES)}"
        )
    if len(data) > MAX_IMAGE_BYTES:
        raise InvalidImageError(
            f"Image is {len(data)} bytes; the limit is {MAX_IMAGE_BYTES} bytes"
        )
    return data, mime_type


def load_image_file(file_path: Path) -> Tuple[bytes, str]:
    suffix = file_path.suffix.lower()
    if suffix not in MIME_TYPES:
        raise InvalidImageError(
            f"Unsupported file type: {suffix}. "
            f"Supported: {', '.join(sorted(MIME_TYPES.keys()))}"
        )
    with open(file_path, "rb") as f:
        data = f.read()
    return decode_image(data, MIME_TYPES[suffix])


# --- API Interaction ---

def create_client() -> genai.Client:
    api_key = os.environ.get("GOOGLE_API_KEY") or os.environ.get("GEMINI_API_KEY")
    if not api_key:
        raise EnvironmentError(
            "GOOGLE_API_KEY environment variable is not set. "
            "Get an API key at https://aistudio.google.com/apikey"
        )
    return genai.Client(api_key=api_key)


class GeminiScorecardExtractor:
    """Reads a scorecard photo with Gemini and returns a validated payload.

    One attempt per call, bounded by ``timeout`` seconds; nothing is retried.
    """

    def __init__(
        self,
        client: Optional[genai.Client] = None,
        model: str = GEMINI_MODEL,
        timeout: float = OCR_TIMEOUT_SECONDS,
    ):
        self._client = client
        self.model = model
        self.timeout = timeout

    @property
    def client(self) -> genai.Client:
        if self._client is None:
            self._client = create_client()
        return self._client

    async def _generate(self, image_part: types.Part, prompt: str) -> str:
        try:
            response = await asyncio.wait_for(
                self.client.aio.models.generate_content(
                    model=self.model,
                    contents=[image_part, prompt],
                    config=types.GenerateContentConfig(response_mime_type="application/json"),
                ),
                timeout=self.timeout,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            logger.warning("Scorecard extraction timed out after %ss", self.timeout)
            raise ServiceTimeoutError(f"Request timed out after {self.timeout} seconds") from e
        except (errors.APIError, httpx.HTTPError, ConnectionError) as e:
            logger.warning("Scorecard reader call failed: %s", e)
            raise ServiceUnavailableError(f"Scorecard reader call failed: {e}") from e

        text = response.text
        if not text:
            raise MalformedResponseError("Empty response from scorecard reader")
        return text

    async def extract(
        self,
        image: ImageInput,
        mime_type: Optional[str] = None,
        user_context: Optional[str] = None,
    ) -> ScorecardPayload:
        """Photo in, validated payload out.

        Raises InvalidImageError, ServiceTimeoutError, ServiceUnavailableError,
        MalformedResponseError or InvalidShapeError.
        """
        data, mime_type = decode_image(image, mime_type)
        logger.info("Extracting scorecard: %d bytes (%s), model %s", len(data), mime_type, self.model)

        image_part = types.Part.from_bytes(data=data, mime_type=mime_type)
        text = await self._generate(image_part, build_extraction_prompt(user_context))
        logger.debug("Scorecard reader raw response: %s", text)
        return validate_extraction(parse_extraction_text(text))


def extract_scorecard(
    file_path: str,
    user_context: Optional[str] = None,
    extractor: Optional[GeminiScorecardExtractor] = None,
) -> ScorecardPayload:
    """Extract a scorecard from an image file (blocking).

    Args:
        file_path: Path to a JPEG, PNG or GIF scorecard photo.
        user_context: Optional hints, e.g. the player's name on the card.
        extractor: Extractor to use; a default Gemini extractor otherwise.
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    data, mime_type = load_image_file(path)
    extractor = extractor or GeminiScorecardExtractor()
    return asyncio.run(extractor.extract(data, mime_type, user_context=user_context))
