import asyncio
import logging
import os
from typing import Mapping, Optional, Sequence

from dotenv import load_dotenv
load_dotenv()

import httpx
from google import genai
from google.genai import errors

from analytics.stats import compare_performance
from llm.prompts import build_chat_prompt, build_performance_prompt
from llm.scorecard_extractor import create_client
from models import Round
from scorecard.exceptions import InsightResponseError, ServiceTimeoutError, ServiceUnavailableError

logger = logging.getLogger(__name__)


# --- Configuration ---

GEMINI_INSIGHT_MODEL = os.environ.get("GEMINI_INSIGHT_MODEL", "gemini-1.5-flash")
INSIGHT_TIMEOUT_SECONDS = 30


class GeminiInsightService:
    """Performance analysis and Q&A over a player's rounds."""

    def __init__(
        self,
        client: Optional[genai.Client] = None,
        model: str = GEMINI_INSIGHT_MODEL,
        timeout: float = INSIGHT_TIMEOUT_SECONDS,
    ):
        self._client = client
        self.model = model
        self.timeout = timeout

    @property
    def client(self) -> genai.Client:
        if self._client is None:
            self._client = create_client()
        return self._client

    async def _ask(self, prompt: str) -> str:
        try:
            response = await asyncio.wait_for(
                self.client.aio.models.generate_content(model=self.model, contents=prompt),
                timeout=self.timeout,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise ServiceTimeoutError(f"Insight request timed out after {self.timeout} seconds") from e
        except (errors.APIError, httpx.HTTPError, ConnectionError) as e:
            logger.warning("Insight call failed: %s", e)
            raise ServiceUnavailableError(f"Insight call failed: {e}") from e

        if not response.text:
            raise InsightResponseError("No answer from AI")
        return response.text.strip()

    async def analyze(
        self,
        rounds: Sequence[Round],
        pars_by_tee_box: Optional[Mapping[str, Sequence[int]]] = None,
    ) -> str:
        """Two short insights comparing recent rounds with the ones before.

        Raises ValueError when there are no rounds.
        """
        comparison = compare_performance(rounds, pars_by_tee_box)
        return await self._ask(build_performance_prompt(comparison))

    async def answer(self, question: str, rounds: Sequence[Round]) -> str:
        if not question or not question.strip():
            raise ValueError("Question cannot be empty")
        return await self._ask(build_chat_prompt(question, rounds))
