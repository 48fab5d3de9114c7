"""Google Gemini API wrapper with error classification."""

import logging
from typing import Protocol

from google import genai
from google.genai import errors, types

from config import settings
from services.errors import (
    AnalysisError,
    InvalidUpstreamRequest,
    ServiceUnavailable,
    UpstreamAuthError,
    UpstreamRateLimited,
)

logger = logging.getLogger(__name__)


class LLMClient(Protocol):
    """Anything that turns a prompt into raw model text."""

    model_name: str

    async def generate(self, prompt: str) -> str: ...


def classify_api_error(exc: errors.APIError) -> AnalysisError:
    """Map a google-genai API error to the pipeline's error taxonomy."""
    code = getattr(exc, "code", None) or 0
    if code in (401, 403):
        return UpstreamAuthError(f"Gemini rejected credentials ({code})")
    if code == 429:
        return UpstreamRateLimited("Gemini quota exceeded (429)")
    if code == 400:
        return InvalidUpstreamRequest("Gemini rejected the request (400)")
    if code >= 500:
        return ServiceUnavailable(f"Gemini unavailable ({code})")
    return AnalysisError(f"Unexpected Gemini error ({code})")


class GeminiClient:
    def __init__(self, api_key: str | None = None, model_name: str | None = None):
        self._api_key = settings.gemini_api_key if api_key is None else api_key
        self.model_name = model_name or settings.gemini_model
        self._client: genai.Client | None = None

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    def _get_client(self) -> genai.Client:
        if not self._api_key:
            logger.warning("No GEMINI_API_KEY set - Gemini analysis disabled")
            raise UpstreamAuthError("GEMINI_API_KEY not configured")
        if self._client is None:
            self._client = genai.Client(api_key=self._api_key)
        return self._client

    async def generate(self, prompt: str) -> str:
        """Send a prompt to Gemini and return the raw response text."""
        client = self._get_client()
        try:
            response = await client.aio.models.generate_content(
                model=self.model_name,
                contents=prompt,
                config=types.GenerateContentConfig(
                    temperature=settings.temperature,
                    max_output_tokens=settings.max_output_tokens,
                ),
            )
        except errors.APIError as e:
            logger.error("Gemini API error: %s", e)
            raise classify_api_error(e) from e

        return response.text or ""
