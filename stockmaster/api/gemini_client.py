"""Client for the hosted Generative Language API (``generateContent``)."""

from typing import Any, Dict, Optional

import httpx

from .base_client import BaseClient
from ..utils.config import get_config
from ..utils.exceptions import AIServiceError, ConfigurationError, RateLimitError


class GeminiClient(BaseClient):
    """Thin text-in/text-out wrapper around a hosted generative model."""

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        config = get_config()
        api_key = api_key or config.env.gemini_api_key
        if not api_key:
            raise ConfigurationError("GEMINI_API_KEY is not configured")

        super().__init__(base_url=config.ai.base_url, headers={"x-goog-api-key": api_key})
        self.model = model or config.ai.model

    def generate_text(self, prompt: str, response_schema: Optional[Dict[str, Any]] = None) -> str:
        """
        Send a single-turn prompt and return the first candidate's text.

        Args:
            prompt: Prompt text
            response_schema: When given, request ``application/json`` output
                constrained to this schema

        Raises:
            AIServiceError: Transport failure, HTTP error or empty reply
            RateLimitError: HTTP 429
        """
        payload: Dict[str, Any] = {"contents": [{"parts": [{"text": prompt}]}]}
        if response_schema is not None:
            payload["generationConfig"] = {
                "responseMimeType": "application/json",
                "responseSchema": response_schema
            }

        endpoint = f"/v1beta/models/{self.model}:generateContent"
        try:
            response = self.post_json(endpoint, payload)
        except httpx.HTTPError as e:
            raise AIServiceError(f"HTTP error: {str(e)}", details={"error": str(e)})

        if response.status_code == 429:
            raise RateLimitError("Generative model rate limit reached", details={"response": response.text})

        if response.status_code != 200:
            raise AIServiceError(
                f"generateContent failed (HTTP {response.status_code})",
                details={"response": response.text}
            )

        try:
            body = response.json()
            parts = body["candidates"][0]["content"]["parts"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise AIServiceError("Unexpected generateContent response shape", details={"error": str(e)})

        text = "".join(part.get("text", "") for part in parts)
        if not text:
            raise AIServiceError("No response text from model")

        return text
