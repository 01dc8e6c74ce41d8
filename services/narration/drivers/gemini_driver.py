"""Google Gemini driver for narration generation."""

from __future__ import annotations

from typing import Any

from google import genai
from google.genai import types

from shared.config import ServiceConfig
from shared.exceptions import ConfigurationError

from .base import NarrationDriver


class GeminiNarrationDriver(NarrationDriver):
    """Gemini implementation using the async surface of the google-genai client."""

    def __init__(self, service_config: ServiceConfig):
        api_key = service_config.get("gemini_api_key")
        if not api_key:
            raise ConfigurationError("Gemini API key not configured. Set GEMINI_API_KEY environment variable.")

        self.model = service_config.get("narration_model", "gemini-1.5-flash")
        self.client = genai.Client(api_key=api_key)

    async def generate(self, prompt: str, step_config: dict[str, Any], **kwargs: Any) -> str:
        """Generate narration text with Gemini."""
        generation_config = types.GenerateContentConfig(
            temperature=step_config.get("temperature", 0.9),
            max_output_tokens=step_config.get("max_output_tokens", 1000),
        )

        response = await self.client.aio.models.generate_content(
            model=step_config.get("model") or self.model,
            contents=prompt,
            config=generation_config,
        )

        if response.text is not None:
            return response.text.strip()
        return ""
