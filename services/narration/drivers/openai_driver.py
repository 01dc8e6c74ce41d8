"""OpenAI driver for narration generation using AsyncOpenAI."""

from __future__ import annotations

from typing import Any

from shared.config import ServiceConfig
from shared.openai_client import create_openai_client

from .base import NarrationDriver


class OpenAINarrationDriver(NarrationDriver):
    """Direct OpenAI implementation using AsyncOpenAI client."""

    def __init__(self, service_config: ServiceConfig):
        """Initialize OpenAI client."""
        self.client = create_openai_client(service_config)
        self.model = service_config.get("narration_model", "gpt-4o-mini")

    async def generate(self, prompt: str, step_config: dict[str, Any], **kwargs: Any) -> str:
        """Generate narration text using OpenAI."""
        response = await self.client.chat.completions.create(
            model=step_config.get("model") or self.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=step_config.get("temperature", 0.9),
            max_tokens=step_config.get("max_output_tokens", 1000),
        )

        content = response.choices[0].message.content
        if content is not None:
            return content.strip()
        return ""
