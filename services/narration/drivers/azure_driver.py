"""Azure OpenAI driver for narration generation using v1 API pattern."""

from __future__ import annotations

from typing import Any

from shared.config import ServiceConfig
from shared.openai_client import create_azure_openai_client, get_azure_deployment_name

from .base import NarrationDriver


class AzureOpenAINarrationDriver(NarrationDriver):
    """Azure OpenAI implementation following Microsoft's v1 API pattern."""

    def __init__(self, service_config: ServiceConfig):
        self.client = create_azure_openai_client(service_config)
        self.deployment = get_azure_deployment_name(service_config)

    async def generate(self, prompt: str, step_config: dict[str, Any], **kwargs: Any) -> str:
        """Generate narration text using an Azure deployment."""
        response = await self.client.chat.completions.create(
            model=self.deployment,  # Deployment name for Azure
            messages=[{"role": "user", "content": prompt}],
            temperature=step_config.get("temperature", 0.9),
            max_tokens=step_config.get("max_output_tokens", 1000),
        )

        content = response.choices[0].message.content
        if content is not None:
            return content.strip()
        return ""
