"""Builders for OpenAI and Azure OpenAI clients used by narration drivers."""

from __future__ import annotations

from openai import AsyncOpenAI

from shared.config import ServiceConfig
from shared.exceptions import ConfigurationError


def create_azure_openai_client(service_config: ServiceConfig) -> AsyncOpenAI:
    """
    Create an Azure OpenAI client using the v1 API pattern.

    Args:
        service_config: Service configuration holding the Azure credentials

    Returns:
        Configured AsyncOpenAI client

    Raises:
        ConfigurationError: If credentials are not configured
    """
    api_key = service_config.get("azure_openai_key")
    azure_endpoint = service_config.get("azure_openai_endpoint")

    if not api_key or not azure_endpoint:
        raise ConfigurationError(
            "Azure OpenAI credentials not configured. "
            "Set AZURE_OPENAI_KEY and AZURE_OPENAI_ENDPOINT environment variables."
        )

    base_url = f"{azure_endpoint.rstrip('/')}/openai/v1/"
    return AsyncOpenAI(api_key=api_key, base_url=base_url)


def create_openai_client(service_config: ServiceConfig) -> AsyncOpenAI:
    """
    Create a direct OpenAI client.

    Raises:
        ConfigurationError: If API key is not configured
    """
    api_key = service_config.get("openai_api_key")

    if not api_key:
        raise ConfigurationError("OpenAI API key not configured. Set OPENAI_API_KEY environment variable.")

    return AsyncOpenAI(api_key=api_key)


def get_azure_deployment_name(service_config: ServiceConfig, deployment: str | None = None) -> str:
    """Get Azure OpenAI deployment name from parameter or config."""
    return deployment or service_config.get("azure_openai_deployment") or "gpt-4o-mini"
