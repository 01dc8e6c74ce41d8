"""Narration generator driver implementations."""

from .azure_driver import AzureOpenAINarrationDriver
from .base import NarrationDriver
from .gemini_driver import GeminiNarrationDriver
from .openai_driver import OpenAINarrationDriver

__all__ = [
    "NarrationDriver",
    "GeminiNarrationDriver",
    "OpenAINarrationDriver",
    "AzureOpenAINarrationDriver",
]
