from abc import ABC, abstractmethod
from typing import Any


class NarrationDriver(ABC):
    """Abstract base class for narration generation drivers."""

    @abstractmethod
    async def generate(self, prompt: str, step_config: dict[str, Any], **kwargs: Any) -> str:
        """Generate narration text for the given prompt and generation parameters."""
        pass
