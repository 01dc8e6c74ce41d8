"""Exception types raised across the narration pipeline."""


class NarrationServiceError(Exception):
    """Base class for errors raised by the slide narration service."""


class ConfigurationError(NarrationServiceError):
    """A required credential or setting is missing."""


class RenderError(NarrationServiceError):
    """The page could not be loaded or extracted by the renderer."""

    def __init__(self, message: str, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class NarrationGenerationError(NarrationServiceError):
    """The narration generator failed or timed out for a passage."""

    def __init__(self, message: str, slide_number: int | None = None) -> None:
        super().__init__(message)
        self.slide_number = slide_number
