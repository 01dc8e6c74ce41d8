from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class PositionRole(str, Enum):
    FIRST = "first"
    MIDDLE = "middle"
    LAST = "last"
    STANDALONE = "standalone"


class NarrationMode(str, Enum):
    SINGLE = "single"
    BATCH = "batch"


# Rendering / segmentation
class ElementCandidate(BaseModel):
    index: int = Field(..., ge=0, description="Document order within its selector")
    text: str = Field(default="", description="innerText of the element")


class RenderedPage(BaseModel):
    """Snapshot of a rendered document; holds no live browser resource."""

    url: str
    text: str = Field(default="", description="Whole-page text after noise removal")
    candidates: dict[str, list[ElementCandidate]] = Field(
        default_factory=dict, description="Matched elements keyed by selector"
    )


class Slide(BaseModel):
    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=0, description="0-based position after filtering")
    text: str


# Narration
class NarrationRequest(BaseModel):
    slide_text: str = Field(..., description="Slide text truncated to the mode's budget")
    position_role: PositionRole
    mode: NarrationMode = Field(default=NarrationMode.BATCH)
    slide_number: int | None = Field(None, ge=1, description="1-based ordinal in the batch")


class NarrationResult(BaseModel):
    text: str
    source_index: int = Field(..., ge=0)
    is_fallback: bool = False
    error: str | None = None


class PacingPolicy(BaseModel):
    interval_seconds: float = Field(default=0.5, ge=0.0, description="Delay between slides")
    max_items: int = Field(default=50, ge=0, description="Maximum slides narrated per batch")


class BatchOutcome(BaseModel):
    slides: list[Slide]
    narrations: list[NarrationResult]
    requested_count: int = Field(..., ge=0, description="Slides detected before capping")
    produced_count: int = Field(..., ge=0, description="Narrations produced")

    @property
    def narration_texts(self) -> list[str]:
        return [narration.text for narration in self.narrations]


class SingleOutcome(BaseModel):
    narration: NarrationResult
    text_length: int = Field(..., ge=0, description="Length of the extracted page text")


# Request/Response Models
class AnalyzeSlideRequest(BaseModel):
    url: str | None = Field(None, description="URL of the slide page to narrate")


class AnalyzeSlidesBatchRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    url: str | None = Field(None, description="URL of the slide deck to narrate")
    slide_count: float | None = Field(
        None, alias="slideCount", description="Expected slide count (advisory, only logged)"
    )


class AnalyzeSlideResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    narration: str
    text_length: int = Field(..., alias="textLength")
    narration_length: int = Field(..., alias="narrationLength")


class AnalyzeSlidesBatchResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    narrations: list[str]
    slide_count: int = Field(..., alias="slideCount")
    generated_count: int = Field(..., alias="generatedCount")
