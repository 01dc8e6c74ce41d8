"""
Common API response models.
"""

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Standard API error response."""

    error: str = Field(..., description="Error summary shown to the user")
    message: str | None = Field(None, description="Underlying error message")


class HealthResponse(BaseModel):
    """Health check response model."""

    model_config = ConfigDict(populate_by_name=True)

    status: str = Field(..., description="Service status")
    message: str = Field(..., description="Health check message")
    gemini_configured: bool = Field(..., alias="geminiConfigured")
    credential_configured: bool = Field(
        ..., alias="credentialConfigured", description="Credential for the active provider is set"
    )
    provider: str = Field(..., description="Active narration provider")
