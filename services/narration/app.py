"""Narration service API endpoints for slide deck pages."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from services.narration.orchestrator import NarrationOrchestrator
from shared.config import ServiceConfig
from shared.models import (
    AnalyzeSlideRequest,
    AnalyzeSlideResponse,
    AnalyzeSlidesBatchRequest,
    AnalyzeSlidesBatchResponse,
)
from shared.response_models import ErrorResponse, HealthResponse
from shared.utils import setup_logging

service_config = ServiceConfig()

logger = setup_logging("narration-service", service_config.get("log_level", "INFO"))

URL_REQUIRED = "URLが必要です"
INVALID_REQUEST = "リクエストが不正です"
SINGLE_FAILED = "スライド解析に失敗しました"
BATCH_FAILED = "バッチ解析に失敗しました"

app = FastAPI(
    title="Slide Narration Service",
    description="Generate spoken narration for slide decks hosted online",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=service_config.get("allowed_origins", ["*"]),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize orchestrator
orchestrator = NarrationOrchestrator(service_config)

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def error_response(status_code: int, error: str, message: str | None = None) -> JSONResponse:
    body = ErrorResponse(error=error, message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Map malformed request bodies to a 400 JSON error."""
    logger.warning(f"Rejected request to {request.url.path}: {exc.errors()}")
    return error_response(400, INVALID_REQUEST, str(exc.errors()))


def register_exception_handlers(target_app: FastAPI) -> None:
    target_app.add_exception_handler(RequestValidationError, validation_exception_handler)


register_exception_handlers(app)


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint for the narration service."""
    return HealthResponse(
        status="ok",
        message="スライドナレーションAPI is running",
        gemini_configured=service_config.credential_configured("gemini"),
        credential_configured=service_config.credential_configured(),
        provider=service_config.get("narration_provider", "gemini"),
    )


@app.post("/api/analyze-slide", response_model=AnalyzeSlideResponse, responses=ERROR_RESPONSES)
async def analyze_slide(request: AnalyzeSlideRequest):
    """Generate one narration for the whole page at ``url``."""
    if not request.url:
        return error_response(400, URL_REQUIRED)

    try:
        outcome = await orchestrator.analyze_single(request.url)
    except Exception as e:
        logger.error(f"Slide analysis failed for {request.url}: {e}")
        return error_response(500, SINGLE_FAILED, str(e))

    narration = outcome.narration.text
    return AnalyzeSlideResponse(
        narration=narration,
        text_length=outcome.text_length,
        narration_length=len(narration),
    )


@app.post("/api/analyze-slides-batch", response_model=AnalyzeSlidesBatchResponse, responses=ERROR_RESPONSES)
async def analyze_slides_batch(request: AnalyzeSlidesBatchRequest):
    """Split the page at ``url`` into slides and narrate each one.

    Slides whose generation fails get a placeholder narration instead of
    failing the request. ``slideCount`` in the body is only logged.
    """
    if not request.url:
        return error_response(400, URL_REQUIRED)

    try:
        outcome = await orchestrator.analyze_batch(request.url, request.slide_count)
    except Exception as e:
        logger.error(f"Batch analysis failed for {request.url}: {e}")
        return error_response(500, BATCH_FAILED, str(e))

    return AnalyzeSlidesBatchResponse(
        narrations=outcome.narration_texts,
        slide_count=outcome.requested_count,
        generated_count=outcome.produced_count,
    )


if __name__ == "__main__":
    try:
        import uvicorn
    except ImportError as e:
        raise RuntimeError("uvicorn must be installed to run this service.") from e
    uvicorn.run(app, host=service_config.get("host", "0.0.0.0"), port=service_config.get("port", 3000))
