"""
Slide Narration Backend - Unified Application Entry Point
Mounts the narration service and static file serving under a single FastAPI application
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException
from starlette.types import Scope

from services.narration import app as narration_module
from shared.utils import setup_logging

service_config = narration_module.service_config
narration_app = narration_module.app

logger = setup_logging("slide-narration-backend", service_config.get("log_level", "INFO"))


class PublicStaticFiles(StaticFiles):
    """Static file app that never serves dotfiles such as ``.env`` or ``.git/``."""

    async def get_response(self, path: str, scope: Scope):
        segments = path.replace("\\", "/").split("/")
        if any(segment.startswith(".") and segment != "." for segment in segments):
            raise HTTPException(status_code=404)
        return await super().get_response(path, scope)


app = FastAPI(
    title="Slide Narration Backend API",
    description="""
    Generates spoken narration for slide decks hosted online.

    Single-slide and batch analysis endpoints, health check and static files.
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {
            "name": "Health",
            "description": "Service health and status endpoints",
        },
        {
            "name": "Narration",
            "description": "Slide analysis and narration generation",
        },
    ],
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=service_config.get("allowed_origins", ["*"]),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

narration_module.register_exception_handlers(app)

# Routes to exclude (internal FastAPI docs routes)
EXCLUDED_PATHS = {"/openapi.json", "/docs", "/docs/oauth2-redirect", "/redoc"}

# Include Narration routes
for route in narration_app.routes:
    if hasattr(route, "path") and hasattr(route, "endpoint"):
        # Skip internal documentation routes
        if route.path in EXCLUDED_PATHS:
            continue
        route_kwargs = {
            "path": route.path,
            "endpoint": route.endpoint,
            "methods": route.methods,
            "tags": ["Health"] if route.path == "/health" else ["Narration"],
        }
        if hasattr(route, "name"):
            route_kwargs["name"] = f"narration_{route.name}"
        if hasattr(route, "response_model"):
            route_kwargs["response_model"] = route.response_model
        if hasattr(route, "responses"):
            route_kwargs["responses"] = route.responses
        app.add_api_route(**route_kwargs)

# Static files are mounted last so API routes take precedence.
app.mount(
    "/",
    PublicStaticFiles(directory=service_config.get("static_dir", "."), html=True),
    name="static",
)


def log_startup_banner() -> None:
    host = service_config.get("host", "0.0.0.0")
    port = service_config.get("port", 3000)
    provider = service_config.get("narration_provider", "gemini")
    configured = "configured" if service_config.credential_configured() else "NOT configured"
    logger.info(f"Starting Slide Narration Backend on http://{host}:{port}")
    logger.info(f"Narration provider '{provider}': credential {configured}")


if __name__ == "__main__":
    import uvicorn

    log_startup_banner()
    uvicorn.run(
        "app:app",
        host=service_config.get("host", "0.0.0.0"),
        port=service_config.get("port", 3000),
        reload=service_config.get("debug", False),
        log_level="info",
    )
