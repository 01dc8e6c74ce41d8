import sys
from pathlib import Path
from typing import Any

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from services.narration.drivers import NarrationDriver
from services.narration.orchestrator import NarrationOrchestrator
from shared.config import ServiceConfig
from shared.models import ElementCandidate, NarrationMode, PacingPolicy, RenderedPage


class StubNarrationDriver(NarrationDriver):
    """Records prompts and returns canned narrations; fails on chosen calls."""

    def __init__(self, fail_on: set[int] | None = None) -> None:
        self.fail_on = fail_on or set()
        self.calls: list[dict[str, Any]] = []

    async def generate(self, prompt: str, step_config: dict[str, Any], **kwargs: Any) -> str:
        call_number = len(self.calls)
        self.calls.append({"prompt": prompt, "step_config": step_config})
        if call_number in self.fail_on:
            raise RuntimeError(f"upstream failure on call {call_number}")
        return f"narration {call_number}"


class StubRenderer:
    """Returns a fixed RenderedPage and records render calls."""

    def __init__(self, page: RenderedPage | None = None, error: Exception | None = None) -> None:
        self.page = page or RenderedPage(url="https://example.com/deck", text="")
        self.error = error
        self.calls: list[tuple[str, NarrationMode, tuple[str, ...]]] = []

    async def render(self, url: str, mode: NarrationMode = NarrationMode.SINGLE, selectors=()) -> RenderedPage:
        self.calls.append((url, mode, tuple(selectors)))
        if self.error is not None:
            raise self.error
        return self.page


def make_page(candidates: dict[str, list[str]] | None = None, text: str = "", url: str = "https://example.com/deck"):
    """Build a RenderedPage from plain selector -> texts mappings."""
    return RenderedPage(
        url=url,
        text=text,
        candidates={
            selector: [ElementCandidate(index=i, text=t) for i, t in enumerate(texts)]
            for selector, texts in (candidates or {}).items()
        },
    )


@pytest.fixture
def service_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> ServiceConfig:
    """Configuration isolated from the developer's environment."""
    for key in (
        "GEMINI_API_KEY",
        "OPENAI_API_KEY",
        "AZURE_OPENAI_KEY",
        "AZURE_OPENAI_ENDPOINT",
        "AZURE_OPENAI_DEPLOYMENT",
        "NARRATION_PROVIDER",
        "NARRATION_MODEL",
        "NARRATION_CONFIG_PATH",
        "HOST",
        "PORT",
    ):
        monkeypatch.delenv(key, raising=False)
    config = ServiceConfig(env_path=str(tmp_path / ".env"))
    config.set("pacing_interval_seconds", 0.0)
    return config


@pytest.fixture
def zero_pacing() -> PacingPolicy:
    return PacingPolicy(interval_seconds=0.0, max_items=50)


@pytest.fixture
def stub_driver() -> StubNarrationDriver:
    return StubNarrationDriver()


@pytest.fixture
def orchestrator(service_config: ServiceConfig, zero_pacing: PacingPolicy, stub_driver: StubNarrationDriver):
    """Narration orchestrator with stub driver and renderer."""
    instance = NarrationOrchestrator(service_config, pacing=zero_pacing)
    instance.narration_driver = stub_driver
    instance.renderer = StubRenderer()
    return instance
