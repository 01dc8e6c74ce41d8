"""Narration orchestrator driving rendering, segmentation and generation."""

import asyncio
import time

from services.narration.drivers import (
    AzureOpenAINarrationDriver,
    GeminiNarrationDriver,
    NarrationDriver,
    OpenAINarrationDriver,
)
from services.narration.prompts import NarrationPromptBuilder
from services.narration.segmenter import SlideSegmenter
from services.renderer import PageRenderer
from shared.config import ServiceConfig
from shared.exceptions import NarrationGenerationError
from shared.models import (
    BatchOutcome,
    NarrationMode,
    NarrationRequest,
    NarrationResult,
    PacingPolicy,
    SingleOutcome,
    Slide,
)
from shared.utils import setup_logging

logger = setup_logging("narration-orchestrator")

DEFAULT_PROVIDER = "gemini"


class NarrationOrchestrator:
    """Orchestrates the single-slide and batch narration pipelines."""

    def __init__(
        self,
        service_config: ServiceConfig,
        segmenter: SlideSegmenter | None = None,
        pacing: PacingPolicy | None = None,
    ):
        self.service_config = service_config
        self.segmenter = segmenter or SlideSegmenter()
        self.prompt_builder = NarrationPromptBuilder(service_config)
        self.pacing = pacing or PacingPolicy(
            interval_seconds=service_config.get("pacing_interval_seconds", 0.5),
            max_items=service_config.get("max_batch_slides", 50),
        )
        self.narration_timeout = float(service_config.get("narration_timeout_seconds", 60))

        # Collaborators are built on first use so a missing credential
        # only fails the request that needs it.
        self._renderer = None
        self._narration_driver = None

    @property
    def renderer(self) -> PageRenderer:
        """Lazy load page renderer."""
        if self._renderer is None:
            self._renderer = PageRenderer(self.service_config)
        return self._renderer

    @renderer.setter
    def renderer(self, renderer):
        self._renderer = renderer

    @property
    def narration_driver(self) -> NarrationDriver:
        """Lazy load the narration driver for the configured provider."""
        if self._narration_driver is None:
            self._narration_driver = self._load_driver(
                self.service_config.get("narration_provider", DEFAULT_PROVIDER)
            )
        return self._narration_driver

    @narration_driver.setter
    def narration_driver(self, driver):
        self._narration_driver = driver

    @narration_driver.deleter
    def narration_driver(self):
        self._narration_driver = None

    def _load_driver(self, provider_name: str) -> NarrationDriver:
        drivers: dict[str, type[NarrationDriver]] = {
            "gemini": GeminiNarrationDriver,
            "openai": OpenAINarrationDriver,
            "azure": AzureOpenAINarrationDriver,
        }

        driver_cls = drivers.get(provider_name.lower())
        if driver_cls is None:
            logger.warning("Unknown narration provider '%s', falling back to %s", provider_name, DEFAULT_PROVIDER)
            driver_cls = drivers[DEFAULT_PROVIDER]
        return driver_cls(self.service_config)

    async def analyze_single(self, url: str) -> SingleOutcome:
        """Narrate the whole page at ``url`` as one passage. Failures propagate."""
        logger.info(f"Single-slide analysis started: {url}")
        page = await self.renderer.render(url, NarrationMode.SINGLE)
        logger.info(f"Text extracted: {len(page.text)} characters")

        request = self.prompt_builder.build_single_request(page.text)
        text = await self.generate(request)
        logger.info(f"Narration generated: {len(text)} characters")

        return SingleOutcome(
            narration=NarrationResult(text=text, source_index=0),
            text_length=len(page.text),
        )

    async def analyze_batch(self, url: str, slide_count: float | None = None) -> BatchOutcome:
        """Render ``url``, split it into slides and narrate each one.

        ``slide_count`` is the caller's estimate and is only logged.
        """
        logger.info(f"Batch analysis started: {url} (estimated {slide_count or 'unknown'} slides)")
        page = await self.renderer.render(url, NarrationMode.BATCH, self.segmenter.selectors)
        slides = self.segmenter.segment(page)
        logger.info(f"Detected {len(slides)} slides")

        outcome = await self.run_batch(slides)
        logger.info(f"Batch generation completed: {outcome.produced_count} narrations")
        return outcome

    async def run_batch(self, slides: list[Slide], pacing: PacingPolicy | None = None) -> BatchOutcome:
        """Narrate ``slides`` sequentially, isolating per-slide failures."""
        pacing = pacing or self.pacing
        capped = slides[: pacing.max_items]
        total = len(capped)
        narrations: list[NarrationResult] = []

        if capped:
            # Configuration errors abort the batch instead of becoming fallbacks.
            _ = self.narration_driver

        for position, slide in enumerate(capped):
            request = self.prompt_builder.build_batch_request(slide, position, total)
            try:
                text = await self.generate(request)
                narrations.append(NarrationResult(text=text, source_index=slide.index))
                logger.info(f"Slide {position + 1}/{total}: {len(text)} characters")
            except Exception as e:
                logger.error(f"Narration failed for slide {position + 1}: {e}")
                narrations.append(
                    NarrationResult(
                        text=self.prompt_builder.fallback_text(position + 1),
                        source_index=slide.index,
                        is_fallback=True,
                        error=str(e),
                    )
                )

            if position < total - 1:
                await self._pace(pacing)

        return BatchOutcome(
            slides=capped,
            narrations=narrations,
            requested_count=len(slides),
            produced_count=len(narrations),
        )

    async def generate(self, request: NarrationRequest) -> str:
        """Invoke the narration driver for one request, bounded by a timeout."""
        prompt = self.prompt_builder.render_prompt(request)
        step_config = self.prompt_builder.generation_parameters(request.mode)
        start_time = time.time()
        try:
            text = await asyncio.wait_for(
                self.narration_driver.generate(prompt, step_config),
                timeout=self.narration_timeout,
            )
        except asyncio.TimeoutError as exc:
            raise NarrationGenerationError(
                f"Narration generation timed out after {self.narration_timeout:.0f}s",
                slide_number=request.slide_number,
            ) from exc
        logger.debug(f"Generation took {time.time() - start_time:.2f}s")
        return text

    async def _pace(self, pacing: PacingPolicy) -> None:
        if pacing.interval_seconds > 0:
            await asyncio.sleep(pacing.interval_seconds)
