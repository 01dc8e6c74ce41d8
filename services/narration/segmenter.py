"""Slide boundary detection over a rendered page snapshot."""

from __future__ import annotations

from collections.abc import Sequence

from shared.models import ElementCandidate, RenderedPage, Slide
from shared.utils import setup_logging

logger = setup_logging("slide-segmenter")

# Most specific structural markers first, generic containers last.
DEFAULT_SLIDE_SELECTORS: tuple[str, ...] = (
    "section",
    '[class*="slide"]',
    '[class*="page"]',
    "article",
    ".swiper-slide",
)

# Elements with this many trimmed characters or fewer are decorative.
MIN_SLIDE_TEXT_LENGTH = 20


class SlideSegmenter:
    """Partition a rendered page into slides using prioritized selectors."""

    def __init__(
        self,
        selectors: Sequence[str] = DEFAULT_SLIDE_SELECTORS,
        min_text_length: int = MIN_SLIDE_TEXT_LENGTH,
    ) -> None:
        self.selectors = tuple(selectors)
        self.min_text_length = min_text_length

    def segment(self, page: RenderedPage) -> list[Slide]:
        """Return the ordered slides of ``page``.

        The first selector with at least one match wins. Its candidates are
        filtered and re-indexed densely from 0. When no selector matches, the
        whole page text becomes slide 0 without filtering.
        """
        for selector in self.selectors:
            candidates = page.candidates.get(selector) or []
            if candidates:
                slides = self._filter(candidates)
                logger.info(
                    f"Selector {selector!r} matched {len(candidates)} elements, "
                    f"{len(slides)} kept as slides"
                )
                return slides

        logger.info(f"No slide selector matched on {page.url}; using whole page as one slide")
        return [Slide(index=0, text=page.text)]

    def _filter(self, candidates: list[ElementCandidate]) -> list[Slide]:
        ordered = sorted(candidates, key=lambda candidate: candidate.index)
        kept = [c for c in ordered if len(c.text.strip()) > self.min_text_length]
        return [Slide(index=i, text=candidate.text) for i, candidate in enumerate(kept)]
