"""Page renderer: load a URL in headless Chromium and snapshot its text."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from shared.config import ServiceConfig
from shared.exceptions import RenderError
from shared.models import ElementCandidate, NarrationMode, RenderedPage
from shared.utils import setup_logging

from .session import BrowserSession

EXCLUDED_SELECTORS: tuple[str, ...] = ("script", "style", "nav", "header", "footer")

SETTLE_SECONDS = {
    NarrationMode.SINGLE: 2.0,
    NarrationMode.BATCH: 3.0,
}

EXTRACT_SCRIPT = """
({ excluded, selectors }) => {
    excluded.forEach(selector => {
        document.querySelectorAll(selector).forEach(el => el.remove());
    });
    const candidates = {};
    for (const selector of selectors) {
        candidates[selector] = Array.from(document.querySelectorAll(selector)).map((el, idx) => ({
            index: idx,
            text: el.innerText || ''
        }));
    }
    return {
        text: document.body ? document.body.innerText : '',
        candidates
    };
}
"""


class PageRenderer:
    """Render pages and return a :class:`RenderedPage` snapshot."""

    def __init__(
        self,
        service_config: ServiceConfig,
        session_factory: Callable[[], BrowserSession] | None = None,
    ) -> None:
        self.logger = setup_logging("page-renderer", service_config.get("log_level", "INFO"))
        self.navigation_timeout_ms = float(service_config.get("navigation_timeout_seconds", 30)) * 1000
        self.session_factory = session_factory or BrowserSession

    async def render(
        self,
        url: str,
        mode: NarrationMode = NarrationMode.SINGLE,
        selectors: Sequence[str] = (),
    ) -> RenderedPage:
        """Load ``url`` and extract page text plus per-selector element texts.

        Raises:
            RenderError: navigation timed out or the browser failed
        """
        settle_ms = SETTLE_SECONDS[mode] * 1000
        try:
            async with self.session_factory() as session:
                page = await session.new_page()
                await page.goto(url, wait_until="networkidle", timeout=self.navigation_timeout_ms)
                await page.wait_for_timeout(settle_ms)
                payload = await page.evaluate(
                    EXTRACT_SCRIPT,
                    {"excluded": list(EXCLUDED_SELECTORS), "selectors": list(selectors)},
                )
        except PlaywrightTimeoutError as exc:
            self.logger.error(f"Navigation timed out for {url}: {exc}")
            raise RenderError(
                f"Navigation timeout after {self.navigation_timeout_ms / 1000:.0f}s: {exc}", url=url
            ) from exc
        except PlaywrightError as exc:
            self.logger.error(f"Rendering failed for {url}: {exc}")
            raise RenderError(str(exc), url=url) from exc

        payload = payload or {}
        candidates = {
            selector: [ElementCandidate(**item) for item in items]
            for selector, items in (payload.get("candidates") or {}).items()
        }
        rendered = RenderedPage(url=url, text=payload.get("text") or "", candidates=candidates)
        self.logger.info(f"Extracted {len(rendered.text)} characters from {url}")
        return rendered
