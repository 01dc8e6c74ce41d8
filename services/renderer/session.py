"""Request-scoped headless browser session."""

from __future__ import annotations

from typing import Any

from playwright.async_api import Browser, Page, Playwright, async_playwright

from shared.utils import setup_logging

logger = setup_logging("browser-session")

DEFAULT_LAUNCH_ARGS = ["--no-sandbox", "--disable-setuid-sandbox"]


class BrowserSession:
    """Async context manager owning one Playwright driver and Chromium browser.

    ``close`` is safe to call more than once. When the launch fails the
    browser is never closed because it was never opened.
    """

    def __init__(self, headless: bool = True, launch_args: list[str] | None = None) -> None:
        self.headless = headless
        self.launch_args = launch_args if launch_args is not None else list(DEFAULT_LAUNCH_ARGS)
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def __aenter__(self) -> "BrowserSession":
        """Start Playwright and launch the browser."""
        self._playwright = await async_playwright().start()
        try:
            self._browser = await self._playwright.chromium.launch(
                headless=self.headless, args=self.launch_args
            )
        except Exception:
            await self._playwright.stop()
            self._playwright = None
            self._closed = True
            raise
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Release the browser on every exit path."""
        await self.close()

    async def new_page(self) -> Page:
        if self._browser is None or self._closed:
            raise RuntimeError("Browser session not open. Use async context manager.")
        return await self._browser.new_page()

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            if self._browser is not None:
                await self._browser.close()
        finally:
            self._browser = None
            if self._playwright is not None:
                await self._playwright.stop()
                self._playwright = None
            logger.debug("Browser session closed")
