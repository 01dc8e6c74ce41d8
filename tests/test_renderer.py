"""Tests for the page renderer and browser session."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from services.renderer import BrowserSession, PageRenderer
from services.renderer.service import EXCLUDED_SELECTORS, EXTRACT_SCRIPT
from shared.exceptions import RenderError
from shared.models import NarrationMode


class FakeSession:
    """Stands in for BrowserSession without launching a browser."""

    def __init__(self, page):
        self.page = page
        self.entered = 0
        self.exited = 0

    async def __aenter__(self):
        self.entered += 1
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self.exited += 1

    async def new_page(self):
        return self.page


def make_page_mock(payload=None):
    page = MagicMock()
    page.goto = AsyncMock()
    page.wait_for_timeout = AsyncMock()
    page.evaluate = AsyncMock(return_value=payload if payload is not None else {"text": "", "candidates": {}})
    return page


@pytest.fixture
def fake_page():
    return make_page_mock(
        {
            "text": "Deck title\nFirst slide body",
            "candidates": {
                "section": [
                    {"index": 0, "text": "First slide body with details"},
                    {"index": 1, "text": "Second slide body with details"},
                ],
                "article": [],
            },
        }
    )


@pytest.fixture
def fake_session(fake_page):
    return FakeSession(fake_page)


@pytest.fixture
def renderer(service_config, fake_session):
    return PageRenderer(service_config, session_factory=lambda: fake_session)


class TestPageRenderer:
    """Test cases for the PageRenderer class."""

    @pytest.mark.asyncio
    async def test_render_batch_snapshot(self, renderer, fake_page, fake_session):
        page = await renderer.render("https://example.com/deck", NarrationMode.BATCH, ["section", "article"])

        assert page.url == "https://example.com/deck"
        assert page.text == "Deck title\nFirst slide body"
        assert [c.index for c in page.candidates["section"]] == [0, 1]
        assert page.candidates["article"] == []
        fake_page.goto.assert_awaited_once_with(
            "https://example.com/deck", wait_until="networkidle", timeout=30000
        )
        fake_page.wait_for_timeout.assert_awaited_once_with(3000)
        fake_page.evaluate.assert_awaited_once_with(
            EXTRACT_SCRIPT,
            {"excluded": list(EXCLUDED_SELECTORS), "selectors": ["section", "article"]},
        )
        assert fake_session.exited == 1

    @pytest.mark.asyncio
    async def test_render_single_uses_shorter_settle(self, renderer, fake_page):
        await renderer.render("https://example.com/slide")

        fake_page.wait_for_timeout.assert_awaited_once_with(2000)
        assert fake_page.evaluate.await_args.args[1]["selectors"] == []

    def test_excludes_noise_elements(self):
        assert set(EXCLUDED_SELECTORS) == {"script", "style", "nav", "header", "footer"}

    @pytest.mark.asyncio
    async def test_navigation_timeout_raises_render_error(self, renderer, fake_page, fake_session):
        fake_page.goto.side_effect = PlaywrightTimeoutError("Timeout 30000ms exceeded.")

        with pytest.raises(RenderError, match="Navigation timeout") as exc_info:
            await renderer.render("https://slow.example.com")

        assert exc_info.value.url == "https://slow.example.com"
        assert fake_session.exited == 1
        fake_page.evaluate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_browser_error_raises_render_error(self, renderer, fake_page, fake_session):
        fake_page.evaluate.side_effect = PlaywrightError("Execution context was destroyed")

        with pytest.raises(RenderError, match="Execution context was destroyed"):
            await renderer.render("https://example.com/deck", NarrationMode.BATCH)

        assert fake_session.exited == 1

    @pytest.mark.asyncio
    async def test_navigation_timeout_from_config(self, service_config, fake_session, fake_page):
        service_config.set("navigation_timeout_seconds", 5)
        renderer = PageRenderer(service_config, session_factory=lambda: fake_session)

        await renderer.render("https://example.com")

        assert fake_page.goto.await_args.kwargs["timeout"] == 5000

    @pytest.mark.asyncio
    async def test_empty_payload_gives_empty_page(self, service_config):
        session = FakeSession(make_page_mock({"text": None, "candidates": None}))
        renderer = PageRenderer(service_config, session_factory=lambda: session)

        page = await renderer.render("https://example.com/blank")

        assert page.text == ""
        assert page.candidates == {}


@pytest.fixture
def playwright_mocks():
    """Patch async_playwright so BrowserSession never starts a real browser."""
    browser = MagicMock()
    browser.close = AsyncMock()
    browser.new_page = AsyncMock(return_value=MagicMock())

    playwright = MagicMock()
    playwright.stop = AsyncMock()
    playwright.chromium.launch = AsyncMock(return_value=browser)

    with patch("services.renderer.session.async_playwright") as mock_async_playwright:
        mock_async_playwright.return_value.start = AsyncMock(return_value=playwright)
        yield playwright, browser


class TestBrowserSession:
    """Test cases for the BrowserSession context manager."""

    @pytest.mark.asyncio
    async def test_launch_and_release(self, playwright_mocks):
        playwright, browser = playwright_mocks

        async with BrowserSession() as session:
            await session.new_page()

        playwright.chromium.launch.assert_awaited_once_with(
            headless=True, args=["--no-sandbox", "--disable-setuid-sandbox"]
        )
        browser.new_page.assert_awaited_once()
        browser.close.assert_awaited_once()
        playwright.stop.assert_awaited_once()
        assert session.closed

    @pytest.mark.asyncio
    async def test_release_on_exception(self, playwright_mocks):
        playwright, browser = playwright_mocks

        with pytest.raises(ValueError):
            async with BrowserSession():
                raise ValueError("extraction failed")

        browser.close.assert_awaited_once()
        playwright.stop.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self, playwright_mocks):
        playwright, browser = playwright_mocks

        async with BrowserSession() as session:
            await session.close()

        await session.close()
        browser.close.assert_awaited_once()
        playwright.stop.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_failed_launch_does_not_close_browser(self, playwright_mocks):
        playwright, browser = playwright_mocks
        playwright.chromium.launch.side_effect = RuntimeError("Executable doesn't exist")

        session = BrowserSession()
        with pytest.raises(RuntimeError, match="Executable"):
            async with session:
                pass

        browser.close.assert_not_awaited()
        playwright.stop.assert_awaited_once()
        assert session.closed

    @pytest.mark.asyncio
    async def test_new_page_requires_open_session(self):
        with pytest.raises(RuntimeError, match="not open"):
            await BrowserSession().new_page()

    @pytest.mark.asyncio
    async def test_browser_close_failure_still_stops_driver(self, playwright_mocks):
        playwright, browser = playwright_mocks
        browser.close.side_effect = RuntimeError("Target closed")

        with pytest.raises(RuntimeError, match="Target closed"):
            async with BrowserSession():
                pass

        playwright.stop.assert_awaited_once()
