"""Headless page rendering for slide decks hosted online."""

from .service import PageRenderer
from .session import BrowserSession

__all__ = ["PageRenderer", "BrowserSession"]
