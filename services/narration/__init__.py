"""Narration service for slide decks hosted online.

This service orchestrates the narration pipeline:
- Rendering the deck page in a headless browser
- Detecting slide boundaries in the rendered page
- Generating spoken narration per slide with an LLM provider
"""

__version__ = "1.0.0"
