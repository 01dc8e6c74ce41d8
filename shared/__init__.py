"""Shared configuration, models and utilities for the slide narration backend."""
