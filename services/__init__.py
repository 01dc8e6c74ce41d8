"""Service packages of the slide narration backend."""
