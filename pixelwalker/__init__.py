"""Pixel Walker: procedural spritesheets and 4-direction character animation."""

__version__ = "0.1.0"
