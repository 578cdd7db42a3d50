"""Circular photo crop editor with pan, zoom and colour adjustments."""

__version__ = "0.1.0"
