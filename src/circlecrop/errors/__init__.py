"""Custom exception hierarchy for circlecrop."""

from __future__ import annotations


class CircleCropError(Exception):
    """Base class for all custom errors raised by circlecrop."""


# --- Image loading ---

class ImageLoadError(CircleCropError):
    """Raised when an image cannot be read or decoded.

    The geometry core never sees this error: a failed load simply leaves the
    previously loaded image (or the empty state) in place.
    """


class UnsupportedImageTypeError(ImageLoadError):
    """Raised when a file does not look like one of the accepted image types."""


# --- Rendering ---

class RenderError(CircleCropError):
    """Raised when the off-screen compositor cannot produce an image."""


# --- Settings ---

class SettingsError(CircleCropError):
    """Base class for settings related failures."""


class SettingsLoadError(SettingsError):
    """Raised when the settings file cannot be parsed or loaded."""


class SettingsValidationError(SettingsError):
    """Raised when settings data fails schema validation."""


__all__ = [
    "CircleCropError",
    "ImageLoadError",
    "RenderError",
    "SettingsError",
    "SettingsLoadError",
    "SettingsValidationError",
    "UnsupportedImageTypeError",
]
