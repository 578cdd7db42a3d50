"""Decode user-supplied images with Pillow.

This is the loader side of the editor: it turns a file (or the raw bytes of
a dropped file) into a :class:`LoadedImage` carrying the decoded pixels and
the natural dimensions the geometry core needs.  Every failure is raised as
:class:`~circlecrop.errors.ImageLoadError` so the caller can report it
without the core ever seeing a half-loaded image.
"""

from __future__ import annotations

import logging
import mimetypes
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import Optional

from PIL import Image, ImageOps, UnidentifiedImageError

from ..config import ACCEPTED_MIME_TYPES, ACCEPTED_SUFFIXES
from ..core.layout import ImageMetrics
from ..errors import ImageLoadError, UnsupportedImageTypeError

_LOGGER = logging.getLogger(__name__)

# Pillow format names that correspond to the accepted MIME types.
_ACCEPTED_FORMATS: frozenset[str] = frozenset({"PNG", "JPEG", "GIF", "WEBP", "MPO"})


@dataclass(frozen=True)
class LoadedImage:
    """Decoded RGBA pixels plus the metrics handed to the geometry core."""

    image: Image.Image
    metrics: ImageMetrics
    source: Optional[Path] = None


def _normalise_mime(value: object) -> str:
    if isinstance(value, str):
        return value.strip().lower()
    return ""


def is_supported(path: Path, mime: str | None = None) -> bool:
    """Return ``True`` when *path* (or the explicit *mime*) is an accepted image type."""

    mime_type = _normalise_mime(mime)
    if not mime_type:
        mime_type = _normalise_mime(mimetypes.guess_type(path.name)[0])
    if mime_type in ACCEPTED_MIME_TYPES:
        return True
    return path.suffix.lower() in ACCEPTED_SUFFIXES


def _decode(handle: Image.Image, source: Optional[Path]) -> LoadedImage:
    if handle.format is not None and handle.format not in _ACCEPTED_FORMATS:
        raise UnsupportedImageTypeError(f"Unsupported image format: {handle.format}")
    # ``exif_transpose`` keeps the natural size aligned with what the user sees.
    upright = ImageOps.exif_transpose(handle)
    rgba = upright.convert("RGBA")
    width, height = rgba.size
    return LoadedImage(
        image=rgba,
        metrics=ImageMetrics(natural_width=float(width), natural_height=float(height)),
        source=source,
    )


def load_image(source: Path) -> LoadedImage:
    """Decode *source* into a :class:`LoadedImage`."""

    path = Path(source)
    if not is_supported(path):
        raise UnsupportedImageTypeError(f"{path.name} is not a PNG, JPEG, GIF or WebP image")
    try:
        with Image.open(path) as handle:
            handle.load()
            loaded = _decode(handle, path)
    except UnsupportedImageTypeError:
        raise
    except (OSError, UnidentifiedImageError, ValueError) as exc:
        raise ImageLoadError(f"Could not load image {path.name}: {exc}") from exc
    _LOGGER.info(
        "Loaded %s (%dx%d)",
        path,
        int(loaded.metrics.natural_width),
        int(loaded.metrics.natural_height),
    )
    return loaded


def load_image_bytes(data: bytes, source: Optional[Path] = None) -> LoadedImage:
    """Decode an in-memory image, e.g. the payload of a drop event."""

    if not data:
        raise ImageLoadError("Image data is empty")
    try:
        with Image.open(BytesIO(data)) as handle:
            handle.load()
            return _decode(handle, source)
    except UnsupportedImageTypeError:
        raise
    except (OSError, UnidentifiedImageError, ValueError) as exc:
        raise ImageLoadError(f"Could not decode image data: {exc}") from exc


__all__ = ["LoadedImage", "is_supported", "load_image", "load_image_bytes"]
