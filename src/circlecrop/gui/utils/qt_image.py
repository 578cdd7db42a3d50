"""Conversions between Pillow images and Qt image types."""

from __future__ import annotations

from PIL import Image
from PySide6.QtGui import QImage, QPixmap


def qimage_from_pil(image: Image.Image) -> QImage:
    """Return a deep-copied ``QImage`` holding *image* as RGBA8888."""

    rgba = image if image.mode == "RGBA" else image.convert("RGBA")
    width, height = rgba.size
    data = rgba.tobytes("raw", "RGBA")
    qimage = QImage(data, width, height, width * 4, QImage.Format.Format_RGBA8888)
    # ``data`` is released when this function returns; the copy owns its pixels.
    return qimage.copy()


def qpixmap_from_pil(image: Image.Image) -> QPixmap:
    return QPixmap.fromImage(qimage_from_pil(image))


__all__ = ["qimage_from_pil", "qpixmap_from_pil"]
