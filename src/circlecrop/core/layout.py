"""Viewport layout for the circular crop editor.

The functions in this module are pure: they take snapshots of the container,
the loaded image and the zoom factor and return a new :class:`ViewportLayout`
without touching any shared state.  They are total as well, so degenerate
inputs (no image yet, a collapsed container) produce the all-zero layout
instead of ``NaN`` or ``inf`` values leaking into the clamp engine.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class ContainerMetrics:
    """Snapshot of the hosting element reported by the resize observer.

    ``origin_x``/``origin_y`` are the container's page coordinates and are used
    to translate pointer positions into container-local space.
    """

    width: float = 0.0
    height: float = 0.0
    origin_x: float = 0.0
    origin_y: float = 0.0


@dataclass(frozen=True)
class ImageMetrics:
    """Natural pixel dimensions of the decoded image."""

    natural_width: float = 0.0
    natural_height: float = 0.0

    @property
    def is_empty(self) -> bool:
        return _non_negative(self.natural_width) <= 0.0 or _non_negative(self.natural_height) <= 0.0


@dataclass(frozen=True)
class ViewportLayout:
    """Scaled image size and mask diameter for one set of inputs.

    ``fitted_width``/``fitted_height`` describe the un-zoomed contain-fit and
    double as the size of the drawing stage.
    """

    fitted_width: float = 0.0
    fitted_height: float = 0.0
    scaled_width: float = 0.0
    scaled_height: float = 0.0
    mask_diameter: float = 0.0

    @property
    def is_empty(self) -> bool:
        return self.mask_diameter <= 0.0

    @property
    def mask_radius(self) -> float:
        return self.mask_diameter * 0.5

    @property
    def mask_center(self) -> tuple[float, float]:
        """Centre of the mask circle in stage coordinates."""
        return self.fitted_width * 0.5, self.fitted_height * 0.5


EMPTY_LAYOUT = ViewportLayout()


def _non_negative(value: float) -> float:
    numeric = float(value)
    if not math.isfinite(numeric) or numeric < 0.0:
        return 0.0
    return numeric


def aspect_ratio(image: ImageMetrics) -> float:
    """Return ``natural_width / natural_height``, or ``0.0`` for an empty image."""

    width = _non_negative(image.natural_width)
    height = _non_negative(image.natural_height)
    if width <= 0.0 or height <= 0.0:
        return 0.0
    return width / height


def contain_fit(container_width: float, ratio: float) -> tuple[float, float]:
    """Fit an image of *ratio* against *container_width* on both axes.

    Both dimensions are capped by the container width; the container height
    plays no part in the fit.
    """

    width = _non_negative(container_width)
    if width <= 0.0 or ratio <= 0.0:
        return 0.0, 0.0
    return min(width, width * ratio), min(width, width / ratio)


def compute_layout(
    container: ContainerMetrics,
    image: ImageMetrics,
    zoom: float,
) -> ViewportLayout:
    """Return the :class:`ViewportLayout` for *container*, *image* and *zoom*.

    The mask diameter follows the un-zoomed fit so the crop circle keeps its
    size while the user zooms; only container or image changes move it.
    """

    ratio = aspect_ratio(image)
    fitted_width, fitted_height = contain_fit(container.width, ratio)
    if fitted_width <= 0.0 or fitted_height <= 0.0:
        return EMPTY_LAYOUT

    mask_diameter = min(fitted_width, fitted_height)
    scale = _non_negative(zoom)
    return ViewportLayout(
        fitted_width=fitted_width,
        fitted_height=fitted_height,
        scaled_width=fitted_width * scale,
        scaled_height=fitted_height * scale,
        mask_diameter=mask_diameter,
    )


__all__ = [
    "ContainerMetrics",
    "EMPTY_LAYOUT",
    "ImageMetrics",
    "ViewportLayout",
    "aspect_ratio",
    "compute_layout",
    "contain_fit",
]
