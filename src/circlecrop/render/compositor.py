"""Off-screen compositor for the circular crop.

Produces the same picture the editor canvas draws, as a Pillow image: the
stage is the un-zoomed contain-fit rectangle, the adjusted image is placed at
the pan offset and scaled by the zoom factor, everything outside the mask
circle is transparent, and the outline ring is painted on top.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from PIL import Image, ImageDraw

from ..config import IDENTITY_COLOR_MATRIX, MASK_OUTLINE_COLOR, MASK_OUTLINE_WIDTH
from ..core.viewport import ViewportState
from ..errors import RenderError
from .adjustment_filter import adjust_image

_LOGGER = logging.getLogger(__name__)

_RESAMPLE = Image.Resampling.LANCZOS


def _stage_size(state: ViewportState) -> tuple[int, int]:
    return (
        max(1, int(math.ceil(state.layout.fitted_width))),
        max(1, int(math.ceil(state.layout.fitted_height))),
    )


def mask_bounds(state: ViewportState) -> tuple[float, float, float, float]:
    """Return ``(left, top, right, bottom)`` of the mask circle in stage pixels."""

    cx, cy = state.layout.mask_center
    radius = state.layout.mask_radius
    return cx - radius, cy - radius, cx + radius, cy + radius


def _circle_mask(size: tuple[int, int], bounds: tuple[float, float, float, float]) -> Image.Image:
    mask = Image.new("L", size, 0)
    ImageDraw.Draw(mask).ellipse(bounds, fill=255)
    return mask


def render_stage(
    state: ViewportState,
    image: Image.Image,
    *,
    outline_width: int = MASK_OUTLINE_WIDTH,
    outline_color: str = MASK_OUTLINE_COLOR,
    color_matrix: Sequence[float] = IDENTITY_COLOR_MATRIX,
) -> Image.Image:
    """Return the full stage with the masked image and its outline ring.

    Raises
    ------
    RenderError
        If the layout is degenerate (no image or a collapsed container).
    """

    if state.layout.is_empty:
        raise RenderError("Nothing to render: the viewport layout is empty")

    stage_size = _stage_size(state)
    scaled_size = (
        max(1, int(round(state.layout.scaled_width))),
        max(1, int(round(state.layout.scaled_height))),
    )
    scaled = image.convert("RGBA").resize(scaled_size, _RESAMPLE)

    bounds = mask_bounds(state)
    # The pan offset is measured from the top-left corner of the mask.
    position = (
        int(round(bounds[0] + state.pan_offset.x)),
        int(round(bounds[1] + state.pan_offset.y)),
    )
    layer = Image.new("RGBA", stage_size, (0, 0, 0, 0))
    layer.paste(scaled, position)
    layer = adjust_image(layer, state.adjustments, color_matrix)

    stage = Image.new("RGBA", stage_size, (0, 0, 0, 0))
    stage.paste(layer, (0, 0), _circle_mask(stage_size, bounds))

    if outline_width > 0:
        # Pillow strokes inwards from the bounding box, which centres a ring
        # of ``outline_width`` on ``radius - outline_width / 2``.
        ImageDraw.Draw(stage).ellipse(bounds, outline=outline_color, width=int(outline_width))

    _LOGGER.debug(
        "Rendered stage %sx%s, scaled image %sx%s at %s",
        stage_size[0],
        stage_size[1],
        scaled_size[0],
        scaled_size[1],
        position,
    )
    return stage


def export_circle(
    state: ViewportState,
    image: Image.Image,
    *,
    outline_width: int = 0,
    outline_color: str = MASK_OUTLINE_COLOR,
    color_matrix: Sequence[float] = IDENTITY_COLOR_MATRIX,
) -> Image.Image:
    """Return only the square around the mask circle, transparent outside it."""

    stage = render_stage(
        state,
        image,
        outline_width=outline_width,
        outline_color=outline_color,
        color_matrix=color_matrix,
    )
    left, top, right, bottom = mask_bounds(state)
    box = (
        int(math.floor(left)),
        int(math.floor(top)),
        int(math.ceil(right)),
        int(math.ceil(bottom)),
    )
    return stage.crop(box)


__all__ = ["export_circle", "mask_bounds", "render_stage"]
