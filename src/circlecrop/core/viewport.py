"""Explicit recompute step joining layout and pan clamping.

:func:`recompute` is the single place where the editor inputs are turned
into the values the renderer draws.  Its dependency set is spelled out in
:class:`ViewportInputs`; nothing else is read.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..config import DEFAULT_ZOOM
from .adjustments import AdjustmentParams
from .layout import ContainerMetrics, ImageMetrics, ViewportLayout, compute_layout
from .pan_clamp import PanBounds, PanOffset, compute_pan_bounds, reclamp


@dataclass(frozen=True)
class ViewportInputs:
    container: ContainerMetrics = field(default_factory=ContainerMetrics)
    image: ImageMetrics = field(default_factory=ImageMetrics)
    zoom: float = DEFAULT_ZOOM
    adjustments: AdjustmentParams = field(default_factory=AdjustmentParams)


@dataclass(frozen=True)
class ViewportState:
    """Everything the renderer needs for one frame."""

    layout: ViewportLayout
    bounds: PanBounds
    pan_offset: PanOffset
    zoom: float
    adjustments: AdjustmentParams
    dragging: bool = False

    @property
    def mask_diameter(self) -> float:
        return self.layout.mask_diameter

    @property
    def scaled_width(self) -> float:
        return self.layout.scaled_width

    @property
    def scaled_height(self) -> float:
        return self.layout.scaled_height

    def as_dict(self) -> dict[str, object]:
        return {
            "maskDiameter": self.layout.mask_diameter,
            "scaledWidth": self.layout.scaled_width,
            "scaledHeight": self.layout.scaled_height,
            "panOffset": {"x": self.pan_offset.x, "y": self.pan_offset.y},
        }


def recompute(
    inputs: ViewportInputs,
    offset: PanOffset,
    *,
    dragging: bool = False,
) -> ViewportState:
    """Return the :class:`ViewportState` for *inputs* with *offset* clamped."""

    layout = compute_layout(inputs.container, inputs.image, inputs.zoom)
    return ViewportState(
        layout=layout,
        bounds=compute_pan_bounds(layout),
        pan_offset=reclamp(layout, offset),
        zoom=float(inputs.zoom),
        adjustments=inputs.adjustments,
        dragging=dragging,
    )


__all__ = ["ViewportInputs", "ViewportState", "recompute"]
