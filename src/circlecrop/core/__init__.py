"""Geometry core of the circular crop editor.

Nothing in this package imports Qt; every module can be driven from tests or
the command line.
"""

from .adjustments import AdjustmentParams
from .drag_session import DragSession, DragState, to_container_local
from .layout import (
    EMPTY_LAYOUT,
    ContainerMetrics,
    ImageMetrics,
    ViewportLayout,
    compute_layout,
)
from .pan_clamp import ORIGIN, PanBounds, PanClampEngine, PanOffset, compute_pan_bounds, reclamp
from .viewport import ViewportInputs, ViewportState, recompute

__all__ = [
    "AdjustmentParams",
    "ContainerMetrics",
    "DragSession",
    "DragState",
    "EMPTY_LAYOUT",
    "ImageMetrics",
    "ORIGIN",
    "PanBounds",
    "PanClampEngine",
    "PanOffset",
    "ViewportInputs",
    "ViewportLayout",
    "ViewportState",
    "compute_layout",
    "compute_pan_bounds",
    "reclamp",
    "recompute",
    "to_container_local",
]
