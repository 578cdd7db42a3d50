"""Widgets composing the crop editor window."""

from .adjustment_panel import AdjustmentPanel, SliderRow
from .crop_canvas import CropCanvas, cursor_for_drag_state
from .image_drop_area import ImageDropArea
from .input_handler import CanvasInputHandler

__all__ = [
    "AdjustmentPanel",
    "CanvasInputHandler",
    "CropCanvas",
    "ImageDropArea",
    "SliderRow",
    "cursor_for_drag_state",
]
