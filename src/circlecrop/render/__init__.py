"""Off-screen rendering: colour adjustments and circular compositing."""

from .adjustment_filter import adjust_image, apply_adjustments, apply_color_matrix
from .compositor import export_circle, mask_bounds, render_stage

__all__ = [
    "adjust_image",
    "apply_adjustments",
    "apply_color_matrix",
    "export_circle",
    "mask_bounds",
    "render_stage",
]
