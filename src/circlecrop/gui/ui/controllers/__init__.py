"""Controllers that wire widgets to the crop editor view model."""

from .zoom_slider_handler import ZoomSliderHandler

__all__ = ["ZoomSliderHandler"]
