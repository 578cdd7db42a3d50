"""Handler for the crop editor's Scale slider."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from PySide6.QtCore import QObject

from ....config import ZOOM_STEP

if TYPE_CHECKING:
    from ...viewmodels.crop_viewmodel import CropEditorViewModel
    from ..widgets.adjustment_panel import SliderRow


class ZoomSliderHandler(QObject):
    """Keeps the Scale slider and the view model's zoom factor in step."""

    def __init__(
        self,
        view_model: CropEditorViewModel,
        zoom_row: SliderRow,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._view_model = view_model
        self._zoom_row = zoom_row
        self._zoom_slider = zoom_row.slider
        self._connected = False

    @property
    def is_connected(self) -> bool:
        return self._connected

    def connect_controls(self) -> None:
        """Connect the Scale slider to the view model."""
        if self._connected:
            return

        self._zoom_slider.valueChanged.connect(self._handle_slider_changed)
        self._view_model.zoom.changed.connect(self._handle_zoom_changed)
        self._connected = True
        self._handle_zoom_changed(self._view_model.zoom.value, None)

    def disconnect_controls(self) -> None:
        """Detach the Scale slider from the view model."""
        if not self._connected:
            return

        try:
            self._zoom_slider.valueChanged.disconnect(self._handle_slider_changed)
            self._view_model.zoom.changed.disconnect(self._handle_zoom_changed)
        finally:
            self._connected = False

    def _handle_slider_changed(self, value: int) -> None:
        """Translate slider ticks into a zoom factor."""
        clamped = max(self._zoom_slider.minimum(), min(self._zoom_slider.maximum(), value))
        self._view_model.set_zoom(round(clamped * ZOOM_STEP, 6))

    def _handle_zoom_changed(self, factor: float, _old: Optional[float]) -> None:
        """Synchronise the slider position when the zoom factor changes elsewhere."""
        slider_value = max(
            self._zoom_slider.minimum(),
            min(self._zoom_slider.maximum(), int(round(factor / ZOOM_STEP))),
        )
        if slider_value == self._zoom_slider.value():
            return
        self._zoom_row.set_value(slider_value * ZOOM_STEP)


__all__ = ["ZoomSliderHandler"]
