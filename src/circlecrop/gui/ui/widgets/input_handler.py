"""
Pointer event routing for the crop canvas.

Mouse events are forwarded to the :class:`CropEditorViewModel` in global
(screen) coordinates.  The view model's drag session subtracts the
container origin, so the canvas never has to translate positions itself.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from PySide6.QtCore import Qt
from PySide6.QtGui import QMouseEvent

_LEFT_BUTTON = Qt.MouseButton.LeftButton

if TYPE_CHECKING:
    from ...viewmodels.crop_viewmodel import CropEditorViewModel


def _global_xy(event: QMouseEvent) -> tuple[float, float]:
    point = event.globalPosition()
    return float(point.x()), float(point.y())


class CanvasInputHandler:
    """Routes canvas mouse events to the crop editor view model.

    Parameters
    ----------
    view_model:
        The editor state that owns the drag session.
    """

    def __init__(self, view_model: CropEditorViewModel) -> None:
        self._view_model = view_model

    def handle_mouse_press(self, event: QMouseEvent) -> bool:
        """Start a drag on a left-button press.

        Returns
        -------
        bool
            True if the event was consumed.
        """
        if event.button() != _LEFT_BUTTON:
            return False
        self._view_model.pointer_down(*_global_xy(event))
        return True

    def handle_mouse_move(self, event: QMouseEvent) -> bool:
        """Forward a move while a drag is in progress."""
        if not self._view_model.is_dragging:
            return False
        self._view_model.pointer_move(*_global_xy(event))
        return True

    def handle_mouse_release(self, event: QMouseEvent) -> bool:
        """Finish the drag on a left-button release."""
        if event.button() != _LEFT_BUTTON or not self._view_model.is_dragging:
            return False
        self._view_model.pointer_up(*_global_xy(event))
        return True


__all__ = ["CanvasInputHandler"]
