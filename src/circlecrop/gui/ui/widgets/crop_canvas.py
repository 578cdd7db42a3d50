"""Widget that draws the circular crop preview."""

from __future__ import annotations

import logging
import math
from typing import Optional

from PIL import Image
from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtGui import (
    QColor,
    QMouseEvent,
    QMoveEvent,
    QPainter,
    QPainterPath,
    QPaintEvent,
    QPen,
    QPixmap,
    QResizeEvent,
    QShowEvent,
)
from PySide6.QtWidgets import QSizePolicy, QWidget

from ....config import MASK_OUTLINE_COLOR, MASK_OUTLINE_WIDTH
from ....core.adjustments import AdjustmentParams
from ....core.layout import ContainerMetrics
from ....core.viewport import ViewportState
from ....render.adjustment_filter import adjust_image
from ...utils.qt_image import qpixmap_from_pil
from ...viewmodels.crop_viewmodel import CropEditorViewModel
from .input_handler import CanvasInputHandler

_LOGGER = logging.getLogger(__name__)


def cursor_for_drag_state(dragging: bool) -> Qt.CursorShape:
    """Return the grab cursor matching the current drag state."""
    return Qt.CursorShape.ClosedHandCursor if dragging else Qt.CursorShape.OpenHandCursor


class CropCanvas(QWidget):
    """Stage that shows the zoomed, panned image through the mask circle.

    The canvas is also the resize observer of the editor: every resize or
    move reports fresh :class:`ContainerMetrics` to the view model.  Its
    height follows the fitted image height, which only depends on the width.
    """

    def __init__(
        self,
        view_model: CropEditorViewModel,
        parent: Optional[QWidget] = None,
        *,
        outline_width: int = MASK_OUTLINE_WIDTH,
        outline_color: str = MASK_OUTLINE_COLOR,
    ) -> None:
        super().__init__(parent)
        self._view_model = view_model
        self._input_handler = CanvasInputHandler(view_model)
        self._outline_width = int(outline_width)
        self._outline_color = QColor(outline_color)
        self._state: ViewportState = view_model.state.value

        # Rendered pixmap cache, keyed by source image, scaled size and adjustments.
        self._pixmap_source: Optional[Image.Image] = None
        self._pixmap_key: Optional[tuple[tuple[int, int], AdjustmentParams]] = None
        self._pixmap: Optional[QPixmap] = None

        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)
        self.setFixedHeight(0)
        self.setCursor(cursor_for_drag_state(False))

        view_model.viewport_changed.connect(self._on_viewport_changed)
        view_model.dragging.changed.connect(self._on_dragging_changed)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------
    @property
    def view_model(self) -> CropEditorViewModel:
        return self._view_model

    @property
    def outline_width(self) -> int:
        return self._outline_width

    def set_outline_width(self, width: int) -> None:
        self._outline_width = max(0, int(width))
        self.update()

    def container_metrics(self) -> ContainerMetrics:
        """Return this widget's size and its top-left corner in global coordinates."""
        origin = self.mapToGlobal(QPointF(0.0, 0.0))
        return ContainerMetrics(
            width=float(self.width()),
            height=float(self.height()),
            origin_x=float(origin.x()),
            origin_y=float(origin.y()),
        )

    def detach(self) -> None:
        """Stop listening to the view model."""
        try:
            self._view_model.viewport_changed.disconnect(self._on_viewport_changed)
            self._view_model.dragging.changed.disconnect(self._on_dragging_changed)
        except ValueError:
            _LOGGER.debug("CropCanvas was already detached")

    # ------------------------------------------------------------------
    # Resize observer
    # ------------------------------------------------------------------
    def _report_container(self) -> None:
        self._view_model.set_container(self.container_metrics())

    def resizeEvent(self, event: QResizeEvent) -> None:  # noqa: N802 - Qt API
        super().resizeEvent(event)
        self._report_container()

    def moveEvent(self, event: QMoveEvent) -> None:  # noqa: N802 - Qt API
        super().moveEvent(event)
        self._report_container()

    def showEvent(self, event: QShowEvent) -> None:  # noqa: N802 - Qt API
        super().showEvent(event)
        self._report_container()

    # ------------------------------------------------------------------
    # View model callbacks
    # ------------------------------------------------------------------
    def _on_viewport_changed(self, state: ViewportState) -> None:
        self._state = state
        height = int(math.ceil(state.layout.fitted_height))
        if height != self.height():
            self.setFixedHeight(height)
        self.update()

    def _on_dragging_changed(self, dragging: bool, _old: bool) -> None:
        self.setCursor(cursor_for_drag_state(bool(dragging)))

    # ------------------------------------------------------------------
    # Mouse events
    # ------------------------------------------------------------------
    def mousePressEvent(self, event: QMouseEvent) -> None:  # noqa: N802 - Qt API
        # Positions are relative to the origin captured at the last resize.
        self._report_container()
        if self._input_handler.handle_mouse_press(event):
            event.accept()
            return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent) -> None:  # noqa: N802 - Qt API
        if self._input_handler.handle_mouse_move(event):
            event.accept()
            return
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:  # noqa: N802 - Qt API
        if self._input_handler.handle_mouse_release(event):
            event.accept()
            return
        super().mouseReleaseEvent(event)

    # ------------------------------------------------------------------
    # Painting
    # ------------------------------------------------------------------
    def _scaled_pixmap(self, state: ViewportState) -> Optional[QPixmap]:
        image = self._view_model.image_handle
        if not isinstance(image, Image.Image):
            return None
        size = (
            max(1, int(round(state.layout.scaled_width))),
            max(1, int(round(state.layout.scaled_height))),
        )
        key = (size, state.adjustments)
        if image is not self._pixmap_source or key != self._pixmap_key:
            scaled = image.resize(size, Image.Resampling.BILINEAR)
            self._pixmap = qpixmap_from_pil(adjust_image(scaled, state.adjustments))
            self._pixmap_source = image
            self._pixmap_key = key
        return self._pixmap

    def paintEvent(self, event: QPaintEvent) -> None:  # noqa: N802 - Qt API
        state = self._state
        if state.layout.is_empty:
            return
        pixmap = self._scaled_pixmap(state)
        if pixmap is None:
            return

        cx, cy = state.layout.mask_center
        radius = state.layout.mask_radius
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
            painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform, True)

            clip = QPainterPath()
            clip.addEllipse(QPointF(cx, cy), radius, radius)
            painter.setClipPath(clip)
            origin = QPointF(cx - radius + state.pan_offset.x, cy - radius + state.pan_offset.y)
            painter.drawPixmap(origin, pixmap)
            painter.setClipping(False)

            if self._outline_width > 0:
                pen = QPen(self._outline_color)
                pen.setWidthF(float(self._outline_width))
                painter.setPen(pen)
                painter.setBrush(Qt.BrushStyle.NoBrush)
                ring = radius - self._outline_width / 2.0
                painter.drawEllipse(QRectF(cx - ring, cy - ring, 2 * ring, 2 * ring))
        finally:
            painter.end()


__all__ = ["CropCanvas", "cursor_for_drag_state"]
