"""Pure Python CropEditorViewModel, no Qt dependency.

Holds the editor inputs as observable properties and re-runs
:func:`~circlecrop.core.viewport.recompute` whenever one of them changes.
The resulting :class:`~circlecrop.core.viewport.ViewportState` is published
through ``state`` and the ``viewport_changed`` signal.

Three independent sources move the pan offset: container resizes, zoom
changes and pointer drags.  All of them end up in the same
:class:`~circlecrop.core.pan_clamp.PanClampEngine`, which is the only writer.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from ...config import DEFAULT_ZOOM, MAX_ZOOM, MIN_ZOOM
from ...core.adjustments import AdjustmentParams
from ...core.drag_session import DragSession
from ...core.layout import ContainerMetrics, ImageMetrics, compute_layout
from ...core.pan_clamp import PanClampEngine, PanOffset
from ...core.viewport import ViewportInputs, ViewportState, recompute
from .base import BaseViewModel
from .signal import ObservableProperty, Signal

_LOGGER = logging.getLogger(__name__)


class CropEditorViewModel(BaseViewModel):
    """Circular crop editor state, pure Python."""

    def __init__(self, *, min_zoom: float = MIN_ZOOM, max_zoom: float = MAX_ZOOM) -> None:
        super().__init__()
        self._min_zoom = float(min_zoom)
        self._max_zoom = float(max_zoom)
        self._image_handle: Any = None

        # Inputs
        self.container = ObservableProperty(ContainerMetrics())
        self.image = ObservableProperty(ImageMetrics())
        self.zoom = ObservableProperty(min(max(DEFAULT_ZOOM, self._min_zoom), self._max_zoom))
        self.adjustments = ObservableProperty(AdjustmentParams())

        self._engine = PanClampEngine()
        self._drag = DragSession(self._engine, lambda: self.container.value)

        # Outputs
        self.dragging = ObservableProperty(False)
        self.state = ObservableProperty(self._snapshot())
        self.viewport_changed = Signal()

        self.bind(self.container.changed, self._on_geometry_changed)
        self.bind(self.zoom.changed, self._on_geometry_changed)
        self.bind(self.image.changed, self._on_image_changed)
        self.bind(self.adjustments.changed, self._on_adjustments_changed)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def min_zoom(self) -> float:
        return self._min_zoom

    @property
    def max_zoom(self) -> float:
        return self._max_zoom

    @property
    def image_handle(self) -> Any:
        """Opaque decoded image supplied by the loader, ``None`` before the first load."""
        return self._image_handle

    @property
    def pan_offset(self) -> PanOffset:
        return self._engine.offset

    @property
    def is_dragging(self) -> bool:
        return self._drag.is_dragging

    def inputs(self) -> ViewportInputs:
        return ViewportInputs(
            container=self.container.value,
            image=self.image.value,
            zoom=self.zoom.value,
            adjustments=self.adjustments.value,
        )

    # ------------------------------------------------------------------
    # Collaborator entry points
    # ------------------------------------------------------------------
    def set_container(self, container: ContainerMetrics) -> None:
        """Resize observer entry point."""
        self.container.value = container

    def set_zoom(self, factor: float) -> None:
        """Control panel entry point; the value is taken as-is."""
        self.zoom.value = float(factor)

    def set_adjustment(self, key: str, value: float) -> None:
        self.adjustments.value = self.adjustments.value.with_value(key, value)

    def set_adjustments(self, params: AdjustmentParams) -> None:
        self.adjustments.value = params

    def set_image(self, metrics: ImageMetrics, handle: Optional[Any] = None) -> None:
        """Image loader entry point.

        A new image always resets the pan offset, even when its dimensions
        match the previous one.
        """
        self._image_handle = handle
        if metrics == self.image.value:
            self._refresh(reset=True)
            return
        self.image.value = metrics

    def clear_image(self) -> None:
        self.set_image(ImageMetrics(), None)

    # ------------------------------------------------------------------
    # Pointer input
    # ------------------------------------------------------------------
    def pointer_down(self, x: float, y: float) -> None:
        self._drag.pointer_down((x, y))
        self._sync_dragging()

    def pointer_move(self, x: float, y: float) -> None:
        # Moves that arrive after pointer_up fall through here unchanged.
        if self._drag.pointer_move((x, y)) is None:
            return
        self._publish()

    def pointer_up(self, x: float | None = None, y: float | None = None) -> None:
        position = None if x is None or y is None else (x, y)
        self._drag.pointer_up(position)
        self._sync_dragging()

    # ------------------------------------------------------------------
    # Recompute cascade
    # ------------------------------------------------------------------
    def _on_geometry_changed(self, _new: Any, _old: Any) -> None:
        self._refresh(reset=False)

    def _on_image_changed(self, _new: Any, _old: Any) -> None:
        self._refresh(reset=True)

    def _on_adjustments_changed(self, _new: Any, _old: Any) -> None:
        self._publish()

    def _refresh(self, *, reset: bool) -> None:
        inputs = self.inputs()
        layout = compute_layout(inputs.container, inputs.image, inputs.zoom)
        if reset:
            self._engine.reset(layout)
        else:
            self._engine.apply_layout(layout)
        self._publish()

    def _sync_dragging(self) -> None:
        dragging = self._drag.is_dragging
        if dragging != self.dragging.value:
            self.dragging.value = dragging
            self._publish()

    def _snapshot(self) -> ViewportState:
        return recompute(self.inputs(), self._engine.offset, dragging=self._drag.is_dragging)

    def _publish(self) -> None:
        state = self._snapshot()
        self.state.value = state
        _LOGGER.debug("viewport %s", state.as_dict())
        self.viewport_changed.emit(state)


__all__ = ["CropEditorViewModel"]
