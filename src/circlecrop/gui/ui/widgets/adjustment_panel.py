"""Slider panel for the zoom factor and the colour adjustments."""

from __future__ import annotations

import logging
from typing import Dict, Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QHBoxLayout, QLabel, QSlider, QVBoxLayout, QWidget

from ....config import (
    ADJUSTMENT_DEFAULT,
    ADJUSTMENT_KEYS,
    ADJUSTMENT_RANGE,
    ADJUSTMENT_STEP,
    DEFAULT_ZOOM,
    MAX_ZOOM,
    MIN_ZOOM,
    ZOOM_STEP,
)
from ....core.adjustments import AdjustmentParams
from ...viewmodels.crop_viewmodel import CropEditorViewModel

_LOGGER = logging.getLogger(__name__)


class SliderRow(QWidget):
    """Labelled ``QSlider`` that maps its integer ticks onto a float range."""

    uiValueChanged = Signal(str, float)

    def __init__(
        self,
        key: str,
        label: str,
        *,
        minimum: float,
        maximum: float,
        step: float,
        initial: float,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._key = key
        self._step = float(step)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(8)

        self.label = QLabel(label, self)
        self.label.setMinimumWidth(80)
        layout.addWidget(self.label)

        self.slider = QSlider(Qt.Orientation.Horizontal, self)
        self.slider.setRange(self._to_ticks(minimum), self._to_ticks(maximum))
        self.slider.setSingleStep(1)
        self.slider.setPageStep(10)
        self.slider.setValue(self._to_ticks(initial))
        layout.addWidget(self.slider, 1)

        self.value_label = QLabel(self._format(initial), self)
        self.value_label.setAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
        self.value_label.setMinimumWidth(32)
        layout.addWidget(self.value_label)

        self.slider.valueChanged.connect(self._handle_slider_changed)

    @property
    def key(self) -> str:
        return self._key

    def value(self) -> float:
        return self._from_ticks(self.slider.value())

    def set_value(self, value: float) -> None:
        """Move the slider without emitting ``uiValueChanged``."""

        ticks = self._to_ticks(value)
        self.value_label.setText(self._format(self._from_ticks(ticks)))
        if ticks == self.slider.value():
            return
        self.slider.blockSignals(True)
        self.slider.setValue(ticks)
        self.slider.blockSignals(False)

    def _handle_slider_changed(self, ticks: int) -> None:
        value = self._from_ticks(ticks)
        self.value_label.setText(self._format(value))
        self.uiValueChanged.emit(self._key, value)

    def _to_ticks(self, value: float) -> int:
        return int(round(float(value) / self._step))

    def _from_ticks(self, ticks: int) -> float:
        return round(ticks * self._step, 6)

    @staticmethod
    def _format(value: float) -> str:
        return f"{value:.1f}"


class AdjustmentPanel(QWidget):
    """Scale slider followed by one slider per colour adjustment."""

    adjustmentChanged = Signal(str, float)

    def __init__(
        self,
        parent: Optional[QWidget] = None,
        *,
        min_zoom: float = MIN_ZOOM,
        max_zoom: float = MAX_ZOOM,
    ) -> None:
        super().__init__(parent)
        self._view_model: Optional[CropEditorViewModel] = None
        self._rows: Dict[str, SliderRow] = {}

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(4)

        self.scale_row = SliderRow(
            "scale",
            "Scale",
            minimum=min_zoom,
            maximum=max_zoom,
            step=ZOOM_STEP,
            initial=min(max(DEFAULT_ZOOM, min_zoom), max_zoom),
            parent=self,
        )
        layout.addWidget(self.scale_row)

        minimum, maximum = ADJUSTMENT_RANGE
        for key in ADJUSTMENT_KEYS:
            row = SliderRow(
                key,
                key.capitalize(),
                minimum=minimum,
                maximum=maximum,
                step=ADJUSTMENT_STEP,
                initial=ADJUSTMENT_DEFAULT,
                parent=self,
            )
            row.uiValueChanged.connect(self.adjustmentChanged)
            layout.addWidget(row)
            self._rows[key] = row

    # ------------------------------------------------------------------
    @property
    def scale_slider(self) -> QSlider:
        return self.scale_row.slider

    def row(self, key: str) -> SliderRow:
        return self._rows[key]

    def values(self) -> AdjustmentParams:
        return AdjustmentParams.from_mapping({key: row.value() for key, row in self._rows.items()})

    def bind_view_model(self, view_model: Optional[CropEditorViewModel]) -> None:
        """Route adjustment slider changes to *view_model* and mirror its state."""

        if self._view_model is view_model:
            return
        if self._view_model is not None:
            self.adjustmentChanged.disconnect(self._view_model.set_adjustment)
            self._view_model.adjustments.changed.disconnect(self._on_adjustments_changed)
        self._view_model = view_model
        if view_model is None:
            return
        self.adjustmentChanged.connect(view_model.set_adjustment)
        view_model.adjustments.changed.connect(self._on_adjustments_changed)
        self.refresh(view_model.adjustments.value)

    def refresh(self, params: AdjustmentParams) -> None:
        """Synchronise slider positions with *params*."""

        for key, value in params.as_mapping().items():
            row = self._rows.get(key)
            if row is not None:
                row.set_value(value)

    def _on_adjustments_changed(self, params: AdjustmentParams, _old: AdjustmentParams) -> None:
        _LOGGER.debug("adjustments now %s", params.as_mapping())
        self.refresh(params)


__all__ = ["AdjustmentPanel", "SliderRow"]
