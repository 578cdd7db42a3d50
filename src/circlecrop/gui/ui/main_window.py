"""Main window hosting the circular crop editor."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QResizeEvent
from PySide6.QtWidgets import QFrame, QMainWindow, QVBoxLayout, QWidget

from ...config import (
    EDITOR_BACKGROUND_COLOR,
    EDITOR_CORNER_RADIUS_PX,
    EDITOR_FOREGROUND_COLOR,
    EDITOR_PADDING_PX,
    EDITOR_WIDTH_FRACTION_RANGE,
    EDITOR_WIDTH_FRACTION_STEP,
)
from ...errors import SettingsError
from ...errors.handler import ErrorHandler, ErrorSeverity
from ...settings import SettingsManager
from ..services.image_import_service import ImageImportService
from ..viewmodels.crop_viewmodel import CropEditorViewModel
from .controllers.zoom_slider_handler import ZoomSliderHandler
from .widgets.adjustment_panel import AdjustmentPanel, SliderRow
from .widgets.crop_canvas import CropCanvas
from .widgets.image_drop_area import ImageDropArea

_LOGGER = logging.getLogger(__name__)

_STATUS_TIMEOUT_MS = 5000


class MainWindow(QMainWindow):
    """Top-level window: the editor panel and the editor Width slider."""

    def __init__(
        self,
        *,
        view_model: CropEditorViewModel,
        import_service: ImageImportService,
        settings: SettingsManager,
        error_handler: ErrorHandler,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._view_model = view_model
        self._import_service = import_service
        self._settings = settings
        self._error_handler = error_handler
        self.setWindowTitle("Circle Crop")
        self.resize(720, 900)

        central = QWidget(self)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(12)
        self.setCentralWidget(central)

        self.editor_frame = QFrame(central)
        self.editor_frame.setObjectName("cropEditor")
        self.editor_frame.setStyleSheet(
            f"QFrame#cropEditor {{ background-color: {EDITOR_BACKGROUND_COLOR};"
            f" border-radius: {EDITOR_CORNER_RADIUS_PX}px; }}"
            f" QFrame#cropEditor QLabel {{ color: {EDITOR_FOREGROUND_COLOR}; }}"
        )
        editor_layout = QVBoxLayout(self.editor_frame)
        editor_layout.setContentsMargins(
            EDITOR_PADDING_PX, EDITOR_PADDING_PX, EDITOR_PADDING_PX, EDITOR_PADDING_PX
        )
        editor_layout.setSpacing(8)

        last_dir = settings.get("last_image_dir")
        self.drop_area = ImageDropArea(
            self.editor_frame,
            start_dir=Path(last_dir) if last_dir else None,
        )
        editor_layout.addWidget(self.drop_area)

        self.canvas = CropCanvas(
            view_model,
            self.editor_frame,
            outline_width=int(settings.get("editor.outline_width")),
        )
        editor_layout.addWidget(self.canvas)

        self.adjustment_panel = AdjustmentPanel(
            self.editor_frame,
            min_zoom=view_model.min_zoom,
            max_zoom=view_model.max_zoom,
        )
        editor_layout.addWidget(self.adjustment_panel)
        layout.addWidget(self.editor_frame, 0, Qt.AlignmentFlag.AlignHCenter)

        minimum, maximum = EDITOR_WIDTH_FRACTION_RANGE
        self.width_row = SliderRow(
            "width",
            "Width",
            minimum=minimum,
            maximum=maximum,
            step=EDITOR_WIDTH_FRACTION_STEP,
            initial=float(settings.get("editor.width_fraction")),
            parent=central,
        )
        layout.addWidget(self.width_row)
        layout.addStretch(1)

        self.zoom_handler = ZoomSliderHandler(view_model, self.adjustment_panel.scale_row, self)
        self.zoom_handler.connect_controls()
        self.adjustment_panel.bind_view_model(view_model)

        self.drop_area.filesDropped.connect(self._handle_files_dropped)
        self.width_row.uiValueChanged.connect(self._handle_width_changed)
        import_service.imageImported.connect(self._handle_image_imported)
        import_service.importFailed.connect(self._handle_import_failed)
        error_handler.register_ui_callback(self.show_error_message)

        self.statusBar()
        self._apply_width_fraction()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    @property
    def settings(self) -> SettingsManager:
        return self._settings

    def width_fraction(self) -> float:
        return self.width_row.value()

    def open_image(self, path: Path) -> None:
        """Load *path* into the editor."""
        self._import_service.import_files([path])

    def show_error_message(self, message: str, severity: ErrorSeverity) -> None:
        prefix = "Error" if severity is ErrorSeverity.ERROR else severity.value.capitalize()
        self.statusBar().showMessage(f"{prefix}: {message}", _STATUS_TIMEOUT_MS)

    # ------------------------------------------------------------------
    # Qt overrides
    # ------------------------------------------------------------------
    def resizeEvent(self, event: QResizeEvent) -> None:  # noqa: N802 - Qt API
        super().resizeEvent(event)
        self._apply_width_fraction()

    def closeEvent(self, event) -> None:  # noqa: N802 - Qt API
        self.zoom_handler.disconnect_controls()
        self.adjustment_panel.bind_view_model(None)
        self.canvas.detach()
        super().closeEvent(event)

    # ------------------------------------------------------------------
    # Slots
    # ------------------------------------------------------------------
    def _handle_files_dropped(self, paths: list[Path]) -> None:
        self._import_service.import_files(paths)

    def _handle_image_imported(self, path: Path) -> None:
        self.statusBar().showMessage(f"Loaded {path.name}", _STATUS_TIMEOUT_MS)
        self.drop_area.set_start_dir(path.parent)
        self._store_setting("last_image_dir", path.parent)

    def _handle_import_failed(self, _path: Path, message: str) -> None:
        _LOGGER.debug("Import failed: %s", message)

    def _handle_width_changed(self, _key: str, fraction: float) -> None:
        self._apply_width_fraction()
        self._store_setting("editor.width_fraction", fraction)

    def _apply_width_fraction(self) -> None:
        central = self.centralWidget()
        if central is None:
            return
        margins = central.layout().contentsMargins()
        available = max(0, central.width() - margins.left() - margins.right())
        self.editor_frame.setFixedWidth(max(1, int(available * self.width_fraction())))

    def _store_setting(self, key: str, value: object) -> None:
        try:
            self._settings.set(key, value)
        except SettingsError as exc:
            self._error_handler.handle(exc, ErrorSeverity.WARNING, context={"key": key})


__all__ = ["MainWindow"]
