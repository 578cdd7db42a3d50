"""Drop target and file picker for the image to crop."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QDragEnterEvent, QDragLeaveEvent, QDragMoveEvent, QDropEvent, QMouseEvent
from PySide6.QtWidgets import QFileDialog, QLabel, QVBoxLayout, QWidget

from ....config import ACCEPTED_SUFFIXES, DROP_PROMPT_ACTIVE, DROP_PROMPT_IDLE

_FILE_FILTER = "Images ({})".format(" ".join(f"*{suffix}" for suffix in ACCEPTED_SUFFIXES))


class ImageDropArea(QWidget):
    """Accept a dropped file or open a file dialog on click.

    ``filesDropped`` carries every local path of the drop; picking the first
    usable one is left to the import service.
    """

    filesDropped = Signal(object)

    def __init__(self, parent: Optional[QWidget] = None, *, start_dir: Optional[Path] = None) -> None:
        super().__init__(parent)
        self._start_dir = start_dir
        self.setAcceptDrops(True)
        self.setCursor(Qt.CursorShape.PointingHandCursor)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        self._label = QLabel(DROP_PROMPT_IDLE, self)
        self._label.setWordWrap(True)
        layout.addWidget(self._label)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def prompt(self) -> str:
        return self._label.text()

    def set_start_dir(self, directory: Optional[Path]) -> None:
        self._start_dir = directory

    def open_file_dialog(self) -> Optional[Path]:
        """Ask the user for an image; emit ``filesDropped`` with the choice."""

        directory = str(self._start_dir) if self._start_dir is not None else ""
        path, _ = QFileDialog.getOpenFileName(self, "Select Image", directory, _FILE_FILTER)
        if not path:
            return None
        selected = Path(path)
        self.filesDropped.emit([selected])
        return selected

    # ------------------------------------------------------------------
    # Qt overrides
    # ------------------------------------------------------------------
    def mouseReleaseEvent(self, event: QMouseEvent) -> None:  # type: ignore[override]
        if event.button() == Qt.MouseButton.LeftButton:
            event.accept()
            self.open_file_dialog()
            return
        super().mouseReleaseEvent(event)

    def dragEnterEvent(self, event: QDragEnterEvent) -> None:  # type: ignore[override]
        if self._extract_local_files(event):
            self._set_active(True)
            event.acceptProposedAction()
            return
        event.ignore()

    def dragMoveEvent(self, event: QDragMoveEvent) -> None:  # type: ignore[override]
        if self._extract_local_files(event):
            event.acceptProposedAction()
            return
        event.ignore()

    def dragLeaveEvent(self, event: QDragLeaveEvent) -> None:  # type: ignore[override]
        self._set_active(False)
        super().dragLeaveEvent(event)

    def dropEvent(self, event: QDropEvent) -> None:  # type: ignore[override]
        self._set_active(False)
        paths = self._extract_local_files(event)
        if not paths:
            event.ignore()
            return
        event.acceptProposedAction()
        self.filesDropped.emit(paths)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _set_active(self, active: bool) -> None:
        self._label.setText(DROP_PROMPT_ACTIVE if active else DROP_PROMPT_IDLE)

    def _extract_local_files(self, event) -> list[Path]:
        mime = event.mimeData()
        if mime is None or not mime.hasUrls():
            return []
        seen: set[Path] = set()
        paths: list[Path] = []
        for url in mime.urls():
            if not url.isLocalFile():
                continue
            local = Path(url.toLocalFile()).expanduser()
            if local in seen:
                continue
            seen.add(local)
            paths.append(local)
        return paths


__all__ = ["ImageDropArea"]
