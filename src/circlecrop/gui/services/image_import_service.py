"""Service that owns the image upload workflow for the GUI."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

from PySide6.QtCore import QObject, QThreadPool, Signal

from ...errors import ImageLoadError
from ...errors.handler import ErrorHandler, ErrorSeverity
from ...events.bus import EventBus
from ...events.image_events import ImageLoadedEvent, ImageLoadFailedEvent
from ...utils.image_loader import LoadedImage, is_supported, load_image
from ..ui.tasks.image_load_worker import ImageLoadWorker
from ..viewmodels.crop_viewmodel import CropEditorViewModel

_LOGGER = logging.getLogger(__name__)


class ImageImportService(QObject):
    """Load a single user-chosen image and hand it to the crop editor.

    Only successful decodes reach the view model.  A failure is reported
    through the :class:`ErrorHandler` and leaves whatever image was shown
    before untouched.  When several loads overlap, only the most recent
    request may update the editor.
    """

    importStarted = Signal(Path)
    imageImported = Signal(Path)
    importFailed = Signal(Path, str)

    def __init__(
        self,
        *,
        view_model: CropEditorViewModel,
        event_bus: EventBus,
        error_handler: ErrorHandler,
        thread_pool: Optional[QThreadPool] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._view_model = view_model
        self._event_bus = event_bus
        self._error_handler = error_handler
        self._thread_pool = thread_pool
        self._latest_token = 0
        self._workers: dict[int, ImageLoadWorker] = {}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def import_files(self, sources: Iterable[Path]) -> Optional[Path]:
        """Load the first usable file from *sources*; return the chosen path."""

        source = self._first_candidate(sources)
        if source is None:
            self._fail(None, "No supported image file was provided.", severity=ErrorSeverity.WARNING)
            return None
        self.import_file(source)
        return source

    def import_file(self, source: Path) -> None:
        """Load *source*, on the thread pool when one was supplied."""

        self._latest_token += 1
        token = self._latest_token
        self.importStarted.emit(source)
        if self._thread_pool is None:
            try:
                loaded = load_image(source)
            except ImageLoadError as exc:
                self._handle_failed(token, source, str(exc))
                return
            self._handle_loaded(token, loaded)
            return

        worker = ImageLoadWorker(source, token)
        worker.signals.imageLoaded.connect(self._handle_loaded)
        worker.signals.loadFailed.connect(self._handle_failed)
        self._workers[token] = worker
        self._thread_pool.start(worker)

    # ------------------------------------------------------------------
    # Worker callbacks
    # ------------------------------------------------------------------
    def _handle_loaded(self, token: int, loaded: LoadedImage) -> None:
        self._workers.pop(token, None)
        if token != self._latest_token:
            _LOGGER.debug("Discarding stale image load for %s", loaded.source)
            return
        self._view_model.set_image(loaded.metrics, loaded.image)
        self._event_bus.publish(ImageLoadedEvent(source=loaded.source, metrics=loaded.metrics))
        if loaded.source is not None:
            self.imageImported.emit(loaded.source)

    def _handle_failed(self, token: int, source: Path, message: str) -> None:
        self._workers.pop(token, None)
        if token != self._latest_token:
            return
        self._fail(source, message)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _fail(
        self,
        source: Optional[Path],
        message: str,
        *,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
    ) -> None:
        self._error_handler.handle(
            ImageLoadError(message),
            severity,
            context={"source": str(source) if source is not None else None},
        )
        self._event_bus.publish(ImageLoadFailedEvent(source=source, reason=message))
        self.importFailed.emit(source if source is not None else Path(), message)

    def _first_candidate(self, sources: Iterable[Path]) -> Optional[Path]:
        # The editor holds one image; extra files in a drop are ignored.
        for candidate in sources:
            try:
                path = Path(candidate).expanduser()
            except TypeError:
                continue
            if not path.is_file():
                continue
            if not is_supported(path):
                _LOGGER.info("Skipping unsupported file %s", path)
                continue
            return path
        return None


__all__ = ["ImageImportService"]
