"""GUI entry point for the circular crop editor."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from PySide6.QtCore import QThreadPool
from PySide6.QtWidgets import QApplication

from ..errors import SettingsError
from ..errors.handler import ErrorHandler
from ..events.bus import EventBus
from ..settings import SettingsManager
from .services.image_import_service import ImageImportService
from .ui.main_window import MainWindow
from .utils.console_logger import ensure_console_logger
from .viewmodels.crop_viewmodel import CropEditorViewModel

_LOGGER = logging.getLogger("circlecrop")


def main(argv: list[str] | None = None) -> int:
    """Launch the Qt application and return the exit code."""

    arguments = list(sys.argv if argv is None else argv)
    ensure_console_logger(_LOGGER, "circlecrop-console")
    app = QApplication(arguments)

    settings = SettingsManager()
    try:
        settings.load()
    except SettingsError as exc:
        # A broken settings file should not keep the editor from starting.
        _LOGGER.warning("Falling back to default settings: %s", exc)

    event_bus = EventBus(_LOGGER)
    error_handler = ErrorHandler(_LOGGER, event_bus)
    min_zoom, max_zoom = settings.zoom_range()
    view_model = CropEditorViewModel(min_zoom=min_zoom, max_zoom=max_zoom)
    import_service = ImageImportService(
        view_model=view_model,
        event_bus=event_bus,
        error_handler=error_handler,
        thread_pool=QThreadPool.globalInstance(),
    )

    window = MainWindow(
        view_model=view_model,
        import_service=import_service,
        settings=settings,
        error_handler=error_handler,
    )
    window.show()
    # Allow opening an image directly via argv[1].
    if len(arguments) > 1:
        window.open_image(Path(arguments[1]))
    return app.exec()


if __name__ == "__main__":  # pragma: no cover - manual launch
    raise SystemExit(main())
