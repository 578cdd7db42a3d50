"""Worker that decodes a dropped image off the UI thread."""

from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import QObject, QRunnable, Signal

from ....errors import ImageLoadError
from ....utils import image_loader


class ImageLoadWorkerSignals(QObject):
    """Signals exposed by :class:`ImageLoadWorker`.

    The signal container is created on the GUI thread and kept separate from
    the runnable, so connected slots run on the GUI thread no matter which
    pool thread decoded the image.
    """

    imageLoaded = Signal(int, object)
    """Emitted with the request token and the :class:`LoadedImage`."""

    loadFailed = Signal(int, Path, str)
    """Emitted with the request token, the source and a readable reason."""


class ImageLoadWorker(QRunnable):
    """Decode one image with Pillow without blocking the UI."""

    def __init__(self, source: Path, token: int) -> None:
        super().__init__()
        self._source = source
        self._token = token
        self.signals = ImageLoadWorkerSignals()

    @property
    def source(self) -> Path:
        return self._source

    @property
    def token(self) -> int:
        return self._token

    def run(self) -> None:  # type: ignore[override]
        try:
            loaded = image_loader.load_image(self._source)
        except ImageLoadError as exc:
            self.signals.loadFailed.emit(self._token, self._source, str(exc))
            return
        self.signals.imageLoaded.emit(self._token, loaded)


__all__ = ["ImageLoadWorker", "ImageLoadWorkerSignals"]
