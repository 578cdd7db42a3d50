"""Tests for the image upload workflow."""

import logging
from pathlib import Path
from unittest.mock import Mock

import pytest

pytest.importorskip("PySide6", reason="PySide6 is required for the import service", exc_type=ImportError)
pytest.importorskip("PySide6.QtTest", reason="Qt test utilities unavailable", exc_type=ImportError)

from PIL import Image
from PySide6.QtCore import QThreadPool
from PySide6.QtTest import QSignalSpy

from circlecrop.core.layout import ContainerMetrics, ImageMetrics
from circlecrop.core.pan_clamp import PanOffset
from circlecrop.errors import ImageLoadError
from circlecrop.errors.handler import ErrorHandler, ErrorSeverity
from circlecrop.events import ImageLoadedEvent, ImageLoadFailedEvent
from circlecrop.events.bus import EventBus
from circlecrop.gui.services.image_import_service import ImageImportService
from circlecrop.gui.viewmodels.crop_viewmodel import CropEditorViewModel


def _png(path: Path, size=(40, 20)) -> Path:
    Image.new("RGB", size, (200, 10, 10)).save(path)
    return path


@pytest.fixture(autouse=True)
def _app(qapp):
    yield qapp


@pytest.fixture
def vm():
    view_model = CropEditorViewModel()
    view_model.set_container(ContainerMetrics(width=400))
    return view_model


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def error_handler():
    return Mock(spec=ErrorHandler)


def _service(vm, bus, error_handler, thread_pool=None):
    return ImageImportService(
        view_model=vm,
        event_bus=bus,
        error_handler=error_handler,
        thread_pool=thread_pool,
    )


def test_successful_import_updates_view_model(tmp_path, vm, bus, error_handler):
    service = _service(vm, bus, error_handler)
    events = []
    bus.subscribe(ImageLoadedEvent, events.append)
    imported = QSignalSpy(service.imageImported)
    path = _png(tmp_path / "photo.png")

    service.import_file(path)

    assert vm.image.value == ImageMetrics(40, 20)
    assert isinstance(vm.image_handle, Image.Image)
    assert imported.count() == 1
    assert events[0].source == path
    error_handler.handle.assert_not_called()


def test_new_image_resets_the_pan(tmp_path, vm, bus, error_handler):
    service = _service(vm, bus, error_handler)
    service.import_file(_png(tmp_path / "first.png"))
    vm.set_zoom(2.0)
    vm.pointer_down(0, 0)
    vm.pointer_move(-50, -20)
    vm.pointer_up()
    assert vm.pan_offset == PanOffset(-50, -20)

    service.import_file(_png(tmp_path / "second.png"))

    assert vm.pan_offset == PanOffset(0, 0)


def test_failed_import_keeps_previous_image(tmp_path, vm, bus, error_handler):
    service = _service(vm, bus, error_handler)
    service.import_file(_png(tmp_path / "good.png"))
    failures = []
    bus.subscribe(ImageLoadFailedEvent, failures.append)
    failed = QSignalSpy(service.importFailed)
    broken = tmp_path / "broken.png"
    broken.write_bytes(b"garbage")

    service.import_file(broken)

    assert vm.image.value == ImageMetrics(40, 20)
    assert failed.count() == 1
    assert failures[0].source == broken
    error = error_handler.handle.call_args[0][0]
    assert isinstance(error, ImageLoadError)
    assert error_handler.handle.call_args[0][1] == ErrorSeverity.ERROR


def test_import_files_uses_first_supported_file(tmp_path, vm, bus, error_handler):
    service = _service(vm, bus, error_handler)
    notes = tmp_path / "notes.txt"
    notes.write_text("hello", encoding="utf-8")
    first = _png(tmp_path / "a.png", size=(10, 30))
    _png(tmp_path / "b.png", size=(30, 10))

    chosen = service.import_files([tmp_path / "missing.png", notes, first, tmp_path / "b.png"])

    assert chosen == first
    assert vm.image.value == ImageMetrics(10, 30)


def test_import_files_without_candidates_warns(tmp_path, vm, bus, error_handler):
    service = _service(vm, bus, error_handler)

    assert service.import_files([tmp_path / "missing.png"]) is None

    assert error_handler.handle.call_args[0][1] == ErrorSeverity.WARNING
    assert vm.image.value == ImageMetrics()


def test_stale_worker_results_are_discarded(tmp_path, vm, bus, error_handler):
    pool = Mock(spec=QThreadPool)
    service = _service(vm, bus, error_handler, thread_pool=pool)

    service.import_file(_png(tmp_path / "old.png", size=(10, 10)))
    service.import_file(_png(tmp_path / "new.png", size=(20, 40)))
    old_worker, new_worker = (call.args[0] for call in pool.start.call_args_list)

    new_worker.run()
    old_worker.run()

    assert vm.image.value == ImageMetrics(20, 40)


def test_error_handler_integration_reaches_ui_callback(tmp_path, vm, bus):
    handler = ErrorHandler(logging.getLogger("test"), bus)
    callback = Mock()
    handler.register_ui_callback(callback)
    service = _service(vm, bus, handler)
    broken = tmp_path / "broken.gif"
    broken.write_bytes(b"GIF89a")

    service.import_file(broken)

    callback.assert_called_once()
    assert callback.call_args[0][1] == ErrorSeverity.ERROR
