"""Tests for CropEditorViewModel: pure Python, no Qt dependency."""

from unittest.mock import Mock

import pytest

from circlecrop.core.adjustments import AdjustmentParams
from circlecrop.core.layout import ContainerMetrics, ImageMetrics
from circlecrop.core.pan_clamp import PanOffset
from circlecrop.gui.viewmodels.crop_viewmodel import CropEditorViewModel


def _make_vm(container_width=400, image=(800, 400), zoom=None):
    vm = CropEditorViewModel()
    vm.set_container(ContainerMetrics(width=container_width, origin_x=100, origin_y=50))
    vm.set_image(ImageMetrics(*image), handle="pixels")
    if zoom is not None:
        vm.set_zoom(zoom)
    return vm


def _drag(vm, start, *moves):
    """Drag in container-local coordinates; the container sits at (100, 50)."""
    vm.pointer_down(start[0] + 100, start[1] + 50)
    for x, y in moves:
        vm.pointer_move(x + 100, y + 50)
    vm.pointer_up()


class TestInitialState:
    def test_empty_editor(self):
        vm = CropEditorViewModel()

        assert vm.zoom.value == 1.0
        assert vm.state.value.layout.is_empty
        assert vm.pan_offset == PanOffset(0, 0)
        assert vm.image_handle is None
        assert vm.is_dragging is False

    def test_initial_zoom_respects_custom_range(self):
        vm = CropEditorViewModel(min_zoom=2.0, max_zoom=4.0)

        assert vm.zoom.value == 2.0
        assert (vm.min_zoom, vm.max_zoom) == (2.0, 4.0)


class TestRecompute:
    def test_layout_follows_container_and_image(self):
        vm = _make_vm()

        state = vm.state.value
        assert state.mask_diameter == pytest.approx(200)
        assert state.scaled_width == pytest.approx(400)
        assert state.bounds.right == pytest.approx(200)
        assert vm.image_handle == "pixels"

    def test_viewport_changed_emits_on_zoom(self):
        vm = _make_vm()
        received = []
        vm.viewport_changed.connect(received.append)

        vm.set_zoom(2.0)

        assert len(received) == 1
        assert received[0].scaled_width == pytest.approx(800)
        assert received[0].mask_diameter == pytest.approx(200)

    def test_adjustments_are_published_without_touching_offset(self):
        vm = _make_vm(zoom=2.0)
        _drag(vm, (0, 0), (-50, -50))
        received = []
        vm.viewport_changed.connect(received.append)

        vm.set_adjustment("gamma", 2.0)

        assert received[-1].adjustments == AdjustmentParams(gamma=2.0)
        assert received[-1].pan_offset == PanOffset(-50, -50)

    def test_set_adjustments_replaces_all(self):
        vm = _make_vm()
        params = AdjustmentParams(red=0.0, blue=3.0)

        vm.set_adjustments(params)

        assert vm.state.value.adjustments == params


class TestPanning:
    def test_drag_pans_and_clamps(self):
        vm = _make_vm(zoom=2.0)

        _drag(vm, (10, 10), (-690, -40))

        assert vm.pan_offset == PanOffset(-600, -50)
        assert vm.state.value.pan_offset == PanOffset(-600, -50)

    def test_zoom_out_reclamps_offset(self):
        vm = _make_vm(zoom=2.0)
        _drag(vm, (0, 0), (-600, -200))

        vm.set_zoom(1.0)

        assert vm.pan_offset == PanOffset(-200, 0)

    def test_resize_reclamps_offset(self):
        vm = _make_vm(zoom=2.0)
        _drag(vm, (0, 0), (-600, -200))

        vm.set_container(ContainerMetrics(width=200, origin_x=100, origin_y=50))

        assert vm.pan_offset == PanOffset(-300, -100)

    def test_move_after_release_is_ignored(self):
        vm = _make_vm(zoom=2.0)
        _drag(vm, (0, 0), (-20, -10))
        received = []
        vm.viewport_changed.connect(received.append)

        vm.pointer_move(0, 0)

        assert received == []
        assert vm.pan_offset == PanOffset(-20, -10)

    def test_dragging_flag_tracks_pointer(self):
        vm = _make_vm(zoom=2.0)
        flags = []
        vm.dragging.changed.connect(lambda new, old: flags.append(new))

        vm.pointer_down(120, 70)
        assert vm.state.value.dragging is True
        vm.pointer_up(120, 70)

        assert flags == [True, False]
        assert vm.state.value.dragging is False


class TestImageReset:
    def test_new_image_resets_offset(self):
        vm = _make_vm(zoom=2.0)
        _drag(vm, (0, 0), (-100, -100))

        vm.set_image(ImageMetrics(600, 600), handle="other")

        assert vm.pan_offset == PanOffset(0, 0)

    def test_same_size_image_still_resets(self):
        vm = _make_vm(zoom=2.0)
        _drag(vm, (0, 0), (-100, -100))
        received = []
        vm.viewport_changed.connect(received.append)

        vm.set_image(ImageMetrics(800, 400), handle="again")

        assert vm.pan_offset == PanOffset(0, 0)
        assert vm.image_handle == "again"
        assert received[-1].pan_offset == PanOffset(0, 0)

    def test_zoom_is_kept_across_images(self):
        vm = _make_vm(zoom=3.0)

        vm.set_image(ImageMetrics(300, 300))

        assert vm.zoom.value == 3.0
        assert vm.state.value.scaled_width == pytest.approx(1200)

    def test_clear_image_returns_to_empty_layout(self):
        vm = _make_vm(zoom=2.0)

        vm.clear_image()

        assert vm.state.value.layout.is_empty
        assert vm.image_handle is None


def test_dispose_stops_recomputing():
    vm = _make_vm()
    handler = Mock()
    vm.viewport_changed.connect(handler)

    vm.dispose()
    vm.set_zoom(2.0)

    handler.assert_not_called()
