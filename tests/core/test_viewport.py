"""End-to-end checks of the recompute step for the documented scenarios."""

import pytest

from circlecrop.core.adjustments import AdjustmentParams
from circlecrop.core.drag_session import DragSession
from circlecrop.core.layout import ContainerMetrics, ImageMetrics, compute_layout
from circlecrop.core.pan_clamp import PanClampEngine, PanOffset
from circlecrop.core.viewport import ViewportInputs, recompute


def _inputs(container_width=400, image=(800, 400), zoom=1.0, **kwargs):
    return ViewportInputs(
        container=ContainerMetrics(width=container_width),
        image=ImageMetrics(natural_width=image[0], natural_height=image[1]),
        zoom=zoom,
        **kwargs,
    )


def test_scenario_a_landscape_at_zoom_one():
    state = recompute(_inputs(), PanOffset(-500, -500))

    assert state.layout.fitted_width == pytest.approx(400)
    assert state.layout.fitted_height == pytest.approx(200)
    assert state.mask_diameter == pytest.approx(200)
    assert state.scaled_width == pytest.approx(400)
    assert state.scaled_height == pytest.approx(200)
    assert state.bounds.right == pytest.approx(200)
    assert state.bounds.bottom == pytest.approx(0)
    assert state.pan_offset == PanOffset(-200, 0)


def test_scenario_b_zoomed_in():
    state = recompute(_inputs(zoom=2.0), PanOffset(-700, -50))

    assert state.scaled_width == pytest.approx(800)
    assert state.scaled_height == pytest.approx(400)
    assert state.bounds.right == pytest.approx(600)
    assert state.bounds.bottom == pytest.approx(200)
    assert state.pan_offset == PanOffset(-600, -50)


def test_scenario_c_square_image_cannot_pan_at_zoom_one():
    state = recompute(_inputs(container_width=300, image=(500, 500)), PanOffset(-40, -40))

    assert state.layout.fitted_width == pytest.approx(300)
    assert state.layout.fitted_height == pytest.approx(300)
    assert state.mask_diameter == pytest.approx(300)
    assert state.bounds.right == pytest.approx(0)
    assert state.bounds.bottom == pytest.approx(0)
    assert state.pan_offset == PanOffset(0, 0)

    zoomed = recompute(_inputs(container_width=300, image=(500, 500), zoom=1.5), PanOffset(-40, -40))
    assert zoomed.pan_offset == PanOffset(-40, -40)


def test_scenario_d_incremental_drag_accumulates_previous_move_deltas():
    inputs = _inputs(zoom=3.0)
    engine = PanClampEngine()
    engine.apply_layout(compute_layout(inputs.container, inputs.image, inputs.zoom))
    engine.apply_delta(-100, -100)
    session = DragSession(engine, lambda: inputs.container)

    session.pointer_down((10, 10))
    session.pointer_move((15, 12))
    session.pointer_move((20, 20))

    state = recompute(inputs, engine.offset)
    assert state.pan_offset == PanOffset(-90, -90)


def test_recompute_is_pure():
    inputs = _inputs(zoom=2.5)
    offset = PanOffset(-12, -34)

    assert recompute(inputs, offset) == recompute(inputs, offset)


def test_recompute_passes_adjustments_through():
    params = AdjustmentParams(gamma=2.0, alpha=0.5)
    state = recompute(_inputs(adjustments=params), PanOffset())

    assert state.adjustments is params


def test_state_as_dict():
    state = recompute(_inputs(zoom=2.0), PanOffset(-10, -20))

    assert state.as_dict() == {
        "maskDiameter": pytest.approx(200),
        "scaledWidth": pytest.approx(800),
        "scaledHeight": pytest.approx(400),
        "panOffset": {"x": -10, "y": -20},
    }


def test_empty_inputs_give_empty_state():
    state = recompute(ViewportInputs(), PanOffset(-5, -5))

    assert state.layout.is_empty
    assert state.pan_offset == PanOffset(0, 0)
    assert state.dragging is False
