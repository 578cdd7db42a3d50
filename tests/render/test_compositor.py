"""Tests for the off-screen circular crop compositor."""

import pytest
from PIL import Image

from circlecrop.core.adjustments import AdjustmentParams
from circlecrop.core.layout import ContainerMetrics, ImageMetrics
from circlecrop.core.pan_clamp import PanOffset
from circlecrop.core.viewport import ViewportInputs, recompute
from circlecrop.errors import RenderError
from circlecrop.render.compositor import export_circle, mask_bounds, render_stage


def _half_and_half(width=80, height=40):
    """Left half red, right half blue."""
    image = Image.new("RGBA", (width, height), (255, 0, 0, 255))
    image.paste((0, 0, 255, 255), (width // 2, 0, width, height))
    return image


def _state(image, *, container_width=80, zoom=1.0, offset=PanOffset(), adjustments=None):
    inputs = ViewportInputs(
        container=ContainerMetrics(width=container_width),
        image=ImageMetrics(natural_width=image.width, natural_height=image.height),
        zoom=zoom,
        adjustments=adjustments or AdjustmentParams(),
    )
    return recompute(inputs, offset)


def test_stage_matches_fitted_size():
    image = _half_and_half()

    stage = render_stage(_state(image), image, outline_width=0)

    assert stage.size == (80, 40)
    assert stage.mode == "RGBA"


def test_outside_of_circle_is_transparent():
    image = _half_and_half()

    stage = render_stage(_state(image), image, outline_width=0)

    # Mask circle has diameter 40 centred at (40, 20).
    assert stage.getpixel((2, 2))[3] == 0
    assert stage.getpixel((78, 38))[3] == 0
    assert stage.getpixel((40, 20))[3] == 255


def test_pan_offset_moves_image_under_mask():
    image = _half_and_half()

    unpanned = render_stage(_state(image), image, outline_width=0)
    panned = render_stage(_state(image, offset=PanOffset(-40, 0)), image, outline_width=0)

    # Unpanned, the mask covers the left (red) half of the image. Panning
    # left by 40 pixels brings the blue half under it.
    assert unpanned.getpixel((30, 20))[:3] == (255, 0, 0)
    assert panned.getpixel((30, 20))[:3] == (0, 0, 255)


def test_outline_is_drawn_on_the_mask_edge():
    image = Image.new("RGBA", (80, 80), (0, 0, 0, 255))

    stage = render_stage(_state(image), image, outline_width=10, outline_color="#e8e8e8")

    assert stage.getpixel((2, 40))[:3] == (0xE8, 0xE8, 0xE8)
    assert stage.getpixel((40, 40))[:3] == (0, 0, 0)


def test_adjustments_are_applied():
    image = Image.new("RGBA", (40, 40), (200, 200, 200, 255))

    stage = render_stage(
        _state(image, container_width=40, adjustments=AdjustmentParams(brightness=0.0)),
        image,
        outline_width=0,
    )

    assert stage.getpixel((20, 20)) == (0, 0, 0, 255)


def test_export_circle_is_mask_sized():
    image = _half_and_half()
    state = _state(image, zoom=2.0, offset=PanOffset(-10, -5))

    crop = export_circle(state, image)

    assert crop.size == (40, 40)
    assert mask_bounds(state) == (pytest.approx(20), 0, pytest.approx(60), pytest.approx(40))


def test_empty_layout_raises():
    image = _half_and_half()

    with pytest.raises(RenderError):
        render_stage(_state(image, container_width=0), image)


def _transparent_inside_circle(crop, margin=1.0):
    """Return pixels inside the inscribed circle of ``crop`` that are not opaque."""

    radius = crop.width / 2.0
    alpha = crop.getchannel("A")
    holes = []
    for y in range(crop.height):
        for x in range(crop.width):
            dx = x + 0.5 - radius
            dy = y + 0.5 - radius
            if dx * dx + dy * dy <= (radius - margin) ** 2 and alpha.getpixel((x, y)) != 255:
                holes.append((x, y))
    return holes


@pytest.mark.parametrize("size", [(160, 80), (40, 80), (800, 400)])
@pytest.mark.parametrize("zoom", [1.0, 2.0, 3.5])
@pytest.mark.parametrize(
    "requested",
    [PanOffset(0, 0), PanOffset(-1e6, 0), PanOffset(0, -1e6), PanOffset(-1e6, -1e6), PanOffset(1e6, 1e6)],
)
def test_circle_is_fully_covered_at_pan_limits(size, zoom, requested):
    image = Image.new("RGBA", size, (255, 0, 0, 255))
    state = _state(image, container_width=80, zoom=zoom, offset=requested)

    crop = export_circle(state, image, outline_width=0)

    assert _transparent_inside_circle(crop) == []


def test_pan_limits_show_the_far_edges_of_the_image():
    image = _half_and_half(160, 80)

    left = export_circle(_state(image), image)
    right = export_circle(_state(image, offset=PanOffset(-1e6, 0)), image)

    # The mask is 40 pixels wide over an 80 pixel wide fitted image, so the
    # two extremes show only one colour each.
    assert left.getpixel((20, 20))[:3] == (255, 0, 0)
    assert left.getpixel((10, 20))[:3] == (255, 0, 0)
    assert right.getpixel((30, 20))[:3] == (0, 0, 255)
    assert right.getpixel((20, 20))[:3] == (0, 0, 255)
