"""Tests for the contain-fit layout calculator."""

import math

import pytest

from circlecrop.core.layout import (
    EMPTY_LAYOUT,
    ContainerMetrics,
    ImageMetrics,
    aspect_ratio,
    compute_layout,
    contain_fit,
)


def _layout(container_width, image_w, image_h, zoom=1.0):
    return compute_layout(
        ContainerMetrics(width=container_width, height=123.0),
        ImageMetrics(natural_width=image_w, natural_height=image_h),
        zoom,
    )


class TestComputeLayout:
    def test_landscape_image_fills_width(self):
        layout = _layout(400, 800, 600)

        assert layout.fitted_width == pytest.approx(400)
        assert layout.fitted_height == pytest.approx(300)
        assert layout.scaled_width == pytest.approx(400)
        assert layout.scaled_height == pytest.approx(300)
        assert layout.mask_diameter == pytest.approx(300)

    def test_portrait_image_is_capped_by_width_on_both_axes(self):
        layout = _layout(400, 600, 800)

        assert layout.fitted_width == pytest.approx(300)
        assert layout.fitted_height == pytest.approx(400)
        assert layout.mask_diameter == pytest.approx(300)

    def test_square_image(self):
        layout = _layout(250, 1000, 1000)

        assert layout.fitted_width == pytest.approx(250)
        assert layout.fitted_height == pytest.approx(250)
        assert layout.mask_diameter == pytest.approx(250)

    def test_zoom_scales_image_but_not_mask(self):
        layout = _layout(400, 800, 600, zoom=2.0)

        assert layout.scaled_width == pytest.approx(800)
        assert layout.scaled_height == pytest.approx(600)
        assert layout.mask_diameter == pytest.approx(300)

    def test_container_height_is_ignored(self):
        short = compute_layout(ContainerMetrics(width=400, height=10), ImageMetrics(800, 600), 1.0)
        tall = compute_layout(ContainerMetrics(width=400, height=5000), ImageMetrics(800, 600), 1.0)

        assert short == tall

    def test_mask_fits_inside_fitted_rectangle(self):
        for width, height in [(1, 1000), (1000, 1), (640, 480), (3, 7)]:
            layout = _layout(320, width, height)
            assert layout.mask_diameter <= layout.fitted_width + 1e-9
            assert layout.mask_diameter <= layout.fitted_height + 1e-9
            assert layout.fitted_width <= 320 + 1e-9
            assert layout.fitted_height <= 320 + 1e-9

    def test_mask_center_is_stage_center(self):
        layout = _layout(400, 800, 600)

        assert layout.mask_center == (pytest.approx(200), pytest.approx(150))
        assert layout.mask_radius == pytest.approx(150)


class TestDegenerateInputs:
    @pytest.mark.parametrize(
        "container_width, image_w, image_h",
        [
            (0, 800, 600),
            (400, 0, 0),
            (400, 0, 600),
            (400, 800, 0),
            (-5, 800, 600),
            (float("nan"), 800, 600),
            (400, float("inf"), 600),
        ],
    )
    def test_degenerate_inputs_give_empty_layout(self, container_width, image_w, image_h):
        layout = _layout(container_width, image_w, image_h)

        assert layout == EMPTY_LAYOUT
        assert layout.is_empty

    def test_no_nan_leaks_into_layout(self):
        layout = _layout(400, 0, 0, zoom=3.0)

        for value in (
            layout.fitted_width,
            layout.fitted_height,
            layout.scaled_width,
            layout.scaled_height,
            layout.mask_diameter,
        ):
            assert math.isfinite(value)
            assert value == 0.0

    def test_empty_image_metrics(self):
        assert ImageMetrics().is_empty
        assert not ImageMetrics(natural_width=1, natural_height=1).is_empty


def test_aspect_ratio():
    assert aspect_ratio(ImageMetrics(800, 400)) == pytest.approx(2.0)
    assert aspect_ratio(ImageMetrics(0, 400)) == 0.0


def test_contain_fit_rejects_zero_ratio():
    assert contain_fit(400, 0.0) == (0.0, 0.0)
    assert contain_fit(400, 0.5) == (pytest.approx(200), pytest.approx(400))
