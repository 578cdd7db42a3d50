"""Pan offset clamping against the circular mask.

The pan offset is the position of the scaled image's top-left corner relative
to the stage origin.  It may only move up and to the left (``<= 0``) and never
further than the amount by which the image overhangs the mask on that axis, so
the mask circle is always covered by image pixels.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from .layout import EMPTY_LAYOUT, ViewportLayout

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class PanOffset:
    """Position of the image's top-left corner in stage coordinates."""

    x: float = 0.0
    y: float = 0.0

    def translated(self, dx: float, dy: float) -> "PanOffset":
        return PanOffset(self.x + float(dx), self.y + float(dy))

    def as_tuple(self) -> tuple[float, float]:
        return self.x, self.y


ORIGIN = PanOffset()


@dataclass(frozen=True)
class PanBounds:
    """Admissible pan range; ``left``/``top`` are always ``0``."""

    left: float = 0.0
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0

    def contains(self, offset: PanOffset, tolerance: float = 1e-9) -> bool:
        return (
            -self.right - tolerance <= offset.x <= self.left + tolerance
            and -self.bottom - tolerance <= offset.y <= self.top + tolerance
        )


def compute_pan_bounds(layout: ViewportLayout) -> PanBounds:
    """Return the pan bounds for *layout*.

    ``abs`` keeps the bounds non-negative when the zoom drops below ``1`` and
    the image becomes smaller than the mask.
    """

    if layout.is_empty:
        return PanBounds()
    return PanBounds(
        right=abs(layout.scaled_width - layout.mask_diameter),
        bottom=abs(layout.scaled_height - layout.mask_diameter),
    )


def _clamp_axis(value: float, low: float, high: float) -> float:
    # Upper bound first, then the lower one: a collapsed range resolves to ``low``.
    return max(low, min(high, value))


def reclamp(layout: ViewportLayout, raw_offset: PanOffset) -> PanOffset:
    """Clamp *raw_offset* into the bounds of *layout*.

    Depends only on its arguments, so calling it again with its own result
    returns that result unchanged.
    """

    bounds = compute_pan_bounds(layout)
    x = float(raw_offset.x)
    y = float(raw_offset.y)
    # NaN has no position to clamp; pin it to the origin.
    if math.isnan(x) or math.isnan(y):
        x = y = 0.0
    return PanOffset(
        _clamp_axis(x, -bounds.right, bounds.left),
        _clamp_axis(y, -bounds.bottom, bounds.top),
    )


class PanClampEngine:
    """Own the pan offset and keep it inside the current bounds.

    Every writer goes through :meth:`apply_layout`, :meth:`apply_delta` or
    :meth:`reset`; each of them commits an offset that already satisfies the
    bounds of the layout it was given.
    """

    def __init__(self) -> None:
        self._offset: PanOffset = ORIGIN
        self._layout: ViewportLayout = EMPTY_LAYOUT

    @property
    def offset(self) -> PanOffset:
        return self._offset

    @property
    def layout(self) -> ViewportLayout:
        return self._layout

    def bounds(self) -> PanBounds:
        return compute_pan_bounds(self._layout)

    def apply_layout(self, layout: ViewportLayout) -> PanOffset:
        """Adopt *layout* and snap the existing offset into its bounds."""

        self._layout = layout
        return self._commit(reclamp(layout, self._offset))

    def apply_delta(self, dx: float, dy: float) -> PanOffset:
        """Move the offset by ``(dx, dy)`` and clamp against the current layout."""

        candidate = self._offset.translated(dx, dy)
        return self._commit(reclamp(self._layout, candidate))

    def reset(self, layout: ViewportLayout | None = None) -> PanOffset:
        """Return the offset to the origin, optionally adopting *layout* first."""

        if layout is not None:
            self._layout = layout
        return self._commit(reclamp(self._layout, ORIGIN))

    def _commit(self, offset: PanOffset) -> PanOffset:
        if offset != self._offset:
            bounds = self.bounds()
            _LOGGER.debug(
                "pan offset %s -> %s (right=%.2f, bottom=%.2f)",
                self._offset.as_tuple(),
                offset.as_tuple(),
                bounds.right,
                bounds.bottom,
            )
        self._offset = offset
        return offset


__all__ = [
    "ORIGIN",
    "PanBounds",
    "PanClampEngine",
    "PanOffset",
    "compute_pan_bounds",
    "reclamp",
]
