"""Default configuration values for circlecrop."""

from __future__ import annotations

from typing import Final

# ---------------------------------------------------------------------------
# Zoom
# ---------------------------------------------------------------------------

# ``1.0`` means "fit": the image is never shown smaller than the contain-fit
# against the container width unless the settings lower the bound explicitly.
MIN_ZOOM: Final[float] = 1.0
MAX_ZOOM: Final[float] = 5.0
DEFAULT_ZOOM: Final[float] = 1.0
ZOOM_STEP: Final[float] = 0.1

# ---------------------------------------------------------------------------
# Colour adjustments
# ---------------------------------------------------------------------------

ADJUSTMENT_KEYS: Final[tuple[str, ...]] = (
    "gamma",
    "brightness",
    "saturation",
    "contrast",
    "red",
    "green",
    "blue",
    "alpha",
)
ADJUSTMENT_DEFAULT: Final[float] = 1.0
ADJUSTMENT_RANGE: Final[tuple[float, float]] = (0.0, 5.0)
ADJUSTMENT_STEP: Final[float] = 0.1

# Row-major 4x5 colour matrix applied after the adjustment pass.  The editor
# ships with the identity matrix so the pass is a no-op until a preset is set.
IDENTITY_COLOR_MATRIX: Final[tuple[float, ...]] = (
    1.0, 0.0, 0.0, 0.0, 0.0,
    0.0, 1.0, 0.0, 0.0, 0.0,
    0.0, 0.0, 1.0, 0.0, 0.0,
    0.0, 0.0, 0.0, 1.0, 0.0,
)

# ---------------------------------------------------------------------------
# Mask presentation
# ---------------------------------------------------------------------------

MASK_OUTLINE_WIDTH: Final[int] = 10
MASK_OUTLINE_COLOR: Final[str] = "#e8e8e8"

# ---------------------------------------------------------------------------
# Image loading
# ---------------------------------------------------------------------------

ACCEPTED_MIME_TYPES: Final[tuple[str, ...]] = (
    "image/png",
    "image/jpg",
    "image/jpeg",
    "image/gif",
    "image/webp",
)
ACCEPTED_SUFFIXES: Final[tuple[str, ...]] = (".png", ".jpg", ".jpeg", ".gif", ".webp")

# ---------------------------------------------------------------------------
# Editor window
# ---------------------------------------------------------------------------

# The editor occupies a fraction of the window width, driven by the "Width"
# slider under the editor.
EDITOR_WIDTH_FRACTION_RANGE: Final[tuple[float, float]] = (0.2, 1.0)
EDITOR_WIDTH_FRACTION_STEP: Final[float] = 0.1
DEFAULT_EDITOR_WIDTH_FRACTION: Final[float] = 1.0
EDITOR_BACKGROUND_COLOR: Final[str] = "#acacac"
EDITOR_FOREGROUND_COLOR: Final[str] = "white"
EDITOR_PADDING_PX: Final[int] = 27
EDITOR_CORNER_RADIUS_PX: Final[int] = 27

DROP_PROMPT_IDLE: Final[str] = "Drag 'n' drop some files here, or click to select files"
DROP_PROMPT_ACTIVE: Final[str] = "Drop the files here ..."
