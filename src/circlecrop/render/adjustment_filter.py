"""NumPy vectorized colour adjustments for the crop preview and export.

Pixels travel as ``float32`` arrays of shape ``(height, width, 4)`` holding
straight (non-premultiplied) RGBA in ``[0.0, 1.0]``.  The adjustment pass
mirrors the fragment shader used by the on-screen preview:

1. gamma: ``rgb ** (1 / gamma)``
2. saturation: mix between the Rec. 709 luma and the colour
3. contrast: mix between mid grey and the result of step 2
4. per-channel red/green/blue gains
5. brightness multiplier
6. alpha multiplier

Fully transparent pixels are left untouched by steps 1 to 5.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from PIL import Image

from ..config import IDENTITY_COLOR_MATRIX
from ..core.adjustments import AdjustmentParams

_LUMA_WEIGHTS = np.array([0.2125, 0.7154, 0.0721], dtype=np.float32)


def _np_mix(a: np.ndarray | float, b: np.ndarray, t: float) -> np.ndarray:
    """Vectorized equivalent of GLSL's ``mix`` helper."""
    return a * (1.0 - t) + b * t


def _np_clamp01(arr: np.ndarray) -> np.ndarray:
    return np.clip(arr, 0.0, 1.0)


def image_to_array(image: Image.Image) -> np.ndarray:
    """Return *image* as a normalised straight-alpha RGBA array."""

    rgba = image if image.mode == "RGBA" else image.convert("RGBA")
    return np.asarray(rgba, dtype=np.float32) / 255.0


def array_to_image(pixels: np.ndarray) -> Image.Image:
    """Convert a normalised RGBA array back into an 8-bit Pillow image."""

    data = np.rint(_np_clamp01(pixels) * 255.0).astype(np.uint8)
    return Image.fromarray(data)


def apply_adjustments(pixels: np.ndarray, params: AdjustmentParams) -> np.ndarray:
    """Return a new array with *params* applied to *pixels*."""

    result = np.array(pixels, dtype=np.float32, copy=True)
    if params.is_identity():
        return result

    rgb = result[..., :3]
    alpha = result[..., 3]
    visible = alpha > 0.0

    gamma = float(params.gamma)
    # gamma == 0 pushes the exponent to infinity: everything below white goes black.
    exponent = np.inf if gamma <= 0.0 else 1.0 / gamma
    with np.errstate(over="ignore", invalid="ignore", divide="ignore"):
        adjusted = np.power(_np_clamp01(rgb), exponent)
    adjusted = np.nan_to_num(adjusted, nan=0.0, posinf=1.0, neginf=0.0)

    luma = (adjusted @ _LUMA_WEIGHTS)[..., np.newaxis]
    adjusted = _np_mix(luma, adjusted, float(params.saturation))
    adjusted = _np_mix(0.5, adjusted, float(params.contrast))

    gains = np.array([params.red, params.green, params.blue], dtype=np.float32)
    adjusted = adjusted * gains * float(params.brightness)

    rgb[visible] = _np_clamp01(adjusted)[visible]
    result[..., 3] = _np_clamp01(alpha * float(params.alpha))
    return result


def apply_color_matrix(
    pixels: np.ndarray,
    matrix: Sequence[float] = IDENTITY_COLOR_MATRIX,
) -> np.ndarray:
    """Apply a row-major 4x5 colour matrix to *pixels*.

    The fifth column is an additive offset in normalised units.
    """

    values = np.asarray(matrix, dtype=np.float32)
    if values.size != 20:
        raise ValueError(f"colour matrix needs 20 values, got {values.size}")
    grid = values.reshape(4, 5)
    if np.allclose(grid, np.asarray(IDENTITY_COLOR_MATRIX, dtype=np.float32).reshape(4, 5)):
        return np.array(pixels, dtype=np.float32, copy=True)
    transformed = pixels @ grid[:, :4].T + grid[:, 4]
    return _np_clamp01(transformed).astype(np.float32)


def adjust_image(
    image: Image.Image,
    params: AdjustmentParams,
    matrix: Sequence[float] = IDENTITY_COLOR_MATRIX,
) -> Image.Image:
    """Return a copy of *image* with the adjustment and colour matrix passes applied."""

    pixels = image_to_array(image)
    pixels = apply_adjustments(pixels, params)
    pixels = apply_color_matrix(pixels, matrix)
    return array_to_image(pixels)


__all__ = [
    "adjust_image",
    "apply_adjustments",
    "apply_color_matrix",
    "array_to_image",
    "image_to_array",
]
