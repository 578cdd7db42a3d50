"""Colour adjustment parameters passed through to the renderer."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass, fields, replace

from ..config import ADJUSTMENT_DEFAULT, ADJUSTMENT_KEYS


@dataclass(frozen=True)
class AdjustmentParams:
    """The eight adjustment sliders.

    ``1.0`` is neutral for every parameter.  Values are stored exactly as the
    control panel reports them; range enforcement belongs to the panel.
    """

    gamma: float = ADJUSTMENT_DEFAULT
    brightness: float = ADJUSTMENT_DEFAULT
    saturation: float = ADJUSTMENT_DEFAULT
    contrast: float = ADJUSTMENT_DEFAULT
    red: float = ADJUSTMENT_DEFAULT
    green: float = ADJUSTMENT_DEFAULT
    blue: float = ADJUSTMENT_DEFAULT
    alpha: float = ADJUSTMENT_DEFAULT

    @classmethod
    def from_mapping(cls, values: Mapping[str, float]) -> "AdjustmentParams":
        """Build parameters from *values*, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{key: float(value) for key, value in values.items() if key in known})

    def as_mapping(self) -> dict[str, float]:
        return {key: float(value) for key, value in asdict(self).items()}

    def with_value(self, key: str, value: float) -> "AdjustmentParams":
        if key not in ADJUSTMENT_KEYS:
            raise KeyError(key)
        return replace(self, **{key: float(value)})

    def is_identity(self) -> bool:
        return all(abs(value - ADJUSTMENT_DEFAULT) < 1e-9 for value in self.as_mapping().values())


__all__ = ["AdjustmentParams"]
