"""Schema helpers for the application settings file.

Only editor preferences live here.  The crop itself (zoom, pan, the loaded
image) is never written to disk.
"""

from __future__ import annotations

import os
from copy import deepcopy
from typing import Any

from jsonschema import Draft202012Validator, ValidationError

from ..config import (
    DEFAULT_EDITOR_WIDTH_FRACTION,
    EDITOR_WIDTH_FRACTION_RANGE,
    MASK_OUTLINE_WIDTH,
    MAX_ZOOM,
    MIN_ZOOM,
)

SETTINGS_SCHEMA: dict[str, Any] = {
    "$id": "circlecrop/settings.schema.json",
    "type": "object",
    "required": ["schema", "editor"],
    "properties": {
        "schema": {"const": "circlecrop/settings@1"},
        "editor": {
            "type": "object",
            "required": ["min_zoom", "max_zoom"],
            "properties": {
                "min_zoom": {"type": "number", "exclusiveMinimum": 0},
                "max_zoom": {"type": "number", "exclusiveMinimum": 0},
                "width_fraction": {
                    "type": "number",
                    "minimum": EDITOR_WIDTH_FRACTION_RANGE[0],
                    "maximum": EDITOR_WIDTH_FRACTION_RANGE[1],
                },
                "outline_width": {"type": "integer", "minimum": 0, "maximum": 64},
            },
            "additionalProperties": True,
        },
        "last_image_dir": {"type": ["string", "null"]},
    },
    "additionalProperties": True,
}

DEFAULT_SETTINGS: dict[str, Any] = {
    "schema": "circlecrop/settings@1",
    "editor": {
        "min_zoom": MIN_ZOOM,
        "max_zoom": MAX_ZOOM,
        "width_fraction": DEFAULT_EDITOR_WIDTH_FRACTION,
        "outline_width": MASK_OUTLINE_WIDTH,
    },
    "last_image_dir": None,
}

_validator = Draft202012Validator(SETTINGS_SCHEMA)


def _check_zoom_range(data: dict[str, Any]) -> None:
    editor = data.get("editor", {})
    low = editor.get("min_zoom")
    high = editor.get("max_zoom")
    if isinstance(low, (int, float)) and isinstance(high, (int, float)) and low > high:
        raise ValidationError(f"editor.min_zoom ({low}) exceeds editor.max_zoom ({high})")


def merge_with_defaults(data: dict[str, Any] | None) -> dict[str, Any]:
    """Merge *data* with :data:`DEFAULT_SETTINGS` and validate the result."""

    merged = deepcopy(DEFAULT_SETTINGS)
    if data:
        for key, value in data.items():
            if key == "editor" and isinstance(value, dict):
                target = merged.setdefault("editor", {})
                for sub_key, sub_value in value.items():
                    target[sub_key] = sub_value
                continue
            if key == "last_image_dir" and value not in {None, ""}:
                try:
                    merged[key] = os.fspath(value)
                except TypeError:
                    continue
                continue
            merged[key] = value
    validate_settings(merged)
    return merged


def validate_settings(data: dict[str, Any]) -> None:
    """Validate *data* against the settings schema."""

    _validator.validate(data)
    _check_zoom_range(data)


__all__ = ["DEFAULT_SETTINGS", "SETTINGS_SCHEMA", "merge_with_defaults", "validate_settings"]
