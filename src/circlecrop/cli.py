"""Typer-based CLI entry point."""

from __future__ import annotations

import functools
import json
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich import print
from rich.table import Table

from .config import MASK_OUTLINE_WIDTH, MAX_ZOOM, MIN_ZOOM
from .core.adjustments import AdjustmentParams
from .core.layout import ContainerMetrics, ImageMetrics, compute_layout
from .core.pan_clamp import PanClampEngine
from .core.viewport import ViewportInputs, ViewportState, recompute
from .errors import CircleCropError, ImageLoadError, RenderError
from .gui.utils.console_logger import ensure_console_logger
from .render.compositor import export_circle, render_stage
from .utils.image_loader import load_image

_LOGGER = logging.getLogger("circlecrop")

app = typer.Typer(help="Circular crop editor: layout inspection and off-screen rendering")


def _handle_errors(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (ImageLoadError, RenderError) as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(1) from exc
        except CircleCropError as exc:
            typer.echo(f"Unexpected error: {exc}", err=True)
            raise typer.Exit(1) from exc

    return wrapper


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging.")) -> None:
    """Circular crop editor."""

    ensure_console_logger(
        _LOGGER,
        "circlecrop-cli",
        level=logging.DEBUG if verbose else logging.WARNING,
    )


def _parse_adjustments(values: Optional[List[str]]) -> AdjustmentParams:
    params = AdjustmentParams()
    for item in values or []:
        key, sep, raw = item.partition("=")
        if not sep:
            raise typer.BadParameter(f"expected KEY=VALUE, got {item!r}", param_hint="--adjust")
        try:
            params = params.with_value(key.strip().lower(), float(raw))
        except KeyError as exc:
            raise typer.BadParameter(f"unknown adjustment {key!r}", param_hint="--adjust") from exc
        except ValueError as exc:
            raise typer.BadParameter(f"{raw!r} is not a number", param_hint="--adjust") from exc
    return params


def _build_state(
    container_width: float,
    image: ImageMetrics,
    zoom: float,
    pan_x: float,
    pan_y: float,
    adjustments: AdjustmentParams,
) -> ViewportState:
    """Run the editor pipeline once: fresh image, zoom, then a single pan."""

    inputs = ViewportInputs(
        container=ContainerMetrics(width=container_width),
        image=image,
        zoom=zoom,
        adjustments=adjustments,
    )
    engine = PanClampEngine()
    engine.reset(compute_layout(inputs.container, inputs.image, inputs.zoom))
    offset = engine.apply_delta(pan_x, pan_y)
    return recompute(inputs, offset)


@app.command()
@_handle_errors
def layout(
    container_width: float = typer.Option(..., "--container-width", "-w", help="Container width in pixels."),
    image_width: float = typer.Option(..., "--image-width", help="Natural image width."),
    image_height: float = typer.Option(..., "--image-height", help="Natural image height."),
    zoom: float = typer.Option(1.0, "--zoom", "-z", min=MIN_ZOOM, max=MAX_ZOOM),
    pan_x: float = typer.Option(0.0, "--pan-x", help="Horizontal drag distance."),
    pan_y: float = typer.Option(0.0, "--pan-y", help="Vertical drag distance."),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON."),
) -> None:
    """Print the layout, pan bounds and clamped offset for the given sizes."""

    state = _build_state(
        container_width,
        ImageMetrics(natural_width=image_width, natural_height=image_height),
        zoom,
        pan_x,
        pan_y,
        AdjustmentParams(),
    )
    if as_json:
        payload = state.as_dict()
        payload["bounds"] = {"right": state.bounds.right, "bottom": state.bounds.bottom}
        typer.echo(json.dumps(payload))
        return

    table = Table(title="Viewport layout")
    table.add_column("Field")
    table.add_column("Value", justify="right")
    rows = [
        ("fitted width", state.layout.fitted_width),
        ("fitted height", state.layout.fitted_height),
        ("scaled width", state.scaled_width),
        ("scaled height", state.scaled_height),
        ("mask diameter", state.mask_diameter),
        ("bound right", state.bounds.right),
        ("bound bottom", state.bounds.bottom),
        ("pan x", state.pan_offset.x),
        ("pan y", state.pan_offset.y),
    ]
    for name, value in rows:
        table.add_row(name, f"{value:.2f}")
    print(table)


@app.command()
@_handle_errors
def render(
    input_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Image to crop."),
    output_path: Path = typer.Argument(..., dir_okay=False, help="PNG file to write."),
    container_width: float = typer.Option(512.0, "--container-width", "-w", help="Container width in pixels."),
    zoom: float = typer.Option(1.0, "--zoom", "-z", min=MIN_ZOOM, max=MAX_ZOOM),
    pan_x: float = typer.Option(0.0, "--pan-x", help="Horizontal drag distance."),
    pan_y: float = typer.Option(0.0, "--pan-y", help="Vertical drag distance."),
    adjust: Optional[List[str]] = typer.Option(
        None, "--adjust", "-a", help="Adjustment as KEY=VALUE, e.g. gamma=1.4. Repeatable."
    ),
    outline: bool = typer.Option(False, "--outline/--no-outline", help="Draw the mask outline ring."),
    full_stage: bool = typer.Option(False, "--full-stage", help="Write the whole stage, not just the circle."),
) -> None:
    """Crop INPUT to the mask circle and write it to OUTPUT."""

    adjustments = _parse_adjustments(adjust)
    loaded = load_image(input_path)
    state = _build_state(container_width, loaded.metrics, zoom, pan_x, pan_y, adjustments)
    outline_width = MASK_OUTLINE_WIDTH if outline else 0
    if full_stage:
        result = render_stage(state, loaded.image, outline_width=outline_width)
    else:
        result = export_circle(state, loaded.image, outline_width=outline_width)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    try:
        result.save(output_path, format="PNG")
    except (OSError, ValueError) as exc:
        raise RenderError(f"Could not write {output_path}: {exc}") from exc
    print(f"[green]Wrote {result.width}x{result.height} crop to {output_path}")


if __name__ == "__main__":  # pragma: no cover - manual launch
    app()
