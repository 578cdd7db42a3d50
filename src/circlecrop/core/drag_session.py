"""Pointer drag state machine feeding the pan clamp engine."""

from __future__ import annotations

import enum
from collections.abc import Callable

from .layout import ContainerMetrics
from .pan_clamp import PanClampEngine, PanOffset


class DragState(enum.Enum):
    """Lifecycle of one pointer gesture."""

    IDLE = "idle"
    DRAGGING = "dragging"


def to_container_local(
    position: tuple[float, float], container: ContainerMetrics
) -> tuple[float, float]:
    """Translate a page-space *position* into *container*-local coordinates."""

    return (
        float(position[0]) - float(container.origin_x),
        float(position[1]) - float(container.origin_y),
    )


class DragSession:
    """Translate pointer down/move/up events into clamped pan updates.

    Each move is measured from the previous move rather than from the point
    where the gesture started, so the accumulated pan depends on how the
    pointer travelled and not only on where it ended up.  A move that runs
    into a bound is absorbed by the clamp and is not "paid back" when the
    pointer turns around.

    Parameters
    ----------
    engine:
        The :class:`PanClampEngine` that owns the pan offset.
    container_provider:
        Callable returning the current :class:`ContainerMetrics`, used to map
        page coordinates into the container.
    """

    def __init__(
        self,
        engine: PanClampEngine,
        container_provider: Callable[[], ContainerMetrics],
    ) -> None:
        self._engine = engine
        self._container_provider = container_provider
        self._state = DragState.IDLE
        self._last_pointer_pos: tuple[float, float] | None = None

    @property
    def state(self) -> DragState:
        return self._state

    @property
    def is_dragging(self) -> bool:
        return self._state is DragState.DRAGGING

    @property
    def last_pointer_pos(self) -> tuple[float, float] | None:
        return self._last_pointer_pos

    def pointer_down(self, position: tuple[float, float]) -> None:
        self._last_pointer_pos = to_container_local(position, self._container_provider())
        self._state = DragState.DRAGGING

    def pointer_move(self, position: tuple[float, float]) -> PanOffset | None:
        """Apply the delta since the previous move; ``None`` when not dragging."""

        if self._state is not DragState.DRAGGING or self._last_pointer_pos is None:
            return None
        local = to_container_local(position, self._container_provider())
        last_x, last_y = self._last_pointer_pos
        offset = self._engine.apply_delta(local[0] - last_x, local[1] - last_y)
        self._last_pointer_pos = local
        return offset

    def pointer_up(self, position: tuple[float, float] | None = None) -> None:
        del position
        self._state = DragState.IDLE
        self._last_pointer_pos = None


__all__ = ["DragSession", "DragState", "to_container_local"]
