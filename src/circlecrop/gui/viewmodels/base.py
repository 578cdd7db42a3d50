"""BaseViewModel: pure Python, no Qt dependency.

Tracks the bus subscriptions and property bindings a ViewModel creates so
that ``dispose()`` can tear all of them down at once.
"""

from __future__ import annotations

from typing import Callable, Type

from ...events.bus import EventBus, Subscription
from .signal import Signal


class BaseViewModel:
    """ViewModel base class: pure Python, no Qt dependency."""

    def __init__(self) -> None:
        self._subscriptions: list[Subscription] = []
        self._connections: list[tuple[Signal, Callable]] = []

    def subscribe_event(
        self,
        event_bus: EventBus,
        event_type: Type,
        handler: Callable,
    ) -> Subscription:
        """Subscribe to an event type and track the subscription."""
        sub = event_bus.subscribe(event_type, handler)
        self._subscriptions.append(sub)
        return sub

    def bind(self, signal: Signal, handler: Callable) -> None:
        """Connect *handler* to *signal* and remember the pair for ``dispose``."""
        signal.connect(handler)
        self._connections.append((signal, handler))

    def dispose(self) -> None:
        """Cancel all tracked event subscriptions and property bindings."""
        for sub in self._subscriptions:
            sub.cancel()
        self._subscriptions.clear()
        for signal, handler in self._connections:
            try:
                signal.disconnect(handler)
            except ValueError:
                continue
        self._connections.clear()
