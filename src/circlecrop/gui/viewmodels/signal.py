"""Pure Python signal system, no Qt dependency.

Provides ``Signal`` for observer-pattern callbacks and ``ObservableProperty``
for data-binding in ViewModels.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Callable, Iterator

_logger = logging.getLogger(__name__)


class Signal:
    """Pure Python signal, does not depend on Qt.

    Handlers run synchronously in connection order.  Exceptions raised by
    individual handlers are caught and logged so that one failing handler does
    not prevent subsequent handlers from executing (same semantics as
    ``EventBus``).
    """

    def __init__(self) -> None:
        self._handlers: list[Callable] = []
        self._blocked = False

    def connect(self, handler: Callable) -> None:
        if handler not in self._handlers:
            self._handlers.append(handler)

    def disconnect(self, handler: Callable) -> None:
        self._handlers.remove(handler)

    def emit(self, *args: Any, **kwargs: Any) -> None:
        if self._blocked:
            return
        for handler in list(self._handlers):
            try:
                handler(*args, **kwargs)
            except Exception as exc:
                _logger.error("Signal handler %r failed: %s", handler, exc)

    @contextmanager
    def blocked(self) -> Iterator[None]:
        """Suppress emissions for the duration of the ``with`` block."""
        previous = self._blocked
        self._blocked = True
        try:
            yield
        finally:
            self._blocked = previous

    @property
    def handler_count(self) -> int:
        return len(self._handlers)


class ObservableProperty:
    """Observable property, the ViewModel data-binding foundation.

    Emits ``changed(new_value, old_value)`` whenever the value is set to
    something that compares unequal to the current one.
    """

    def __init__(self, initial_value: Any = None) -> None:
        self._value = initial_value
        self.changed = Signal()

    @property
    def value(self) -> Any:
        return self._value

    @value.setter
    def value(self, new_value: Any) -> None:
        if self._value != new_value:
            old_value = self._value
            self._value = new_value
            self.changed.emit(new_value, old_value)
