"""Observable single-value container with explicit listener registration."""

from __future__ import annotations

from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")

Listener = Callable[[T], None]


class ObservableValue(Generic[T]):
    """Holds one immutable value and notifies listeners on replacement.

    Values are only ever replaced whole; listeners receive the new value.
    """

    def __init__(self, initial: T) -> None:
        self._value = initial
        self._listeners: list[Listener] = []

    def get(self) -> T:
        return self._value

    def subscribe(self, listener: Listener, *, emit_current: bool = False) -> Callable[[], None]:
        """Register ``listener`` and return a callable that unregisters it."""
        self._listeners.append(listener)
        if emit_current:
            listener(self._value)
        return lambda: self.unsubscribe(listener)

    def unsubscribe(self, listener: Listener) -> bool:
        """Remove ``listener``; return ``False`` when it was not registered."""
        try:
            self._listeners.remove(listener)
        except ValueError:
            return False
        return True

    def set(self, value: T) -> None:
        self._value = value
        for listener in tuple(self._listeners):
            listener(value)

    def update(self, change: Callable[[T], T]) -> T:
        """Replace the value with ``change(current)`` and return the result."""
        value = change(self._value)
        self.set(value)
        return value


__all__ = ["Listener", "ObservableValue"]
