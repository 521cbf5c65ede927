"""Observable cells that mirror the latest payload of an event.

These adapters are pure consumers of :class:`EventManager`: a signal
subscribes to one key and keeps the last value it saw, an accessor can
also write back through the same channel.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Generic, Hashable, List, Optional

from ..events.manager import EventManager
from ..events.types import EventContext, EventKey, KeyLike, T, key_name
from ..utils.equality import deep_equal

logger = logging.getLogger(__name__)

Observer = Callable[[Any], None]


class EventSignal(Generic[T]):
    """Read-only cell holding the latest payload emitted on ``key``.

    Observers registered with :meth:`subscribe` are called with the new value
    whenever it changes. Call :meth:`close` (or use the signal as a context
    manager) to stop listening.
    """

    def __init__(
        self,
        manager: EventManager,
        key: KeyLike,
        default: Optional[T] = None,
        priority: Optional[int] = None,
    ) -> None:
        self.manager = manager
        self.key = key
        self._value: Optional[T] = default
        self._observers: List[Observer] = []
        self._off: Optional[Callable[[], None]] = manager.on(key, self._on_event, priority=priority)

    def _on_event(self, value: T, event: EventContext) -> None:
        self._update(value)

    def _update(self, value: T) -> None:
        if deep_equal(self._value, value):
            self._value = value
            return
        self._value = value
        for observer in list(self._observers):
            observer(value)

    def get(self) -> Optional[T]:
        return self._value

    __call__ = get

    @property
    def value(self) -> Optional[T]:
        return self._value

    @property
    def closed(self) -> bool:
        return self._off is None

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Call ``observer(value)`` on every change; returns an unsubscribe function."""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def close(self) -> None:
        """Stop listening to the event. Safe to call more than once."""
        if self._off is not None:
            self._off()
            self._off = None
            logger.debug("Closed signal for '%s'", key_name(self.key))

    def __enter__(self) -> "EventSignal[T]":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()


class EventAccessor(EventSignal[T]):
    """Signal that can also publish a value through its event.

    :meth:`set` updates the local value first, then emits it. The echo of
    that emission does not re-notify observers. When a modifier on the same
    key rewrites the value, observers see the value passed to ``set`` first
    and then the rewritten one (e.g. ``[15, 10]`` for a ``min(v, 10)`` clamp).
    """

    def set(self, value: T) -> EventContext:
        self._update(value)
        return self.manager.emit(self.key, value)

    @property
    def value(self) -> Optional[T]:
        return self._value

    @value.setter
    def value(self, value: T) -> None:
        self.set(value)


def create_event_signal(
    manager: EventManager, key: EventKey[T], default: Optional[T] = None, priority: Optional[int] = None
) -> EventSignal[T]:
    """Create a signal bound to a typed event key."""
    return EventSignal(manager, key, default, priority)


def create_custom_event_signal(
    manager: EventManager, key: Hashable, default: Any = None, priority: Optional[int] = None
) -> EventSignal[Any]:
    """Create a signal bound to a custom (untyped) event key."""
    return EventSignal(manager, key, default, priority)


def create_event_accessor(
    manager: EventManager, key: EventKey[T], default: Optional[T] = None, priority: Optional[int] = None
) -> EventAccessor[T]:
    """Create an accessor bound to a typed event key."""
    return EventAccessor(manager, key, default, priority)


def create_custom_event_accessor(
    manager: EventManager, key: Hashable, default: Any = None, priority: Optional[int] = None
) -> EventAccessor[Any]:
    """Create an accessor bound to a custom (untyped) event key."""
    return EventAccessor(manager, key, default, priority)


__all__ = [
    "EventAccessor",
    "EventSignal",
    "create_custom_event_accessor",
    "create_custom_event_signal",
    "create_event_accessor",
    "create_event_signal",
]
