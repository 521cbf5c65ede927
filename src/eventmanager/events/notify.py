from __future__ import annotations

import logging
from typing import Generic, Optional

from .manager import EventManager
from .types import EventContext, T, change_event_name

logger = logging.getLogger(__name__)


class ObservedField(Generic[T]):
    """A value holder that emits a change event on every assignment.

    The event is ``"<name>-changed"`` unless ``event_name`` is given, and is
    emitted on the injected ``manager`` after the value is stored. Without a
    manager the field simply stores values.

    Example:
        >>> events = EventManager()
        >>> count = ObservedField(events, "count", 0)
        >>> _ = events.on("count-changed", lambda v, e: print(v))
        >>> count.set(3)
        3
    """

    def __init__(
        self,
        manager: Optional[EventManager],
        name: str,
        initial: T,
        event_name: Optional[str] = None,
    ) -> None:
        self.manager = manager
        self.name = name
        self.event_name = event_name or change_event_name(name)
        self._value = initial

    def get(self) -> T:
        return self._value

    def set(self, value: T) -> Optional[EventContext]:
        """Store ``value`` and emit the change event; returns its context."""
        self._value = value
        if self.manager is None:
            logger.debug("Field '%s' set without an event manager", self.name)
            return None
        return self.manager.emit(self.event_name, value)

    @property
    def value(self) -> T:
        return self._value

    @value.setter
    def value(self, value: T) -> None:
        self.set(value)

    def __repr__(self) -> str:
        return f"ObservedField(name={self.name!r}, value={self._value!r}, event={self.event_name!r})"


__all__ = ["ObservedField"]
