from __future__ import annotations

import logging
from typing import Any, Callable, Hashable, Optional

from ..utils.equality import deep_equal
from .manager import EventManager, Unsubscribe
from .types import EventContext, EventKey, KeyLike, T, key_name

logger = logging.getLogger(__name__)


class _Modifier:
    """Listener state for one modifier registration.

    ``active`` is held while ``transform`` and the re-emission run, so the
    modifier ignores the dispatch it triggers itself.
    """

    def __init__(self, manager: EventManager, key: KeyLike, transform: Callable[[Any], Any]) -> None:
        self.manager = manager
        self.key = key
        self.transform = transform
        self.active = False

    def __call__(self, value: Any, event: EventContext) -> None:
        if self.active:
            return

        self.active = True
        try:
            modified = self.transform(value)
            if deep_equal(modified, value):
                return
            event.stop_propagation()
            event.prevent_default()
            logger.debug("Modifier on '%s' re-emitting %r (was %r)", key_name(self.key), modified, value)
            self.manager.emit(self.key, modified)
        finally:
            self.active = False


def add_modifier(
    manager: EventManager,
    key: KeyLike,
    transform: Callable[[Any], Any],
    priority: Optional[int] = None,
) -> Unsubscribe:
    """Add a high-priority listener that can replace an event's payload.

    ``transform`` receives the payload and returns a candidate replacement.
    If it differs (by :func:`deep_equal`) the current dispatch is stopped,
    its default callback prevented, and the replacement is emitted as a new
    dispatch on the same key. Equal results leave the dispatch untouched.

    ``transform`` must reach a fixed point. Modifiers or listeners that
    re-emit the same key with ever-changing values recurse without bound.

    Returns a function that removes the modifier.
    """
    if priority is None:
        priority = manager.config.modifier_priority
    return manager.on(key, _Modifier(manager, key, transform), priority=priority)


def add_event_modifier(
    manager: EventManager,
    key: EventKey[T],
    transform: Callable[[T], T],
    priority: Optional[int] = None,
) -> Unsubscribe:
    """Typed variant of :func:`add_modifier` for an :class:`EventKey`."""
    return add_modifier(manager, key, transform, priority)


def add_custom_event_modifier(
    manager: EventManager,
    key: Hashable,
    transform: Callable[[Any], Any],
    priority: Optional[int] = None,
) -> Unsubscribe:
    """Variant of :func:`add_modifier` for untyped/custom event keys."""
    return add_modifier(manager, key, transform, priority)


__all__ = ["add_custom_event_modifier", "add_event_modifier", "add_modifier"]
