from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Hashable, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class EventKey(Generic[T]):
    """Typed name of an event channel.

    The payload type exists for type checkers only; at runtime a key is
    just its ``name``, so ``EventKey("count")`` and ``"count"`` address the
    same channel.
    """

    name: str

    @classmethod
    def changed(cls, field_name: str) -> "EventKey[Any]":
        """Key of the change event emitted for ``field_name``."""
        return cls(change_event_name(field_name))

    def __str__(self) -> str:
        return self.name


KeyLike = Union[EventKey[Any], Hashable]


def key_name(key: KeyLike) -> Hashable:
    """Normalize a typed or custom key to the registry key."""
    if isinstance(key, EventKey):
        return key.name
    return key


def change_event_name(field_name: str) -> str:
    return f"{field_name}-changed"


@dataclass(frozen=True)
class ListenerOptions:
    """Options for registering a listener.

    Higher ``priority`` runs first; ``once`` listeners are removed after
    their first call.
    """

    priority: int = 0
    once: bool = False


class EventContext:
    """Per-dispatch state shared by every listener of one ``emit`` call."""

    __slots__ = ("propagation_stopped", "default_prevented")

    def __init__(self) -> None:
        self.propagation_stopped = False
        self.default_prevented = False

    def stop_propagation(self) -> None:
        """Skip the remaining listeners of this dispatch."""
        self.propagation_stopped = True

    def prevent_default(self) -> None:
        """Skip the default callback of this dispatch."""
        self.default_prevented = True

    def __repr__(self) -> str:
        return (
            f"EventContext(propagation_stopped={self.propagation_stopped}, "
            f"default_prevented={self.default_prevented})"
        )


class InertEventContext(EventContext):
    """Context of a dispatch with no listeners; its actions do nothing."""

    __slots__ = ()

    def stop_propagation(self) -> None:
        pass

    def prevent_default(self) -> None:
        pass


EventCallback = Callable[[T, EventContext], Any]


@dataclass(eq=False)
class ListenerEntry(Generic[T]):
    """A registered callback. Entries compare by identity."""

    callback: EventCallback[T]
    priority: int = 0
    once: bool = False
    fired: bool = field(default=False, repr=False)


__all__ = [
    "EventCallback",
    "EventContext",
    "InertEventContext",
    "EventKey",
    "KeyLike",
    "ListenerEntry",
    "ListenerOptions",
    "change_event_name",
    "key_name",
]
