from .manager import EventManager, Unsubscribe, get_default_manager, reset_default_manager
from .modifier import add_custom_event_modifier, add_event_modifier, add_modifier
from .notify import ObservedField
from .types import (
    EventCallback,
    EventContext,
    EventKey,
    InertEventContext,
    ListenerEntry,
    ListenerOptions,
    change_event_name,
    key_name,
)

__all__ = [
    "EventCallback",
    "EventContext",
    "EventKey",
    "EventManager",
    "InertEventContext",
    "ListenerEntry",
    "ListenerOptions",
    "ObservedField",
    "Unsubscribe",
    "add_custom_event_modifier",
    "add_event_modifier",
    "add_modifier",
    "change_event_name",
    "get_default_manager",
    "key_name",
    "reset_default_manager",
]
