from .signals import (
    EventAccessor,
    EventSignal,
    create_custom_event_accessor,
    create_custom_event_signal,
    create_event_accessor,
    create_event_signal,
)

__all__ = [
    "EventAccessor",
    "EventSignal",
    "create_custom_event_accessor",
    "create_custom_event_signal",
    "create_event_accessor",
    "create_event_signal",
]
