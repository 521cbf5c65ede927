"""
eventmanager package root.

An in-process, typed publish/subscribe dispatcher with priority ordering,
cooperative propagation control and payload modifiers. Reactive cells and
observed fields are thin consumers of the core in :mod:`eventmanager.events`.
"""

from .config import DispatcherConfig, load_dispatcher_config
from .events import (
    EventContext,
    EventKey,
    EventManager,
    ListenerOptions,
    ObservedField,
    add_custom_event_modifier,
    add_event_modifier,
    add_modifier,
    get_default_manager,
)
from .exceptions import ConfigError, EventManagerError
from .utils import deep_equal

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "DispatcherConfig",
    "EventContext",
    "EventKey",
    "EventManager",
    "EventManagerError",
    "ListenerOptions",
    "ObservedField",
    "add_custom_event_modifier",
    "add_event_modifier",
    "add_modifier",
    "deep_equal",
    "get_default_manager",
    "load_dispatcher_config",
]
