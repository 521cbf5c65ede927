from __future__ import annotations

import contextlib
import logging
import threading
from typing import Any, Callable, ContextManager, Dict, Hashable, List, Optional, Tuple, overload

from ..config import ERROR_POLICY_LOG, DispatcherConfig, load_dispatcher_config
from .types import (
    EventCallback,
    EventContext,
    EventKey,
    InertEventContext,
    KeyLike,
    ListenerEntry,
    ListenerOptions,
    T,
    key_name,
)

logger = logging.getLogger(__name__)

Unsubscribe = Callable[[], None]


class EventManager:
    """Synchronous, priority-ordered publish/subscribe dispatcher.

    Listeners for a key run in non-increasing priority order, FIFO among
    equal priorities. Each ``emit`` creates an :class:`EventContext` that
    listeners use to stop propagation or prevent the default callback.

    Dispatch iterates over a snapshot of the listener list, so listeners
    may call ``on``/``off``/``emit`` (including on the same key) while
    being dispatched. When ``config.thread_safe`` is set, registry access
    is serialized by a lock that is released before any callback runs.
    """

    def __init__(self, config: Optional[DispatcherConfig] = None) -> None:
        self.config = config or DispatcherConfig()
        self._listeners: Dict[Hashable, List[ListenerEntry[Any]]] = {}
        self._lock: ContextManager[Any] = (
            threading.RLock() if self.config.thread_safe else contextlib.nullcontext()
        )

    # ------------------------ Registration ------------------------
    @overload
    def on(
        self,
        key: EventKey[T],
        callback: EventCallback[T],
        options: Optional[ListenerOptions] = ...,
        *,
        priority: Optional[int] = ...,
        once: Optional[bool] = ...,
    ) -> Unsubscribe: ...

    @overload
    def on(
        self,
        key: Hashable,
        callback: EventCallback[Any],
        options: Optional[ListenerOptions] = ...,
        *,
        priority: Optional[int] = ...,
        once: Optional[bool] = ...,
    ) -> Unsubscribe: ...

    def on(self, key, callback, options=None, *, priority=None, once=None):
        """Register ``callback`` for ``key`` and return an unsubscribe function.

        ``priority``/``once`` keyword arguments override ``options``. The new
        entry is placed before the first entry of strictly lower priority.
        The returned function removes exactly this registration and is safe
        to call more than once.
        """
        opts = options or ListenerOptions()
        entry: ListenerEntry[Any] = ListenerEntry(
            callback=callback,
            priority=opts.priority if priority is None else priority,
            once=opts.once if once is None else once,
        )
        name = key_name(key)
        with self._lock:
            entries = self._listeners.setdefault(name, [])
            index = next((i for i, e in enumerate(entries) if e.priority < entry.priority), len(entries))
            entries.insert(index, entry)
        logger.debug(
            "Subscribed %s to '%s' (priority=%s, once=%s)", callback, name, entry.priority, entry.once
        )

        def unsubscribe() -> None:
            self._remove_entry(name, entry)

        return unsubscribe

    def once(self, key: KeyLike, callback: EventCallback[Any], priority: int = 0) -> Unsubscribe:
        """Shorthand for ``on(key, callback, priority=priority, once=True)``."""
        return self.on(key, callback, priority=priority, once=True)

    def off(self, key: KeyLike, callback: EventCallback[Any]) -> None:
        """Remove every registration of ``callback`` under ``key``."""
        name = key_name(key)
        with self._lock:
            entries = self._listeners.get(name)
            if not entries:
                return
            kept = [e for e in entries if e.callback != callback]
            removed = len(entries) - len(kept)
            if kept:
                self._listeners[name] = kept
            else:
                del self._listeners[name]
        if removed:
            logger.debug("Unsubscribed %s from '%s' (%d entries)", callback, name, removed)

    def _remove_entry(self, name: Hashable, entry: ListenerEntry[Any]) -> None:
        with self._lock:
            entries = self._listeners.get(name)
            if not entries:
                return
            for i, e in enumerate(entries):
                if e is entry:
                    del entries[i]
                    break
            else:
                return
            if not entries:
                del self._listeners[name]
        logger.debug("Removed listener %s from '%s'", entry.callback, name)

    def clear(self, key: Optional[KeyLike] = None) -> None:
        """Remove all listeners for ``key``, or for every key (useful in tests)."""
        with self._lock:
            if key is None:
                self._listeners.clear()
            else:
                self._listeners.pop(key_name(key), None)

    # ------------------------ Introspection ------------------------
    def listeners(self, key: KeyLike) -> Tuple[EventCallback[Any], ...]:
        """Callbacks registered for ``key`` in dispatch order."""
        with self._lock:
            return tuple(e.callback for e in self._listeners.get(key_name(key), ()))

    def listener_count(self, key: KeyLike) -> int:
        with self._lock:
            return len(self._listeners.get(key_name(key), ()))

    def has_listeners(self, key: KeyLike) -> bool:
        return self.listener_count(key) > 0

    # ------------------------ Dispatch ------------------------
    @overload
    def emit(
        self, key: EventKey[T], value: T, default_callback: Optional[EventCallback[T]] = ...
    ) -> EventContext: ...

    @overload
    def emit(
        self, key: Hashable, value: Any, default_callback: Optional[EventCallback[Any]] = ...
    ) -> EventContext: ...

    def emit(self, key, value, default_callback=None):
        """Dispatch ``value`` to the listeners of ``key``.

        Listeners are called as ``callback(value, context)``. Once-listeners
        run at most once, even across nested dispatches, and are removed
        right after their call, even if it raised. Unless a listener called
        ``prevent_default()``, ``default_callback(value, context)`` runs after
        the listeners. Returns the context; when there were no listeners its
        actions are no-ops and both flags stay False.
        """
        name = key_name(key)
        with self._lock:
            entries = list(self._listeners.get(name, ()))

        if not entries:
            ctx: EventContext = InertEventContext()
            logger.debug("Emitting '%s' with no listeners. Payload=%r", name, value)
        else:
            ctx = EventContext()
            logger.debug("Emitting '%s' to %d listeners. Payload=%r", name, len(entries), value)

        for entry in entries:
            if entry.once and not self._claim(entry):
                continue
            try:
                self._invoke(name, entry.callback, value, ctx)
            finally:
                if entry.once:
                    self._remove_entry(name, entry)
            if ctx.propagation_stopped:
                logger.debug("Propagation of '%s' stopped by %s", name, entry.callback)
                break

        if default_callback is not None:
            if ctx.default_prevented:
                logger.debug("Default callback for '%s' prevented", name)
            else:
                self._invoke(name, default_callback, value, ctx)
        return ctx

    def _claim(self, entry: ListenerEntry[Any]) -> bool:
        # a nested dispatch may already have run this once-entry
        with self._lock:
            if entry.fired:
                return False
            entry.fired = True
            return True

    def _invoke(self, name: Hashable, callback: EventCallback[Any], value: Any, ctx: EventContext) -> None:
        if self.config.error_policy != ERROR_POLICY_LOG:
            callback(value, ctx)
            return
        try:
            callback(value, ctx)
        except Exception:
            logger.exception("Error in listener %s for event '%s'", callback, name)


# Process-global default manager (optional use)
_DEFAULT_MANAGER: Optional[EventManager] = None
_DEFAULT_LOCK = threading.Lock()


def get_default_manager() -> EventManager:
    """Return a process-global EventManager, creating one if necessary."""
    global _DEFAULT_MANAGER
    with _DEFAULT_LOCK:
        if _DEFAULT_MANAGER is None:
            _DEFAULT_MANAGER = EventManager(load_dispatcher_config())
        return _DEFAULT_MANAGER


def reset_default_manager() -> None:
    """Drop the process-global manager; the next lookup builds a fresh one."""
    global _DEFAULT_MANAGER
    with _DEFAULT_LOCK:
        _DEFAULT_MANAGER = None


__all__ = ["EventManager", "Unsubscribe", "get_default_manager", "reset_default_manager"]
