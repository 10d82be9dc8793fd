from __future__ import annotations

import functools
import logging
from dataclasses import dataclass
from threading import RLock
from typing import Any, Callable, Dict, List, Optional, Set, Tuple, TypeVar

from .keys import EventKey
from .settings import EmitterSettings, check_max_listeners

logger = logging.getLogger(__name__)

Listener = Callable[..., Any]

_E = TypeVar("_E", bound="NodeEventEmitter")


def _describe(listener: Listener) -> str:
    return getattr(listener, "__qualname__", None) or repr(listener)


@dataclass(frozen=True, eq=False)
class _ListenerEntry:
    """A registered listener and the callable emit actually invokes.

    ``target`` is ``listener`` itself, or a self-removing wrapper for
    ``once`` registrations. Entries compare by identity.
    """

    listener: Listener
    target: Listener


class NodeEventEmitter:
    """Synchronous event emitter without static typing of events.

    Listeners run in registration order on the caller's thread. ``emit``
    iterates a snapshot taken when it starts: listeners added meanwhile wait
    for the next emit, and listeners removed meanwhile still run this time.
    An exception raised by a listener propagates out of ``emit`` and the
    listeners after it are skipped.

    Example::

        emitter = NodeEventEmitter()
        emitter.on("login", lambda user: print("hello", user))
        emitter.emit("login", "alice")  # True
        emitter.emit("logout")          # False, nobody listens
    """

    def __init__(self, settings: Optional[EmitterSettings] = None) -> None:
        # Sequences are tuples, replaced on every change, so emit can iterate without copying.
        self._events: Dict[EventKey, Tuple[_ListenerEntry, ...]] = {}
        self._lock = RLock()
        self._max_listeners = (settings or EmitterSettings()).max_listeners
        self._leak_warned: Set[EventKey] = set()

    def _add_entry(self, event: EventKey, entry: _ListenerEntry) -> None:
        with self._lock:
            entries = self._events.get(event, ()) + (entry,)
            self._events[event] = entries
            logger.debug("Added listener %s to %r", _describe(entry.listener), event)
            self._check_leak(event, len(entries))

    def _check_leak(self, event: EventKey, count: int) -> None:
        if self._max_listeners <= 0 or count <= self._max_listeners or event in self._leak_warned:
            return
        self._leak_warned.add(event)
        logger.warning(
            "Possible listener leak: %d listeners added to %r, max is %d. "
            "Use set_max_listeners() to raise the limit.",
            count,
            event,
            self._max_listeners,
        )

    def _store(self, event: EventKey, entries: Tuple[_ListenerEntry, ...]) -> None:
        # Caller holds the lock. Empty sequences are dropped.
        if entries:
            self._events[event] = entries
        else:
            self._events.pop(event, None)
            self._leak_warned.discard(event)

    def _remove_entry(self, event: EventKey, entry: _ListenerEntry) -> None:
        with self._lock:
            entries = self._events.get(event)
            if entries is None:
                return
            self._store(event, tuple(e for e in entries if e is not entry))

    def on(self: _E, event: EventKey, listener: Listener) -> _E:
        """Register ``listener`` for ``event``. The same listener may be added repeatedly."""
        self._add_entry(event, _ListenerEntry(listener, listener))
        return self

    add_listener = on

    def once(self: _E, event: EventKey, listener: Listener) -> _E:
        """Register ``listener`` to run on the next emit of ``event`` only.

        The pending registration can be cancelled with ``off(event, listener)``.
        """
        fired = False

        @functools.wraps(listener)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            nonlocal fired
            # A re-entrant emit can hold this wrapper in two snapshots.
            if fired:
                return None
            fired = True
            self._remove_entry(event, entry)
            logger.debug("Once listener %s fired for %r", _describe(listener), event)
            return listener(*args, **kwargs)

        entry = _ListenerEntry(listener, wrapper)
        self._add_entry(event, entry)
        return self

    def emit(self, event: EventKey, *args: Any, **kwargs: Any) -> bool:
        """Call every listener of ``event`` with the given arguments.

        Returns:
            True if the event had listeners, False otherwise.
        """
        with self._lock:
            entries = self._events.get(event)
        if not entries:
            logger.debug("Emitting %r with no listeners", event)
            return False
        logger.debug("Emitting %r to %d listeners", event, len(entries))
        for index, entry in enumerate(entries):
            try:
                entry.target(*args, **kwargs)
            except Exception:
                logger.debug(
                    "Listener %s for %r raised; skipping %d remaining listeners",
                    _describe(entry.listener),
                    event,
                    len(entries) - index - 1,
                )
                raise
        return True

    def off(self: _E, event: EventKey, listener: Listener) -> _E:
        """Remove every registration of ``listener`` for ``event``, once-registrations included."""
        with self._lock:
            entries = self._events.get(event)
            if entries is None:
                return self
            kept = tuple(e for e in entries if e.listener != listener)
            if len(kept) != len(entries):
                logger.debug(
                    "Removed %d registration(s) of %s from %r",
                    len(entries) - len(kept),
                    _describe(listener),
                    event,
                )
            self._store(event, kept)
        return self

    def remove_listener(self: _E, event: EventKey, listener: Listener) -> _E:
        return self.off(event, listener)

    def remove_all_listeners(self: _E, event: Optional[EventKey] = None) -> _E:
        """Remove the listeners of ``event``, or of every event when omitted."""
        with self._lock:
            if event is None:
                self._events.clear()
                self._leak_warned.clear()
                logger.debug("Removed all listeners")
            else:
                self._store(event, ())
                logger.debug("Removed all listeners for %r", event)
        return self

    def listeners(self, event: EventKey) -> List[Listener]:
        """Return the listeners registered for ``event``, in invocation order."""
        with self._lock:
            entries = self._events.get(event, ())
        return [entry.listener for entry in entries]

    def raw_listeners(self, event: EventKey) -> List[Listener]:
        # Wrappers are never exposed, so this matches listeners().
        return self.listeners(event)

    def listener_count(self, event: EventKey) -> int:
        with self._lock:
            return len(self._events.get(event, ()))

    def event_names(self) -> List[EventKey]:
        """Return the events that currently have listeners, oldest first."""
        with self._lock:
            return list(self._events)

    def set_max_listeners(self: _E, n: int) -> _E:
        """Set the per-event count above which a possible leak is logged; 0 disables it."""
        self._max_listeners = check_max_listeners(n)
        return self

    def get_max_listeners(self) -> int:
        return self._max_listeners

    # camelCase names for callers written against the Node.js contract
    addListener = add_listener
    removeListener = remove_listener
    removeAllListeners = remove_all_listeners
    rawListeners = raw_listeners
    listenerCount = listener_count
    eventNames = event_names
    setMaxListeners = set_max_listeners
    getMaxListeners = get_max_listeners
