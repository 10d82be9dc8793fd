"""Statically typed facade over :class:`NodeEventEmitter`.

Events are declared ahead of time together with the parameters their
listeners take, so a type checker can verify every ``on``, ``once`` and
``emit`` call::

    class ChatEvents:
        MESSAGE: Event[[str, int]] = Event("message")
        READY: Event[[]] = Event("ready")

    emitter = EventEmitter()
    emitter.on(ChatEvents.MESSAGE, lambda text, count: ...)  # typed str, int
    emitter.emit(ChatEvents.MESSAGE, "hello", 123)           # ok
    emitter.emit(ChatEvents.MESSAGE, "hello", "hi")          # type error
    emitter.emit(ChatEvents.MESSAGE, "hello")                # type error

Nothing is checked at runtime: every call is forwarded unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, List, Optional, ParamSpec, TypeVar

from .emitter import NodeEventEmitter
from .settings import EmitterSettings

P = ParamSpec("P")

_T = TypeVar("_T", bound="EventEmitter")


@dataclass(frozen=True)
class Event(Generic[P]):
    """Declaration of an event name and the parameters its listeners accept.

    Events with equal names are equal, so they address the same listeners.
    """

    name: str

    def __str__(self) -> str:
        return self.name


class EventEmitter:
    """Event emitter whose events and listener signatures are type checked."""

    def __init__(self, settings: Optional[EmitterSettings] = None) -> None:
        self._emitter = NodeEventEmitter(settings)

    def on(self: _T, event: Event[P], listener: Callable[P, Any]) -> _T:
        self._emitter.on(event, listener)
        return self

    def add_listener(self: _T, event: Event[P], listener: Callable[P, Any]) -> _T:
        self._emitter.add_listener(event, listener)
        return self

    def once(self: _T, event: Event[P], listener: Callable[P, Any]) -> _T:
        self._emitter.once(event, listener)
        return self

    def emit(self, event: Event[P], *args: P.args, **kwargs: P.kwargs) -> bool:
        return self._emitter.emit(event, *args, **kwargs)

    def off(self: _T, event: Event[P], listener: Callable[P, Any]) -> _T:
        self._emitter.off(event, listener)
        return self

    def remove_listener(self: _T, event: Event[P], listener: Callable[P, Any]) -> _T:
        self._emitter.remove_listener(event, listener)
        return self

    def remove_all_listeners(self: _T, event: Optional[Event[Any]] = None) -> _T:
        self._emitter.remove_all_listeners(event)
        return self

    def listeners(self, event: Event[P]) -> List[Callable[P, Any]]:
        return self._emitter.listeners(event)

    def raw_listeners(self, event: Event[P]) -> List[Callable[P, Any]]:
        return self._emitter.raw_listeners(event)

    def listener_count(self, event: Event[Any]) -> int:
        return self._emitter.listener_count(event)

    def event_names(self) -> List[Event[Any]]:
        return self._emitter.event_names()  # type: ignore[return-value]

    def set_max_listeners(self: _T, n: int) -> _T:
        self._emitter.set_max_listeners(n)
        return self

    def get_max_listeners(self) -> int:
        return self._emitter.get_max_listeners()

    addListener = add_listener
    removeListener = remove_listener
    removeAllListeners = remove_all_listeners
    rawListeners = raw_listeners
    listenerCount = listener_count
    eventNames = event_names
    setMaxListeners = set_max_listeners
    getMaxListeners = get_max_listeners
