"""SPA events and a small synchronous emitter.

Listeners run in registration order on the caller's stack, the same way
browser event callbacks run to completion on the event loop.
"""

import logging
from collections.abc import Callable
from enum import StrEnum
from typing import Any

logger = logging.getLogger("folio.spa")

Listener = Callable[..., Any]


class Event(StrEnum):
    """Events emitted by the routing core and the renderer."""

    # Initial content rendered (fired once per session)
    READY = "ready"
    # A page (api, content or 404 view) was rendered
    RENDER = "render"
    # A route is being applied; payload is the route or None for 404
    ROUTE = "route"
    # Route changed or re-navigated (e.g. hash change within the same route)
    NAVIGATE = "navigate"


class EventEmitter:
    """Register listeners per event and trigger them.

    Usage::

        emitter = EventEmitter()
        emitter.on(Event.NAVIGATE, lambda route: print(route))
        emitter.emit(Event.NAVIGATE, route)
    """

    __slots__ = ("_listeners", "_once")

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = {}
        self._once: set[tuple[str, int]] = set()

    def on(self, event: str, listener: Listener) -> Listener:
        """Add *listener* for *event*. Duplicates are not added.

        Returns the listener so this can be used as a decorator.
        """
        listeners = self._listeners.setdefault(str(event), [])
        if listener not in listeners:
            listeners.append(listener)
        return listener

    def once(self, event: str, listener: Listener) -> Listener:
        """Add *listener* to be removed after its first call."""
        self.on(event, listener)
        self._once.add((str(event), id(listener)))
        return listener

    def off(self, event: str, listener: Listener | None = None) -> None:
        """Remove *listener*, or every listener of *event* when omitted."""
        key = str(event)
        if listener is None:
            for fn in self._listeners.pop(key, []):
                self._once.discard((key, id(fn)))
            return
        listeners = self._listeners.get(key, [])
        if listener in listeners:
            listeners.remove(listener)
        self._once.discard((key, id(listener)))

    def emit(self, event: str, *args: Any) -> None:
        """Call every listener of *event* with *args*."""
        key = str(event)
        logger.debug("Event: %s %s", key, args[0] if args else "")
        for listener in list(self._listeners.get(key, ())):
            if (key, id(listener)) in self._once:
                self.off(key, listener)
            listener(*args)

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(str(event), ()))
