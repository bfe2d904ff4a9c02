"""Synchronous in-process event emitter."""

from __future__ import annotations

import logging
from typing import Any

from minibus.domain.models import (
    WILDCARD,
    EventKey,
    Handler,
    HandlerMap,
    Registration,
    WildcardHandler,
)

logger = logging.getLogger(__name__)


class Emitter:
    """Publish/subscribe emitter keyed by event type.

    Handlers are called synchronously in registration order. Handlers
    registered under ``WILDCARD`` run after the type-specific ones and
    receive ``(event_type, payload)``. Exceptions raised by a handler
    bubble up to the caller of :meth:`emit` and stop the dispatch.

    ``all`` is the live registry, not a copy: callers may inspect it or
    write registrations into it directly.
    """

    def __init__(self, handler_map: HandlerMap | None = None) -> None:
        # An empty mapping passed in is still shared with the caller.
        self.all: HandlerMap = handler_map if handler_map is not None else {}

    def on(
        self,
        event_type: EventKey,
        callback: Handler | WildcardHandler,
        context: Any = None,
        once: bool = False,
    ) -> None:
        """Register *callback* for *event_type* (``WILDCARD`` for all events)."""
        registration = Registration(callback=callback, context=context, once=once)
        handlers = self.all.get(event_type)
        if handlers is None:
            self.all[event_type] = [registration]
        else:
            handlers.append(registration)
        logger.debug("Registered %r for %r (once=%s)", callback, event_type, once)

    def off(
        self,
        event_type: EventKey,
        callback: Handler | WildcardHandler | None = None,
        context: Any = None,
    ) -> None:
        """Remove a handler for *event_type*.

        Without *callback* every handler for the type is dropped and the key
        is left mapped to an empty list. With *callback* only the first
        registration matching both *callback* and *context* is removed; no
        match is a no-op.
        """
        if callback is None:
            self.all[event_type] = []
            logger.debug("Cleared handlers for %r", event_type)
            return

        handlers = self.all.get(event_type)
        if not handlers:
            return
        for index, registration in enumerate(handlers):
            if registration.matches(callback, context):
                del handlers[index]
                logger.debug("Removed %r from %r", callback, event_type)
                return

    def emit(self, event_type: EventKey, payload: Any = None) -> None:
        """Invoke every handler for *event_type*, then the wildcard handlers."""
        if event_type == WILDCARD:
            logger.debug("Ignoring emit of the wildcard key %r", WILDCARD)
            return

        self._dispatch(event_type, (payload,))
        self._dispatch(WILDCARD, (event_type, payload))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _dispatch(self, key: EventKey, args: tuple[Any, ...]) -> None:
        # Iterate a snapshot so handlers may call on/off/emit re-entrantly.
        # Registrations removed from the live list before their turn are
        # skipped; ones added to this key during the pass wait for the next
        # emit. The wildcard snapshot is taken after the type pass, so
        # wildcard handlers added by type handlers do run in the same emit.
        snapshot = list(self.all.get(key) or ())
        for registration in snapshot:
            if not self._is_live(key, registration):
                continue
            registration.callback(*args)
            if registration.once:
                self.off(key, registration.callback, registration.context)

    def _is_live(self, key: EventKey, registration: Registration) -> bool:
        # Linear scan of the live list per call: dispatch is O(n^2) per key.
        return any(item is registration for item in self.all.get(key) or ())


def create_emitter(handler_map: HandlerMap | None = None) -> Emitter:
    """Return an Emitter, optionally backed by a pre-built *handler_map*."""
    return Emitter(handler_map)
