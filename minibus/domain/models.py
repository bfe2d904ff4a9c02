"""Domain models for the handler registry."""

from __future__ import annotations

from collections.abc import Hashable, MutableMapping
from typing import Any, Callable

from pydantic import BaseModel

EventKey = Hashable

# Reserved key: handlers registered here receive every emitted event.
WILDCARD: EventKey = "*"

Handler = Callable[[Any], None]
WildcardHandler = Callable[[EventKey, Any], None]


class Registration(BaseModel):
    """A single handler binding stored under an event key.

    ``context`` identifies who registered the handler and is only used to
    match removals; it is never passed to ``callback``.
    """

    callback: Callable[..., Any]
    context: Any = None
    once: bool = False

    def matches(self, callback: Callable[..., Any], context: Any = None) -> bool:
        # Bound methods are recreated on every attribute access, so compare
        # callbacks by equality rather than identity. Contexts compare the
        # same way; plain objects fall back to identity.
        return self.callback == callback and self.context == context


HandlerMap = MutableMapping[EventKey, list[Registration]]
