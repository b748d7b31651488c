"""Change notifications between the core and whatever presents it."""

import sys
from typing import Callable

CARD_UPDATED = "memmaster:card-updated"
CARD_CREATED = "memmaster:card-created"
CARD_DELETED = "memmaster:card-deleted"
SETTINGS_UPDATED = "memmaster:settings-updated"

EVENT_KINDS = (CARD_UPDATED, CARD_CREATED, CARD_DELETED, SETTINGS_UPDATED)


class EventBus:
    """In-process publish/subscribe keyed by event kind.

    A failing handler prints a warning and does not stop the others.
    """

    def __init__(self):
        self._handlers: dict[str, list[Callable]] = {}

    def on(self, kind: str, handler: Callable) -> Callable:
        if kind not in EVENT_KINDS:
            raise ValueError(f"Unknown event kind: {kind}")
        self._handlers.setdefault(kind, []).append(handler)
        return handler

    def off(self, kind: str, handler: Callable):
        handlers = self._handlers.get(kind, [])
        if handler in handlers:
            handlers.remove(handler)

    def trigger(self, kind: str, *args):
        for handler in list(self._handlers.get(kind, [])):
            try:
                handler(*args)
            except Exception as e:
                name = getattr(handler, "__name__", repr(handler))
                print(f"Warning: handler {name} failed on {kind}: {e}", file=sys.stderr)
