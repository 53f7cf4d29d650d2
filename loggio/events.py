"""Minimal publish/subscribe emitter used for the ingestion "data" event."""

import logging
import threading
from collections import defaultdict
from typing import Any, Callable

logger = logging.getLogger(__name__)

WILDCARD = "*"

Handler = Callable[..., Any]


class Emitter:
    """Named-event emitter.

    Handlers registered on a named event are called with the payload.
    Handlers registered on ``"*"`` are called with ``(event, payload)`` for
    every emitted event. Handlers run on the emitting thread, outside the lock,
    and a failing handler never prevents the remaining ones from running.
    """

    def __init__(self):
        self._handlers: dict[str, list[Handler]] = defaultdict(list)
        self._lock = threading.Lock()

    def on(self, event: str, handler: Handler) -> None:
        with self._lock:
            self._handlers[event].append(handler)

    def off(self, event: str, handler: Handler | None = None) -> None:
        """Remove *handler* from *event*, or every handler of *event* if omitted."""
        with self._lock:
            if event not in self._handlers:
                return
            if handler is None:
                del self._handlers[event]
                return
            handlers = self._handlers[event]
            if handler in handlers:
                handlers.remove(handler)

    def emit(self, event: str, payload: Any = None) -> None:
        with self._lock:
            handlers = list(self._handlers.get(event, ()))
            wildcards = list(self._handlers.get(WILDCARD, ()))

        for handler in handlers:
            self._safe_call(event, handler, payload)
        for handler in wildcards:
            self._safe_call(event, handler, event, payload)

    def _safe_call(self, event: str, handler: Handler, *args) -> None:
        try:
            handler(*args)
        except Exception:
            logger.exception("Listener %r failed for event '%s'", handler, event)
