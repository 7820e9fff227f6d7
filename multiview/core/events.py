"""
Synchronous, in-process event emitter.

Every observable object in the package (query state, view states, datasets,
views) owns one of these instead of relying on a UI toolkit's event system.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

Handler = Callable[..., None]


class EventEmitter:
    """
    Minimal bind/unbind/trigger emitter.

    - Handlers run synchronously, in subscription order, to completion.
    - Handler exceptions propagate to whoever triggered the event.
    - Triggering iterates over a copy, so handlers may unbind themselves.
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, List[Handler]] = {}

    def bind(self, event: str, handler: Handler) -> Handler:
        """
        Subscribe handler to event.
        Returns: the handler, so it can be passed back to unbind
        """
        self._handlers.setdefault(event, []).append(handler)
        return handler

    def unbind(self, event: str, handler: Optional[Handler] = None) -> bool:
        """Remove one handler (or every handler when None). Returns True if anything was removed."""
        handlers = self._handlers.get(event)
        if not handlers:
            return False

        if handler is None:
            del self._handlers[event]
            return True

        try:
            handlers.remove(handler)
        except ValueError:
            return False

        if not handlers:
            del self._handlers[event]
        return True

    def trigger(self, event: str, *args: Any) -> None:
        for handler in list(self._handlers.get(event, [])):
            handler(*args)
