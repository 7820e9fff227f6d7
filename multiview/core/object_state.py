from __future__ import annotations

import copy
from typing import Any, Dict, Iterator, Mapping, Optional

from .events import EventEmitter, Handler

CHANGE = "change"


class ObjectState:
    """
    Observable key -> JSON value mapping.

    Used for the shared query state, every sub-view's own state, and (via
    CompositeState) the aggregated session state.

    Contract:
    - set() merges a partial mapping and emits exactly one 'change' event,
      unless silent=True, in which case nothing is emitted
    - 'change' carries no payload; observers re-read via get() / to_json()
    - values are deep-copied on the way in and on the way out of to_json()
    """

    def __init__(self, initial: Optional[Mapping[str, Any]] = None) -> None:
        self.events = EventEmitter()
        self._data: Dict[str, Any] = {}
        if initial:
            self._data.update(copy.deepcopy(dict(initial)))

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, partial: Mapping[str, Any], *, silent: bool = False) -> None:
        if not isinstance(partial, Mapping):
            raise TypeError(f"set() expects a mapping, got {type(partial).__name__}")

        self._data.update(copy.deepcopy(dict(partial)))
        if not silent:
            self.trigger_change()

    def to_json(self) -> Dict[str, Any]:
        return copy.deepcopy(self._data)

    def on_change(self, handler: Handler) -> Handler:
        return self.events.bind(CHANGE, handler)

    def off_change(self, handler: Handler) -> bool:
        return self.events.unbind(CHANGE, handler)

    def trigger_change(self) -> None:
        self.events.trigger(CHANGE)

    def keys(self):
        return self._data.keys()

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._data!r})"
