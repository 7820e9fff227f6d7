from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Tuple

from .hash_url import GRAPH_KEY, QUERY_KEY, HashURLCodec
from .object_state import ObjectState

if TYPE_CHECKING:
    from .dataset import Dataset

logger = logging.getLogger(__name__)

CURRENT_VIEW = "currentView"
READ_ONLY = "readOnly"
BACKEND = "backend"
URL = "url"

VIEW_PREFIX = "view-"


def view_key(view_id: str) -> str:
    return f"{VIEW_PREFIX}{view_id}"


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """Recursively merge override into a copy of base; override wins per key."""
    merged = copy.deepcopy(dict(base))
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


class CompositeState(ObjectState):
    """
    The single aggregated, serializable state of a MultiView session.

    Reserved keys:

    - query: mirror of the dataset's QueryState
    - view-<id>: mirror of each sub-view's own state
    - currentView: id of the active view (or None)
    - readOnly: run without editing affordances
    - backend / url: identify the dataset for restore()
    """

    @property
    def current_view(self) -> Optional[str]:
        return self.get(CURRENT_VIEW)

    @property
    def read_only(self) -> bool:
        return bool(self.get(READ_ONLY, False))

    def view_state(self, view_id: str) -> Any:
        return self.get(view_key(view_id))


class StateSync:
    """
    Upward propagation from upstream observables into CompositeState.

    Built once from an explicit list of (source, key) pairs. Each upstream
    change performs one silent write followed by exactly one manually
    emitted change on the composite state, for every source alike.
    """

    def __init__(self, state: CompositeState) -> None:
        self.state = state
        self._bindings: List[Tuple[ObjectState, str, Any]] = []

    def add(self, source: ObjectState, key: str) -> None:
        def propagate() -> None:
            self.state.set({key: source.to_json()}, silent=True)
            self.state.trigger_change()

        source.on_change(propagate)
        self._bindings.append((source, key, propagate))

    def seed(self, source: ObjectState, key: str) -> None:
        self.state.set({key: source.to_json()}, silent=True)

    @property
    def keys(self) -> List[str]:
        return [key for _, key, _ in self._bindings]

    def close(self) -> None:
        for source, _, handler in self._bindings:
            source.off_change(handler)
        self._bindings.clear()


def build_composite_state(
    dataset: Dataset,
    codec: HashURLCodec,
    initial_state: Optional[Mapping[str, Any]] = None,
) -> CompositeState:
    """
    Layered construction: defaults < URL-fragment overrides < initial_state.

    Nothing here subscribes to anything, so hydration cannot feed back.
    """
    defaults = {
        QUERY_KEY: dataset.query_state.to_json(),
        GRAPH_KEY: {},
        BACKEND: dataset.backend_type,
        URL: dataset.url,
        CURRENT_VIEW: None,
        READ_ONLY: False,
    }

    params = codec.parse()
    url_overrides = codec.decode_state(params, query_default=dataset.query_state.to_json)

    data = deep_merge(defaults, url_overrides)
    if initial_state:
        data = deep_merge(data, initial_state)
    if not isinstance(data[QUERY_KEY], Mapping):
        logger.warning("Ignoring non-object query state", extra={"type": type(data[QUERY_KEY]).__name__})
        data[QUERY_KEY] = dataset.query_state.to_json()

    logger.debug(
        "Composite state built",
        extra={"url_keys": sorted(params), "initial_keys": sorted(initial_state or {})},
    )
    return CompositeState(data)
