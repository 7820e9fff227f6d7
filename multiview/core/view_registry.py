from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterable, Iterator, List, Mapping, Optional, Union

if TYPE_CHECKING:
    from .composite_state import CompositeState
    from .dataset import Dataset

DEFAULT_VIEW_IDS = ("grid", "graph", "map", "timeline")


@dataclass(frozen=True)
class ViewEntry:
    """One participating sub-view: routing id, switcher label, view handle."""
    id: str
    label: str
    view: Any


class ViewRegistry:
    """
    Ordered registry of the sub-views participating in a session.

    Design Notes:
    - Stores view *instances* wrapped in ViewEntry, in the order the switcher shows them
    - Enforces invariants:
        * each entry 'id' is unique
        * each view exposes an 'element' and a 'bind' method
    - freeze() makes the set immutable for the session lifetime
    """

    def __init__(self, entries: Iterable[Union[ViewEntry, Mapping[str, Any]]] = ()):
        self._entries: List[ViewEntry] = []
        self._frozen = False
        for entry in entries:
            self.register(entry)

    def register(self, entry: Union[ViewEntry, Mapping[str, Any]]) -> ViewEntry:
        """
        Register a view entry (a ViewEntry or a {id, label, view} mapping)

        Raises:
            RuntimeError: if the registry is frozen
            TypeError: if the view does not expose 'element' and 'bind'
            ValueError: if an entry with same 'id' already exists
        """
        if self._frozen:
            raise RuntimeError("ViewRegistry is frozen")

        if not isinstance(entry, ViewEntry):
            entry = ViewEntry(id=entry["id"], label=entry.get("label") or entry["id"], view=entry["view"])

        view = entry.view
        if not hasattr(view, "element") or not callable(getattr(view, "bind", None)):
            raise TypeError(f"View '{entry.id}' must expose an 'element' and a 'bind' method")

        if entry.id in self:
            raise ValueError(f"View '{entry.id}' already registered")

        self._entries.append(entry)
        return entry

    def freeze(self) -> None:
        self._frozen = True

    def get(self, view_id: str) -> ViewEntry:
        """
        Raises:
            KeyError: if no view with the given id exists in the registry
        """
        for entry in self._entries:
            if entry.id == view_id:
                return entry
        raise KeyError(f"View '{view_id}' not found")

    def first(self) -> Optional[ViewEntry]:
        return self._entries[0] if self._entries else None

    def ids(self) -> List[str]:
        return [entry.id for entry in self._entries]

    def __contains__(self, view_id: object) -> bool:
        return any(entry.id == view_id for entry in self._entries)

    def __iter__(self) -> Iterator[ViewEntry]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)


def build_default_registry(dataset: Dataset, state: CompositeState) -> ViewRegistry:
    """Grid, Graph, Map and Timeline, each seeded from its 'view-<id>' slice."""
    from multiview.views import GraphView, GridView, MapView, TimelineView

    registry = ViewRegistry()
    for view_cls in (GridView, GraphView, MapView, TimelineView):
        view = view_cls(dataset, state=state.view_state(view_cls.id))
        registry.register(ViewEntry(id=view_cls.id, label=view_cls.label, view=view))
    return registry
