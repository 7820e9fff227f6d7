"""
MultiView: coordinates several sub-views around one dataset.

Usage:

    explorer = MultiView(
        model=dataset,              # multiview.core.Dataset (required)
        element=Element(),          # attachable surface (required)
        views=[                     # optional, defaults to grid/graph/map/timeline
            {"id": "grid", "label": "Grid", "view": GridView(dataset)},
            {"id": "graph", "label": "Graph", "view": GraphView(dataset)},
        ],
        state={                     # optional composite state overrides
            "query": {...},
            "view-graph": {...},
            "currentView": "graph",
            "readOnly": False,
        },
    )

The set of views itself is not serialized: restore() expects the default
views to be fine, or the caller to pass the same views again.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future
from typing import Any, Iterable, Mapping, Optional, Union

from .composite_state import READ_ONLY, CompositeState, StateSync, build_composite_state, view_key
from .dataset import Dataset
from .element import Element
from .exceptions import ConfigError
from .hash_url import HashURLCodec, Location
from .navigation import NavigationController
from .notifications import DEFAULT_DISPLAY_SECONDS, Category, Notification, NotificationCenter
from .scheduler import PollingScheduler, Scheduler
from .view_registry import ViewEntry, ViewRegistry, build_default_registry

logger = logging.getLogger(__name__)

READ_ONLY_CLASS = "read-only"
MENU_ACTIONS = ("filters", "facets")

ViewSpec = Union[ViewEntry, Mapping[str, Any]]


class MultiView:
    """
    Owns the composite state, view registry, navigation and notifications,
    and wires them together.

    Construction order matters:
    1. composite state (defaults < URL fragment < state argument)
    2. views (given or default)
    3. render (attach view elements, build the switcher)
    4. upward state subscriptions and flash bindings
    5. read-only flag, initial view
    6. dataset query lifecycle -> notifications, then fetch + first query
    """

    def __init__(
        self,
        model: Optional[Dataset],
        element: Optional[Element],
        views: Optional[Iterable[ViewSpec]] = None,
        state: Optional[Mapping[str, Any]] = None,
        *,
        location: Optional[Location] = None,
        scheduler: Optional[Scheduler] = None,
        display_seconds: float = DEFAULT_DISPLAY_SECONDS,
    ) -> None:
        if model is None:
            raise ConfigError("MultiView requires a 'model' (Dataset)")
        if element is None:
            raise ConfigError("MultiView requires an 'element' to attach to")

        self.model = model
        self.element = element
        self.codec = HashURLCodec(location)
        self.state: CompositeState = build_composite_state(model, self.codec, state)

        if views is not None:
            self.registry = ViewRegistry(views)
        else:
            self.registry = build_default_registry(model, self.state)
        self.registry.freeze()

        self.notifications = NotificationCenter(scheduler or PollingScheduler(), display_seconds)
        self.navigation = NavigationController(self.registry, self.state)
        self.sync = StateSync(self.state)

        self.render()
        self._bind_state_changes()
        self._bind_flash_notifications()

        if self.state.read_only:
            self.set_read_only()
        self.navigation.activate_initial()

        self.notifications.bind_dataset(model, on_done=self._update_doc_count)
        self._fetch()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def render(self) -> None:
        self.element.add_class("multiview")
        self.alerts_element = self.element.append(Element("div", {"alert-messages"}))
        self.header_element = self.element.append(Element("div", {"header"}))
        self.doc_count_element = self.header_element.append(Element("span", {"doc-count"}))

        self.filter_editor = self.header_element.append(Element("div", {"filter-editor"}))
        self.facet_viewer = self.header_element.append(Element("div", {"facet-viewer"}))
        self.filter_editor.hide()
        self.facet_viewer.hide()

        self.view_container = self.element.append(Element("div", {"data-view-container"}))
        for entry in self.registry:
            self.view_container.append(entry.view.element)

    @property
    def doc_count_text(self) -> str:
        return self.doc_count_element.text

    def _update_doc_count(self) -> None:
        self.doc_count_element.text = str(self.model.doc_count or "Unknown")

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    def _bind_state_changes(self) -> None:
        self.sync.add(self.model.query_state, "query")
        for entry in self.registry:
            view_state = getattr(entry.view, "state", None)
            if view_state is None or not callable(getattr(view_state, "on_change", None)):
                continue
            key = view_key(entry.id)
            self.sync.seed(view_state, key)
            self.sync.add(view_state, key)

    def _bind_flash_notifications(self) -> None:
        for entry in self.registry:
            self.notifications.bind_view(entry.view)

    def to_json(self) -> dict[str, Any]:
        return self.state.to_json()

    def to_fragment(self) -> str:
        return self.codec.encode(self.state.to_json())

    def update_location(self) -> str:
        """Write the shareable part of the state back into the URL fragment."""
        return self.codec.write(self.state.to_json())

    # ------------------------------------------------------------------
    # Navigation / read-only
    # ------------------------------------------------------------------
    @property
    def current_view(self) -> Optional[str]:
        return self.navigation.active_id

    def switch_to(self, view_id: str) -> bool:
        return self.navigation.switch_to(view_id)

    @property
    def read_only(self) -> bool:
        return self.state.read_only

    def set_read_only(self) -> None:
        self.element.add_class(READ_ONLY_CLASS)
        if not self.state.read_only:
            self.state.set({READ_ONLY: True})

    def open_menu(self, action: str) -> bool:
        """Show the filter editor or facet viewer. Refused in read-only mode."""
        if self.read_only:
            logger.warning("Menu action refused in read-only mode", extra={"action": action})
            return False

        if action == "filters":
            self.filter_editor.show()
        elif action == "facets":
            self.facet_viewer.show()
        else:
            logger.warning("Unknown menu action", extra={"action": action})
            return False
        return True

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------
    def notify(self, flash: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> Notification:
        return self.notifications.notify(flash, **kwargs)

    def clear_notifications(self) -> None:
        self.notifications.clear()

    # ------------------------------------------------------------------
    # Dataset
    # ------------------------------------------------------------------
    def _fetch(self) -> None:
        # fetch() returns an already-settled future
        self._on_fetched(self.model.fetch())

    def _on_fetched(self, fetched: Future) -> None:
        error = fetched.exception()
        if error is not None:
            logger.error("Initial dataset fetch failed", extra={"url": self.model.url, "error": str(error)})
            message = getattr(error, "message", None) or str(error)
            self.notify(message=message, category=Category.ERROR.value, persist=True)
            return
        self.model.query(self.state.get("query"))

    def close(self) -> None:
        """Drop the upward subscriptions; the coordinator stops tracking its upstreams."""
        self.sync.close()

    @classmethod
    def restore(cls, serialized: Mapping[str, Any], **kwargs: Any) -> MultiView:
        return restore(serialized, **kwargs)


def restore(
    serialized: Mapping[str, Any],
    *,
    element: Optional[Element] = None,
    views: Optional[Iterable[ViewSpec]] = None,
    location: Optional[Location] = None,
    scheduler: Optional[Scheduler] = None,
    display_seconds: float = DEFAULT_DISPLAY_SECONDS,
) -> MultiView:
    """
    Rebuild a MultiView (dataset included) from a serialized composite state.

    The snapshot is the explicit override layer, so every non-volatile key
    comes back as it was.
    """
    dataset = Dataset.restore(serialized)
    logger.info(
        "Restoring MultiView",
        extra={"backend": dataset.backend_type, "current_view": serialized.get("currentView")},
    )
    return MultiView(
        model=dataset,
        element=element if element is not None else Element(),
        views=views,
        state=serialized,
        location=location,
        scheduler=scheduler,
        display_seconds=display_seconds,
    )
