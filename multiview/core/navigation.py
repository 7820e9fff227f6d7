from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from .base_view import VIEW_HIDE, VIEW_SHOW
from .composite_state import CURRENT_VIEW, CompositeState
from .exceptions import NavigationError
from .view_registry import ViewEntry, ViewRegistry

logger = logging.getLogger(__name__)


@dataclass
class NavItem:
    """Switcher affordance for one view. The active item is also disabled."""
    id: str
    label: str
    active: bool = False
    disabled: bool = False


class NavigationController:
    """
    Single-active-view state machine over a ViewRegistry.

    - exactly one registered view is active at a time
    - switch_to() with an unknown id is rejected: nothing changes, a
      NavigationError is recorded in last_error and False is returned
    - a valid switch hides the previous view, shows the target, updates the
      switcher items and writes 'currentView' into the composite state
    """

    def __init__(self, registry: ViewRegistry, state: CompositeState) -> None:
        if not len(registry):
            raise ValueError("NavigationController needs at least one registered view")

        self.registry = registry
        self.state = state
        self.items: List[NavItem] = [NavItem(id=e.id, label=e.label) for e in registry]
        self.active_id: Optional[str] = None
        self.last_error: Optional[NavigationError] = None

    def initial_view_id(self) -> str:
        current = self.state.current_view
        if current in self.registry:
            return current
        if current is not None:
            logger.warning("Ignoring unknown currentView", extra={"view_id": current})
        return self.registry.first().id

    def activate_initial(self) -> str:
        """Show the initial view without writing 'currentView' (no change event)."""
        view_id = self.initial_view_id()
        self._activate(view_id)
        return view_id

    def switch_to(self, view_id: str) -> bool:
        if view_id not in self.registry:
            self.last_error = NavigationError(view_id, self.registry.ids())
            logger.warning("Navigation rejected", extra={"view_id": view_id, "error": str(self.last_error)})
            return False

        self.last_error = None
        self._activate(view_id)
        self.state.set({CURRENT_VIEW: view_id})
        logger.info("Switched view", extra={"view_id": view_id})
        return True

    @property
    def active_entry(self) -> Optional[ViewEntry]:
        if self.active_id is None:
            return None
        return self.registry.get(self.active_id)

    def _activate(self, view_id: str) -> None:
        for entry in self.registry:
            if entry.id == view_id:
                continue
            entry.view.element.hide()
            entry.view.trigger(VIEW_HIDE)

        target = self.registry.get(view_id)
        target.view.element.show()
        target.view.trigger(VIEW_SHOW)

        for item in self.items:
            item.active = item.id == view_id
            item.disabled = item.active

        self.active_id = view_id
