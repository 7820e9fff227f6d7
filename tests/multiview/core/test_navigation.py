from __future__ import annotations

import pytest

from multiview.core.composite_state import CompositeState
from multiview.core.exceptions import NavigationError
from multiview.core.navigation import NavigationController
from multiview.core.view_registry import ViewRegistry


@pytest.fixture
def registry(stub_views):
    return ViewRegistry(stub_views)


def test_initial_view_is_first_entry_without_current_view(registry):
    nav = NavigationController(registry, CompositeState({"currentView": None}))
    assert nav.activate_initial() == "grid"
    assert nav.active_id == "grid"


def test_initial_view_uses_registered_current_view(registry):
    nav = NavigationController(registry, CompositeState({"currentView": "graph"}))
    assert nav.activate_initial() == "graph"


def test_initial_view_ignores_unregistered_current_view(registry):
    nav = NavigationController(registry, CompositeState({"currentView": "map"}))
    assert nav.activate_initial() == "grid"


def test_activate_initial_does_not_write_state(registry):
    state = CompositeState({"currentView": None})
    calls = []
    state.on_change(lambda: calls.append(1))

    NavigationController(registry, state).activate_initial()

    assert calls == []
    assert state.current_view is None


def test_switch_to_hides_previous_and_shows_target(registry):
    state = CompositeState()
    nav = NavigationController(registry, state)
    nav.activate_initial()
    grid, graph = registry.get("grid").view, registry.get("graph").view

    lifecycle = []
    grid.bind("view:hide", lambda: lifecycle.append("grid:hide"))
    graph.bind("view:show", lambda: lifecycle.append("graph:show"))

    assert nav.switch_to("graph") is True

    assert lifecycle == ["grid:hide", "graph:show"]
    assert grid.element.visible is False and grid.active is False
    assert graph.element.visible is True and graph.active is True
    assert state.current_view == "graph"
    assert [(i.id, i.active, i.disabled) for i in nav.items] == [
        ("grid", False, False),
        ("graph", True, True),
    ]


def test_switch_to_unknown_view_is_rejected(registry):
    state = CompositeState({"currentView": "grid"})
    nav = NavigationController(registry, state)
    nav.activate_initial()
    calls = []
    state.on_change(lambda: calls.append(1))

    assert nav.switch_to("nonexistent") is False

    assert nav.active_id == "grid"
    assert state.current_view == "grid"
    assert calls == []
    assert isinstance(nav.last_error, NavigationError)
    assert nav.last_error.view_id == "nonexistent"


def test_switch_writes_current_view_with_one_change(registry):
    state = CompositeState()
    nav = NavigationController(registry, state)
    nav.activate_initial()
    calls = []
    state.on_change(lambda: calls.append(state.current_view))

    nav.switch_to("graph")
    nav.switch_to("grid")

    assert calls == ["graph", "grid"]


def test_empty_registry_is_rejected():
    with pytest.raises(ValueError):
        NavigationController(ViewRegistry(), CompositeState())
