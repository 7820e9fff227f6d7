from __future__ import annotations

import pytest

from multiview.core.composite_state import CompositeState
from multiview.core.view_registry import ViewEntry, ViewRegistry, build_default_registry


def test_registry_keeps_order_and_accepts_mappings(stub_views):
    registry = ViewRegistry(stub_views)

    assert registry.ids() == ["grid", "graph"]
    assert registry.first().id == "grid"
    assert "graph" in registry and "map" not in registry
    assert isinstance(registry.get("graph"), ViewEntry)


def test_duplicate_id_rejected(stub_views):
    registry = ViewRegistry(stub_views)
    with pytest.raises(ValueError):
        registry.register(stub_views[0])


def test_view_without_element_rejected():
    with pytest.raises(TypeError):
        ViewRegistry([{"id": "x", "label": "X", "view": object()}])


def test_unknown_id_raises_key_error(stub_views):
    with pytest.raises(KeyError):
        ViewRegistry(stub_views).get("timeline")


def test_frozen_registry_rejects_new_entries(stub_views):
    registry = ViewRegistry(stub_views[:1])
    registry.freeze()
    with pytest.raises(RuntimeError):
        registry.register(stub_views[1])


def test_default_registry_seeds_view_state(dataset):
    state = CompositeState({"view-graph": {"group": "date", "series": ["temp"]}})

    registry = build_default_registry(dataset, state)

    assert registry.ids() == ["grid", "graph", "map", "timeline"]
    assert [e.label for e in registry] == ["Grid", "Graph", "Map", "Timeline"]
    graph_state = registry.get("graph").view.state.to_json()
    assert graph_state["group"] == "date"
    assert graph_state["series"] == ["temp"]
    assert graph_state["graphType"] == "lines-and-points"
