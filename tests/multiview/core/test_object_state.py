from __future__ import annotations

import pytest

from multiview.core.events import EventEmitter
from multiview.core.object_state import ObjectState
from multiview.core.query_state import QueryState


@pytest.mark.parametrize(
    "key, value",
    [
        ("query", {"q": "oslo", "filters": [{"type": "term", "field": "city", "term": "Oslo"}]}),
        ("currentView", "graph"),
        ("readOnly", True),
        ("view-grid", {"hiddenColumns": ["lat", "lon"]}),
        ("nothing", None),
    ],
)
def test_set_then_get_returns_equal_value(key, value):
    state = ObjectState()
    state.set({key: value})
    assert state.get(key) == value


def test_set_emits_exactly_one_change():
    state = ObjectState({"a": 1})
    calls = []
    state.on_change(lambda: calls.append(state.to_json()))

    state.set({"a": 2, "b": 3})

    assert calls == [{"a": 2, "b": 3}]


def test_silent_set_emits_nothing():
    state = ObjectState()
    calls = []
    state.on_change(lambda: calls.append(1))

    state.set({"a": 1}, silent=True)

    assert calls == []
    assert state.get("a") == 1


def test_stored_values_are_isolated_from_callers():
    nested = {"series": ["temp"]}
    state = ObjectState()
    state.set({"view-graph": nested})

    nested["series"].append("lat")
    snapshot = state.to_json()
    snapshot["view-graph"]["series"].append("lon")

    assert state.get("view-graph") == {"series": ["temp"]}


def test_set_rejects_non_mapping():
    with pytest.raises(TypeError):
        ObjectState().set(["not", "a", "mapping"])


def test_off_change_stops_notifications():
    state = ObjectState()
    calls = []
    handler = state.on_change(lambda: calls.append(1))

    assert state.off_change(handler) is True
    state.set({"a": 1})

    assert calls == []


def test_emitter_propagates_handler_errors_and_allows_self_unbind():
    emitter = EventEmitter()
    seen = []

    def once():
        seen.append("once")
        emitter.unbind("tick", once)

    emitter.bind("tick", once)
    emitter.trigger("tick")
    emitter.trigger("tick")
    assert seen == ["once"]

    def boom():
        raise RuntimeError("handler failed")

    emitter.bind("tick", boom)
    with pytest.raises(RuntimeError):
        emitter.trigger("tick")


def test_query_state_defaults_and_filters():
    qs = QueryState({"q": "lis"})
    assert qs.get("size") == 100
    assert qs.get("q") == "lis"

    calls = []
    qs.on_change(lambda: calls.append(1))
    qs.set({"from": 20}, silent=True)
    qs.add_term_filter("city", "Oslo")

    assert len(calls) == 1
    assert qs.get("from") == 0
    assert qs.filters == [{"type": "term", "field": "city", "term": "Oslo"}]

    qs.remove_filter(0)
    assert qs.filters == []
    assert QueryState.defaults()["filters"] == []
