from __future__ import annotations

import pytest

from multiview.views.graph_view import GraphView


def _loaded(dataset):
    dataset.fetch()
    dataset.query()
    return dataset


def test_without_group_renders_placeholder(dataset):
    view = GraphView(_loaded(dataset))

    assert view.compute_data().empty
    fig = view.render()
    assert len(fig.data) == 0
    assert "group" in fig.layout.title.text


def test_unknown_series_are_dropped(dataset):
    view = GraphView(_loaded(dataset), state={"group": "city", "series": ["temp", "missing"]})

    data = view.compute_data()

    assert list(data.columns) == ["city", "temp"]


@pytest.mark.parametrize(
    "graph_type, trace_type",
    [("lines-and-points", "scatter"), ("points", "scatter"), ("columns", "bar"), ("bars", "bar")],
)
def test_graph_type_selects_trace(dataset, graph_type, trace_type):
    view = GraphView(_loaded(dataset), state={"group": "city", "series": ["temp"], "graphType": graph_type})

    fig = view.render()

    assert fig.data[0].type == trace_type


def test_legacy_url_state_reaches_graph_view(make_explorer):
    explorer = make_explorer(fragment='graph={"group":"city","series":["temp"]}')

    graph = explorer.registry.get("graph").view
    assert graph.state.get("group") == "city"
    assert explorer.state.get("view-graph")["series"] == ["temp"]
