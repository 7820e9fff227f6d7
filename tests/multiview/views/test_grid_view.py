from __future__ import annotations

import plotly.graph_objs as go

from multiview.views.grid_view import GridView


def _loaded(dataset):
    dataset.fetch()
    dataset.query()
    return dataset


def test_visible_fields_follow_order_and_hidden_columns(dataset):
    view = GridView(_loaded(dataset), state={"columnsOrder": ["city"], "hiddenColumns": ["lat"]})

    assert view.visible_fields() == ["city", "id", "date", "lon", "temp"]


def test_hide_and_show_column_update_state(dataset):
    view = GridView(_loaded(dataset))
    changes = []
    view.state.on_change(lambda: changes.append(view.state.get("hiddenColumns")))

    view.hide_column("temp")
    view.hide_column("temp")
    view.show_column("temp")

    assert changes == [["temp"], []]
    assert "temp" in view.visible_fields()


def test_render_builds_table_of_visible_columns(dataset):
    view = GridView(_loaded(dataset), state={"hiddenColumns": ["lat", "lon"]})

    fig = view.render()

    assert isinstance(fig, go.Figure)
    table = fig.data[0]
    assert table.type == "table"
    assert list(table.header.values) == ["id", "city", "date", "temp"]
    assert list(table.cells.values[1]) == ["Oslo", "Lisbon", "Cairo"]
