import json

import dash

from multiview.core.scheduler import PollingScheduler
from multiview.ui.dash_app import build_context, create_dash_app
from multiview.ui.ids import IDs


def _make_config_root(tmp_path):
    root = tmp_path / "config"
    data = root / "data"
    data.mkdir(parents=True)
    (data / "rows.csv").write_text("city,date,lat,lon,temp\nOslo,2024-01-01,59.9,10.7,-4\nCairo,2024-01-03,30.0,31.2,19\n")
    (root / "global.json").write_text(
        json.dumps(
            {
                "ui_title": "Test Explorer",
                "views": ["grid", "graph", "map"],
                "dataset": {"backend": "csv", "url": "data/rows.csv"},
                "state": {"currentView": "map", "view-graph": {"group": "city", "series": ["temp"]}},
            }
        )
    )
    return root


def test_build_context_wires_explorer(tmp_path):
    ctx = build_context(_make_config_root(tmp_path))
    explorer = ctx.explorer

    assert isinstance(ctx.scheduler, PollingScheduler)
    assert explorer.registry.ids() == ["grid", "graph", "map"]
    assert explorer.current_view == "map"
    assert explorer.model.doc_count == 2
    assert explorer.doc_count_text == "2"
    assert explorer.state.get("view-graph")["group"] == "city"
    assert explorer.state.get("backend") == "csv"


def test_build_context_with_missing_csv_shows_error(tmp_path):
    root = tmp_path / "config"
    root.mkdir()
    (root / "global.json").write_text(json.dumps({"dataset": {"backend": "csv", "url": "missing.csv"}}))

    explorer = build_context(root).explorer

    assert explorer.model.doc_count is None
    [notification] = explorer.notifications.notifications
    assert notification.category.value == "error"
    assert notification.persist is True


def test_create_dash_app(tmp_path):
    app = create_dash_app(_make_config_root(tmp_path))

    assert isinstance(app, dash.Dash)
    assert app.title == "Test Explorer"
    assert app.layout is not None
    outputs = " ".join(app.callback_map)
    assert IDs.Control.ALERTS in outputs
    assert IDs.Control.MAIN_GRAPH in outputs


def test_callbacks_share_one_reentrant_lock(tmp_path):
    ctx = build_context(_make_config_root(tmp_path))

    with ctx.lock:
        # reentrant: a callback may call helpers that take the lock again
        assert ctx.lock.acquire(blocking=False) is True
        ctx.lock.release()


def test_query_panel_callback_is_registered(tmp_path):
    app = create_dash_app(_make_config_root(tmp_path))

    outputs = " ".join(app.callback_map)
    assert IDs.Control.FILTER_LIST in outputs
    assert IDs.Control.FACET_LIST in outputs
