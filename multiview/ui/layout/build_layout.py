from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dcc, html

from multiview.ui.context import AppContext
from multiview.ui.ids import IDs
from multiview.ui.layout.build_navbar import build_navbar
from multiview.ui.layout.build_notifications import build_alerts, build_result_count
from multiview.ui.layout.build_query_panels import build_facet_viewer, build_filter_editor

TICK_MS = 500


def build_layout(ctx: AppContext) -> dbc.Container:
    explorer = ctx.explorer
    active = explorer.navigation.active_entry
    fields = explorer.model.fields

    return dbc.Container(
        fluid=True,
        className="multiview-root",
        children=[
            dcc.Location(id=IDs.Store.LOCATION, refresh=False),
            dcc.Interval(id=IDs.Store.TICK, interval=TICK_MS),

            build_navbar(ctx.global_config.ui_title, explorer.navigation.items, explorer.read_only),

            html.Div(build_alerts(explorer.notifications.notifications), id=IDs.Control.ALERTS,
                     className="alert-messages mt-2"),
            html.Div(build_result_count(explorer.doc_count_text), id=IDs.Control.DOC_COUNT,
                     className="results-info mb-2"),

            dbc.Collapse(build_filter_editor(fields, explorer.model.query_state.filters),
                         id=IDs.Control.FILTER_EDITOR, is_open=explorer.filter_editor.visible),
            dbc.Collapse(build_facet_viewer(fields, explorer.model.facets),
                         id=IDs.Control.FACET_VIEWER, is_open=explorer.facet_viewer.visible),

            dbc.Card(
                dbc.CardBody(
                    dcc.Loading(
                        dcc.Graph(
                            id=IDs.Control.MAIN_GRAPH,
                            figure=active.view.render() if active else {},
                            style={"height": "650px"},
                            config={"responsive": True},
                        ),
                    ),
                ),
                className="data-view-container",
            ),
        ],
    )
