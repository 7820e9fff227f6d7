from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional

import dash
from dash import ALL, Input, Output, exceptions

from multiview.core.composite_state import CURRENT_VIEW
from multiview.core.hash_url import GRAPH_KEY, QUERY_KEY
from multiview.core.multiview import MultiView
from multiview.ui.ids import IDs
from multiview.ui.layout.build_navbar import build_nav_links
from multiview.ui.layout.build_query_panels import build_facet_list, build_filter_list

if TYPE_CHECKING:
    from multiview.ui.context import AppContext

logger = logging.getLogger(__name__)


def _differs(current: dict, overrides: dict) -> bool:
    return any(current.get(k) != v for k, v in overrides.items())


def apply_fragment(explorer: MultiView, fragment: Optional[str]) -> bool:
    """
    Push shareable state from an incoming URL fragment into the explorer's
    upstreams (query state, graph view state, active view), so it reaches
    the composite state through the normal propagation path.

    Returns True if anything changed.
    """
    params = explorer.codec.parse(fragment or "")
    if not params:
        return False

    overrides = explorer.codec.decode_state(params, query_default=dict)
    changed = False

    query = overrides[QUERY_KEY]
    current_query = explorer.model.query_state.to_json()
    if query and _differs(current_query, query):
        explorer.model.query_state.set(query)
        changed = True

    graph = overrides[GRAPH_KEY]
    if graph and "graph" in explorer.registry:
        graph_state = explorer.registry.get("graph").view.state
        if graph_state is not None and _differs(graph_state.to_json(), graph):
            graph_state.set(graph)
            changed = True

    view_id = params.get(CURRENT_VIEW)
    if view_id and view_id != explorer.current_view:
        changed = explorer.switch_to(view_id) or changed

    logger.debug("URL fragment applied", extra={"keys": sorted(params), "changed": changed})
    return changed


def active_figure(explorer: MultiView) -> Any:
    entry = explorer.navigation.active_entry
    return entry.view.render() if entry else {}


def register_navigation_callbacks(app: dash.Dash, ctx: AppContext) -> None:
    explorer = ctx.explorer

    # ---------------------------------------------------------
    # Switcher click -> active view (+ shareable URL)
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.NAVIGATION, "children"),
        Output(IDs.Control.MAIN_GRAPH, "figure"),
        Output(IDs.Store.LOCATION, "hash"),
        Input({"type": IDs.Pattern.VIEW_LINK, "index": ALL}, "n_clicks"),
        prevent_initial_call=True,
    )
    def switch_view(_clicks):
        triggered = dash.ctx.triggered_id
        if not isinstance(triggered, dict) or not any(_clicks or []):
            raise exceptions.PreventUpdate

        with ctx.lock:
            if not explorer.switch_to(triggered["index"]):
                raise exceptions.PreventUpdate
            fragment = explorer.update_location()
            return build_nav_links(explorer.navigation.items), active_figure(explorer), f"#{fragment}"

    # ---------------------------------------------------------
    # URL fragment -> explorer (page load / pasted link)
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.NAVIGATION, "children", allow_duplicate=True),
        Output(IDs.Control.MAIN_GRAPH, "figure", allow_duplicate=True),
        Output(IDs.Control.FILTER_LIST, "children", allow_duplicate=True),
        Output(IDs.Control.FACET_LIST, "children", allow_duplicate=True),
        Input(IDs.Store.LOCATION, "hash"),
        prevent_initial_call="initial_duplicate",
    )
    def sync_from_hash(fragment):
        with ctx.lock:
            if not apply_fragment(explorer, fragment):
                raise exceptions.PreventUpdate
            return (
                build_nav_links(explorer.navigation.items),
                active_figure(explorer),
                build_filter_list(explorer.model.query_state.filters),
                build_facet_list(explorer.model.facets),
            )

    # ---------------------------------------------------------
    # Filters / facets menu (refused in read-only mode)
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.FILTER_EDITOR, "is_open"),
        Output(IDs.Control.FACET_VIEWER, "is_open"),
        Input(IDs.Control.FILTERS_BTN, "n_clicks"),
        Input(IDs.Control.FACETS_BTN, "n_clicks"),
        prevent_initial_call=True,
    )
    def open_menu(_filters, _facets):
        action = "filters" if dash.ctx.triggered_id == IDs.Control.FILTERS_BTN else "facets"
        with ctx.lock:
            explorer.open_menu(action)
            return explorer.filter_editor.visible, explorer.facet_viewer.visible
