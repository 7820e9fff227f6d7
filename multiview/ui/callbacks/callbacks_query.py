from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Mapping, Optional, Union

import dash
from dash import ALL, Input, Output, State, exceptions

from multiview.core.multiview import MultiView
from multiview.ui.callbacks.callbacks_navigation import active_figure
from multiview.ui.ids import IDs
from multiview.ui.layout.build_query_panels import (
    build_facet_list,
    build_filter_list,
    parse_facet_term_index,
)

if TYPE_CHECKING:
    from multiview.ui.context import AppContext

logger = logging.getLogger(__name__)

REMOVE_FILTER = "remove-filter"
TERM_FILTER = "term-filter"
ADD_RANGE = "add-range"
ADD_FACET = "add-facet"


def coerce_bound(value: Any) -> Optional[Union[int, float, str]]:
    """Text input -> range bound: '' means open, numbers become numbers."""
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return text
    return int(number) if number.is_integer() else number


def apply_query_action(explorer: MultiView, action: str, payload: Mapping[str, Any]) -> bool:
    """
    Apply one filter-editor / facet-viewer action to the shared query state.
    The change re-runs the query and reaches the composite state the usual way.

    Returns True if the query state changed. Refused in read-only mode.
    """
    if explorer.read_only:
        logger.warning("Query edit refused in read-only mode", extra={"action": action})
        return False

    query_state = explorer.model.query_state
    field = payload.get("field")

    if action == REMOVE_FILTER:
        index = payload.get("index")
        if not isinstance(index, int) or not 0 <= index < len(query_state.filters):
            return False
        query_state.remove_filter(index)
    elif action == TERM_FILTER:
        if not field:
            return False
        query_state.add_term_filter(field, payload.get("term"))
    elif action == ADD_RANGE:
        start, end = coerce_bound(payload.get("from")), coerce_bound(payload.get("to"))
        if not field or (start is None and end is None):
            return False
        query_state.add_range_filter(field, start, end)
    elif action == ADD_FACET:
        if not field:
            return False
        query_state.add_facet(field)
    else:
        logger.warning("Unknown query action", extra={"action": action})
        return False

    logger.info("Query edited", extra={"action": action, "field": field})
    return True


def register_query_callbacks(app: dash.Dash, ctx: AppContext) -> None:
    explorer = ctx.explorer

    # ---------------------------------------------------------
    # Filter editor / facet viewer -> query state (+ shareable URL)
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.FILTER_LIST, "children"),
        Output(IDs.Control.FACET_LIST, "children"),
        Output(IDs.Control.MAIN_GRAPH, "figure", allow_duplicate=True),
        Output(IDs.Store.LOCATION, "hash", allow_duplicate=True),
        Input({"type": IDs.Pattern.REMOVE_FILTER, "index": ALL}, "n_clicks"),
        Input({"type": IDs.Pattern.FACET_TERM, "index": ALL}, "n_clicks"),
        Input(IDs.Control.ADD_RANGE_BTN, "n_clicks"),
        Input(IDs.Control.ADD_FACET_BTN, "n_clicks"),
        State(IDs.Control.RANGE_FIELD, "value"),
        State(IDs.Control.RANGE_FROM, "value"),
        State(IDs.Control.RANGE_TO, "value"),
        State(IDs.Control.FACET_FIELD, "value"),
        prevent_initial_call=True,
    )
    def edit_query(_remove, _terms, _add_range, _add_facet, range_field, range_from, range_to, facet_field):
        triggered = dash.ctx.triggered_id
        # freshly rendered list buttons fire with n_clicks=0
        if triggered is None or not dash.ctx.triggered[0]["value"]:
            raise exceptions.PreventUpdate

        if isinstance(triggered, dict) and triggered["type"] == IDs.Pattern.REMOVE_FILTER:
            action, payload = REMOVE_FILTER, {"index": triggered["index"]}
        elif isinstance(triggered, dict) and triggered["type"] == IDs.Pattern.FACET_TERM:
            field, term = parse_facet_term_index(triggered["index"])
            action, payload = TERM_FILTER, {"field": field, "term": term}
        elif triggered == IDs.Control.ADD_RANGE_BTN:
            action, payload = ADD_RANGE, {"field": range_field, "from": range_from, "to": range_to}
        else:
            action, payload = ADD_FACET, {"field": facet_field}

        with ctx.lock:
            if not apply_query_action(explorer, action, payload):
                raise exceptions.PreventUpdate
            fragment = explorer.update_location()
            return (
                build_filter_list(explorer.model.query_state.filters),
                build_facet_list(explorer.model.facets),
                active_figure(explorer),
                f"#{fragment}",
            )
