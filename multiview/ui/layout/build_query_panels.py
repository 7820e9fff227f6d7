from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional

import dash_bootstrap_components as dbc
from dash import dcc, html

from multiview.ui.ids import IDs


def describe_filter(flt: Mapping[str, Any]) -> str:
    field = flt.get("field")
    if flt.get("type", "term") == "range":
        start = flt.get("from")
        end = flt.get("to")
        return f"{field}: {'any' if start is None else start} to {'any' if end is None else end}"
    return f"{field} = {flt.get('term')}"


def facet_term_index(field: str, term: Any) -> str:
    # pattern-matching indices must be strings or numbers
    return json.dumps([field, term])


def parse_facet_term_index(index: str) -> tuple[str, Any]:
    field, term = json.loads(index)
    return field, term


def build_filter_list(filters: List[Dict[str, Any]]) -> Any:
    if not filters:
        return html.Small("No filters", className="text-muted")

    return dbc.ListGroup(
        [
            dbc.ListGroupItem(
                [
                    html.Span(describe_filter(flt)),
                    dbc.Button(
                        "×",
                        id={"type": IDs.Pattern.REMOVE_FILTER, "index": i},
                        color="link",
                        size="sm",
                        className="float-end p-0",
                        n_clicks=0,
                    ),
                ],
                className="filter-item",
            )
            for i, flt in enumerate(filters)
        ],
        flush=True,
    )


def build_facet_list(facets: Dict[str, Any]) -> Any:
    if not facets:
        return html.Small("No facets", className="text-muted")

    blocks = []
    for field, facet in facets.items():
        terms = facet.get("terms") or []
        blocks.append(
            html.Div(
                [
                    html.H6(field, className="mt-2"),
                    html.Div(
                        [
                            dbc.Button(
                                f"{t['term']} ({t['count']})",
                                id={"type": IDs.Pattern.FACET_TERM, "index": facet_term_index(field, t["term"])},
                                color="light",
                                size="sm",
                                className="me-1 mb-1",
                                n_clicks=0,
                            )
                            for t in terms
                        ]
                    ),
                ],
                className="facet",
            )
        )
    return blocks


def _field_options(fields: List[str]) -> List[Dict[str, str]]:
    return [{"label": f, "value": f} for f in fields]


def build_filter_editor(fields: List[str], filters: List[Dict[str, Any]]) -> dbc.Card:
    """Current filters (removable) plus a form adding a range filter."""
    return dbc.Card(
        dbc.CardBody(
            [
                html.H5("Filters", className="card-title"),
                html.Div(build_filter_list(filters), id=IDs.Control.FILTER_LIST),
                dbc.Row(
                    [
                        dbc.Col(dcc.Dropdown(id=IDs.Control.RANGE_FIELD, options=_field_options(fields),
                                             placeholder="Field"), md=4),
                        dbc.Col(dbc.Input(id=IDs.Control.RANGE_FROM, placeholder="From", type="text"), md=3),
                        dbc.Col(dbc.Input(id=IDs.Control.RANGE_TO, placeholder="To", type="text"), md=3),
                        dbc.Col(dbc.Button("Add", id=IDs.Control.ADD_RANGE_BTN, size="sm", n_clicks=0), md=2),
                    ],
                    className="g-2 mt-2",
                ),
            ]
        ),
        className="filter-editor",
    )


def build_facet_viewer(fields: List[str], facets: Optional[Dict[str, Any]]) -> dbc.Card:
    """Term counts per requested facet; clicking a term filters on it."""
    return dbc.Card(
        dbc.CardBody(
            [
                html.H5("Facets", className="card-title"),
                dbc.Row(
                    [
                        dbc.Col(dcc.Dropdown(id=IDs.Control.FACET_FIELD, options=_field_options(fields),
                                             placeholder="Field"), md=6),
                        dbc.Col(dbc.Button("Add facet", id=IDs.Control.ADD_FACET_BTN, size="sm", n_clicks=0), md=3),
                    ],
                    className="g-2",
                ),
                html.Div(build_facet_list(facets or {}), id=IDs.Control.FACET_LIST),
            ]
        ),
        className="facet-viewer",
    )
