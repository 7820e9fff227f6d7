from __future__ import annotations

from typing import List

import dash_bootstrap_components as dbc
from dash import html

from multiview.core.navigation import NavItem
from multiview.ui.ids import IDs, view_link_id


def build_nav_links(items: List[NavItem]) -> List[dbc.NavItem]:
    return [
        dbc.NavItem(
            dbc.NavLink(
                item.label,
                id=view_link_id(item.id),
                active=item.active,
                disabled=item.disabled,
                n_clicks=0,
            )
        )
        for item in items
    ]


def build_navbar(title: str, items: List[NavItem], read_only: bool = False) -> dbc.Navbar:
    menu_buttons = html.Div(
        [
            dbc.Button("Filters", id=IDs.Control.FILTERS_BTN, color="secondary", size="sm",
                       className="me-2", disabled=read_only),
            dbc.Button("Facets", id=IDs.Control.FACETS_BTN, color="secondary", size="sm",
                       disabled=read_only),
        ],
        className="ms-auto menu-right",
    )

    return dbc.Navbar(
        dbc.Container(
            fluid=True,
            children=[
                html.H2(title, className="mb-0 me-4"),
                dbc.Nav(
                    build_nav_links(items),
                    id=IDs.Control.NAVIGATION,
                    pills=True,
                    className="navigation",
                ),
                menu_buttons,
            ],
        ),
        dark=False,
        className="shadow-sm mv-navbar",
    )
