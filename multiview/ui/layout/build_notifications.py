from __future__ import annotations

from typing import List

import dash_bootstrap_components as dbc
from dash import html

from multiview.core.notifications import Category, Notification

# bootstrap alert colours per notification category
CATEGORY_COLORS = {
    Category.WARNING: "warning",
    Category.SUCCESS: "success",
    Category.ERROR: "danger",
}


def build_alert(notification: Notification) -> dbc.Alert:
    if notification.loader:
        return dbc.Alert(
            [notification.message, dbc.Spinner(size="sm", spinner_class_name="ms-2 notification-loader")],
            color="info",
            className="alert-loader",
        )

    return dbc.Alert(
        notification.message,
        color=CATEGORY_COLORS[notification.category],
        dismissable=True,
        fade=True,
    )


def build_alerts(notifications: List[Notification]) -> List[dbc.Alert]:
    return [build_alert(n) for n in notifications]


def build_result_count(text: str) -> html.Span:
    return html.Span(["Results found ", html.Span(text, className="doc-count")])
