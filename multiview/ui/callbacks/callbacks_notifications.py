from __future__ import annotations

from typing import TYPE_CHECKING

import dash
from dash import Input, Output

from multiview.ui.ids import IDs
from multiview.ui.layout.build_notifications import build_alerts, build_result_count

if TYPE_CHECKING:
    from multiview.ui.context import AppContext


def register_notification_callbacks(app: dash.Dash, ctx: AppContext) -> None:
    explorer = ctx.explorer

    # ---------------------------------------------------------
    # Interval tick: expire due notifications, re-render alerts + count
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.ALERTS, "children"),
        Output(IDs.Control.DOC_COUNT, "children"),
        Input(IDs.Store.TICK, "n_intervals"),
    )
    def refresh_notifications(_n):
        with ctx.lock:
            ctx.scheduler.run_due()
            return (
                build_alerts(explorer.notifications.notifications),
                build_result_count(explorer.doc_count_text),
            )
