from __future__ import annotations

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from multiview.core.base_view import BaseView

GRAPH_TYPES = ("lines-and-points", "lines", "points", "bars", "columns")


class GraphView(BaseView):
    """
    Line / point / bar chart of one or more series against a group field.

    State:
    - group: field on the x axis (y axis for horizontal bars)
    - series: fields plotted against group
    - graphType: one of GRAPH_TYPES
    """

    id = "graph"
    label = "Graph"
    default_state = {
        "group": None,
        "series": [],
        "graphType": "lines-and-points",
    }

    def compute_data(self) -> pd.DataFrame:
        records = self.dataset.records
        group = self.state.get("group")
        series = [s for s in self.state.get("series") or [] if s in records.columns]
        if not group or group not in records.columns or not series:
            return pd.DataFrame()

        data = records.loc[:, [group] + series].copy()
        for s in series:
            data[s] = pd.to_numeric(data[s], errors="coerce")
        return data

    def render_figure(self, data: pd.DataFrame) -> go.Figure:
        if data.empty:
            return self.empty_figure("Select a group field and at least one series")

        group = data.columns[0]
        series = list(data.columns[1:])
        graph_type = self.state.get("graphType") or "lines-and-points"

        if graph_type == "bars":
            fig = px.bar(data, y=group, x=series, orientation="h")
        elif graph_type == "columns":
            fig = px.bar(data, x=group, y=series)
        elif graph_type == "points":
            fig = px.scatter(data, x=group, y=series)
        else:
            fig = px.line(data, x=group, y=series, markers=graph_type == "lines-and-points")

        fig.update_layout(margin=dict(l=40, r=40, t=40, b=40))
        return fig
