from __future__ import annotations

from typing import List

import pandas as pd
import plotly.graph_objects as go

from multiview.core.base_view import BaseView


class GridView(BaseView):
    """
    Tabular view of the current page of records.

    State:
    - hiddenColumns: fields not shown
    - columnsOrder: explicit field order (unlisted fields follow in dataset order)
    - fitColumns: stretch columns to the container width
    """

    id = "grid"
    label = "Grid"
    default_state = {
        "hiddenColumns": [],
        "columnsOrder": [],
        "fitColumns": False,
    }

    def visible_fields(self) -> List[str]:
        fields = self.dataset.fields or [str(c) for c in self.dataset.records.columns]
        hidden = set(self.state.get("hiddenColumns") or [])
        order = [f for f in self.state.get("columnsOrder") or [] if f in fields]
        rest = [f for f in fields if f not in order]
        return [f for f in order + rest if f not in hidden]

    def hide_column(self, field: str) -> None:
        hidden = list(self.state.get("hiddenColumns") or [])
        if field not in hidden:
            self.set_state({"hiddenColumns": hidden + [field]})

    def show_column(self, field: str) -> None:
        hidden = [f for f in self.state.get("hiddenColumns") or [] if f != field]
        self.set_state({"hiddenColumns": hidden})

    def compute_data(self) -> pd.DataFrame:
        records = self.dataset.records
        fields = [f for f in self.visible_fields() if f in records.columns]
        return records.loc[:, fields]

    def render_figure(self, data: pd.DataFrame) -> go.Figure:
        if data.empty and not len(data.columns):
            return self.empty_figure("No records")

        fig = go.Figure(
            data=[
                go.Table(
                    header=dict(values=list(data.columns)),
                    cells=dict(values=[data[c].tolist() for c in data.columns]),
                )
            ]
        )
        fig.update_layout(margin=dict(l=10, r=10, t=10, b=10), autosize=bool(self.state.get("fitColumns")))
        return fig
