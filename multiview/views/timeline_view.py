from __future__ import annotations

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from multiview.core.base_view import BaseView
from multiview.views.map_view import _guess_field

START_FIELD_NAMES = ("date", "start", "startdate", "start-date", "start_date")
END_FIELD_NAMES = ("end", "enddate", "end-date", "end_date")


class TimelineView(BaseView):
    """
    Timeline of records with a start (and optional end) date.

    Records without an end date are drawn as instants (end = start).
    """

    id = "timeline"
    label = "Timeline"
    default_state = {
        "startField": None,
        "endField": None,
    }

    def compute_data(self) -> pd.DataFrame:
        records = self.dataset.records
        fields = self.dataset.fields or [str(c) for c in records.columns]
        start = self.state.get("startField") or _guess_field(fields, START_FIELD_NAMES)
        end = self.state.get("endField") or _guess_field(fields, END_FIELD_NAMES)
        if not start or start not in records.columns:
            return pd.DataFrame(columns=["start", "end", "label"])

        data = pd.DataFrame(index=records.index)
        data["start"] = pd.to_datetime(records[start], errors="coerce")
        if end and end in records.columns:
            data["end"] = pd.to_datetime(records[end], errors="coerce").fillna(data["start"])
        else:
            data["end"] = data["start"]

        label_field = next((f for f in fields if f not in (start, end)), start)
        data["label"] = records[label_field].astype(str)
        return data.dropna(subset=["start"])

    def render_figure(self, data: pd.DataFrame) -> go.Figure:
        if data.empty:
            return self.empty_figure("No records with a date")

        fig = px.timeline(data, x_start="start", x_end="end", y="label")
        fig.update_layout(margin=dict(l=40, r=40, t=40, b=40))
        return fig
