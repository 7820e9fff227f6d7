from __future__ import annotations

from typing import Optional, Sequence

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from multiview.core.base_view import BaseView

LAT_FIELD_NAMES = ("lat", "latitude")
LON_FIELD_NAMES = ("lon", "lng", "long", "longitude")


def _guess_field(fields: Sequence[str], candidates: Sequence[str]) -> Optional[str]:
    lowered = {f.lower(): f for f in fields}
    return next((lowered[c] for c in candidates if c in lowered), None)


class MapView(BaseView):
    """
    Point map of records with latitude/longitude fields.

    Fields are guessed from common names when the state does not name them.
    Records with missing or out-of-range coordinates are skipped and
    reported with a flash warning.
    """

    id = "map"
    label = "Map"
    default_state = {
        "latField": None,
        "lonField": None,
        "autoZoom": True,
    }

    def location_fields(self) -> tuple[Optional[str], Optional[str]]:
        fields = self.dataset.fields or [str(c) for c in self.dataset.records.columns]
        lat = self.state.get("latField") or _guess_field(fields, LAT_FIELD_NAMES)
        lon = self.state.get("lonField") or _guess_field(fields, LON_FIELD_NAMES)
        return lat, lon

    def compute_data(self) -> pd.DataFrame:
        records = self.dataset.records
        lat, lon = self.location_fields()
        if not lat or not lon or lat not in records.columns or lon not in records.columns:
            return pd.DataFrame(columns=["lat", "lon"])

        data = records.copy()
        data["lat"] = pd.to_numeric(records[lat], errors="coerce")
        data["lon"] = pd.to_numeric(records[lon], errors="coerce")
        valid = data["lat"].between(-90, 90) & data["lon"].between(-180, 180)

        skipped = int((~valid).sum())
        if skipped:
            self.flash(f"{skipped} record(s) skipped: missing or invalid coordinates")

        return data[valid]

    def render_figure(self, data: pd.DataFrame) -> go.Figure:
        if data.empty:
            return self.empty_figure("No records with a location")

        hover = [c for c in data.columns if c not in ("lat", "lon")][:5]
        fig = px.scatter_geo(data, lat="lat", lon="lon", hover_data=hover)
        if self.state.get("autoZoom"):
            fig.update_geos(fitbounds="locations")
        fig.update_layout(margin=dict(l=10, r=10, t=10, b=10))
        return fig
