from __future__ import annotations

import pandas as pd
import plotly.graph_objs as go
import pytest

from multiview.backends.memory import MemoryBackend
from multiview.core.base_view import BaseView
from multiview.core.dataset import Dataset
from multiview.core.element import Element
from multiview.core.hash_url import Location
from multiview.core.multiview import MultiView
from multiview.core.scheduler import ManualScheduler

RECORDS = [
    {"id": 1, "city": "Oslo", "date": "2024-01-01", "lat": 59.91, "lon": 10.75, "temp": -4.2},
    {"id": 2, "city": "Lisbon", "date": "2024-01-02", "lat": 38.72, "lon": -9.14, "temp": 11.8},
    {"id": 3, "city": "Cairo", "date": "2024-01-03", "lat": 30.04, "lon": 31.24, "temp": 18.9},
]


class StubView(BaseView):
    """Minimal sub-view with its own state, for registries built in tests."""

    id = "stub"
    label = "Stub"
    default_state = {"zoom": 1}

    def compute_data(self):
        return self.dataset.records

    def render_figure(self, data):
        return go.Figure()


class StatelessView(StubView):
    default_state = None


def make_dataset(records=None) -> Dataset:
    return Dataset(backend=MemoryBackend(RECORDS if records is None else records))


@pytest.fixture
def dataset() -> Dataset:
    return make_dataset()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def make_explorer(scheduler):
    """
    Factory building a MultiView over the in-memory dataset:
    make_explorer(views=None, state=None, fragment="", model=None)
    """

    def _make(views=None, state=None, fragment="", model=None):
        model = model if model is not None else make_dataset()
        location = Location(f"http://example.test/explore#{fragment}" if fragment else "http://example.test/explore")
        return MultiView(
            model=model,
            element=Element(),
            views=views,
            state=state,
            location=location,
            scheduler=scheduler,
        )

    return _make


@pytest.fixture
def stub_views(dataset):
    """grid + graph stub views sharing the default dataset."""
    grid = StubView(dataset)
    graph = StubView(dataset)
    return [
        {"id": "grid", "label": "Grid", "view": grid},
        {"id": "graph", "label": "Graph", "view": graph},
    ]


@pytest.fixture
def frame() -> pd.DataFrame:
    return pd.DataFrame(RECORDS)


@pytest.fixture
def stub_view_cls():
    return StubView


@pytest.fixture
def stateless_view_cls():
    return StatelessView
