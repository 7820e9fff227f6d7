from __future__ import annotations

import pytest

from multiview.backends.csv_backend import CsvBackend
from multiview.backends.memory import MemoryBackend
from multiview.backends.registry import BackendRegistry, create_default_registry
from multiview.core.dataset import Dataset
from multiview.core.exceptions import BackendNotFoundError, QueryError


def test_default_registry_types():
    registry = create_default_registry()
    assert registry.types() == ["memory", "csv"]
    assert isinstance(registry.create("memory", records=[{"a": 1}]), MemoryBackend)


def test_duplicate_and_unknown_types():
    registry = BackendRegistry()
    registry.register("memory", MemoryBackend)
    with pytest.raises(ValueError):
        registry.register("memory", MemoryBackend)
    with pytest.raises(BackendNotFoundError):
        registry.create("sql")


def test_csv_backend_loads_and_queries(tmp_path):
    path = tmp_path / "rows.csv"
    path.write_text("name,score\nada,3\nbob,1\n")
    ds = Dataset(backend=CsvBackend(), url=str(path))

    ds.fetch()
    ds.query({"sort": [{"field": "score"}]})

    assert ds.fields == ["name", "score"]
    assert list(ds.records["name"]) == ["bob", "ada"]


def test_csv_backend_errors_become_query_errors(tmp_path, dataset):
    backend = CsvBackend()
    with pytest.raises(QueryError):
        backend.query({}, dataset)

    missing = Dataset(backend=backend, url=str(tmp_path / "nope.csv"))
    assert isinstance(missing.fetch().exception(), QueryError)

    no_url = Dataset(backend=CsvBackend())
    assert isinstance(no_url.fetch().exception(), QueryError)
