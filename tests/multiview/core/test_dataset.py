from __future__ import annotations

import pytest

from multiview.backends.memory import MemoryBackend
from multiview.core.dataset import STUB_RECORDS, Dataset
from multiview.core.exceptions import BackendNotFoundError, QueryError


def test_fetch_then_query(dataset):
    assert dataset.fetch().result() is dataset
    assert dataset.fields == ["id", "city", "date", "lat", "lon", "temp"]

    page = dataset.query({"q": "l", "sort": [{"field": "temp", "order": "desc"}]}).result()

    assert list(page["city"]) == ["Lisbon", "Oslo"]
    assert dataset.doc_count == 2
    assert dataset.query_state.get("q") == "l"


def test_query_events_in_order(dataset):
    events = []
    for name in ("query:start", "query:done", "query:fail"):
        dataset.bind(name, lambda *args, name=name: events.append(name))

    dataset.fetch()
    dataset.query()
    dataset.query({"filters": [{"type": "term", "field": "nope", "term": 1}]})

    assert events == ["query:start", "query:done", "query:start", "query:fail"]


def test_failed_query_rejects_future(dataset):
    dataset.fetch()
    received = []
    dataset.bind("query:fail", received.append)

    fut = dataset.query({"sort": [{"field": "nope"}]})

    assert isinstance(fut.exception(), QueryError)
    assert received == [fut.exception()]


def test_query_state_change_requeries_only_after_fetch(dataset):
    starts = []
    dataset.bind("query:start", lambda: starts.append(1))

    dataset.query_state.set({"q": "cairo"})
    assert starts == []

    dataset.fetch()
    dataset.query_state.set({"q": "oslo"})
    assert starts == [1]
    assert dataset.doc_count == 1


def test_query_argument_is_applied_silently(dataset):
    dataset.fetch()
    changes = []
    dataset.query_state.on_change(lambda: changes.append(1))

    dataset.query({"size": 1})

    assert changes == []
    assert len(dataset.records) == 1
    assert dataset.doc_count == 3


def test_to_json_and_restore():
    ds = Dataset(backend=MemoryBackend([{"a": 1}]), query_state={"q": "x"})
    state = ds.to_json()
    assert state["backend"] == "memory"
    assert state["query"]["q"] == "x"

    restored = Dataset.restore(state)
    assert restored.backend_type == "memory"
    assert restored.query_state.get("q") == "x"
    assert restored.backend.frame.to_dict(orient="records") == STUB_RECORDS


def test_restore_keeps_inline_records_and_url():
    restored = Dataset.restore({"backend": "memory", "records": [{"a": 1}, {"a": 2}]})
    restored.fetch()
    restored.query()
    assert restored.doc_count == 2

    csv = Dataset.restore({"backend": "csv", "url": "data/x.csv"})
    assert csv.backend_type == "csv"
    assert csv.url == "data/x.csv"


def test_restore_unknown_backend():
    with pytest.raises(BackendNotFoundError):
        Dataset.restore({"backend": "elasticsearch"})


class _RaisingBackend(MemoryBackend):
    def query(self, query, dataset):
        raise ValueError("backend exploded")


def test_unexpected_backend_errors_become_query_failures():
    ds = Dataset(backend=_RaisingBackend([{"a": 1}]))
    ds.fetch()
    failures = []
    ds.bind("query:fail", failures.append)

    fut = ds.query()

    [error] = failures
    assert isinstance(error, QueryError)
    assert error.title == "Query failed"
    assert fut.exception() is error


def test_non_object_query_is_rejected(dataset):
    dataset.fetch()
    failures = []
    dataset.bind("query:fail", failures.append)

    fut = dataset.query(5)

    assert isinstance(fut.exception(), QueryError)
    assert failures[0].title == "Invalid query"
    assert dataset.query_state.get("size") == 100
