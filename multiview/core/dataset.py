from __future__ import annotations

import logging
from concurrent.futures import Future
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional

import pandas as pd

from .events import EventEmitter, Handler
from .exceptions import MultiViewError, QueryError
from .query_state import QueryState

if TYPE_CHECKING:
    from multiview.backends.base import BaseBackend
    from multiview.backends.registry import BackendRegistry

logger = logging.getLogger(__name__)

QUERY_START = "query:start"
QUERY_DONE = "query:done"
QUERY_FAIL = "query:fail"

STUB_RECORDS = [{"stub": "this is a stub dataset because memory datasets are not serialized"}]


def resolved(value: Any) -> Future:
    fut: Future = Future()
    fut.set_result(value)
    return fut


def rejected(error: BaseException) -> Future:
    fut: Future = Future()
    fut.set_exception(error)
    return fut


class Dataset:
    """
    Dataset model shared by every sub-view.

    Includes:
    - a backend that knows how to fetch and query records
    - the shared QueryState (a change re-runs the query)
    - the current page of records, facets and doc_count of the last settled query
    - query lifecycle events: 'query:start', 'query:done', 'query:fail'(error)

    fetch() and query() return concurrent.futures.Future objects that are
    already settled when returned; add_done_callback() runs immediately.
    Overlapping queries are not cancelled: whichever settles last wins.
    """

    def __init__(
        self,
        backend: BaseBackend,
        url: str = "",
        query_state: Optional[Mapping[str, Any]] = None,
        name: str = "",
    ) -> None:
        self.backend = backend
        self.url = url or ""
        self.name = name
        self.events = EventEmitter()
        self.query_state = QueryState(query_state)

        self.fields: List[str] = []
        self.records: pd.DataFrame = pd.DataFrame()
        self.facets: Dict[str, Any] = {}
        self.doc_count: Optional[int] = None
        self.fetched = False

        self.query_state.on_change(self._on_query_state_change)

    @property
    def backend_type(self) -> str:
        return self.backend.__type__

    # -------------------------------------------------------------------------
    # Events
    # -------------------------------------------------------------------------
    def bind(self, event: str, handler: Handler) -> Handler:
        return self.events.bind(event, handler)

    def unbind(self, event: str, handler: Optional[Handler] = None) -> bool:
        return self.events.unbind(event, handler)

    def trigger(self, event: str, *args: Any) -> None:
        self.events.trigger(event, *args)

    # -------------------------------------------------------------------------
    # Fetch / query
    # -------------------------------------------------------------------------
    def fetch(self) -> Future:
        try:
            result = self.backend.fetch(self)
        except MultiViewError as exc:
            logger.warning("Dataset fetch failed", extra={"url": self.url, "error": str(exc)})
            return rejected(exc)

        self.fields = list(result.fields)
        self.fetched = True
        logger.info(
            "Dataset fetched",
            extra={"backend": self.backend_type, "url": self.url, "n_fields": len(self.fields)},
        )
        return resolved(self)

    def query(self, query: Optional[Mapping[str, Any]] = None) -> Future:
        self.trigger(QUERY_START)
        if query is not None and not isinstance(query, Mapping):
            error = QueryError(f"Expected a query object, got {type(query).__name__}", title="Invalid query")
            return self._fail(error)
        if query:
            # silent: the caller already knows, and a change would re-query
            self.query_state.set(query, silent=True)

        actual = self.query_state.to_json()
        try:
            result = self.backend.query(actual, self)
        except QueryError as exc:
            return self._fail(exc)
        except (KeyError, TypeError, ValueError) as exc:
            logger.exception("Backend raised on query", extra={"backend": self.backend_type})
            return self._fail(QueryError(str(exc), title="Query failed"))

        self.doc_count = result.total
        self.records = result.hits
        self.facets = result.facets
        self.trigger(QUERY_DONE)
        return resolved(self.records)

    def _fail(self, error: QueryError) -> Future:
        logger.warning("Dataset query failed", extra={"url": self.url, "error": str(error)})
        self.trigger(QUERY_FAIL, error)
        return rejected(error)

    def _on_query_state_change(self) -> None:
        if self.fetched:
            self.query()

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------
    def to_json(self) -> Dict[str, Any]:
        return {
            "backend": self.backend_type,
            "url": self.url,
            "query": self.query_state.to_json(),
        }

    @classmethod
    def restore(cls, state: Mapping[str, Any], registry: Optional[BackendRegistry] = None) -> Dataset:
        """
        Rebuild a Dataset from a serialized composite state.

        Memory datasets carry no records in the state unless the caller put
        them under 'records'; otherwise a one-row stub is used.
        """
        if registry is None:
            from multiview.backends.registry import default_registry
            registry = default_registry

        backend_type = state.get("backend") or "memory"
        if backend_type == "memory":
            backend = registry.create(backend_type, records=state.get("records") or STUB_RECORDS)
        else:
            backend = registry.create(backend_type)

        return cls(backend=backend, url=state.get("url") or "", query_state=state.get("query"))
