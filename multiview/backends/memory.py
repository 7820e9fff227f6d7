from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Mapping, Optional, Union

import pandas as pd

from multiview.backends.base import BaseBackend, FetchResult, QueryResult
from multiview.core.exceptions import QueryError

if TYPE_CHECKING:
    from multiview.core.dataset import Dataset

logger = logging.getLogger(__name__)

Records = Union[pd.DataFrame, Iterable[Mapping[str, Any]]]


def to_frame(records: Optional[Records]) -> pd.DataFrame:
    if records is None:
        return pd.DataFrame()
    if isinstance(records, pd.DataFrame):
        return records.copy()
    return pd.DataFrame(list(records))


class MemoryBackend(BaseBackend):
    """
    Queries a pandas DataFrame held in memory.

    Query semantics:
    - q: case-insensitive substring match against any column
    - term filter: exact match on the stringified value
    - range filter: inclusive bounds, either side optional
    - sort: stable multi-key sort
    - from/size: paging window applied last
    - facets: value counts per field, top-n
    """

    __type__ = "memory"

    def __init__(self, records: Optional[Records] = None) -> None:
        self.frame = to_frame(records)

    def fetch(self, dataset: Dataset) -> FetchResult:
        return FetchResult(fields=[str(c) for c in self.frame.columns], frame=self.frame)

    def query(self, query: Dict[str, Any], dataset: Dataset) -> QueryResult:
        return run_query(self.frame, query)


def run_query(frame: pd.DataFrame, query: Dict[str, Any]) -> QueryResult:
    df = frame

    q = str(query.get("q") or "").strip()
    if q and not df.empty:
        as_text = df.astype(str)
        mask = as_text.apply(lambda col: col.str.contains(q, case=False, regex=False)).any(axis=1)
        df = df[mask]

    for flt in _as_list(query, "filters", "Invalid filter"):
        if not isinstance(flt, Mapping):
            raise QueryError(f"Filter must be an object, got {flt!r}", title="Invalid filter")
        df = _apply_filter(df, flt)

    sort = _as_list(query, "sort", "Invalid sort")
    if sort and not df.empty:
        df = _apply_sort(df, sort)

    facets = query.get("facets") or {}
    if not isinstance(facets, Mapping):
        raise QueryError(f"Facets must be an object, got {facets!r}", title="Invalid facet")
    facets = _compute_facets(df, facets)

    total = len(df)
    start = _as_int(query.get("from"), "from") or 0
    size = _as_int(query.get("size"), "size")
    end = None if size is None else start + size
    hits = df.iloc[start:end]

    logger.debug(
        "Memory query ran",
        extra={"total": total, "returned": len(hits), "filters": len(query.get("filters") or [])},
    )
    return QueryResult(total=total, hits=hits.reset_index(drop=True), facets=facets)


def _as_list(query: Dict[str, Any], key: str, title: str) -> List[Any]:
    value = query.get(key) or []
    if not isinstance(value, list):
        raise QueryError(f"'{key}' must be a list, got {value!r}", title=title)
    return value


def _as_int(value: Any, key: str) -> Optional[int]:
    if value is None:
        return None
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise QueryError(f"'{key}' must be a whole number, got {value!r}", title="Invalid paging") from exc
    if number < 0:
        raise QueryError(f"'{key}' must not be negative, got {number}", title="Invalid paging")
    return number


def _apply_sort(df: pd.DataFrame, sort: List[Any]) -> pd.DataFrame:
    if not all(isinstance(s, Mapping) and s.get("field") for s in sort):
        raise QueryError(f"Each sort entry needs a 'field': {sort!r}", title="Invalid sort")

    by = [s["field"] for s in sort]
    _require_fields(df, by, "Invalid sort")
    ascending = [s.get("order", "asc") != "desc" for s in sort]
    try:
        return df.sort_values(by=by, ascending=ascending, kind="mergesort")
    except TypeError as exc:
        raise QueryError(f"Cannot sort by {', '.join(map(str, by))}: {exc}", title="Invalid sort") from exc


def _apply_filter(df: pd.DataFrame, flt: Dict[str, Any]) -> pd.DataFrame:
    field = flt.get("field")
    kind = flt.get("type", "term")
    _require_fields(df, [field], "Invalid filter")

    series = df[field]
    if kind == "term":
        return df[series.astype(str) == str(flt.get("term"))]

    if kind == "range":
        mask = pd.Series(True, index=df.index)
        try:
            if flt.get("from") is not None:
                mask &= series >= flt["from"]
            if flt.get("to") is not None:
                mask &= series <= flt["to"]
        except TypeError as exc:
            raise QueryError(f"Cannot compare field '{field}': {exc}", title="Invalid filter") from exc
        return df[mask]

    raise QueryError(f"Unsupported filter type '{kind}'", title="Invalid filter")


def _compute_facets(df: pd.DataFrame, facets: Dict[str, Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    if not facets:
        return out

    _require_fields(df, list(facets), "Invalid facet")
    for field, opts in facets.items():
        if opts is not None and not isinstance(opts, Mapping):
            raise QueryError(f"Facet options for '{field}' must be an object", title="Invalid facet")
        size = _as_int((opts or {}).get("size"), "size")
        size = 10 if size is None else size
        counts = df[field].astype(str).value_counts().head(size)
        out[field] = {
            "terms": [{"term": term, "count": int(count)} for term, count in counts.items()],
        }
    return out


def _require_fields(df: pd.DataFrame, fields: List[Any], title: str) -> None:
    missing = [f for f in fields if f not in df.columns]
    if missing:
        raise QueryError(f"Unknown field(s): {', '.join(map(str, missing))}", title=title)
