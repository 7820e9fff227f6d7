from __future__ import annotations

import copy
from typing import Any, Dict, List, Mapping, Optional

from .object_state import ObjectState

DEFAULT_QUERY: Dict[str, Any] = {
    "q": "",
    "filters": [],
    "from": 0,
    "size": 100,
    "sort": [],
    "facets": {},
}


class QueryState(ObjectState):
    """
    The shared query slice every sub-view renders against.

    Fields:

    - q: free-text query, matched against every field
    - filters: list of {"type": "term", "field", "term"} or
      {"type": "range", "field", "from", "to"} dicts
    - from / size: paging window over the matching records
    - sort: list of {"field", "order": "asc"|"desc"}
    - facets: field -> {"size": n} term facets to compute
    """

    def __init__(self, initial: Optional[Mapping[str, Any]] = None) -> None:
        data = copy.deepcopy(DEFAULT_QUERY)
        if initial:
            data.update(initial)
        super().__init__(data)

    @classmethod
    def defaults(cls) -> Dict[str, Any]:
        return copy.deepcopy(DEFAULT_QUERY)

    @property
    def filters(self) -> List[Dict[str, Any]]:
        return copy.deepcopy(self.get("filters") or [])

    def add_term_filter(self, field: str, term: Any) -> None:
        self._add_filter({"type": "term", "field": field, "term": term})

    def add_range_filter(self, field: str, start: Any = None, end: Any = None) -> None:
        self._add_filter({"type": "range", "field": field, "from": start, "to": end})

    def remove_filter(self, index: int) -> None:
        filters = self.filters
        del filters[index]
        self.set({"filters": filters, "from": 0})

    def add_facet(self, field: str, size: int = 10) -> None:
        facets = copy.deepcopy(self.get("facets") or {})
        facets[field] = {"size": size}
        self.set({"facets": facets})

    def _add_filter(self, flt: Dict[str, Any]) -> None:
        # a new filter invalidates the current page
        self.set({"filters": self.filters + [flt], "from": 0})
