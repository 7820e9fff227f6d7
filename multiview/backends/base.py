from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List

import pandas as pd

if TYPE_CHECKING:
    from multiview.core.dataset import Dataset


@dataclass
class FetchResult:
    """
    What a backend knows about a dataset before any query runs.

    - fields: column names in display order
    - frame: the full table, when the backend holds it in memory
    """
    fields: List[str]
    frame: pd.DataFrame = field(default_factory=pd.DataFrame)


@dataclass
class QueryResult:
    """
    One page of matching records.

    - total: number of records matching the query (before paging)
    - hits: the page itself
    - facets: field -> {"terms": [{"term", "count"}, ...]}
    """
    total: int
    hits: pd.DataFrame
    facets: Dict[str, Any] = field(default_factory=dict)


class BaseBackend(ABC):
    """
    Contract every dataset backend follows.

    Backends raise QueryError for anything the user can fix (bad field, bad
    filter); the Dataset turns that into a 'query:fail' event.
    """

    __type__: str = None

    @abstractmethod
    def fetch(self, dataset: Dataset) -> FetchResult:
        raise NotImplementedError

    @abstractmethod
    def query(self, query: Dict[str, Any], dataset: Dataset) -> QueryResult:
        raise NotImplementedError
