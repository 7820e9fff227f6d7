from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Optional

import pandas as pd

from multiview.backends.base import BaseBackend, FetchResult, QueryResult
from multiview.backends.memory import run_query
from multiview.core.exceptions import QueryError

if TYPE_CHECKING:
    from multiview.core.dataset import Dataset

logger = logging.getLogger(__name__)


class CsvBackend(BaseBackend):
    """
    Loads dataset.url (local path or http(s) URL) with pandas on fetch and
    then queries it like the memory backend.
    """

    __type__ = "csv"

    def __init__(self, **read_csv_kwargs: Any) -> None:
        self.read_csv_kwargs = read_csv_kwargs
        self.frame: Optional[pd.DataFrame] = None

    def fetch(self, dataset: Dataset) -> FetchResult:
        if not dataset.url:
            raise QueryError("CSV dataset has no url", title="Fetch failed")

        logger.info("Loading CSV dataset", extra={"url": dataset.url})
        try:
            self.frame = pd.read_csv(dataset.url, **self.read_csv_kwargs)
        except (OSError, ValueError) as exc:
            raise QueryError(str(exc), title="Fetch failed") from exc

        return FetchResult(fields=[str(c) for c in self.frame.columns], frame=self.frame)

    def query(self, query: Dict[str, Any], dataset: Dataset) -> QueryResult:
        if self.frame is None:
            raise QueryError("Dataset queried before fetch()", title="Query failed")
        return run_query(self.frame, query)
