"""
Dataset backends: where records come from and how a query is evaluated.
"""

from .base import BaseBackend, FetchResult, QueryResult
from .csv_backend import CsvBackend
from .memory import MemoryBackend
from .registry import BackendRegistry, create_default_registry, default_registry

__all__ = [
    "BaseBackend",
    "FetchResult",
    "QueryResult",
    "MemoryBackend",
    "CsvBackend",
    "BackendRegistry",
    "create_default_registry",
    "default_registry",
]
