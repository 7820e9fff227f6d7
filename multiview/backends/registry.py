from __future__ import annotations

from typing import Any, Callable, Dict, List

from multiview.backends.base import BaseBackend
from multiview.backends.csv_backend import CsvBackend
from multiview.backends.memory import MemoryBackend
from multiview.core.exceptions import BackendNotFoundError

BackendFactory = Callable[..., BaseBackend]


class BackendRegistry:
    """
    Registry of dataset backends keyed by backend type ("memory", "csv", ...).

    The backend type is what a serialized composite state stores under
    'backend', so restoring a session starts here.
    """

    def __init__(self) -> None:
        self._factories: Dict[str, BackendFactory] = {}

    def register(self, backend_type: str, factory: BackendFactory) -> None:
        """
        :raises ValueError: if a backend with the same type already exists.
        """
        if backend_type in self._factories:
            raise ValueError(f"The backend '{backend_type}' already exists")
        self._factories[backend_type] = factory

    def create(self, backend_type: str, **kwargs: Any) -> BaseBackend:
        """
        :raises BackendNotFoundError: if no backend is registered for backend_type
        """
        try:
            factory = self._factories[backend_type]
        except KeyError:
            raise BackendNotFoundError(
                f"No backend registered for type '{backend_type}'. "
                f"Registered backends: {self.types()}"
            )
        return factory(**kwargs)

    def types(self) -> List[str]:
        return list(self._factories)


def create_default_registry() -> BackendRegistry:
    registry = BackendRegistry()
    registry.register(MemoryBackend.__type__, MemoryBackend)
    registry.register(CsvBackend.__type__, CsvBackend)
    return registry


default_registry = create_default_registry()
