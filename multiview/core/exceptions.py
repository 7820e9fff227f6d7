from __future__ import annotations

from typing import Any


class MultiViewError(Exception):
    """Base exception for all multiview errors"""
    pass


class ConfigError(MultiViewError):
    """
    Missing required collaborator (model / element) at construction time,
    or an invalid global.json / dataset block
    """
    pass


class BackendNotFoundError(ConfigError):
    """No dataset backend registered under the requested backend type"""
    pass


class ParseError(MultiViewError):
    """
    A URL-derived state value could not be JSON-decoded.
    Callers recover by substituting an empty object.
    """

    def __init__(self, key: str, raw: str, reason: str = ""):
        self.key = key
        self.raw = raw
        message = f"Could not decode '{key}' from URL fragment: {raw!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class QueryError(MultiViewError):
    """
    Dataset query rejected by its backend.

    Carries an optional title so notifications can render "title: message".
    """

    def __init__(self, message: str, title: str | None = None):
        self.title = title
        self.message = message
        super().__init__(message)


class NavigationError(MultiViewError):
    """Navigation requested to a view id that is not registered. Never raised to callers."""

    def __init__(self, view_id: Any, known: list[str]):
        self.view_id = view_id
        self.known = known
        super().__init__(f"View '{view_id}' not registered (known: {', '.join(known)})")
