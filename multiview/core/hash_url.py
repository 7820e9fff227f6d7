"""
URL-fragment codec.

The fragment uses plain query-string syntax (key=value&key2=value2). Only a
few keys carry JSON; which ones is the caller's decision, the parser itself
returns raw strings.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, Iterable, Mapping, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from .exceptions import ParseError

logger = logging.getLogger(__name__)

QUERY_KEY = "query"
GRAPH_KEY = "view-graph"
LEGACY_GRAPH_KEY = "graph"

JSON_KEYS = (QUERY_KEY, GRAPH_KEY, LEGACY_GRAPH_KEY)
DEFAULT_ENCODE_KEYS = (QUERY_KEY, GRAPH_KEY, "currentView")


class Location:
    """The page's addressable URL. Only the fragment matters to the codec."""

    def __init__(self, href: str = "") -> None:
        self.href = href

    @property
    def hash(self) -> str:
        return urlsplit(self.href).fragment

    @hash.setter
    def hash(self, fragment: str) -> None:
        parts = urlsplit(self.href)
        self.href = urlunsplit(parts._replace(fragment=fragment.lstrip("#")))

    def __repr__(self) -> str:
        return f"Location({self.href!r})"


class HashURLCodec:
    """
    Parse and compose the URL fragment.

    - parse(): fragment -> {key: raw decoded string}
    - decode_json(): raw string -> object, or ParseError
    - decode_state(): the JSON overrides CompositeState cares about, applying
      the legacy 'graph' -> 'view-graph' rule
    - encode(): state -> fragment string
    """

    def __init__(self, location: Optional[Location] = None) -> None:
        self.location = location if location is not None else Location()

    def parse(self, fragment: Optional[str] = None) -> Dict[str, str]:
        fragment = self.location.hash if fragment is None else fragment
        fragment = fragment.lstrip("#")
        # '#grid?a=1' style fragments: a bare page name before '?' is ignored.
        # A '?' after the first key=value pair belongs to a value.
        prefix, sep, rest = fragment.partition("?")
        if sep and "=" not in prefix and "&" not in prefix:
            fragment = rest
        if not fragment:
            return {}

        return dict(parse_qsl(fragment, keep_blank_values=True))

    @staticmethod
    def decode_json(key: str, raw: str) -> Any:
        try:
            return json.loads(raw)
        except (TypeError, ValueError) as exc:
            raise ParseError(key, raw, str(exc)) from exc

    def decode_state(
        self,
        params: Mapping[str, str],
        query_default: Callable[[], Any] = dict,
    ) -> Dict[str, Any]:
        """
        Build the URL override layer.

        - 'query': decoded when present, else query_default()
        - 'view-graph': from 'view-graph', else legacy 'graph', else {}

        A malformed value, or one that is not a JSON object, is logged and
        replaced by {}.
        """
        raw_query = params.get(QUERY_KEY)
        if raw_query:
            query = self._decode_or_empty(QUERY_KEY, raw_query)
        else:
            query = query_default()

        if params.get(GRAPH_KEY):
            graph = self._decode_or_empty(GRAPH_KEY, params[GRAPH_KEY])
        elif params.get(LEGACY_GRAPH_KEY):
            graph = self._decode_or_empty(LEGACY_GRAPH_KEY, params[LEGACY_GRAPH_KEY])
        else:
            graph = {}

        return {QUERY_KEY: query, GRAPH_KEY: graph}

    def _decode_or_empty(self, key: str, raw: str) -> Dict[str, Any]:
        try:
            value = self.decode_json(key, raw)
        except ParseError as exc:
            logger.warning("Ignoring malformed URL state", extra={"key": key, "error": str(exc)})
            return {}

        if not isinstance(value, dict):
            logger.warning("Ignoring non-object URL state", extra={"key": key, "type": type(value).__name__})
            return {}
        return value

    @staticmethod
    def encode(state: Mapping[str, Any], keys: Iterable[str] = DEFAULT_ENCODE_KEYS) -> str:
        pairs = []
        for key in keys:
            value = state.get(key)
            if value is None:
                continue
            if not isinstance(value, str):
                value = json.dumps(value, separators=(",", ":"), sort_keys=True)
            pairs.append((key, value))
        return urlencode(pairs)

    def write(self, state: Mapping[str, Any], keys: Iterable[str] = DEFAULT_ENCODE_KEYS) -> str:
        fragment = self.encode(state, keys)
        self.location.hash = fragment
        return fragment
